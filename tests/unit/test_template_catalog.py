"""Unit tests for template definitions, TemplateCatalog and skin loading."""

from types import MappingProxyType

import pytest
from jinja2 import TemplateNotFound
from loguru import logger

from vitae.contexts.rendering.data_structures import (
    HeaderDisplayConfig,
    SectionDisplayConfig,
    TemplateDefinition,
)
from vitae.contexts.rendering.exceptions import TemplateValidationError
from vitae.contexts.rendering.registries import (
    TemplateCatalog,
    get_catalog,
    load_catalog,
    skin_directories,
    validate_template,
)
from vitae.contexts.rendering.renderer import render_skeleton

SKELETON = (
    '<div class="resume"><header><!-- resume-header-content --></header>'
    '<div class="region">'
    '<div class="section" id="resume-summary">{{resume-summary}}</div>'
    '<div class="section" id="resume-skills">{{resume-skills}}</div>'
    "<!-- resume-custom-sections --></div></div>"
)

SKIN_YAML = """\
id: alpha
display_name: Alpha
is_pro: false
css_prefix: al
sections:
  resume-summary:
    icon: person-fill
  resume-skills:
    icon: gear-fill
    location: sidebar
    display_style: columns
"""

SKIN_SKELETON = """\
<div class="<<< prefix >>>-resume">
  <header><!-- resume-header-content --></header>
  <div class="region">
<%% for section_id in main_sections + sidebar_sections %%>
    <div class="section" id="<<< section_id >>>">{{<<< section_id >>>}}</div>
<%% endfor %%>
  </div>
</div>
"""


def _definition(template_id="plain", is_pro=False, skeleton=SKELETON, section_config=None, **kwargs):
    if section_config is None:
        section_config = {
            "resume-summary": SectionDisplayConfig(icon="person-fill"),
            "resume-skills": SectionDisplayConfig(location="sidebar", display_style="columns"),
        }
    kwargs.setdefault("styles", ".resume { margin: 0; }")
    kwargs.setdefault("render_fn", render_skeleton)
    return TemplateDefinition(
        id=template_id,
        display_name=template_id.title(),
        is_pro=is_pro,
        skeleton=skeleton,
        section_config=section_config,
        **kwargs,
    )


def _write_skin(skins_path, name="alpha", config=SKIN_YAML, skeleton=SKIN_SKELETON, styles=".al-resume {}"):
    skin_dir = skins_path / name
    skin_dir.mkdir(parents=True)
    if config is not None:
        (skin_dir / "skin.yaml").write_text(config)
    if skeleton is not None:
        (skin_dir / "skeleton.html.jinja").write_text(skeleton)
    if styles is not None:
        (skin_dir / "styles.css").write_text(styles)
    return skin_dir


# =============================================================================
# DEFINITIONS
# =============================================================================


@pytest.mark.unit
def test_section_config_is_read_only():
    """Test that definitions expose an immutable section config."""
    template = _definition()

    assert isinstance(template.section_config, MappingProxyType)
    with pytest.raises(TypeError):
        template.section_config["resume-awards"] = SectionDisplayConfig()


@pytest.mark.unit
def test_css_prefix_defaults_to_id():
    assert _definition().css_prefix == "plain"
    assert _definition(css_prefix="pl").css_prefix == "pl"


@pytest.mark.unit
def test_placeholders():
    assert _definition().placeholders == ["{{resume-summary}}", "{{resume-skills}}"]


@pytest.mark.unit
def test_valid_definition():
    assert validate_template(_definition()) == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides, expected_issue",
    [
        ({"skeleton": SKELETON.replace("<!-- resume-header-content -->", "")}, "exactly one header marker"),
        (
            {"skeleton": SKELETON.replace("</header>", "<!-- resume-header-content --></header>")},
            "exactly one header marker",
        ),
        ({"section_config": {"resume-hobbies": SectionDisplayConfig()}}, "Unknown section id"),
        ({"section_config": {"resume-awards": SectionDisplayConfig()}}, "no placeholder"),
        ({"section_config": {"resume-skills": SectionDisplayConfig(location="footer")}}, "unknown location"),
        (
            {"section_config": {"resume-skills": SectionDisplayConfig(display_style="grid")}},
            "unknown display style",
        ),
        ({"render_fn": None}, "Missing render function"),
        ({"styles": "  "}, "Missing styles"),
        ({"header": HeaderDisplayConfig(address="stacked")}, "unknown address style"),
    ],
)
def test_invalid_definitions(overrides, expected_issue):
    """Test each contract violation is reported."""
    issues = validate_template(_definition(**overrides))

    assert any(expected_issue in issue for issue in issues), issues


# =============================================================================
# CATALOG
# =============================================================================


@pytest.fixture
def catalog():
    return TemplateCatalog(
        [_definition("plain"), _definition("fancy", is_pro=True)],
        default_template_id="plain",
    )


@pytest.mark.unit
def test_catalog_membership(catalog):
    assert "fancy" in catalog
    assert "missing" not in catalog
    assert len(catalog) == 2
    assert catalog.ids() == ["plain", "fancy"]
    assert [t.id for t in catalog] == ["plain", "fancy"]


@pytest.mark.unit
def test_get_known_template(catalog):
    assert catalog.get("fancy").id == "fancy"


@pytest.mark.unit
@pytest.mark.parametrize("template_id", ["missing", None, ""])
def test_get_unknown_falls_back_to_default(catalog, template_id):
    """Test that unknown ids resolve to the default skin instead of failing."""
    assert catalog.get(template_id) is catalog.default


@pytest.fixture
def warnings():
    """Collect loguru WARNING messages emitted during a test."""
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)


@pytest.mark.unit
def test_default_request_is_not_a_miss(catalog, warnings):
    """Test that asking for no particular skin returns the default without a warning."""
    assert catalog.get(None) is catalog.default
    assert warnings == []


@pytest.mark.unit
def test_unknown_id_warns(catalog, warnings):
    catalog.get("missing")

    assert len(warnings) == 1
    assert "'missing' not found" in warnings[0]


@pytest.mark.unit
def test_pro_template_gated(catalog):
    assert catalog.get("fancy", allow_pro=False).id == "plain"
    assert catalog.get("fancy", allow_pro=True).id == "fancy"


@pytest.mark.unit
def test_list_templates(catalog):
    assert [t.id for t in catalog.list_templates("free")] == ["plain"]
    assert [t.id for t in catalog.list_templates("pro")] == ["fancy"]
    assert [t.id for t in catalog.list_templates()] == ["plain", "fancy"]


@pytest.mark.unit
def test_duplicate_ids_rejected():
    with pytest.raises(TemplateValidationError, match="Duplicate template id"):
        TemplateCatalog([_definition("plain"), _definition("plain")], default_template_id="plain")


@pytest.mark.unit
def test_invalid_definition_rejected():
    broken = _definition("broken", skeleton=SKELETON.replace("{{resume-skills}}", ""))

    with pytest.raises(TemplateValidationError) as exc_info:
        TemplateCatalog([_definition("plain"), broken], default_template_id="plain")

    assert exc_info.value.template_id == "broken"
    assert any("resume-skills" in issue for issue in exc_info.value.issues)


@pytest.mark.unit
def test_unknown_default_rejected():
    with pytest.raises(TemplateValidationError, match="Default template is not registered"):
        TemplateCatalog([_definition("plain")], default_template_id="fancy")


# =============================================================================
# LOADING
# =============================================================================


@pytest.mark.unit
def test_load_catalog_from_directory(tmp_path):
    """Test loading a skin directory; underscore folders are skipped."""
    _write_skin(tmp_path)
    (tmp_path / "_shared").mkdir()

    catalog = load_catalog(tmp_path, default_template_id="alpha")
    template = catalog.get("alpha")

    assert catalog.ids() == ["alpha"]
    assert template.display_name == "Alpha"
    assert template.css_prefix == "al"
    assert template.render_fn is render_skeleton
    assert template.section_config["resume-skills"].location == "sidebar"
    assert template.section_config["resume-summary"].display_style == "default"
    assert '<div class="al-resume">' in template.skeleton
    assert "{{resume-summary}}" in template.skeleton
    assert "{{resume-skills}}" in template.skeleton
    assert template.header == HeaderDisplayConfig()


@pytest.mark.unit
def test_header_options_loaded(tmp_path):
    _write_skin(tmp_path, config=SKIN_YAML + "header:\n  monogram: true\n  address: inline\n")

    template = load_catalog(tmp_path, default_template_id="alpha").get("alpha")

    assert template.header == HeaderDisplayConfig(monogram=True, address="inline")


@pytest.mark.unit
def test_skin_directories_sorted(tmp_path):
    for name in ("zeta", "_shared", "alpha"):
        (tmp_path / name).mkdir()

    assert [path.name for path in skin_directories(tmp_path)] == ["alpha", "zeta"]


@pytest.mark.unit
def test_missing_styles(tmp_path):
    _write_skin(tmp_path, styles=None)

    with pytest.raises(FileNotFoundError, match="Styles not found"):
        load_catalog(tmp_path, default_template_id="alpha")


@pytest.mark.unit
def test_missing_skeleton(tmp_path):
    _write_skin(tmp_path, skeleton=None)

    with pytest.raises(TemplateNotFound):
        load_catalog(tmp_path, default_template_id="alpha")


@pytest.mark.unit
def test_skin_without_placeholder_rejected(tmp_path):
    """Test that a configured section missing from the skeleton fails at load time."""
    skin_dir = _write_skin(tmp_path, skeleton=SKIN_SKELETON.replace(" + sidebar_sections", ""))

    with pytest.raises(TemplateValidationError) as exc_info:
        load_catalog(tmp_path, default_template_id="alpha")

    assert exc_info.value.skin_path == skin_dir
    assert any("resume-skills" in issue for issue in exc_info.value.issues)


@pytest.mark.unit
def test_packaged_catalog():
    """Test the skins shipped with the package."""
    catalog = get_catalog()

    assert catalog.ids() == ["basic", "compact", "creative", "executive", "professional", "technical"]
    assert catalog.default.id == "basic"
    assert not catalog.default.is_pro
    assert [t.id for t in catalog.list_templates("pro")] == [
        "compact",
        "creative",
        "executive",
        "professional",
        "technical",
    ]
