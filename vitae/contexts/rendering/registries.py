"""
Template Registries

Loads skins from disk into an immutable catalog keyed by template id.

Each skin lives in skins/{skin_id}/:
- skin.yaml           metadata, header options and per-section display
                      configuration (OmegaConf)
- skeleton.html.jinja layout with {{resume-...}} placeholders, rendered once at
                      load time with the custom-delimiter environment
- styles.css          stylesheet, read verbatim
"""

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from jinja2 import TemplateNotFound
from omegaconf import OmegaConf

from vitae.contexts.parsing.section_patterns import STANDARD_SECTION_IDS
from vitae.contexts.rendering.data_structures import (
    ADDRESS_STYLES,
    DISPLAY_STYLES,
    HEADER_MARKER,
    HeaderDisplayConfig,
    LOCATIONS,
    SectionDisplayConfig,
    TemplateDefinition,
    placeholder_token,
)
from vitae.contexts.rendering.environment import skin_environment
from vitae.contexts.rendering.exceptions import TemplateValidationError
from vitae.contexts.rendering.logger import _log_debug, log_template_fallback
from vitae.contexts.rendering.renderer import render_skeleton
from vitae.utils.settings import SKINS_PATH, get_settings

SKIN_CONFIG_FILE = "skin.yaml"
SKELETON_FILE = "skeleton.html.jinja"
STYLES_FILE = "styles.css"

# Render functions a skin.yaml may name
RENDERERS: Mapping[str, Callable] = MappingProxyType({"skeleton": render_skeleton})


# =============================================================================
# VALIDATION
# =============================================================================


def validate_template(template: TemplateDefinition) -> List[str]:
    """
    Check a definition against the skin contract.

    Args:
        template: Definition to check

    Returns:
        Problems found (empty when the definition is valid)
    """
    issues = []

    if not template.id:
        issues.append("Missing template id")
    if not template.display_name or not template.display_name.strip():
        issues.append("Missing display name")
    if not template.styles or not template.styles.strip():
        issues.append("Missing styles")
    if not callable(template.render_fn):
        issues.append("Missing render function")

    marker_count = template.skeleton.count(HEADER_MARKER)
    if marker_count != 1:
        issues.append(f"Skeleton must contain exactly one header marker (found {marker_count})")

    for section_id, config in template.section_config.items():
        if section_id not in STANDARD_SECTION_IDS:
            issues.append(f"Unknown section id in config: '{section_id}'")
        if placeholder_token(section_id) not in template.skeleton:
            issues.append(f"Skeleton has no placeholder for configured section '{section_id}'")
        if config.location not in LOCATIONS:
            issues.append(f"Section '{section_id}': unknown location '{config.location}'")
        if config.display_style not in DISPLAY_STYLES:
            issues.append(f"Section '{section_id}': unknown display style '{config.display_style}'")

    if template.header.address not in ADDRESS_STYLES:
        issues.append(f"Header: unknown address style '{template.header.address}'")

    return issues


# =============================================================================
# CATALOG
# =============================================================================


class TemplateCatalog:
    """
    Immutable registry of skins keyed by id.

    Lookup of an unknown id (or of a pro skin when pro skins are not allowed)
    returns the default skin and logs a warning instead of failing.
    """

    def __init__(self, templates: Iterable[TemplateDefinition], default_template_id: str = None):
        """
        Build and validate the catalog.

        Args:
            templates: Skin definitions
            default_template_id: Fallback skin (defaults to settings.default_template)

        Raises:
            TemplateValidationError: On duplicate ids, invalid definitions, or an
                unknown default id
        """
        registered: Dict[str, TemplateDefinition] = {}
        for template in templates:
            if template.id in registered:
                raise TemplateValidationError("Duplicate template id", template_id=template.id)
            issues = validate_template(template)
            if issues:
                raise TemplateValidationError("Invalid template definition", template.id, issues)
            registered[template.id] = template

        if default_template_id is None:
            default_template_id = get_settings().default_template
        if default_template_id not in registered:
            raise TemplateValidationError(
                "Default template is not registered",
                template_id=default_template_id,
                issues=[f"Registered: {', '.join(registered) or '(none)'}"],
            )

        self._templates: Mapping[str, TemplateDefinition] = MappingProxyType(registered)
        self.default_template_id = default_template_id

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self):
        return iter(self._templates.values())

    @property
    def default(self) -> TemplateDefinition:
        return self._templates[self.default_template_id]

    def ids(self) -> List[str]:
        return list(self._templates)

    def get(self, template_id: Optional[str], allow_pro: bool = True) -> TemplateDefinition:
        """
        Look up a skin, falling back to the default.

        Args:
            template_id: Requested skin id (None for the default skin)
            allow_pro: False when the caller's plan doesn't include pro skins

        Returns:
            The requested skin, or the default skin when it is unknown or gated
        """
        if not template_id:
            return self.default

        template = self._templates.get(template_id)
        if template is None:
            log_template_fallback(template_id, self.default_template_id, "not found")
            return self.default
        if template.is_pro and not allow_pro:
            log_template_fallback(template_id, self.default_template_id, "requires a pro plan")
            return self.default
        return template

    def list_templates(self, category: str = "all") -> List[TemplateDefinition]:
        """
        Skins for a gallery.

        Args:
            category: "all", "free" or "pro"

        Returns:
            Definitions in catalog order
        """
        if category == "free":
            return [t for t in self._templates.values() if not t.is_pro]
        if category == "pro":
            return [t for t in self._templates.values() if t.is_pro]
        return list(self._templates.values())


# =============================================================================
# LOADING
# =============================================================================


def _display_config(raw: Optional[Dict[str, Any]]) -> SectionDisplayConfig:
    raw = raw or {}
    return SectionDisplayConfig(
        icon=raw.get("icon", "") or "",
        location=raw.get("location", "main"),
        display_style=raw.get("display_style", "default"),
    )


def _header_config(raw: Optional[Dict[str, Any]]) -> HeaderDisplayConfig:
    raw = raw or {}
    return HeaderDisplayConfig(
        monogram=bool(raw.get("monogram", False)),
        address=raw.get("address", "lines"),
    )


def load_skin(skin_dir: Path, env=None) -> TemplateDefinition:
    """
    Load one skin directory into a TemplateDefinition.

    Args:
        skin_dir: skins/{skin_id}/
        env: Jinja2 environment rooted at the skins directory

    Returns:
        Definition (not yet validated)

    Raises:
        FileNotFoundError: If skin.yaml or styles.css is missing
        TemplateNotFound: If the skeleton template is missing
    """
    if env is None:
        env = skin_environment(skin_dir.parent)

    config_path = skin_dir / SKIN_CONFIG_FILE
    if not config_path.exists():
        raise FileNotFoundError(f"Skin config not found at {config_path}")

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    template_id = config.get("id", skin_dir.name)
    css_prefix = config.get("css_prefix") or template_id

    section_config = {
        section_id: _display_config(raw) for section_id, raw in (config.get("sections") or {}).items()
    }

    # Skeleton regions list their sections in config order
    context = {
        "template_id": template_id,
        "prefix": css_prefix,
        "main_sections": [s for s, c in section_config.items() if c.location == "main"],
        "sidebar_sections": [s for s, c in section_config.items() if c.location == "sidebar"],
    }
    skeleton_path = f"{skin_dir.name}/{SKELETON_FILE}"
    try:
        skeleton = env.get_template(skeleton_path).render(**context)
    except TemplateNotFound as e:
        raise TemplateNotFound(
            f"Skeleton not found for skin '{template_id}' at {skin_dir / SKELETON_FILE}"
        ) from e

    styles_path = skin_dir / STYLES_FILE
    if not styles_path.exists():
        raise FileNotFoundError(f"Styles not found for skin '{template_id}' at {styles_path}")

    renderer_name = config.get("renderer", "skeleton")
    _log_debug(f"Loaded skin '{template_id}' ({len(section_config)} sections, renderer '{renderer_name}')")

    return TemplateDefinition(
        id=template_id,
        display_name=config.get("display_name", ""),
        is_pro=bool(config.get("is_pro", False)),
        skeleton=skeleton,
        section_config=section_config,
        styles=styles_path.read_text(encoding="utf-8"),
        render_fn=RENDERERS.get(renderer_name),
        css_prefix=css_prefix,
        custom_section=_display_config(config.get("custom_section")),
        description=config.get("description", ""),
        header=_header_config(config.get("header")),
    )


def skin_directories(skins_path: Path) -> List[Path]:
    """Skin folders in name order; folders starting with "_" hold shared files."""
    return sorted(
        path for path in skins_path.iterdir() if path.is_dir() and not path.name.startswith("_")
    )


def load_catalog(skins_path: Path = None, default_template_id: str = None) -> TemplateCatalog:
    """
    Load every skin under a directory into a validated catalog.

    Args:
        skins_path: Skins directory (defaults to VITAE_SKINS_PATH)
        default_template_id: Fallback skin (defaults to settings.default_template)

    Returns:
        TemplateCatalog

    Raises:
        TemplateValidationError: If any skin breaks the contract
    """
    if skins_path is None:
        skins_path = SKINS_PATH

    env = skin_environment(skins_path)
    templates = []
    for skin_dir in skin_directories(skins_path):
        template = load_skin(skin_dir, env)
        issues = validate_template(template)
        if issues:
            raise TemplateValidationError("Invalid skin", template.id, issues, skin_path=skin_dir)
        templates.append(template)

    return TemplateCatalog(templates, default_template_id)


@lru_cache(maxsize=None)
def get_catalog() -> TemplateCatalog:
    """Process-wide catalog of the packaged (or VITAE_SKINS_PATH) skins."""
    return load_catalog()
