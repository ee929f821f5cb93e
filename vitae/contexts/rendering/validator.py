"""
Template output validation.

Renders every skin against sample sections and several header scenarios and
checks the output contract: no leftover placeholders, no empty section
containers, a name element, and a contact line without empty spans or
dangling separators. Catalog construction already validated the definitions;
this catches skeleton and header-template defects that only show up in
rendered markup.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vitae.contexts.parsing.data_structures import HeaderInfo, Section
from vitae.contexts.parsing.ordering import ensure_all_standard_sections
from vitae.contexts.parsing.patterns import PLACEHOLDER_RE, MarkerClasses
from vitae.contexts.parsing.section_patterns import SectionKind, StandardSectionId
from vitae.contexts.rendering.data_structures import TemplateDefinition
from vitae.contexts.rendering.logger import log_validation_result
from vitae.contexts.rendering.registries import TemplateCatalog
from vitae.contexts.rendering.renderer import render
from vitae.utils.html_tools import parse_fragment, plain_text

_SEPARATOR_EDGE = re.compile(r"^\s*[|•·;]|[|•·;]\s*$")


@dataclass
class TemplateCheck:
    """
    Output validation result for one skin.

    Attributes:
        template_id: Skin checked
        issues: "scenario: problem" strings (empty when the skin passes)
        scenarios: Names of the header scenarios rendered
    """

    template_id: str
    issues: List[str] = field(default_factory=list)
    scenarios: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues


# =============================================================================
# SAMPLE DATA
# =============================================================================


def sample_sections() -> List[Section]:
    """A small filled résumé plus one custom section, gaps filled with empty sections."""
    filled = [
        Section(
            id=StandardSectionId.SUMMARY,
            title="Summary",
            content='<h2 class="section-title">Summary</h2><p>Backend developer with eight years of experience.</p>',
            kind=SectionKind.SUMMARY,
        ),
        Section(
            id=StandardSectionId.EXPERIENCE,
            title="Experience",
            content=(
                '<h2 class="section-title">Experience</h2>'
                "<h3>Senior Developer, Acme Corp</h3>"
                "<ul><li>Led the billing platform migration</li><li>Mentored four developers</li></ul>"
            ),
            kind=SectionKind.EXPERIENCE,
        ),
        Section(
            id=StandardSectionId.SKILLS,
            title="Skills",
            content='<h2 class="section-title">Skills</h2><ul><li>Python</li><li>PostgreSQL</li><li>Docker</li></ul>',
            kind=SectionKind.SKILLS,
        ),
        Section(
            id="side-projects",
            title="Side Projects",
            content='<h2 class="section-title">Side Projects</h2><p>Maintainer of an open-source CLI.</p>',
        ),
    ]
    return ensure_all_standard_sections(filled, "en")


def header_scenarios() -> Dict[str, HeaderInfo]:
    """Headers covering full, minimal, placeholder-valued and address-only cases."""
    return {
        "full": HeaderInfo(
            name="Jane Smith",
            title="Senior Backend Developer",
            phone="514-555-1234",
            email="jane@email.com",
            linkedin="linkedin.com/in/janesmith",
            portfolio="janesmith.dev",
            address="123 rue Principale\nMontréal, QC H2X 1Y4",
        ),
        "minimal": HeaderInfo(name="Jane Smith"),
        "placeholders": HeaderInfo(
            name="{{name}}", title="n/a", phone="{{phone}}", email="", linkedin="-"
        ),
        "address_only": HeaderInfo(name="Jane Smith", address="Montréal, QC"),
    }


# =============================================================================
# CHECKS
# =============================================================================


def check_markup(markup: str) -> List[str]:
    """
    Contract problems in rendered markup.

    Args:
        markup: RenderedDocument.markup

    Returns:
        Problem descriptions (empty when the markup is clean)
    """
    problems = []

    leftovers = PLACEHOLDER_RE.findall(markup)
    if leftovers:
        problems.append(f"leftover placeholders {sorted(set(leftovers))}")

    soup = parse_fragment(markup)

    if soup.find(class_=MarkerClasses.NAME) is None:
        problems.append("missing name element")

    for container in soup.find_all(class_=MarkerClasses.SECTION):
        if not plain_text(container):
            problems.append(f"empty section container '{container.get('id', '?')}'")

    for contact_line in soup.find_all(class_="contact-info"):
        for span in contact_line.find_all("span"):
            if not plain_text(span):
                problems.append(f"empty contact span '{' '.join(span.get('class', []))}'")
        text = plain_text(contact_line)
        if not text:
            problems.append("empty contact line")
        elif _SEPARATOR_EDGE.search(text):
            problems.append(f"dangling separator in contact line '{text}'")

    return problems


def validate_template_output(
    template: TemplateDefinition, sections: Optional[List[Section]] = None
) -> TemplateCheck:
    """
    Render one skin under every header scenario and check the output.

    Args:
        template: Skin to check
        sections: Sections to render (defaults to sample_sections())

    Returns:
        TemplateCheck with one issue per problem per scenario
    """
    if sections is None:
        sections = sample_sections()

    check = TemplateCheck(template_id=template.id)
    for scenario, header in header_scenarios().items():
        check.scenarios.append(scenario)
        document = render(sections, header, template)
        check.issues.extend(f"{scenario}: {problem}" for problem in check_markup(document.markup))

    # No sections at all must still render cleanly
    empty_render = render([], header_scenarios()["minimal"], template)
    check.issues.extend(f"no_sections: {problem}" for problem in check_markup(empty_render.markup))
    check.scenarios.append("no_sections")

    log_validation_result(template.id, check.issues)
    return check


def validate_catalog_output(catalog: TemplateCatalog) -> List[TemplateCheck]:
    """Run validate_template_output() for every skin in the catalog."""
    sections = sample_sections()
    return [validate_template_output(template, sections) for template in catalog.list_templates()]
