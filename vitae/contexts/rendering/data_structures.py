"""
Rendering Data Structures

Template definitions (one per skin) and the rendered output. Both are
immutable; a render always produces a new RenderedDocument.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional

HEADER_MARKER = "<!-- resume-header-content -->"
CUSTOM_SECTIONS_MARKER = "<!-- resume-custom-sections -->"

LOCATIONS = ("main", "sidebar")
DISPLAY_STYLES = ("default", "columns", "inline")
ADDRESS_STYLES = ("lines", "inline")


def placeholder_token(section_id: str) -> str:
    """Skeleton placeholder for a section: {{resume-skills}}."""
    return "{{" + section_id + "}}"


@dataclass(frozen=True)
class SectionDisplayConfig:
    """
    How one section is shown by a skin.

    Attributes:
        icon: Bootstrap icon name ("briefcase-fill"), empty for none
        location: "main" or "sidebar"
        display_style: "default", "columns" (multi-column lists) or "inline"
    """

    icon: str = ""
    location: str = "main"
    display_style: str = "default"


@dataclass(frozen=True)
class HeaderDisplayConfig:
    """
    How a skin lays out the header block.

    Attributes:
        monogram: Show the name's initials in a badge before the name
        address: "lines" (one line per address line) or "inline" (comma-joined)
    """

    monogram: bool = False
    address: str = "lines"


@dataclass(frozen=True)
class RenderedDocument:
    """
    Final markup of one render call plus the skin's styles.

    Attributes:
        markup: Rendered body markup (no placeholders, no empty containers)
        styles: CSS of the skin
        template_id: Skin that produced the markup
    """

    markup: str
    styles: str
    template_id: str


@dataclass(frozen=True)
class TemplateDefinition:
    """
    A skin: skeleton with placeholders plus per-section display configuration.

    Attributes:
        id: Unique catalog key
        display_name: Human-readable name
        is_pro: Whether the skin is gated behind a paid plan
        skeleton: Markup with one {{<section-id>}} token per configured section
                  and exactly one header marker comment
        section_config: Standard section id -> SectionDisplayConfig (read-only)
        styles: CSS text
        render_fn: Callable(sections, header, template) -> RenderedDocument
        css_prefix: Prefix for skin-specific classes ("pro" -> "pro-section-title")
        custom_section: Display config for non-standard sections
        description: One-line description for galleries
        header: Header block options
    """

    id: str
    display_name: str
    is_pro: bool
    skeleton: str
    section_config: Mapping[str, SectionDisplayConfig]
    styles: str
    render_fn: Optional[Callable] = None
    css_prefix: str = ""
    custom_section: SectionDisplayConfig = field(default_factory=SectionDisplayConfig)
    description: str = ""
    header: HeaderDisplayConfig = field(default_factory=HeaderDisplayConfig)

    def __post_init__(self):
        if not isinstance(self.section_config, MappingProxyType):
            object.__setattr__(self, "section_config", MappingProxyType(dict(self.section_config)))
        if not self.css_prefix:
            object.__setattr__(self, "css_prefix", self.id)

    @property
    def placeholders(self):
        """Placeholder tokens of every configured section, in config order."""
        return [placeholder_token(section_id) for section_id in self.section_config]
