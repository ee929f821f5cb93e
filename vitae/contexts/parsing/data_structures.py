"""
Canonical Résumé Data Structures

Defines the typed section model produced by the parsing context and consumed
by the rendering context. Both structures are immutable: "changing" a section
means building a new one (dataclasses.replace), which also re-derives its
emptiness.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

from vitae.contexts.parsing.emptiness import is_empty as _content_is_empty
from vitae.contexts.parsing.section_patterns import SectionKind, STANDARD_SECTION_IDS

DEFAULT_NAME = "Full Name"


@dataclass(frozen=True)
class Section:
    """
    One typed, ordered block of a résumé.

    Attributes:
        id: Standard id ("resume-experience") or a slug unique in the document
        title: Heading text as displayed
        content: Markup fragment (includes the title heading when present)
        kind: SectionKind inferred from the title
        order: Position in the document
        visible: False hides the section at render time without deleting it
        is_empty: Derived from content and title on every construction
    """

    id: str
    title: str
    content: str
    kind: str = SectionKind.GENERAL
    order: int = 0
    visible: bool = True
    is_empty: bool = field(init=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "is_empty", _content_is_empty(self.content, self.title))

    @property
    def is_standard(self) -> bool:
        """True when the id belongs to the closed standard set."""
        return self.id in STANDARD_SECTION_IDS

    @property
    def is_renderable(self) -> bool:
        """Visible and non-empty."""
        return self.visible and not self.is_empty


@dataclass(frozen=True)
class HeaderInfo:
    """
    Structured contact fields of the header section.

    Always recomputed from the header section's content, never stored on its
    own. Every field except name is None when not found.
    """

    name: str = DEFAULT_NAME
    title: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Plain dict of all fields (None preserved)."""
        return asdict(self)

    @property
    def contact_fields(self) -> Dict[str, str]:
        """Non-blank contact fields in display order (phone, email, links)."""
        fields = {
            "phone": self.phone,
            "email": self.email,
            "linkedin": self.linkedin,
            "portfolio": self.portfolio,
        }
        return {key: value for key, value in fields.items() if value and value.strip()}
