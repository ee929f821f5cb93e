"""Serialization of the canonical section model back to container markup."""

import html
from typing import Sequence

from vitae.contexts.parsing.data_structures import Section


def section_to_markup(section: Section) -> str:
    """One section as <section id="...">content</section>."""
    return f'<section id="{html.escape(section.id, quote=True)}">{section.content}</section>'


def sections_to_markup(sections: Sequence[Section]) -> str:
    """
    Canonical document form of a section list.

    Empty and hidden sections are left out; order is the list order. Parsing
    the result yields the same non-empty section ids (explicit containers).

    Args:
        sections: Sections, usually from ordering.order_sections()

    Returns:
        Markup with one <section> container per renderable section
    """
    return "\n".join(section_to_markup(section) for section in sections if section.is_renderable)
