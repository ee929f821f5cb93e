"""
Header block construction from HeaderInfo.

Only fields with content are emitted, so a header with a missing phone or
email never shows an empty span or a dangling separator.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from vitae.contexts.parsing.contact_validation import format_address_inline, get_initials, has_content
from vitae.contexts.parsing.data_structures import DEFAULT_NAME, HeaderInfo
from vitae.contexts.rendering.data_structures import HeaderDisplayConfig
from vitae.contexts.rendering.environment import get_shared_environment

HEADER_BLOCK_TEMPLATE = "_shared/header.html.jinja"
HEADER_SECTION_TEMPLATE = "_shared/header_section.html.jinja"


def _contacts(header: HeaderInfo) -> List[Tuple[str, str]]:
    return [(key, value.strip()) for key, value in header.contact_fields.items() if has_content(value)]


def _address_lines(header: HeaderInfo, inline: bool = False) -> List[str]:
    if not has_content(header.address):
        return []
    if inline:
        return [format_address_inline(header.address)]
    return [line.strip() for line in header.address.split("\n") if line.strip()]


def _render(template_name: str, header: HeaderInfo, inline_address: bool = False, **context) -> str:
    template = get_shared_environment().get_template(template_name)
    name = header.name.strip() if has_content(header.name) else DEFAULT_NAME
    title = header.title if has_content(header.title) else None
    return template.render(
        header=replace(header, name=name, title=title),
        contacts=_contacts(header),
        address_lines=_address_lines(header, inline_address),
        **context,
    ).strip()


def build_header_block(
    header: HeaderInfo, css_prefix: str, display: Optional[HeaderDisplayConfig] = None
) -> str:
    """
    Skin header block: name, optional title, contact spans, address lines.

    Args:
        header: Extracted (or edited) header fields
        css_prefix: Skin class prefix ("pro" -> "pro-header")
        display: Skin header options (monogram badge, inline address)

    Returns:
        Escaped markup ready for the skeleton's header marker
    """
    display = display or HeaderDisplayConfig()

    # No badge for the "Full Name" stand-in
    initials = ""
    if display.monogram and has_content(header.name) and header.name.strip() != DEFAULT_NAME:
        initials = get_initials(header.name)

    return _render(
        HEADER_BLOCK_TEMPLATE,
        header,
        inline_address=display.address == "inline",
        prefix=css_prefix,
        initials=initials,
    )


def build_header_section_markup(header: HeaderInfo) -> str:
    """
    Canonical <section id="resume-header"> for a HeaderInfo.

    Used to rebuild a degraded or hand-edited header; extracting the result
    gives back the same fields.
    """
    return _render(HEADER_SECTION_TEMPLATE, header)
