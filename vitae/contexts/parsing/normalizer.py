"""
Content normalizer for the Parsing context.

Canonicalizes raw résumé content before section parsing:
- entity-encoded markup is decoded, plain text is converted to block markup
- legacy/alternate section ids are rewritten to standard ids
- the "section-title" marker sits on each section's primary heading, once,
  and never on the container itself

Normalize BEFORE parsing, and keep normalize(normalize(x)) == normalize(x):
upstream content is often already partially normalized.
"""

import html
import re
from typing import Optional

from bs4 import Tag

from vitae.contexts.parsing.logger import _log_debug, _log_warning
from vitae.contexts.parsing.patterns import MarkerClasses
from vitae.contexts.parsing.section_patterns import is_known_section_id, to_standard_id
from vitae.utils.html_tools import (
    SECTION_HEADING_TAGS,
    MarkupParseError,
    add_class,
    has_class,
    has_encoded_markup,
    looks_like_markup,
    parse_fragment,
    remove_class,
    text_to_markup,
)

CONTAINER_TAGS = ("section", "div", "article")
ID_BEARING_TAGS = CONTAINER_TAGS + ("header", "aside")

# Invisible characters that break keyword and pattern matching
INVISIBLE_CHARACTERS = {
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM
}

# Generated markup often arrives wrapped in a fenced code block
_CODE_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*\n(.*?)\n?\s*```\s*$", re.DOTALL)
_TAG_STRIPPER = re.compile(r"<[^>]*>")


def is_section_container(element) -> bool:
    """
    True for elements that delimit a section.

    A container is a <section>, <div> or <article> with a non-empty id that is
    either a <section>, carries the "section" class, or whose id is a
    standard/alternate section id.
    """
    if not isinstance(element, Tag) or element.name not in CONTAINER_TAGS:
        return False

    element_id = (element.get("id") or "").strip()
    if not element_id:
        return False

    return (
        element.name == "section"
        or has_class(element, MarkerClasses.SECTION)
        or is_known_section_id(element_id)
    )


def strip_invisible_characters(text: str) -> str:
    """Remove zero-width characters and BOMs."""
    for char, replacement in INVISIBLE_CHARACTERS.items():
        text = text.replace(char, replacement)
    return text


def unwrap_code_fence(text: str) -> str:
    """Return the body of a ```html ... ``` block, or the text unchanged."""
    match = _CODE_FENCE.match(text)
    return match.group(1) if match else text


def _to_markup(raw: str) -> str:
    """Bring raw content to (unparsed) markup form."""
    text = unwrap_code_fence(strip_invisible_characters(raw))

    if not looks_like_markup(text) and has_encoded_markup(text):
        _log_debug("Decoding entity-encoded markup")
        text = html.unescape(text)

    if not looks_like_markup(text):
        _log_debug("No markup found, converting plain text")
        text = text_to_markup(html.unescape(text))

    return text


def _rewrite_alternate_ids(soup) -> int:
    rewritten = 0
    for element in soup.find_all(ID_BEARING_TAGS, id=True):
        current = element["id"]
        standard = to_standard_id(current)
        if standard and standard != current:
            element["id"] = standard
            rewritten += 1
    return rewritten


def _fix_title_markers(container: Tag) -> None:
    title_marker = MarkerClasses.SECTION_TITLE

    # The container itself never carries the title marker
    remove_class(container, title_marker)

    heading = container.find(SECTION_HEADING_TAGS)
    marked = container.find_all(class_=title_marker)

    if heading is not None:
        add_class(heading, title_marker)
        for element in marked:
            if element is not heading:
                remove_class(element, title_marker)
    else:
        # No heading: keep only the first marked element
        for element in marked[1:]:
            remove_class(element, title_marker)


def normalize(raw: Optional[str]) -> str:
    """
    Normalize raw résumé content to canonical markup.

    Args:
        raw: Markup, entity-encoded markup, or plain text

    Returns:
        Normalized markup (empty string for blank input)

    Example:
        >>> normalize('<div id="experiences" class="section-title"><h2>Work</h2></div>')
        '<div id="resume-experience"><h2 class="section-title">Work</h2></div>'
    """
    if raw is None or not raw.strip():
        return ""

    markup = _to_markup(raw)

    try:
        soup = parse_fragment(markup)
    except MarkupParseError as e:
        _log_warning(f"Markup could not be parsed, falling back to text conversion: {e}")
        text = html.unescape(_TAG_STRIPPER.sub("\n", markup))
        soup = parse_fragment(text_to_markup(text))

    rewritten = _rewrite_alternate_ids(soup)
    if rewritten:
        _log_debug(f"Rewrote {rewritten} alternate section id(s)")

    containers = [element for element in soup.find_all(CONTAINER_TAGS) if is_section_container(element)]
    for container in containers:
        _fix_title_markers(container)

    return str(soup)
