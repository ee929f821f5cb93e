"""
Emptiness predicate for section content.

Pure function of (content, title); callers re-evaluate it on every content
change instead of trusting a stored flag.
"""

import re
from typing import Optional

from vitae.utils.html_tools import (
    CONTENT_TAGS,
    MarkupParseError,
    collapse_whitespace,
    parse_fragment,
)
from vitae.utils.settings import get_settings

_WHITESPACE = re.compile(r"\s+")
_ANY_TAG = re.compile(r"<[^>]+>")
# Whitespace-free form of "<hN ...>Title</hN>" optionally followed by "<p ...></p>"
_BARE_HEADING = r"<h([1-3])(?:[^>]*)>{title}</h\1>(?:<p(?:[^>]*)></p>)?"


def _is_bare_heading(compact_content: str, title: str) -> bool:
    compact_title = _WHITESPACE.sub("", title)
    if not compact_title:
        return False
    pattern = _BARE_HEADING.format(title=re.escape(compact_title))
    return re.fullmatch(pattern, compact_content, flags=re.IGNORECASE) is not None


def is_empty(content: Optional[str], title: Optional[str] = None) -> bool:
    """
    Decide whether section content carries anything worth rendering.

    Empty when any of:
    - content is blank after trimming
    - content is only the title heading, optionally followed by an empty paragraph
    - visible text is shorter than emptiness.min_text_length
    - there is no content-bearing element (p, li, table, ul, ol)
    - every content-bearing element is blank

    Args:
        content: Section markup fragment
        title: Section title (enables the bare-heading check)

    Returns:
        True when the section should be treated as empty

    Example:
        >>> is_empty("<h2>Skills</h2><p></p>", "Skills")
        True
        >>> is_empty("<h2>Skills</h2><ul><li>Python, SQL</li></ul>", "Skills")
        False
    """
    if content is None or not content.strip():
        return True

    compact = _WHITESPACE.sub("", content)
    if title and _is_bare_heading(compact, title):
        return True

    try:
        soup = parse_fragment(content)
    except MarkupParseError:
        # Unparseable markup: judge on the tag-stripped text alone
        text = collapse_whitespace(_ANY_TAG.sub(" ", content))
        return len(text) < get_settings().emptiness.min_text_length

    if len(collapse_whitespace(soup.get_text(" "))) < get_settings().emptiness.min_text_length:
        return True

    bearers = soup.find_all(list(CONTENT_TAGS))
    if not bearers:
        return True

    return all(not collapse_whitespace(element.get_text(" ")) for element in bearers)
