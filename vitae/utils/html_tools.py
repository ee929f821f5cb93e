"""
HTML tree helpers built on BeautifulSoup.

Every pipeline stage parses its input into its own soup, mutates that soup,
and serializes it back to a string. Nothing here keeps a tree alive between
calls.
"""

import html
import re
from typing import List, Optional, Union

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag

PARSER = "html.parser"

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
SECTION_HEADING_TAGS = ("h1", "h2", "h3")
CONTENT_TAGS = ("p", "li", "table", "ul", "ol")

_TAG_PATTERN = re.compile(r"<\s*/?\s*[a-zA-Z][a-zA-Z0-9-]*(?:\s[^<>]*)?/?\s*>")
_ENCODED_TAG_PATTERN = re.compile(r"&lt;\s*/?\s*[a-zA-Z][a-zA-Z0-9-]*")
_WHITESPACE = re.compile(r"\s+")
_MARKDOWN_HEADING = re.compile(r"^(#{1,3})\s+(.+?)\s*#*$")
_BULLET = re.compile(r"^\s*(?:[-*•·▪‣◦])\s+(.*)$")
# Plain-text line shapes promoted to headings
_NAME_MAX_WORDS = 5
_CAPS_HEADING_MAX_WORDS = 6


class MarkupParseError(ValueError):
    """Raised when content cannot be parsed as an HTML tree at all."""

    def __init__(self, message: str, snippet: Optional[str] = None):
        self.snippet = snippet

        parts = [message]
        if snippet:
            preview = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"\nContent:\n{preview}")

        super().__init__("\n".join(parts))


# =============================================================================
# PARSING / SERIALIZATION
# =============================================================================


def parse_fragment(markup: str) -> BeautifulSoup:
    """
    Parse markup into a fresh, caller-owned soup.

    Args:
        markup: HTML fragment or document

    Returns:
        BeautifulSoup tree

    Raises:
        MarkupParseError: If the parser rejects the markup outright
    """
    try:
        return BeautifulSoup(markup or "", PARSER)
    except ParserRejectedMarkup as e:
        raise MarkupParseError(f"Markup rejected by parser: {e}", snippet=markup) from e


def inner_html(tag: Tag) -> str:
    """Serialized children of a tag, without the tag itself."""
    return tag.decode_contents()


def node_to_html(node: Union[Tag, NavigableString, str]) -> str:
    """
    Serialize one node.

    Text nodes are entity-escaped (str() on a NavigableString is not), comments
    keep their delimiters, and plain strings are taken as ready-made markup.
    """
    if isinstance(node, NavigableString):
        return node.output_ready()
    return str(node)


def nodes_to_html(nodes: List[Union[Tag, NavigableString, str]]) -> str:
    """Serialize a run of sibling nodes in order."""
    return "".join(node_to_html(node) for node in nodes)


# =============================================================================
# TEXT
# =============================================================================


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WHITESPACE.sub(" ", text or "").strip()


def plain_text(source: Union[str, Tag, None], separator: str = " ") -> str:
    """
    Visible text of markup or a tag, whitespace-collapsed.

    Args:
        source: Markup string, parsed tag, or None
        separator: Joined between text nodes so adjacent blocks don't fuse

    Returns:
        Plain text (empty string for None)
    """
    if source is None:
        return ""
    if isinstance(source, str):
        if not looks_like_markup(source):
            return collapse_whitespace(html.unescape(source))
        source = parse_fragment(source)
    return collapse_whitespace(source.get_text(separator))


def looks_like_markup(text: str) -> bool:
    """True when text contains at least one literal tag."""
    return bool(_TAG_PATTERN.search(text or ""))


def has_encoded_markup(text: str) -> bool:
    """True when text contains entity-encoded tags like &lt;p&gt;."""
    return bool(_ENCODED_TAG_PATTERN.search(text or ""))


def _is_caps_heading(line: str) -> bool:
    """ALL-CAPS line short enough to be a section heading ("EXPÉRIENCE", "SKILLS")."""
    return (
        len(line) > 3
        and line.upper() == line
        and line.lower() != line
        and "@" not in line
        and len(line.split()) <= _CAPS_HEADING_MAX_WORDS
    )


def _is_name_line(line: str) -> bool:
    """A first line that can be a person's name: short, no digits, no email."""
    return (
        "@" not in line
        and not any(char.isdigit() for char in line)
        and len(line.split()) <= _NAME_MAX_WORDS
    )


def text_to_markup(text: str) -> str:
    """
    Convert plain text to simple block markup.

    - the first non-blank line becomes the name <h1> when it looks like a name
    - ALL-CAPS lines become <h2> section headings
    - markdown-style headings (#, ##, ###) become h1-h3
    - bullet lines become list items, every other line its own paragraph

    Args:
        text: Plain text (e.g., output of a PDF/Word extractor)

    Returns:
        HTML fragment

    Example:
        >>> text_to_markup("Jane Smith\\nSKILLS\\n- Python\\n- SQL")
        '<h1>Jane Smith</h1>\\n<h2>SKILLS</h2>\\n<ul><li>Python</li><li>SQL</li></ul>'
    """
    blocks = []
    list_items = []
    first_line = True

    def flush_list():
        if list_items:
            blocks.append("<ul>" + "".join(f"<li>{item}</li>" for item in list_items) + "</ul>")
            list_items.clear()

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            flush_list()
            continue

        heading = _MARKDOWN_HEADING.match(line)
        bullet = _BULLET.match(line)
        if heading:
            flush_list()
            level = len(heading.group(1))
            blocks.append(f"<h{level}>{html.escape(heading.group(2))}</h{level}>")
        elif bullet:
            list_items.append(html.escape(bullet.group(1).strip()))
        elif first_line and _is_name_line(line):
            blocks.append(f"<h1>{html.escape(line)}</h1>")
        elif _is_caps_heading(line):
            flush_list()
            blocks.append(f"<h2>{html.escape(line)}</h2>")
        else:
            flush_list()
            blocks.append(f"<p>{html.escape(line)}</p>")
        first_line = False

    flush_list()
    return "\n".join(blocks)


# =============================================================================
# ELEMENT HELPERS
# =============================================================================


def heading_level(tag) -> Optional[int]:
    """Numeric level of a heading tag (h1 -> 1), None for anything else."""
    if isinstance(tag, Tag) and tag.name in HEADING_TAGS:
        return int(tag.name[1])
    return None


def get_classes(tag: Tag) -> List[str]:
    """CSS classes of a tag as a list (html.parser already splits them)."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def has_class(tag, class_name: str) -> bool:
    """True when the tag carries the CSS class."""
    return isinstance(tag, Tag) and class_name in get_classes(tag)


def add_class(tag: Tag, *class_names: str) -> None:
    """Append classes that are not already present, preserving order."""
    classes = get_classes(tag)
    for name in class_names:
        if name and name not in classes:
            classes.append(name)
    tag["class"] = classes


def remove_class(tag: Tag, class_name: str) -> None:
    """Remove a class; drop the attribute entirely once no class is left."""
    classes = [c for c in get_classes(tag) if c != class_name]
    if classes:
        tag["class"] = classes
    elif tag.has_attr("class"):
        del tag["class"]


def element_children(tag: Tag) -> List[Tag]:
    """Direct element children (text nodes and comments skipped)."""
    return [child for child in tag.children if isinstance(child, Tag)]
