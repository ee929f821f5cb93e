"""
Section parser: normalized markup -> ordered list of typed sections.

Parsing is a cascade of strategies tried in order; the first one producing at
least one section wins and later strategies never run:

1. explicit containers   (<section id=...>, <div class="section" id=...>)
2. marked titles         (elements carrying the "section-title" class)
3. heading cascade       (h1 = header, h2/h3 open sections)
4. paragraph grouping    (flat <p> runs split on short "title-like" paragraphs)
5. single fallback       (whole document as the summary)

Strategies only read the tree. Output is in document order; callers sort it
with ordering.order_sections().
"""

import html
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from bs4 import NavigableString, Tag

from vitae.contexts.parsing.classifier import classify, matches_section_name, slugify
from vitae.contexts.parsing.data_structures import Section
from vitae.contexts.parsing.language import display_name, resolve_language
from vitae.contexts.parsing.logger import _log_debug, _log_warning, log_strategy_result
from vitae.contexts.parsing.normalizer import CONTAINER_TAGS, is_section_container
from vitae.contexts.parsing.patterns import MarkerClasses
from vitae.contexts.parsing.section_patterns import (
    SectionKind,
    StandardSectionId,
    kind_for_id,
    to_standard_id,
)
from vitae.utils.html_tools import (
    HEADING_TAGS,
    SECTION_HEADING_TAGS,
    MarkupParseError,
    element_children,
    has_class,
    heading_level,
    inner_html,
    nodes_to_html,
    parse_fragment,
    plain_text,
    text_to_markup,
)
from vitae.utils.settings import get_settings

# Wrappers the parser looks through when they are the only element at a level
_TRANSPARENT_WRAPPERS = ("html", "body", "main", "div", "article")
_TAG_STRIPPER = re.compile(r"<[^>]*>")


@dataclass
class SectionFragment:
    """
    A section as found by a strategy, before id resolution and merging.

    Attributes:
        section_id: Standard id or slug
        title: Heading text
        content: Markup fragment
    """

    section_id: str
    title: str
    content: str


@dataclass
class ParseResult:
    """
    Sections plus the name of the strategy that produced them.

    Attributes:
        sections: Parsed sections in document order
        strategy: Winning strategy name ("fallback" when none matched)
    """

    sections: List[Section] = field(default_factory=list)
    strategy: str = "fallback"

    @property
    def section_ids(self) -> List[str]:
        return [section.id for section in self.sections]


# =============================================================================
# TREE HELPERS
# =============================================================================


def _has_container_ancestor(element: Tag) -> bool:
    return any(is_section_container(parent) for parent in element.parents)


def _content_root(soup) -> Tag:
    """Descend through single-child wrappers (html/body/div) to the real content."""
    body = soup.find("body")
    node = body if body is not None else soup
    while True:
        children = element_children(node)
        loose_text = any(
            type(child) is NavigableString and child.strip() for child in node.children
        )
        if len(children) != 1 or loose_text:
            return node

        child = children[0]
        if child.name not in _TRANSPARENT_WRAPPERS or is_section_container(child):
            return node
        node = child


def _flatten_blocks(node: Tag, contains: Tuple[str, ...]) -> Iterator:
    """
    Yield the block sequence of a node, looking through wrappers.

    A child element that is not itself one of `contains` but wraps one is
    replaced by its own children, so headings or paragraphs nested in layout
    divs still form a flat sequence.
    """
    for child in node.children:
        if isinstance(child, Tag) and child.name not in contains and child.find(list(contains)):
            yield from _flatten_blocks(child, contains)
        else:
            yield child


def _is_blank_run(nodes) -> bool:
    return not plain_text(nodes_to_html(nodes))


def _humanize(section_id: str) -> str:
    return section_id.replace("-", " ").replace("_", " ").strip().title()


def _resolve_id(text: str, language: str) -> str:
    return classify(text, language) or slugify(text)


# =============================================================================
# STRATEGIES
# =============================================================================


def parse_explicit_containers(root: Tag, language: str) -> List[SectionFragment]:
    """Strategy 1: outermost section containers; inner markup kept verbatim."""
    fragments = []
    for container in root.find_all(list(CONTAINER_TAGS)):
        if not is_section_container(container) or _has_container_ancestor(container):
            continue

        raw_id = container["id"].strip()
        section_id = to_standard_id(raw_id) or slugify(raw_id)

        heading = container.find(SECTION_HEADING_TAGS)
        if heading is not None and plain_text(heading):
            title = plain_text(heading)
        else:
            title = display_name(section_id, language) or _humanize(section_id)

        fragments.append(SectionFragment(section_id, title, inner_html(container)))

    if not fragments:
        return fragments

    # Loose name/contact markup ahead of the first container is the header
    leading = []
    for child in root.children:
        if is_section_container(child) or (
            isinstance(child, Tag)
            and any(is_section_container(el) for el in child.find_all(list(CONTAINER_TAGS)))
        ):
            break
        leading.append(child)

    has_header = any(f.section_id == StandardSectionId.HEADER for f in fragments)
    if leading and not has_header and not _is_blank_run(leading):
        leading_markup = nodes_to_html(leading)
        heading = parse_fragment(leading_markup).find(SECTION_HEADING_TAGS)
        title = plain_text(heading) if heading is not None else display_name(
            StandardSectionId.HEADER, language
        )
        fragments.insert(0, SectionFragment(StandardSectionId.HEADER, title, leading_markup))
    return fragments


def parse_marked_titles(root: Tag, language: str) -> List[SectionFragment]:
    """Strategy 2: each marked title runs until the next sibling holding a marked title."""
    marker = MarkerClasses.SECTION_TITLE
    titles = [
        element
        for element in root.find_all(class_=marker)
        if not _has_container_ancestor(element)
    ]
    if not titles:
        return []

    def holds_title(node) -> bool:
        return isinstance(node, Tag) and (has_class(node, marker) or node.find(class_=marker) is not None)

    fragments = []
    has_header = False

    # Anything ahead of the first title (name, contact line) is the header
    leading = []
    for child in root.children:
        if holds_title(child):
            break
        leading.append(child)
    if leading and not _is_blank_run(leading):
        fragments.append(
            SectionFragment(
                StandardSectionId.HEADER,
                display_name(StandardSectionId.HEADER, language),
                nodes_to_html(leading),
            )
        )
        has_header = True

    for title in titles:
        text = plain_text(title)
        explicit_id = to_standard_id(title.get("id"))

        if explicit_id:
            section_id = explicit_id
        elif not has_header and (title.name == "h1" or has_class(title, MarkerClasses.NAME)):
            section_id = StandardSectionId.HEADER
        else:
            section_id = _resolve_id(text, language)
        has_header = has_header or section_id == StandardSectionId.HEADER

        nodes = [title]
        for sibling in title.next_siblings:
            if holds_title(sibling):
                break
            nodes.append(sibling)

        fragments.append(SectionFragment(section_id, text, nodes_to_html(nodes)))
    return fragments


def parse_heading_cascade(root: Tag, language: str) -> List[SectionFragment]:
    """
    Strategy 3: first h1 is the header; h2/h3 open sections down to their level.

    The h1 and the blocks after it form the header wherever it appears, so a
    name placed below a summary still lands in the header. A document whose
    only heading is the h1, followed by a long flat run of paragraphs, is left
    to paragraph grouping.
    """
    blocks = list(_flatten_blocks(root, SECTION_HEADING_TAGS))
    headings = [block for block in blocks if heading_level(block) in (1, 2, 3)]
    if not headings:
        return []

    header_heading = next((h for h in headings if h.name == "h1"), None)
    sub_levels = [heading_level(h) for h in headings if heading_level(h) in (2, 3)]
    section_level = min(sub_levels) if sub_levels else 1

    openers = [
        h for h in headings if h is not header_heading and heading_level(h) <= section_level
    ]
    lone_name = not openers and len(root.find_all(list(HEADING_TAGS))) == 1
    if lone_name and len(root.find_all("p")) > get_settings().parser.paragraph_grouping.min_paragraphs:
        return []
    opener_ids = {id(h) for h in openers}

    fragments = []
    current: Optional[SectionFragment] = None
    current_nodes: list = []

    def flush():
        if current is not None:
            current.content = nodes_to_html(current_nodes)
            fragments.append(current)

    leading: list = []
    for block in blocks:
        if block is header_heading and current is not None:
            flush()
            current = SectionFragment(StandardSectionId.HEADER, plain_text(block), "")
            current_nodes = [block]
        elif id(block) in opener_ids:
            if current is None and leading and not _is_blank_run(leading):
                header_title = (
                    plain_text(header_heading)
                    if header_heading is not None
                    else display_name(StandardSectionId.HEADER, language)
                )
                fragments.append(
                    SectionFragment(StandardSectionId.HEADER, header_title, nodes_to_html(leading))
                )
            flush()
            text = plain_text(block)
            current = SectionFragment(_resolve_id(text, language), text, "")
            current_nodes = [block]
        elif current is None:
            leading.append(block)
        else:
            current_nodes.append(block)

    if current is None:
        # Only a header heading: everything belongs to the header
        if not _is_blank_run(leading):
            title = plain_text(header_heading) if header_heading is not None else ""
            fragments.append(SectionFragment(StandardSectionId.HEADER, title, nodes_to_html(leading)))
    else:
        flush()
    return fragments


def parse_paragraph_groups(root: Tag, language: str) -> List[SectionFragment]:
    """
    Strategy 4: split a flat run of paragraphs on title-like paragraphs.

    A non-blank paragraph is a boundary when it is short (fewer than max_words
    words, fewer than max_chars characters, no sentence terminator) or when it
    fuzzily matches a localized section name. Until the header holds content,
    paragraphs that don't match a section name are absorbed into it. A single
    leading h1 (the name line of converted plain text) opens the header.
    """
    settings = get_settings().parser.paragraph_grouping

    headings = root.find_all(list(HEADING_TAGS))
    name_heading = headings[0] if len(headings) == 1 and headings[0].name == "h1" else None
    if headings and name_heading is None:
        return []
    if len(root.find_all("p")) <= settings.min_paragraphs:
        return []

    def is_boundary(text: str) -> bool:
        short = (
            len(text.split()) < settings.max_words
            and len(text) < settings.max_chars
            and settings.sentence_terminator not in text
        )
        return short or matches_section_name(text, language) is not None

    header_title = (
        plain_text(name_heading)
        if name_heading is not None
        else display_name(StandardSectionId.HEADER, language)
    )
    header = SectionFragment(StandardSectionId.HEADER, header_title, "")
    fragments = [header]
    current = header
    parts: Dict[int, list] = {id(header): []}

    for block in _flatten_blocks(root, ("p",)):
        text = plain_text(block) if isinstance(block, Tag) else plain_text(str(block))
        is_paragraph = isinstance(block, Tag) and block.name == "p"

        if is_paragraph and text:
            header_filled = bool(plain_text(nodes_to_html(parts[id(header)])))
            named_section = matches_section_name(text, language)
            if current is header and not header_filled and named_section is None:
                parts[id(header)].append(block)
                continue
            if is_boundary(text):
                section_id = named_section or _resolve_id(text, language)
                current = SectionFragment(section_id, text, "")
                fragments.append(current)
                parts[id(current)] = [
                    f'<h2 class="{MarkerClasses.SECTION_TITLE}">{html.escape(text)}</h2>'
                ]
                continue

        parts[id(current)].append(block)

    for fragment in fragments:
        fragment.content = nodes_to_html(parts[id(fragment)])

    return [fragment for fragment in fragments if fragment is not header or fragment.content.strip()]


def parse_single_fallback(root: Tag, language: str) -> List[SectionFragment]:
    """Strategy 5: the whole document is the summary."""
    content = inner_html(root) if isinstance(root, Tag) else str(root)
    if not plain_text(content):
        return []
    return [
        SectionFragment(
            StandardSectionId.SUMMARY,
            display_name(StandardSectionId.SUMMARY, language),
            content,
        )
    ]


ParseStrategy = Callable[[Tag, str], List[SectionFragment]]

PARSE_STRATEGIES: Tuple[Tuple[str, ParseStrategy], ...] = (
    ("explicit_containers", parse_explicit_containers),
    ("marked_titles", parse_marked_titles),
    ("heading_cascade", parse_heading_cascade),
    ("paragraph_grouping", parse_paragraph_groups),
    ("single_fallback", parse_single_fallback),
)


# =============================================================================
# DRIVER
# =============================================================================


def _section_kind(section_id: str, title: str, language: str) -> str:
    # The header's title is a person's name, not a heading to classify
    if section_id == StandardSectionId.HEADER:
        return SectionKind.HEADER
    classified = classify(title, language)
    return kind_for_id(classified or section_id)


def build_sections(fragments: List[SectionFragment], language: str) -> List[Section]:
    """
    Merge fragments sharing an id and build Section values.

    Content of later duplicates is appended in document order, so ids are
    unique and nothing is dropped.
    """
    merged: Dict[str, SectionFragment] = {}
    for fragment in fragments:
        if fragment.section_id in merged:
            _log_debug(f"Merging duplicate section '{fragment.section_id}'")
            merged[fragment.section_id].content += fragment.content
        else:
            merged[fragment.section_id] = SectionFragment(
                fragment.section_id, fragment.title, fragment.content
            )

    return [
        Section(
            id=fragment.section_id,
            title=fragment.title,
            content=fragment.content,
            kind=_section_kind(fragment.section_id, fragment.title, language),
            order=position,
        )
        for position, fragment in enumerate(merged.values())
    ]


def parse_with_details(document: Optional[str], language: Optional[str] = None) -> ParseResult:
    """
    Parse normalized markup and report which strategy won.

    Args:
        document: Normalized markup (see normalizer.normalize)
        language: Language code or name for classification and titles

    Returns:
        ParseResult with sections in document order
    """
    code = resolve_language(language)
    document = document or ""

    try:
        soup = parse_fragment(document)
    except MarkupParseError as e:
        _log_warning(f"Parser rejected document, using plain-text path: {e}")
        soup = parse_fragment(text_to_markup(html.unescape(_TAG_STRIPPER.sub("\n", document))))

    root = _content_root(soup)

    for name, strategy in PARSE_STRATEGIES:
        fragments = strategy(root, code)
        if fragments:
            sections = build_sections(fragments, code)
            log_strategy_result(name, [section.id for section in sections])
            return ParseResult(sections=sections, strategy=name)

    _log_debug("No strategy produced sections, synthesizing an empty summary")
    summary = Section(
        id=StandardSectionId.SUMMARY,
        title=display_name(StandardSectionId.SUMMARY, code),
        content=document,
        kind=SectionKind.SUMMARY,
    )
    return ParseResult(sections=[summary], strategy="fallback")


def parse(document: Optional[str], language: Optional[str] = None) -> List[Section]:
    """
    Extract typed sections from normalized markup.

    Args:
        document: Normalized markup
        language: Language code or name

    Returns:
        Sections in document order (not yet sorted)

    Example:
        >>> sections = parse("<h1>Jane Smith</h1><h2>Experience</h2><p>ACME, 2020-2024</p>")
        >>> [s.id for s in sections]
        ['resume-header', 'resume-experience']
    """
    return parse_with_details(document, language).sections
