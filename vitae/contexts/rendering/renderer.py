"""
Template renderer: canonical sections + HeaderInfo + skin -> RenderedDocument.

Render steps:
1. build the header block and put it at the skeleton's header marker
2. for every configured section with a placeholder in the skeleton, inject the
   styled section content, or mark the container for removal when the section
   is missing, hidden or empty
3. insert custom (non-standard) sections at the custom-sections marker
4. remove marked containers
5. final sweep: strip leftover placeholder tokens, drop containers left
   without content

Output never contains placeholder tokens or empty section containers, and
rendering already-rendered sections again gives the same markup.
"""

import re
from typing import Dict, List, Optional, Sequence

from bs4 import Comment, NavigableString, Tag

from vitae.contexts.parsing.data_structures import HeaderInfo, Section
from vitae.contexts.parsing.patterns import PLACEHOLDER_RE, MarkerClasses
from vitae.contexts.parsing.section_patterns import SectionKind, to_standard_id
from vitae.contexts.rendering.data_structures import (
    CUSTOM_SECTIONS_MARKER,
    HEADER_MARKER,
    RenderedDocument,
    SectionDisplayConfig,
    TemplateDefinition,
    placeholder_token,
)
from vitae.contexts.rendering.environment import get_shared_environment
from vitae.contexts.rendering.header_builder import build_header_block
from vitae.contexts.rendering.logger import _log_debug, log_render_result
from vitae.utils.html_tools import (
    SECTION_HEADING_TAGS,
    add_class,
    get_classes,
    has_class,
    parse_fragment,
    plain_text,
    remove_class,
)
from vitae.utils.settings import get_settings

DOCUMENT_TEMPLATE = "_shared/document.html.jinja"

SECTION_ICON_CLASS = "section-icon"
REGION_CLASS = "region"
# Lists in these kinds read better spread over columns
COLUMN_KINDS = (
    SectionKind.SKILLS,
    SectionKind.LANGUAGES,
    SectionKind.INTERESTS,
    SectionKind.CERTIFICATIONS,
)

_MARKER_TEXT = re.compile(r"^<!--\s*(.*?)\s*-->$")
_STALE_TITLE_CLASS = re.compile(r"^[\w-]+-section-title$")


def _comment_text(marker: str) -> str:
    return _MARKER_TEXT.match(marker).group(1)


# =============================================================================
# SECTION ENHANCEMENT
# =============================================================================


def icon_url(icon: str) -> str:
    """Bootstrap icon URL for an icon name."""
    return f"{get_settings().icon_base_url.rstrip('/')}/{icon}.svg"


def _primary_heading(soup) -> Optional[Tag]:
    marked = soup.find(class_=MarkerClasses.SECTION_TITLE)
    if marked is not None:
        return marked
    return soup.find(SECTION_HEADING_TAGS)


def enhance_section_content(
    section: Section, config: SectionDisplayConfig, css_prefix: str
) -> str:
    """
    Apply a skin's icon and display classes to section content.

    Idempotent: existing icons are replaced, classes are only added when
    absent, so enhancing enhanced content changes nothing.

    Args:
        section: Section to style
        config: Display configuration for this section in the skin
        css_prefix: Skin class prefix

    Returns:
        Styled content markup
    """
    soup = parse_fragment(section.content)

    heading = _primary_heading(soup)
    if heading is None:
        heading = soup.new_tag("h2")
        heading.string = section.title
        soup.insert(0, heading)

    # Classes left by a previous render with another skin
    for stale in [c for c in get_classes(heading) if _STALE_TITLE_CLASS.match(c)]:
        if stale != f"{css_prefix}-section-title":
            remove_class(heading, stale)
    add_class(heading, MarkerClasses.SECTION_TITLE, f"{css_prefix}-section-title")

    for old_icon in heading.find_all("img", class_=SECTION_ICON_CLASS):
        old_icon.decompose()
    if config.icon:
        icon = soup.new_tag(
            "img",
            attrs={
                "class": [SECTION_ICON_CLASS, f"{css_prefix}-icon"],
                "src": icon_url(config.icon),
                "alt": "",
            },
        )
        heading.insert(0, icon)

    lists = soup.find_all(["ul", "ol"])
    if config.location == "sidebar":
        for element in lists:
            add_class(element, f"{css_prefix}-sidebar-list")
        for item in soup.find_all("li"):
            add_class(item, f"{css_prefix}-sidebar-item")
    else:
        for paragraph in soup.find_all("p"):
            add_class(paragraph, f"{css_prefix}-text")
        for element in lists:
            add_class(element, f"{css_prefix}-list")

    if config.display_style == "columns" and section.kind in COLUMN_KINDS:
        for element in lists:
            add_class(element, "list-columns")
    elif config.display_style == "inline":
        for element in lists:
            add_class(element, "list-inline")

    return str(soup)


# =============================================================================
# SKELETON HELPERS
# =============================================================================


def _collect_slots(soup) -> Dict[str, NavigableString]:
    """
    Split the skeleton's text so every placeholder token is its own text node.

    Runs before anything is injected, so tokens that section content happens
    to contain are never mistaken for skeleton slots. Whitespace-only text
    around a token is dropped.

    Returns:
        First text node of each token, keyed by token
    """
    slots: Dict[str, NavigableString] = {}
    holders = soup.find_all(
        string=lambda text: not isinstance(text, Comment) and PLACEHOLDER_RE.search(text)
    )
    for node in holders:
        text = str(node)
        position = 0
        for match in PLACEHOLDER_RE.finditer(text):
            before = text[position : match.start()]
            if before.strip():
                node.insert_before(NavigableString(before))
            token_node = NavigableString(match.group(0))
            node.insert_before(token_node)
            slots.setdefault(match.group(0), token_node)
            position = match.end()
        if text[position:].strip():
            node.insert_before(NavigableString(text[position:]))
        node.extract()
    return slots


def _find_comment(soup, marker: str) -> Optional[Comment]:
    wanted = _comment_text(marker)
    return soup.find(string=lambda text: isinstance(text, Comment) and text.strip() == wanted)


def _token_container(node: NavigableString) -> Optional[Tag]:
    """Nearest ancestor marked as a section, else the token's parent (None at top level)."""
    for parent in node.parents:
        if has_class(parent, MarkerClasses.SECTION):
            return parent
    parent = node.parent
    return parent if parent is not None and parent.parent is not None else None


def _replace_node(node: NavigableString, markup: str) -> None:
    """Swap a slot (token text node or marker comment) for parsed markup."""
    fragment = parse_fragment(markup)
    for child in list(fragment.contents):
        node.insert_before(child.extract())
    node.extract()


def _sweep(soup) -> int:
    """Strip leftover placeholders, then remove sections/regions without text."""
    stripped = 0
    emptied: List[Tag] = []
    leftovers = soup.find_all(
        string=lambda text: not isinstance(text, Comment) and PLACEHOLDER_RE.search(text)
    )
    for node in leftovers:
        stripped += len(PLACEHOLDER_RE.findall(node))
        parent = node.parent
        node.replace_with(NavigableString(PLACEHOLDER_RE.sub("", str(node))))
        if (
            parent is not None
            and parent.parent is not None
            and not plain_text(parent)
            and parent.find("img") is None
        ):
            emptied.append(parent)

    for element in emptied:
        if not element.decomposed and element.parent is not None:
            element.decompose()

    # Innermost first so a region emptied by its sections is caught too
    for class_name in (MarkerClasses.SECTION, REGION_CLASS):
        for element in reversed(soup.find_all(class_=class_name)):
            if not element.decomposed and element.parent is not None and not plain_text(element):
                element.decompose()
    return stripped


# =============================================================================
# RENDERING
# =============================================================================


def render_skeleton(
    sections: Sequence[Section], header: HeaderInfo, template: TemplateDefinition
) -> RenderedDocument:
    """
    Default render function: fill the skin's skeleton.

    Args:
        sections: Canonical sections (any order; custom sections keep list order)
        header: Header fields for the header block
        template: Skin definition

    Returns:
        RenderedDocument with the skin's styles
    """
    prefix = template.css_prefix
    soup = parse_fragment(template.skeleton)

    # Slots come from the bare skeleton, before any content is injected
    slots = _collect_slots(soup)
    header_marker = _find_comment(soup, HEADER_MARKER)
    custom_marker = _find_comment(soup, CUSTOM_SECTIONS_MARKER)

    if header_marker is not None:
        _replace_node(header_marker, build_header_block(header, prefix, template.header))

    by_id: Dict[str, Section] = {}
    for section in sections:
        by_id.setdefault(to_standard_id(section.id) or section.id, section)

    to_remove: List[Tag] = []
    injected = 0

    for section_id, config in template.section_config.items():
        node = slots.get(placeholder_token(section_id))
        if node is None:
            continue

        section = by_id.get(section_id)
        if section is None or not section.is_renderable:
            container = _token_container(node)
            if container is None:
                node.extract()
            else:
                to_remove.append(container)
            continue

        _replace_node(node, enhance_section_content(section, config, prefix))
        injected += 1

    customs = [s for s in sections if to_standard_id(s.id) is None and s.is_renderable]
    if custom_marker is not None:
        for section in customs:
            container = soup.new_tag(
                "div",
                attrs={
                    "class": [MarkerClasses.SECTION, f"{prefix}-section", f"{prefix}-custom-section"],
                    "id": section.id,
                },
            )
            content = parse_fragment(
                enhance_section_content(section, template.custom_section, prefix)
            )
            for child in list(content.contents):
                container.append(child.extract())
            custom_marker.insert_before(container)
            injected += 1
        custom_marker.extract()
    elif customs:
        _log_debug(f"Template '{template.id}' has no custom-section slot, {len(customs)} omitted")

    for container in to_remove:
        if not container.decomposed and container.parent is not None:
            container.decompose()

    stripped = _sweep(soup)
    log_render_result(template.id, injected, len(to_remove), stripped)

    return RenderedDocument(markup=str(soup).strip(), styles=template.styles, template_id=template.id)


def render(
    sections: Sequence[Section], header: HeaderInfo, template: TemplateDefinition
) -> RenderedDocument:
    """
    Render sections through a skin.

    Dispatches to the skin's render function; every built-in skin uses
    render_skeleton().

    Args:
        sections: Canonical sections
        header: Header fields
        template: Skin definition (from TemplateCatalog.get)

    Returns:
        Fresh RenderedDocument

    Example:
        >>> catalog = get_catalog()
        >>> document = render(sections, header, catalog.get("professional"))
        >>> "{{" in document.markup
        False
    """
    return template.render_fn(sections, header, template)


def to_html(document: RenderedDocument, title: str = "Résumé", lang: str = "en") -> str:
    """Wrap rendered markup and styles into a standalone HTML page."""
    page = get_shared_environment().get_template(DOCUMENT_TEMPLATE)
    return page.render(title=title, lang=lang, styles=document.styles, markup=document.markup)
