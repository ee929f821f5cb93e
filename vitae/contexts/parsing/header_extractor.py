"""
Header extraction: header section markup -> HeaderInfo.

Each field is resolved independently: a marker-tagged element wins, otherwise
the field is found by scanning text. Extraction never raises; a header that
can't be read yields defaults.
"""

import re
from typing import Iterable, List, Optional, Tuple

from bs4 import NavigableString, Tag

from vitae.contexts.parsing.contact_validation import clean_header
from vitae.contexts.parsing.data_structures import HeaderInfo
from vitae.contexts.parsing.logger import _log_warning, log_header_result
from vitae.contexts.parsing.patterns import (
    ADDRESS_MIN_COMMAS,
    ADDRESS_PATTERNS,
    CITY_TOKENS,
    CLAUSE_SEPARATORS_RE,
    EMAIL_RE,
    LINKEDIN_KEYWORDS,
    LINKEDIN_URL_RE,
    PHONE_PATTERNS,
    PORTFOLIO_KEYWORDS,
    URL_TOKEN_RE,
    MarkerClasses,
)
from vitae.utils.html_tools import (
    HEADING_TAGS,
    collapse_whitespace,
    has_class,
    parse_fragment,
    plain_text,
)
from vitae.utils.settings import get_settings

# Blocks scanned for free-text fields
TEXT_BLOCK_TAGS = ("p", "li", "div", "span", "address")
_CITY_RES = tuple(re.compile(r"(?<!\w)" + re.escape(city) + r"(?!\w)", re.IGNORECASE) for city in CITY_TOKENS)


# =============================================================================
# TEXT SCANNERS
# =============================================================================


def find_phone(text: str) -> Optional[str]:
    """
    First phone-like token in text.

    Patterns are tried in order (North-American, spaced pairs, generic
    international); within a pattern, the first match of at least
    header.phone_min_length characters wins.
    """
    min_length = get_settings().header.phone_min_length
    for pattern in PHONE_PATTERNS:
        for match in pattern.finditer(text or ""):
            candidate = match.group(0).strip()
            if len(candidate) >= min_length:
                return candidate
    return None


def find_email(text: str) -> Optional[str]:
    match = EMAIL_RE.search(text or "")
    return match.group(0) if match else None


def looks_like_contact(text: str) -> bool:
    """True when text holds an email or a phone number."""
    return find_email(text) is not None or find_phone(text) is not None


def looks_like_address(text: str) -> bool:
    """Postal code, street/apartment indicator, known city, or comma-dense."""
    if not text or looks_like_contact(text):
        return False
    if any(pattern.search(text) for pattern in ADDRESS_PATTERNS):
        return True
    if any(city.search(text) for city in _CITY_RES):
        return True
    return text.count(",") >= ADDRESS_MIN_COMMAS


def _clauses(text: str) -> List[str]:
    return [clause.strip() for clause in CLAUSE_SEPARATORS_RE.split(text) if clause.strip()]


def find_keyword_link(texts: Iterable[str], keywords: Tuple[str, ...]) -> Optional[str]:
    """
    Find a link announced by a keyword ("LinkedIn: linkedin.com/in/jane").

    Returns the first URL-like token at or after the keyword, otherwise the
    clause holding the keyword verbatim.
    """
    for text in texts:
        folded = text.casefold()
        for keyword in keywords:
            position = folded.find(keyword)
            if position < 0:
                continue

            url = URL_TOKEN_RE.search(text, position)
            clause = next((c for c in _clauses(text) if keyword in c.casefold()), None)
            if url and (clause is None or url.group(0) in clause):
                return url.group(0).rstrip(".")
            if clause:
                return clause
    return None


# =============================================================================
# TREE HELPERS
# =============================================================================


def _marked(soup, markers) -> Optional[Tag]:
    if isinstance(markers, str):
        markers = (markers,)
    for marker in markers:
        element = soup.find(class_=marker)
        if element is not None:
            return element
    return None


def _marked_value(soup, markers) -> Optional[str]:
    """Text of the first marked element, its href when the text is empty."""
    element = _marked(soup, markers)
    if element is None:
        return None
    text = plain_text(element)
    if text:
        return text
    anchor = element if element.name == "a" else element.find("a")
    if anchor is not None and anchor.get("href"):
        return anchor["href"].replace("mailto:", "").replace("tel:", "")
    return None


def _leaf_texts(soup, exclude: Tuple[str, ...] = ()) -> List[str]:
    """Texts of innermost text blocks, headings and excluded texts skipped."""
    texts = []
    for element in soup.find_all(list(TEXT_BLOCK_TAGS)):
        if element.find(list(TEXT_BLOCK_TAGS)) is not None:
            continue
        text = plain_text(element)
        if text and text not in exclude:
            texts.append(text)
    if not texts:
        loose = plain_text(soup)
        if loose:
            texts.append(loose)
    return texts


def _address_from_marker(element: Tag) -> Optional[str]:
    for br in element.find_all("br"):
        br.replace_with(NavigableString("\n"))
    lines = [collapse_whitespace(line) for line in element.get_text().split("\n")]
    address = "\n".join(line for line in lines if line)
    return address or None


def _title_candidate(name_heading: Optional[Tag]) -> Optional[str]:
    if name_heading is None:
        return None
    sibling = name_heading.find_next_sibling()
    if sibling is None or sibling.name in ("br", "hr"):
        return None

    contact_markers = MarkerClasses.contact_markers()
    if any(has_class(sibling, marker) for marker in contact_markers):
        return None
    if any(sibling.find(class_=marker) is not None for marker in contact_markers):
        return None

    text = plain_text(sibling)
    if not text or looks_like_contact(text):
        return None
    if len(text) >= get_settings().header.title_max_length:
        return None
    return text


# =============================================================================
# EXTRACTION
# =============================================================================


def _extract(content: str) -> HeaderInfo:
    soup = parse_fragment(content)
    settings = get_settings().header

    # Name: first heading, else a name marker
    name_heading = soup.find(list(HEADING_TAGS))
    name_element = name_heading if name_heading is not None else _marked(soup, MarkerClasses.NAME)
    name = plain_text(name_element) if name_element is not None else ""

    # Title: marker, else the element after the name, else an unmarked h2/h3
    title = None
    title_marker = soup.find(class_=MarkerClasses.TITLE)
    if title_marker is not None and title_marker is not name_element:
        title = plain_text(title_marker) or None
    if title is None:
        title = _title_candidate(name_heading)
    if title is None:
        for heading in soup.find_all(["h2", "h3"]):
            if heading is not name_heading and not has_class(heading, MarkerClasses.SECTION_TITLE):
                title = plain_text(heading) or None
                if title:
                    break

    excluded = tuple(text for text in (name, title) if text)
    texts = _leaf_texts(soup, exclude=excluded)
    full_text = " \n ".join(texts)

    phone = _marked_value(soup, MarkerClasses.PHONE) or find_phone(full_text)
    email = _marked_value(soup, MarkerClasses.EMAIL) or find_email(full_text)

    linkedin = _marked_value(soup, MarkerClasses.LINKEDIN)
    if linkedin is None:
        anchor = soup.find("a", href=LINKEDIN_URL_RE)
        linkedin = anchor["href"] if anchor is not None else None
    if linkedin is None:
        linkedin = find_keyword_link(texts, LINKEDIN_KEYWORDS)

    portfolio = _marked_value(soup, MarkerClasses.PORTFOLIO) or find_keyword_link(
        texts, PORTFOLIO_KEYWORDS
    )

    address = None
    address_element = _marked(soup, MarkerClasses.ADDRESS)
    if address_element is not None:
        address = _address_from_marker(address_element)
    if address is None:
        for text in texts:
            address = next((c for c in _clauses(text) if looks_like_address(c)), None)
            if address:
                break

    return clean_header(
        HeaderInfo(
            name=name or settings.default_name,
            title=title,
            phone=phone,
            email=email,
            linkedin=linkedin,
            portfolio=portfolio,
            address=address,
        )
    )


def extract_header(content: Optional[str]) -> HeaderInfo:
    """
    Decompose header section markup into structured contact fields.

    Args:
        content: Markup of the header section

    Returns:
        HeaderInfo; every field except name is None when not found

    Example:
        >>> info = extract_header("<h1>Jane Smith</h1><p>514-555-1234 jane@email.com</p>")
        >>> info.phone, info.email, info.title
        ('514-555-1234', 'jane@email.com', None)
    """
    if content is None or not content.strip():
        return HeaderInfo(name=get_settings().header.default_name)

    try:
        header = _extract(content)
    except Exception as e:
        # Extraction never raises
        _log_warning(f"Header extraction failed, using defaults: {type(e).__name__}: {e}")
        return HeaderInfo(name=get_settings().header.default_name)

    log_header_result(header)
    return header
