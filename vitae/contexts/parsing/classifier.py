"""
Section classification: heading text -> standard section id.

Keyword tables live in section_patterns.py. Matching is case-insensitive and
scans ids in canonical order; the first id with a matching keyword wins.
"""

import re
import unicodedata
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from vitae.contexts.parsing.language import resolve_language
from vitae.contexts.parsing.logger import _log_debug
from vitae.contexts.parsing.section_patterns import (
    DISPLAY_NAMES,
    SECTION_KEYWORDS,
    kind_for_id,
)

_APOSTROPHES = str.maketrans({"\u2019": "'", "\u2018": "'", "\u02bc": "'"})
_SLUG_SEPARATORS = re.compile(r"[\W_]+", re.UNICODE)
FALLBACK_SLUG = "section"
MIN_REVERSE_MATCH = 4


def fold(text: str) -> str:
    """Comparison form of heading text: NFC, straight apostrophes, casefolded, trimmed."""
    return unicodedata.normalize("NFC", text or "").translate(_APOSTROPHES).casefold().strip()


@lru_cache(maxsize=None)
def _compiled_table(language: str) -> Tuple[Tuple[str, Tuple[Pattern, ...]], ...]:
    # Keywords match from a word start: "formation" hits "Formation" but not "Informations"
    return tuple(
        (
            section_id,
            tuple(re.compile(r"(?<!\w)" + re.escape(fold(keyword))) for keyword in keywords),
        )
        for section_id, keywords in SECTION_KEYWORDS[language].items()
    )


def classify(heading_text: str, language: Optional[str] = None) -> Optional[str]:
    """
    Map free heading text to a standard section id.

    The table of the requested language is scanned first, then English
    (headings are often left in English in otherwise localized documents).

    Args:
        heading_text: Visible heading text ("Expérience Professionnelle")
        language: Language code or name (defaults to configured default)

    Returns:
        Standard id ("resume-experience") or None on a classification miss

    Example:
        >>> classify("Technical Skills", "en")
        'resume-skills'
        >>> classify("Mes Loisirs", "fr") is None
        True
    """
    folded = fold(heading_text)
    if not folded:
        return None

    code = resolve_language(language)
    languages = (code,) if code == "en" else (code, "en")

    for table_language in languages:
        for section_id, patterns in _compiled_table(table_language):
            if any(pattern.search(folded) for pattern in patterns):
                return section_id

    _log_debug(f"No section keyword matched '{heading_text}' ({code})")
    return None


def classify_kind(heading_text: str, language: Optional[str] = None) -> str:
    """SectionKind of a heading ("general" on a classification miss)."""
    return kind_for_id(classify(heading_text, language))


def slugify(text: str) -> str:
    """
    Synthesize a section id from heading text.

    Lower-cased, runs of non-alphanumerics collapsed to one hyphen, trimmed.

    Example:
        >>> slugify("Mes Loisirs")
        'mes-loisirs'
    """
    slug = _SLUG_SEPARATORS.sub("-", fold(text)).strip("-")
    return slug or FALLBACK_SLUG


def _contains_words(haystack: str, needle: str) -> bool:
    # "formation" is in "formation continue" but not in "informations"
    return re.search(r"(?<!\w)" + re.escape(needle) + r"(?!\w)", haystack) is not None


def matches_section_name(text: str, language: Optional[str] = None) -> Optional[str]:
    """
    Fuzzy match text against the localized section display names.

    Whole-word containment in either direction, case-insensitive. Used by the
    paragraph-grouping parser to spot section boundaries.

    Returns:
        Standard id of the first matching display name, or None
    """
    folded = fold(text)
    if not folded:
        return None

    for section_id, name in DISPLAY_NAMES[resolve_language(language)].items():
        folded_name = fold(name)
        # Reverse containment needs a few characters or "a" would match everything
        if _contains_words(folded, folded_name) or (
            len(folded) >= MIN_REVERSE_MATCH and _contains_words(folded_name, folded)
        ):
            return section_id
    return None
