"""
Language resolution and detection.

Languages arrive from collaborators either as codes ("fr", "fr-CA") or as
names ("French", "français"); everything inside the core uses the two-letter
code of a supported language.
"""

import re
from functools import lru_cache
from typing import FrozenSet, Optional

import nltk
from nltk.corpus import stopwords

from vitae.contexts.parsing.section_patterns import DISPLAY_NAMES, SUPPORTED_LANGUAGES
from vitae.utils.settings import get_settings

LANGUAGE_NAMES = {
    "english": "en",
    "anglais": "en",
    "inglés": "en",
    "ingles": "en",
    "french": "fr",
    "français": "fr",
    "francais": "fr",
    "francés": "fr",
    "spanish": "es",
    "español": "es",
    "espanol": "es",
    "espagnol": "es",
}

# NLTK stop-word corpus file per supported code
NLTK_LANGUAGES = {"en": "english", "fr": "french", "es": "spanish"}
DETECTION_RATIO = 0.05

_WORD = re.compile(r"[^\W\d_]+", re.UNICODE)


def resolve_language(language: Optional[str]) -> str:
    """
    Normalize a language code or name to a supported code.

    Args:
        language: "fr", "fr-CA", "French", "español", ... or None

    Returns:
        Supported two-letter code, or the configured default language
    """
    default = get_settings().default_language
    if not language:
        return default

    key = language.strip().lower()
    if key in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[key]

    code = re.split(r"[-_]", key, maxsplit=1)[0]
    return code if code in SUPPORTED_LANGUAGES else default


@lru_cache(maxsize=None)
def stop_words(language: str) -> FrozenSet[str]:
    """
    NLTK stop words for a supported language code, downloading the corpus if necessary.

    Loaded once per language; the returned set is read-only.
    """
    name = NLTK_LANGUAGES[language]
    try:
        words = stopwords.words(name)
    except LookupError:
        nltk.download("stopwords", quiet=True)
        words = stopwords.words(name)
    return frozenset(word.lower() for word in words)


def detect_language(text: str) -> str:
    """
    Guess the language of résumé text from stop-word frequency.

    Every supported language is scored by how many words are in its NLTK
    stop-word list. The best score wins when it exceeds 5% of all words;
    ties and weak scores resolve to English.

    Args:
        text: Plain text

    Returns:
        "fr", "es" or "en"
    """
    words = [word.lower() for word in _WORD.findall(text or "")]
    if not words:
        return "en"

    scores = {}
    for code in SUPPORTED_LANGUAGES:
        known = stop_words(code)
        scores[code] = sum(1 for word in words if word in known)
    # max() keeps the first of equal scores, and English is listed first
    best = max(scores, key=scores.get)
    if scores[best] <= len(words) * DETECTION_RATIO:
        return "en"
    return best


def display_name(section_id: str, language: Optional[str] = None) -> Optional[str]:
    """Localized display name of a standard id, None for custom ids."""
    names = DISPLAY_NAMES[resolve_language(language)]
    return names.get(section_id)
