"""
Reusable patterns and constants for header (contact block) extraction.

Pattern classes follow the frozen-dataclass convention:
- Class-level constants for patterns
- Compiled module-level regexes for the helpers that use them
"""

import re
from dataclasses import dataclass

# =============================================================================
# MARKER VOCABULARY
# =============================================================================


@dataclass(frozen=True)
class MarkerClasses:
    """CSS classes that tag semantic roles in markup."""

    SECTION_TITLE: str = "section-title"
    SECTION: str = "section"
    NAME: str = "name"
    TITLE: str = "title"
    PHONE: str = "phone"
    EMAIL: str = "email"
    LINKEDIN: tuple = ("linkedin", "social")
    PORTFOLIO: tuple = ("portfolio", "link")
    ADDRESS: str = "address"

    @classmethod
    def contact_markers(cls) -> tuple:
        """Markers that identify contact fields (used to reject title candidates)."""
        return (cls.PHONE, cls.EMAIL, cls.ADDRESS) + cls.LINKEDIN + cls.PORTFOLIO


# =============================================================================
# CONTACT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """
    Regex patterns for contact details in free text.

    Phone patterns are tried in declaration order; the first match long
    enough to be a real number wins.
    """

    EMAIL: str = r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"

    # 514-555-1234, (514) 555-1234, +1 514.555.1234
    PHONE_NORTH_AMERICAN: str = r"(?<!\d)(?:\+?1[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?!\d)"

    # +33 6 12 34 56 78, 06 12 34 56 78
    PHONE_SPACED_PAIRS: str = r"(?<!\d)(?:\+\d{1,3}[\s.]?)?\d{1,2}(?:[\s.]\d{2}){4}(?!\d)"

    # +44 20 7946 0958, +49 (30) 1234-5678
    PHONE_INTERNATIONAL: str = r"(?<![\w@])\+?\(?\d{2,4}\)?(?:[\s.-]\d{2,4}){2,4}(?![\w@])"

    # Bare URL-ish token: scheme optional, at least one dot, optional path
    URL_TOKEN: str = r"(?<![\w@.])(?:https?://)?(?:www\.)?[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)+(?:/[^\s|,;•]*)?"

    LINKEDIN_URL: str = r"(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/(?:in|pub|company)/[^\s|,;•]+"

    # Placeholder tokens left over from editors: {{phone}}
    PLACEHOLDER: str = r"\{\{[^}]+\}\}"


EMAIL_RE = re.compile(ContactPatterns.EMAIL)
PHONE_PATTERNS = (
    re.compile(ContactPatterns.PHONE_NORTH_AMERICAN),
    re.compile(ContactPatterns.PHONE_SPACED_PAIRS),
    re.compile(ContactPatterns.PHONE_INTERNATIONAL),
)
URL_TOKEN_RE = re.compile(ContactPatterns.URL_TOKEN)
LINKEDIN_URL_RE = re.compile(ContactPatterns.LINKEDIN_URL, re.IGNORECASE)
PLACEHOLDER_RE = re.compile(ContactPatterns.PLACEHOLDER)

# Clause separators inside a contact line ("Montréal | jane@x.com | 514...")
CLAUSE_SEPARATORS_RE = re.compile(r"\s*(?:\||•|·|;|\n)\s*")

LINKEDIN_KEYWORDS = ("linkedin", "github")
PORTFOLIO_KEYWORDS = ("portfolio", "website", "site web", "sitio web")


# =============================================================================
# ADDRESS PATTERNS
# =============================================================================


@dataclass(frozen=True)
class AddressPatterns:
    """Signals that a text segment is a postal address."""

    CANADIAN_POSTAL_CODE: str = r"\b[A-Za-z]\d[A-Za-z][\s-]?\d[A-Za-z]\d\b"
    US_ZIP_WITH_STATE: str = r"\b[A-Z]{2}\s+\d{5}(?:-\d{4})?\b"
    FRENCH_POSTAL_CODE: str = r"\b\d{5}\s+[A-ZÀ-Ý][a-zà-ÿ]+"
    APARTMENT: str = r"\b(?:apt|app|apartment|appartement|suite|unit|unité|bureau)\b\.?"
    STREET: str = (
        r"\b\d{1,5}[\s,]+(?:rue|avenue|av\.|boulevard|boul\.|blvd|chemin|street|st\.|road|rd\.|"
        r"drive|dr\.|lane|calle|place|route)\b"
    )


ADDRESS_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE if name != "US_ZIP_WITH_STATE" else 0)
    for name, pattern in (
        ("CANADIAN_POSTAL_CODE", AddressPatterns.CANADIAN_POSTAL_CODE),
        ("US_ZIP_WITH_STATE", AddressPatterns.US_ZIP_WITH_STATE),
        ("FRENCH_POSTAL_CODE", AddressPatterns.FRENCH_POSTAL_CODE),
        ("APARTMENT", AddressPatterns.APARTMENT),
        ("STREET", AddressPatterns.STREET),
    )
)

# Cities common enough in the user base to count as an address signal
CITY_TOKENS = (
    "montréal",
    "montreal",
    "québec",
    "quebec",
    "laval",
    "gatineau",
    "sherbrooke",
    "ottawa",
    "toronto",
    "vancouver",
    "calgary",
    "paris",
    "lyon",
    "marseille",
    "bruxelles",
    "genève",
    "madrid",
    "barcelona",
    "new york",
    "boston",
    "san francisco",
    "london",
)

# A line with this many commas is probably "street, city, region, code"
ADDRESS_MIN_COMMAS = 2
