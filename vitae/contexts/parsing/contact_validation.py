"""
Validation and formatting for header contact fields.

Used by the header extractor (to drop placeholder values) and by callers that
edit a HeaderInfo before re-rendering it.
"""

import re
from dataclasses import dataclass, field, replace
from typing import List, Optional

from vitae.contexts.parsing.data_structures import DEFAULT_NAME, HeaderInfo
from vitae.contexts.parsing.patterns import PLACEHOLDER_RE

# Values editors and generators leave behind for "nothing here"
PLACEHOLDER_VALUES = frozenset(("n/a", "na", "none", "null", "undefined", "-", "--"))

_EMAIL_FORMAT = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_FORMAT = re.compile(r"^[\d\s\-.()+]+$")
_LINKEDIN_URL = re.compile(r"^(?:https?://)?(?:www\.)?linkedin\.com/(?:in|company)/[\w-]+/?$", re.IGNORECASE)
_LINKEDIN_PATH = re.compile(r"^in/[\w-]+$")
_LINKEDIN_HANDLE = re.compile(r"^[\w-]+$")
_NON_DIGITS = re.compile(r"\D")

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 20


def has_content(value: Optional[str]) -> bool:
    """True when a field value is neither blank, a placeholder token, nor "n/a"-style filler."""
    if not value:
        return False
    trimmed = PLACEHOLDER_RE.sub("", value).strip()
    return bool(trimmed) and trimmed.lower() not in PLACEHOLDER_VALUES


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_FORMAT.match(email or ""))


def is_valid_phone(phone: str) -> bool:
    """Between 7 and 20 digits, written with digits, spaces, dashes, dots, parentheses or +."""
    digits = _NON_DIGITS.sub("", phone or "")
    if not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        return False
    return bool(_PHONE_FORMAT.match(phone))


def is_valid_linkedin(linkedin: str) -> bool:
    """
    Accept a profile URL, an "in/<handle>" path, or a bare handle.

    Example:
        >>> is_valid_linkedin("https://www.linkedin.com/in/jane-smith")
        True
        >>> is_valid_linkedin("linkedin.com/feed")
        False
    """
    value = (linkedin or "").strip()
    if "linkedin.com" in value.lower():
        return bool(_LINKEDIN_URL.match(value))
    if value.startswith("in/"):
        return bool(_LINKEDIN_PATH.match(value))
    return bool(_LINKEDIN_HANDLE.match(value))


def format_phone(phone: str) -> str:
    """
    Normalize North-American numbers to "(514) 555-1234"; leave others as written.

    Args:
        phone: Phone number as written

    Returns:
        Formatted number ("+1 (514) 555-1234" when written with a leading +)
    """
    if not phone:
        return ""

    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 10 or (len(digits) == 11 and digits.startswith("1")):
        area, first, last = digits[-10:-7], digits[-7:-4], digits[-4:]
        formatted = f"({area}) {first}-{last}"
        return f"+1 {formatted}" if phone.strip().startswith("+") else formatted
    return phone


def format_address_inline(address: Optional[str]) -> str:
    """Join a multi-line address into one comma-separated line."""
    if not address:
        return ""
    return ", ".join(line.strip() for line in address.split("\n") if line.strip())


def get_initials(name: str) -> str:
    """Up to two initials: first and last name parts."""
    parts = (name or "").split()
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def _clean_value(value: Optional[str]) -> Optional[str]:
    if not has_content(value):
        return None
    return re.sub(r"[ \t]+", " ", PLACEHOLDER_RE.sub("", value)).strip()


def clean_header(header: HeaderInfo) -> HeaderInfo:
    """
    Trim fields, drop placeholder values, lower-case the email.

    Returns:
        New HeaderInfo; name falls back to the default when it has no content
    """
    email = _clean_value(header.email)
    return replace(
        header,
        name=_clean_value(header.name) or DEFAULT_NAME,
        title=_clean_value(header.title),
        phone=_clean_value(header.phone),
        email=email.lower() if email else None,
        linkedin=_clean_value(header.linkedin),
        portfolio=_clean_value(header.portfolio),
        address=_clean_value(header.address),
    )


@dataclass
class HeaderValidation:
    """
    Result of header validation.

    Attributes:
        is_valid: True when no errors were found
        errors: Human-readable problems, one per field
    """

    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_header(header: HeaderInfo) -> HeaderValidation:
    """
    Check required fields and contact formats.

    Name is required (the "Full Name" default counts as missing); email, phone
    and LinkedIn are checked only when present.
    """
    result = HeaderValidation()

    if not has_content(header.name) or header.name.strip() == DEFAULT_NAME:
        result.errors.append("Name is required")
    if header.email and not is_valid_email(header.email):
        result.errors.append("Invalid email format")
    if header.phone and not is_valid_phone(header.phone):
        result.errors.append("Invalid phone number format")
    if header.linkedin and not is_valid_linkedin(header.linkedin):
        result.errors.append("Invalid LinkedIn format")

    return result
