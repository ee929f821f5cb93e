"""
Parsing Context

Responsibilities:
- Normalizes raw résumé content (entity-encoded markup, plain text, legacy ids)
- Parses normalized markup into typed, ordered sections via cascading strategies
- Classifies headings into standard section ids per language
- Decides section emptiness and extracts structured header fields

Owns: Canonical section model, section vocabulary tables, header extraction
Never: Knows about skins, styles, or rendered output
"""

from vitae.contexts.parsing.classifier import classify, slugify
from vitae.contexts.parsing.data_structures import HeaderInfo, Section
from vitae.contexts.parsing.emptiness import is_empty
from vitae.contexts.parsing.header_extractor import extract_header
from vitae.contexts.parsing.language import detect_language, resolve_language
from vitae.contexts.parsing.normalizer import normalize
from vitae.contexts.parsing.ordering import (
    ensure_all_standard_sections,
    find_missing_information,
    order_sections,
)
from vitae.contexts.parsing.section_parser import ParseResult, parse, parse_with_details
from vitae.contexts.parsing.section_patterns import SectionKind, StandardSectionId
from vitae.contexts.parsing.serializer import sections_to_markup

__all__ = [
    # Pipeline stages
    "normalize",
    "parse",
    "parse_with_details",
    "ParseResult",
    "order_sections",
    "ensure_all_standard_sections",
    "extract_header",
    "is_empty",
    # Classification and language
    "classify",
    "slugify",
    "detect_language",
    "resolve_language",
    # Model
    "Section",
    "HeaderInfo",
    "SectionKind",
    "StandardSectionId",
    # Completeness and serialization
    "find_missing_information",
    "sections_to_markup",
]
