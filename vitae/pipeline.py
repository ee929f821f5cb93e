"""
Résumé pipeline orchestration.

Runs the stages in order for one document:
normalize -> parse -> order -> ensure all standard sections -> extract header
-> render through a skin.

Every stage is a pure function of its input, so documents can be processed
in parallel by the caller; within a document the stages run strictly in order.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from vitae.contexts.parsing.contact_validation import validate_header
from vitae.contexts.parsing.data_structures import HeaderInfo, Section
from vitae.contexts.parsing.header_extractor import extract_header
from vitae.contexts.parsing.language import detect_language, resolve_language
from vitae.contexts.parsing.logger import _log_info, _log_warning
from vitae.contexts.parsing.normalizer import normalize
from vitae.contexts.parsing.ordering import (
    MissingSection,
    ensure_all_standard_sections,
    find_missing_information,
    order_sections,
)
from vitae.contexts.parsing.section_parser import parse
from vitae.contexts.parsing.section_patterns import StandardSectionId
from vitae.contexts.rendering.data_structures import RenderedDocument
from vitae.contexts.rendering.registries import TemplateCatalog, get_catalog
from vitae.contexts.rendering.renderer import render
from vitae.utils.html_tools import plain_text
from vitae.utils.timestamp import elapsed_since


@dataclass
class PipelineResult:
    """
    Result from build_resume().

    Attributes:
        missing: Standard sections worth adding, with recommendations
        header_issues: Header problems to fix before sending (from validate_header)
    """

    sections: List[Section]
    header: HeaderInfo
    document: RenderedDocument
    template_id: str
    language: str
    missing: List[MissingSection] = field(default_factory=list)
    header_issues: List[str] = field(default_factory=list)
    time_s: float = 0.0


def parse_document(raw: Optional[str], language: Optional[str] = None) -> List[Section]:
    """
    Raw markup or text to ordered canonical sections.

    Args:
        raw: Markup, entity-encoded markup, or plain text
        language: Language code or name for classification and titles

    Returns:
        Sections in canonical order
    """
    return order_sections(parse(normalize(raw), language))


def header_of(sections: List[Section]) -> HeaderInfo:
    """
    HeaderInfo recomputed from the header section's content.

    Pass parsed sections, not gap-filled ones: a synthesized header only holds
    its display name, which is not a person's name.
    """
    header_section = next((s for s in sections if s.id == StandardSectionId.HEADER), None)
    return extract_header(header_section.content if header_section is not None else None)


def build_resume(
    raw: Optional[str],
    template_id: Optional[str] = None,
    language: Optional[str] = None,
    allow_pro: bool = True,
    catalog: Optional[TemplateCatalog] = None,
) -> PipelineResult:
    """
    Full flow for one résumé: raw content in, rendered document out.

    Args:
        raw: Markup, entity-encoded markup, or plain text
        template_id: Skin id (unknown or gated ids fall back to the default skin)
        language: Language code or name; detected from the text when None
        allow_pro: Whether pro skins may be used
        catalog: Template catalog (defaults to the packaged skins)

    Returns:
        PipelineResult with the canonical sections, header and rendered document

    Example:
        >>> result = build_resume(open("resume.html").read(), template_id="professional")
        >>> result.template_id
        'professional'
    """
    start = time.perf_counter()

    normalized = normalize(raw)
    code = resolve_language(language) if language else detect_language(plain_text(normalized))

    parsed = parse(normalized, code)
    header = header_of(parsed)
    sections = ensure_all_standard_sections(parsed, code)

    if catalog is None:
        catalog = get_catalog()
    template = catalog.get(template_id, allow_pro=allow_pro)
    document = render(sections, header, template)

    result = PipelineResult(
        sections=sections,
        header=header,
        document=document,
        template_id=template.id,
        language=code,
        missing=find_missing_information(sections, code),
        header_issues=validate_header(header).errors,
        time_s=elapsed_since(start),
    )
    if result.header_issues:
        _log_warning(f"Header needs attention: {'; '.join(result.header_issues)}")
    filled = sum(1 for s in sections if s.is_renderable)
    _log_info(
        f"Built résumé with '{template.id}' ({filled} filled section(s), "
        f"language {code}, {result.time_s}s)"
    )
    return result
