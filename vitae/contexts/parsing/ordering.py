"""
Ordering of the canonical section list.

Standard sections sort by the canonical order (alternate ids share the rank
of their standard id); custom sections follow, alphabetically by title. The
sort is stable and every returned section carries its new position in
`order`.
"""

import html
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from vitae.contexts.parsing.data_structures import Section
from vitae.contexts.parsing.language import display_name, resolve_language
from vitae.contexts.parsing.logger import _log_debug
from vitae.contexts.parsing.patterns import MarkerClasses
from vitae.contexts.parsing.section_patterns import (
    SECTION_ORDER,
    STANDARD_SECTION_IDS,
    StandardSectionId,
    kind_for_id,
    to_standard_id,
)

_RANKS: Dict[str, int] = {
    section_id: STANDARD_SECTION_IDS.index(to_standard_id(section_id))
    for section_id in SECTION_ORDER
}


def section_rank(section_id: str) -> Optional[int]:
    """Canonical rank of a standard or alternate id, None for custom ids."""
    return _RANKS.get(section_id)


def _sort_key(section: Section):
    rank = section_rank(section.id)
    if rank is None:
        return (1, len(STANDARD_SECTION_IDS), section.title.casefold())
    return (0, rank, "")


def order_sections(sections: Sequence[Section]) -> List[Section]:
    """
    Sort sections into canonical order.

    Args:
        sections: Sections in any order

    Returns:
        New list; each section's `order` equals its index

    Example:
        >>> [s.id for s in order_sections([skills, side_projects, experiences])]
        ['experiences', 'resume-skills', 'side-projects']
    """
    ordered = sorted(sections, key=_sort_key)
    return [
        section if section.order == position else replace(section, order=position)
        for position, section in enumerate(ordered)
    ]


def empty_section(section_id: str, language: Optional[str] = None) -> Section:
    """Heading-only placeholder section for a missing standard id."""
    title = display_name(section_id, language) or section_id
    return Section(
        id=section_id,
        title=title,
        content=f'<h2 class="{MarkerClasses.SECTION_TITLE}">{html.escape(title)}</h2><p></p>',
        kind=kind_for_id(section_id),
    )


def ensure_all_standard_sections(
    sections: Sequence[Section], language: Optional[str] = None
) -> List[Section]:
    """
    Fill gaps so every standard id has exactly one section, then order.

    Custom sections are kept. Synthesized sections are empty and therefore
    never rendered.
    """
    present = {to_standard_id(section.id) or section.id for section in sections}
    missing = [section_id for section_id in STANDARD_SECTION_IDS if section_id not in present]
    if missing:
        _log_debug(f"Synthesizing {len(missing)} empty standard section(s)")

    filled = list(sections) + [empty_section(section_id, language) for section_id in missing]
    return order_sections(filled)


# =============================================================================
# COMPLETENESS
# =============================================================================

CRITICAL_SECTIONS = (
    StandardSectionId.HEADER,
    StandardSectionId.SUMMARY,
    StandardSectionId.EXPERIENCE,
    StandardSectionId.EDUCATION,
    StandardSectionId.SKILLS,
)

RECOMMENDATIONS = {
    "en": {
        StandardSectionId.HEADER: "Add your name and contact details so recruiters can reach you.",
        StandardSectionId.SUMMARY: "Add a short professional summary highlighting your strengths.",
        StandardSectionId.EXPERIENCE: "List your work experience with concrete achievements.",
        StandardSectionId.EDUCATION: "Add your education: degrees, schools and dates.",
        StandardSectionId.SKILLS: "List the technical and soft skills relevant to your target role.",
    },
    "fr": {
        StandardSectionId.HEADER: "Ajoutez votre nom et vos coordonnées.",
        StandardSectionId.SUMMARY: "Ajoutez un court profil professionnel mettant en valeur vos forces.",
        StandardSectionId.EXPERIENCE: "Décrivez votre expérience avec des réalisations concrètes.",
        StandardSectionId.EDUCATION: "Ajoutez votre formation : diplômes, établissements et dates.",
        StandardSectionId.SKILLS: "Énumérez les compétences pertinentes pour le poste visé.",
    },
    "es": {
        StandardSectionId.HEADER: "Añada su nombre y sus datos de contacto.",
        StandardSectionId.SUMMARY: "Añada un breve perfil profesional que destaque sus fortalezas.",
        StandardSectionId.EXPERIENCE: "Describa su experiencia con logros concretos.",
        StandardSectionId.EDUCATION: "Añada su formación: títulos, centros y fechas.",
        StandardSectionId.SKILLS: "Enumere las habilidades relevantes para el puesto.",
    },
}


@dataclass
class MissingSection:
    """A critical section that is absent or empty, with advice for the author."""

    section_id: str
    title: str
    recommendation: str


def find_missing_information(
    sections: Sequence[Section], language: Optional[str] = None
) -> List[MissingSection]:
    """
    Critical sections (header, summary, experience, education, skills) that are absent or empty.

    Args:
        sections: Parsed sections
        language: Language for titles and recommendations

    Returns:
        One MissingSection per gap, in canonical order
    """
    code = resolve_language(language)
    filled = {section.id for section in sections if not section.is_empty}

    return [
        MissingSection(
            section_id=section_id,
            title=display_name(section_id, code),
            recommendation=RECOMMENDATIONS[code][section_id],
        )
        for section_id in CRITICAL_SECTIONS
        if section_id not in filled
    ]
