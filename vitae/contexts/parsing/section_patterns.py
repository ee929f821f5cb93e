"""
Static section vocabulary: identifiers, alternate ids, display names, keywords.

Pattern classes follow the convention of frozen dataclasses with class-level
constants. Everything here is read-only after import: tuples and
MappingProxyType views only, so the tables can be shared across threads.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# =============================================================================
# IDENTIFIERS
# =============================================================================


@dataclass(frozen=True)
class StandardSectionId:
    """
    Closed set of canonical section identifiers, in canonical order.

    These are the ids used on section containers and in template placeholder
    tokens ({{resume-experience}}).
    """

    HEADER: str = "resume-header"
    SUMMARY: str = "resume-summary"
    EXPERIENCE: str = "resume-experience"
    EDUCATION: str = "resume-education"
    SKILLS: str = "resume-skills"
    LANGUAGES: str = "resume-languages"
    CERTIFICATIONS: str = "resume-certifications"
    PROJECTS: str = "resume-projects"
    AWARDS: str = "resume-awards"
    VOLUNTEERING: str = "resume-volunteering"
    PUBLICATIONS: str = "resume-publications"
    INTERESTS: str = "resume-interests"
    REFERENCES: str = "resume-references"
    ADDITIONAL: str = "resume-additional"

    @classmethod
    def all(cls) -> Tuple[str, ...]:
        """All standard ids in canonical order."""
        return (
            cls.HEADER,
            cls.SUMMARY,
            cls.EXPERIENCE,
            cls.EDUCATION,
            cls.SKILLS,
            cls.LANGUAGES,
            cls.CERTIFICATIONS,
            cls.PROJECTS,
            cls.AWARDS,
            cls.VOLUNTEERING,
            cls.PUBLICATIONS,
            cls.INTERESTS,
            cls.REFERENCES,
            cls.ADDITIONAL,
        )


ID_PREFIX = "resume-"
STANDARD_SECTION_IDS = StandardSectionId.all()


@dataclass(frozen=True)
class SectionKind:
    """Semantic kind of a section, inferred from its title."""

    HEADER: str = "header"
    SUMMARY: str = "summary"
    EXPERIENCE: str = "experience"
    EDUCATION: str = "education"
    SKILLS: str = "skills"
    LANGUAGES: str = "languages"
    CERTIFICATIONS: str = "certifications"
    PROJECTS: str = "projects"
    AWARDS: str = "awards"
    VOLUNTEERING: str = "volunteering"
    PUBLICATIONS: str = "publications"
    INTERESTS: str = "interests"
    REFERENCES: str = "references"
    ADDITIONAL: str = "additional"
    GENERAL: str = "general"


def kind_for_id(section_id: Optional[str]) -> str:
    """SectionKind for a standard id ("resume-skills" -> "skills"), else general."""
    if section_id in STANDARD_SECTION_IDS:
        return section_id[len(ID_PREFIX) :]
    return SectionKind.GENERAL


# =============================================================================
# ALTERNATE IDS
# =============================================================================

# Legacy exports and older editors used these ids. Total, many-to-one, and no
# value is ever a key, so mapping an already-mapped id is a no-op.
_ALTERNATE_IDS = {
    "personal-information": StandardSectionId.HEADER,
    "website-social-links": StandardSectionId.HEADER,
    "professional-summaries": StandardSectionId.SUMMARY,
    "experiences": StandardSectionId.EXPERIENCE,
    "formations": StandardSectionId.EDUCATION,
    "skills-interests": StandardSectionId.SKILLS,
    "certifications": StandardSectionId.CERTIFICATIONS,
    "projects": StandardSectionId.PROJECTS,
    "awards-achievements": StandardSectionId.AWARDS,
    "volunteering": StandardSectionId.VOLUNTEERING,
    "publications": StandardSectionId.PUBLICATIONS,
    "interests": StandardSectionId.INTERESTS,
    "referees": StandardSectionId.REFERENCES,
    "additional": StandardSectionId.ADDITIONAL,
}
# Bare kind names ("experience", "skills", ...) are accepted too
for _standard_id in STANDARD_SECTION_IDS:
    _ALTERNATE_IDS.setdefault(_standard_id[len(ID_PREFIX) :], _standard_id)

ALTERNATE_SECTION_IDS: Mapping[str, str] = MappingProxyType(_ALTERNATE_IDS)


def to_standard_id(section_id: Optional[str]) -> Optional[str]:
    """
    Map a standard or alternate id to its standard form.

    Args:
        section_id: Raw id from markup (case and surrounding whitespace ignored)

    Returns:
        Standard id, or None when the id is neither standard nor alternate
    """
    if not section_id:
        return None
    key = section_id.strip().lower()
    if key in STANDARD_SECTION_IDS:
        return key
    return ALTERNATE_SECTION_IDS.get(key)


def is_known_section_id(section_id: Optional[str]) -> bool:
    """True for standard and alternate ids."""
    return to_standard_id(section_id) is not None


# =============================================================================
# CANONICAL ORDER
# =============================================================================


def _build_section_order() -> Tuple[str, ...]:
    # Each standard id followed by the alternate ids that map onto it
    order = []
    for standard_id in STANDARD_SECTION_IDS:
        order.append(standard_id)
        order.extend(
            alt for alt, target in ALTERNATE_SECTION_IDS.items() if target == standard_id
        )
    return tuple(order)


SECTION_ORDER: Tuple[str, ...] = _build_section_order()


# =============================================================================
# DISPLAY NAMES (per language)
# =============================================================================

_DISPLAY_NAMES = {
    "en": {
        StandardSectionId.HEADER: "Personal Information",
        StandardSectionId.SUMMARY: "Professional Summary",
        StandardSectionId.EXPERIENCE: "Experience",
        StandardSectionId.EDUCATION: "Education",
        StandardSectionId.SKILLS: "Skills",
        StandardSectionId.LANGUAGES: "Languages",
        StandardSectionId.CERTIFICATIONS: "Certifications",
        StandardSectionId.PROJECTS: "Projects",
        StandardSectionId.AWARDS: "Awards & Achievements",
        StandardSectionId.VOLUNTEERING: "Volunteering",
        StandardSectionId.PUBLICATIONS: "Publications",
        StandardSectionId.INTERESTS: "Interests",
        StandardSectionId.REFERENCES: "References",
        StandardSectionId.ADDITIONAL: "Additional Information",
    },
    "fr": {
        StandardSectionId.HEADER: "Informations Personnelles",
        StandardSectionId.SUMMARY: "Profil Professionnel",
        StandardSectionId.EXPERIENCE: "Expérience Professionnelle",
        StandardSectionId.EDUCATION: "Formation",
        StandardSectionId.SKILLS: "Compétences",
        StandardSectionId.LANGUAGES: "Langues",
        StandardSectionId.CERTIFICATIONS: "Certifications",
        StandardSectionId.PROJECTS: "Projets",
        StandardSectionId.AWARDS: "Prix et Distinctions",
        StandardSectionId.VOLUNTEERING: "Bénévolat",
        StandardSectionId.PUBLICATIONS: "Publications",
        StandardSectionId.INTERESTS: "Centres d'Intérêt",
        StandardSectionId.REFERENCES: "Références",
        StandardSectionId.ADDITIONAL: "Informations Complémentaires",
    },
    "es": {
        StandardSectionId.HEADER: "Información Personal",
        StandardSectionId.SUMMARY: "Perfil Profesional",
        StandardSectionId.EXPERIENCE: "Experiencia Profesional",
        StandardSectionId.EDUCATION: "Formación Académica",
        StandardSectionId.SKILLS: "Habilidades",
        StandardSectionId.LANGUAGES: "Idiomas",
        StandardSectionId.CERTIFICATIONS: "Certificaciones",
        StandardSectionId.PROJECTS: "Proyectos",
        StandardSectionId.AWARDS: "Premios y Logros",
        StandardSectionId.VOLUNTEERING: "Voluntariado",
        StandardSectionId.PUBLICATIONS: "Publicaciones",
        StandardSectionId.INTERESTS: "Intereses",
        StandardSectionId.REFERENCES: "Referencias",
        StandardSectionId.ADDITIONAL: "Información Adicional",
    },
}

DISPLAY_NAMES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {language: MappingProxyType(names) for language, names in _DISPLAY_NAMES.items()}
)


# =============================================================================
# CLASSIFIER KEYWORDS (per language)
# =============================================================================


@dataclass(frozen=True)
class EnglishKeywords:
    """
    Heading substrings per standard id, English.

    Matched case-insensitively from a word start ("skill" hits "Skillset",
    "formation" misses "Informations"); the first id (canonical order) with
    any hit wins, so broad terms belong to later ids.
    """

    HEADER: tuple = ("personal information", "contact", "personal details")
    SUMMARY: tuple = ("summary", "profile", "objective", "about me", "overview")
    EXPERIENCE: tuple = ("experience", "employment", "work history", "career", "positions")
    EDUCATION: tuple = ("education", "academic", "degree", "studies", "training", "schooling")
    SKILLS: tuple = ("skill", "competenc", "expertise", "technologies", "tools", "proficienc")
    LANGUAGES: tuple = ("language",)
    CERTIFICATIONS: tuple = ("certif", "licen", "accreditation")
    PROJECTS: tuple = ("project", "portfolio")
    AWARDS: tuple = ("award", "achievement", "honor", "honour", "distinction", "accomplishment")
    VOLUNTEERING: tuple = ("volunteer", "community", "civic")
    PUBLICATIONS: tuple = ("publication", "paper", "research", "article")
    INTERESTS: tuple = ("interest", "hobbies", "hobby", "activities", "passion")
    REFERENCES: tuple = ("reference", "referee", "recommendation")
    ADDITIONAL: tuple = ("additional", "other", "miscellaneous", "extra")


@dataclass(frozen=True)
class FrenchKeywords:
    """Heading substrings per standard id, French (matched after casefold)."""

    HEADER: tuple = ("informations personnelles", "coordonnées", "contact")
    SUMMARY: tuple = ("profil", "résumé", "sommaire", "objectif", "à propos")
    EXPERIENCE: tuple = ("expérience", "experience", "emploi", "parcours professionnel")
    EDUCATION: tuple = ("formation", "éducation", "études", "diplôme", "scolarité")
    SKILLS: tuple = ("compétence", "aptitude", "savoir-faire", "expertise")
    LANGUAGES: tuple = ("langue",)
    CERTIFICATIONS: tuple = ("certification", "certificat", "attestation")
    PROJECTS: tuple = ("projet", "réalisation")
    AWARDS: tuple = ("prix", "distinction", "récompense", "réussite")
    VOLUNTEERING: tuple = ("bénévolat", "bénévole", "engagement communautaire")
    PUBLICATIONS: tuple = ("publication", "recherche", "article")
    INTERESTS: tuple = ("centres d'intérêt", "intérêts", "passe-temps")
    REFERENCES: tuple = ("référence",)
    ADDITIONAL: tuple = ("complémentaire", "additionnel", "divers", "autres")


@dataclass(frozen=True)
class SpanishKeywords:
    """Heading substrings per standard id, Spanish (matched after casefold)."""

    HEADER: tuple = ("información personal", "datos personales", "contacto")
    SUMMARY: tuple = ("perfil", "resumen", "objetivo", "sobre mí")
    EXPERIENCE: tuple = ("experiencia", "empleo", "trayectoria")
    EDUCATION: tuple = ("formación", "educación", "estudios", "académic")
    SKILLS: tuple = ("habilidad", "competencia", "aptitud", "conocimiento")
    LANGUAGES: tuple = ("idioma", "lengua")
    CERTIFICATIONS: tuple = ("certifica", "licencia")
    PROJECTS: tuple = ("proyecto",)
    AWARDS: tuple = ("premio", "logro", "reconocimiento", "distincion", "distinción")
    VOLUNTEERING: tuple = ("voluntariado", "voluntario")
    PUBLICATIONS: tuple = ("publicacion", "publicación", "investigación")
    INTERESTS: tuple = ("interés", "intereses", "aficiones", "pasatiempo")
    REFERENCES: tuple = ("referencia",)
    ADDITIONAL: tuple = ("adicional", "otros", "varios")


def _keyword_table(patterns) -> Mapping[str, Tuple[str, ...]]:
    # Attribute names mirror StandardSectionId, so the canonical order carries over
    table = {}
    for attribute in StandardSectionId.__dataclass_fields__:
        table[getattr(StandardSectionId, attribute)] = tuple(getattr(patterns, attribute))
    return MappingProxyType(table)


SECTION_KEYWORDS: Mapping[str, Mapping[str, Tuple[str, ...]]] = MappingProxyType(
    {
        "en": _keyword_table(EnglishKeywords),
        "fr": _keyword_table(FrenchKeywords),
        "es": _keyword_table(SpanishKeywords),
    }
)

SUPPORTED_LANGUAGES: Tuple[str, ...] = tuple(SECTION_KEYWORDS)
