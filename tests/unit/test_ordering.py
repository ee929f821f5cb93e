"""
Unit tests for section ordering, gap filling, completeness and serialization.
"""

import pytest

from vitae.contexts.parsing.data_structures import Section
from vitae.contexts.parsing.ordering import (
    empty_section,
    ensure_all_standard_sections,
    find_missing_information,
    order_sections,
    section_rank,
)
from vitae.contexts.parsing.section_parser import parse
from vitae.contexts.parsing.section_patterns import STANDARD_SECTION_IDS
from vitae.contexts.parsing.serializer import sections_to_markup


def _section(section_id, title, body="<p>Some real content here</p>", **kwargs):
    return Section(id=section_id, title=title, content=f"<h2>{title}</h2>{body}", **kwargs)


@pytest.fixture
def skills():
    return _section("resume-skills", "Skills", "<ul><li>Python, SQL</li></ul>")


@pytest.fixture
def experiences():
    return _section("experiences", "Experience", order=7)


@pytest.fixture
def side_projects():
    return _section("side-projects", "Side Projects")


@pytest.mark.unit
class TestOrderSections:
    """Tests for order_sections()."""

    def test_canonical_then_custom(self, skills, side_projects, experiences):
        """Test that alternate ids rank with their standard id and customs follow."""
        ordered = order_sections([skills, side_projects, experiences])

        assert [s.id for s in ordered] == ["experiences", "resume-skills", "side-projects"]

    def test_order_matches_position(self, skills, side_projects, experiences):
        ordered = order_sections([side_projects, skills, experiences])

        assert [s.order for s in ordered] == [0, 1, 2]

    def test_custom_sections_alphabetical_by_title(self):
        zumba = _section("zumba", "Zumba")
        archery = _section("tir-a-l-arc", "Archery")

        ordered = order_sections([zumba, archery])

        assert [s.title for s in ordered] == ["Archery", "Zumba"]

    def test_stable_for_equal_ranks(self):
        """Test that a standard id and its alternate keep their input order."""
        first = _section("skills", "Tools")
        second = _section("resume-skills", "Skills")

        ordered = order_sections([first, second])

        assert [s.id for s in ordered] == ["skills", "resume-skills"]

    def test_input_untouched(self, skills, experiences):
        order_sections([skills, experiences])

        assert experiences.order == 7

    def test_section_rank(self):
        assert section_rank("resume-header") == 0
        assert section_rank("formations") == section_rank("resume-education")
        assert section_rank("side-projects") is None


@pytest.mark.unit
class TestEnsureAllStandardSections:
    """Tests for ensure_all_standard_sections() and empty_section()."""

    def test_gaps_filled_in_canonical_order(self, skills, side_projects):
        filled = ensure_all_standard_sections([side_projects, skills], "en")

        assert [s.id for s in filled] == list(STANDARD_SECTION_IDS) + ["side-projects"]
        assert [s.order for s in filled] == list(range(len(filled)))

    def test_synthesized_sections_are_empty(self, skills):
        filled = ensure_all_standard_sections([skills], "en")

        for section in filled:
            assert section.is_empty == (section.id != "resume-skills")

    def test_alternate_id_counts_as_present(self, experiences):
        filled = ensure_all_standard_sections([experiences], "en")

        ids = [s.id for s in filled]
        assert "experiences" in ids
        assert "resume-experience" not in ids
        assert len(filled) == len(STANDARD_SECTION_IDS)

    def test_empty_section_localized(self):
        section = empty_section("resume-skills", "fr")

        assert section.title == "Compétences"
        assert section.kind == "skills"
        assert section.is_empty


@pytest.mark.unit
class TestFindMissingInformation:
    """Tests for find_missing_information()."""

    def test_reports_absent_and_empty_critical_sections(self, skills):
        header = _section("resume-header", "Jane Smith", "<p>jane@example.com</p>")
        empty_summary = empty_section("resume-summary", "en")

        missing = find_missing_information([header, empty_summary, skills], "en")

        assert [m.section_id for m in missing] == [
            "resume-summary",
            "resume-experience",
            "resume-education",
        ]
        assert missing[1].title == "Experience"
        assert missing[1].recommendation

    def test_localized(self):
        missing = find_missing_information([], "fr")

        assert len(missing) == 5
        assert missing[3].title == "Formation"
        assert missing[3].recommendation.startswith("Ajoutez votre formation")


@pytest.mark.unit
class TestSectionsToMarkup:
    """Tests for the canonical markup serializer."""

    def test_skips_empty_and_hidden(self, skills, side_projects):
        hidden = _section("resume-awards", "Awards", visible=False)
        markup = sections_to_markup([skills, empty_section("resume-summary"), hidden, side_projects])

        assert markup.count("<section") == 2
        assert 'id="resume-summary"' not in markup
        assert 'id="resume-awards"' not in markup

    def test_parses_back_to_same_ids(self, skills, side_projects, experiences):
        ordered = order_sections([skills, side_projects, experiences])

        reparsed = parse(sections_to_markup(ordered), "en")

        assert [s.id for s in reparsed] == ["resume-experience", "resume-skills", "side-projects"]
