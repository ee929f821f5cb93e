"""
Unit tests for the section parser strategy cascade.

Each strategy is exercised through parse_with_details() with a document that
only the targeted strategy can read, then the driver's id merging and kind
assignment are checked.
"""

import pytest

from vitae.contexts.parsing.header_extractor import extract_header
from vitae.contexts.parsing.normalizer import normalize
from vitae.contexts.parsing.section_parser import parse, parse_with_details


def _by_id(sections):
    return {section.id: section for section in sections}


@pytest.mark.unit
class TestExplicitContainers:
    """Tests for strategy 1 (section containers)."""

    DOCUMENT = (
        '<div class="resume">'
        '<h1 class="name">Jane Smith</h1><p>jane@example.com</p>'
        '<section id="experiences"><h2>Work</h2><p>ACME Corp, 2020-2024</p></section>'
        '<section id="mes-loisirs"><h2>Mes Loisirs</h2><p>Escalade, voile</p></section>'
        "</div>"
    )

    def test_containers_become_sections(self):
        """Test ids, titles and order from containers inside a wrapper div."""
        result = parse_with_details(normalize(self.DOCUMENT), "en")

        assert result.strategy == "explicit_containers"
        assert result.section_ids == ["resume-header", "resume-experience", "mes-loisirs"]

        sections = _by_id(result.sections)
        assert sections["resume-experience"].title == "Work"
        assert "ACME Corp, 2020-2024" in sections["resume-experience"].content

    def test_leading_content_becomes_header(self):
        """Test that name and contact lines ahead of the first container form the header."""
        header = parse(normalize(self.DOCUMENT), "en")[0]

        assert header.id == "resume-header"
        assert header.title == "Jane Smith"
        assert "jane@example.com" in header.content

    def test_kinds(self):
        """Test kind inference: id fallback for "Work", general for custom ids."""
        sections = _by_id(parse(normalize(self.DOCUMENT), "en"))

        assert sections["resume-header"].kind == "header"
        assert sections["resume-experience"].kind == "experience"
        assert sections["mes-loisirs"].kind == "general"

    def test_outermost_container_only(self):
        """Test that nested containers stay inside their parent section."""
        document = (
            '<section id="resume-experience"><h2>Experience</h2>'
            '<div class="section" id="job-1"><p>ACME Corp, 2020-2024</p></div></section>'
        )

        sections = parse(document, "en")

        assert [s.id for s in sections] == ["resume-experience"]
        assert 'id="job-1"' in sections[0].content

    def test_title_from_display_name_without_heading(self):
        """Test the localized display name as title when a container has no heading."""
        sections = parse('<section id="resume-education"><p>Université de Montréal</p></section>', "fr")

        assert sections[0].title == "Formation"

    def test_duplicate_ids_merged(self):
        """Test that containers resolving to one id merge in document order."""
        document = (
            '<section id="resume-skills"><h2>Skills</h2><p>Python</p></section>'
            '<section id="skills"><h2>More Skills</h2><p>SQL and Docker</p></section>'
        )

        sections = parse(document, "en")

        assert [s.id for s in sections] == ["resume-skills"]
        assert sections[0].title == "Skills"
        assert sections[0].content.index("Python") < sections[0].content.index("SQL and Docker")


@pytest.mark.unit
class TestMarkedTitles:
    """Tests for strategy 2 (section-title markers)."""

    DOCUMENT = (
        "<p>Jane Smith</p><p>jane@example.com</p>"
        '<div class="section-title">Experience</div><p>ACME Corp, 2020-2024</p>'
        '<div class="section-title">Skills</div><ul><li>Python, SQL</li></ul>'
    )

    def test_marked_titles_split_sections(self):
        """Test that each marked title runs until the next one."""
        result = parse_with_details(self.DOCUMENT, "en")

        assert result.strategy == "marked_titles"
        assert result.section_ids == ["resume-header", "resume-experience", "resume-skills"]

        sections = _by_id(result.sections)
        assert "ACME Corp" in sections["resume-experience"].content
        assert "Python, SQL" not in sections["resume-experience"].content
        assert "Python, SQL" in sections["resume-skills"].content

    def test_leading_header_uses_display_name(self):
        """Test the header title when the header has no heading of its own."""
        header = parse(self.DOCUMENT, "en")[0]

        assert header.title == "Personal Information"
        assert "jane@example.com" in header.content


@pytest.mark.unit
class TestHeadingCascade:
    """Tests for strategy 3 (h1 header, h2/h3 sections)."""

    def test_h1_header_and_h2_sections(self):
        """Test that h3 subheadings stay inside their h2 section."""
        document = (
            "<h1>Jane Smith</h1><p>Développeuse backend</p>"
            "<h2>Expérience</h2><p>ACME Corp, 2020-2024</p><h3>Cheffe d'équipe</h3><p>Équipe de 4</p>"
            "<h2>Formation</h2><p>Université de Montréal</p>"
        )

        result = parse_with_details(document, "fr")

        assert result.strategy == "heading_cascade"
        assert result.section_ids == ["resume-header", "resume-experience", "resume-education"]

        sections = _by_id(result.sections)
        assert sections["resume-header"].title == "Jane Smith"
        assert "Développeuse backend" in sections["resume-header"].content
        assert "Équipe de 4" in sections["resume-experience"].content

    def test_headings_nested_in_layout_divs(self):
        """Test that wrapper divs around headings don't hide them."""
        document = (
            "<div><h1>Jane Smith</h1></div>"
            "<div><h2>Skills</h2><p>Python and SQL</p></div>"
        )

        assert [s.id for s in parse(document, "en")] == ["resume-header", "resume-skills"]

    def test_only_h1(self):
        """Test that a lone h1 and its contact line form the header."""
        sections = parse("<h1>Jane Smith</h1><p>jane@example.com · 514-555-1234</p>", "en")

        assert [s.id for s in sections] == ["resume-header"]
        assert sections[0].kind == "header"

    def test_h1_after_first_section_opens_header(self):
        """Test that a name heading placed below a section still becomes the header."""
        document = (
            "<h2>Summary</h2><p>Backend developer with eight years of experience.</p>"
            "<h1>Jane Smith</h1><p>jane@example.com · 514-555-1234</p>"
            "<h2>Skills</h2><p>Python and SQL</p>"
        )

        result = parse_with_details(document, "en")
        sections = _by_id(result.sections)

        assert result.strategy == "heading_cascade"
        assert result.section_ids == ["resume-summary", "resume-header", "resume-skills"]
        assert sections["resume-header"].title == "Jane Smith"
        assert "jane@example.com" in sections["resume-header"].content
        assert "Jane Smith" not in sections["resume-summary"].content
        assert extract_header(sections["resume-header"].content).name == "Jane Smith"

    def test_lone_h1_with_flat_paragraphs_left_to_grouping(self):
        """Test that converted plain text (name heading + paragraphs) is grouped by paragraph."""
        document = (
            "<h1>Jane Smith</h1><p>jane@example.com | 514-555-1234</p>"
            "<p>Experience</p><p>Built payment APIs for a bank.</p>"
            "<p>Skills</p><p>Python, SQL and Docker every day.</p>"
        )

        result = parse_with_details(document, "en")
        sections = _by_id(result.sections)

        assert result.strategy == "paragraph_grouping"
        assert result.section_ids == ["resume-header", "resume-experience", "resume-skills"]
        assert sections["resume-header"].title == "Jane Smith"
        assert "jane@example.com" in sections["resume-header"].content

    def test_unclassified_heading_gets_slug(self):
        """Test slug ids for headings the classifier can't place."""
        sections = parse("<h2>Mes Loisirs</h2><p>Escalade et voile le week-end</p>", "fr")

        assert sections[0].id == "mes-loisirs"
        assert sections[0].kind == "general"


@pytest.mark.unit
class TestParagraphGrouping:
    """Tests for strategy 4 (flat paragraph runs)."""

    DOCUMENT = (
        "<p>Jane Smith</p>"
        "<p>Experience</p><p>Built payment APIs for a bank.</p>"
        "<p>Skills</p><p>Python, SQL and Docker every day.</p>"
    )

    def test_short_paragraphs_open_sections(self):
        """Test boundaries on short, unpunctuated paragraphs."""
        result = parse_with_details(self.DOCUMENT, "en")

        assert result.strategy == "paragraph_grouping"
        assert result.section_ids == ["resume-header", "resume-experience", "resume-skills"]

        sections = _by_id(result.sections)
        assert "Jane Smith" in sections["resume-header"].content
        assert "Built payment APIs" in sections["resume-experience"].content

    def test_boundary_becomes_marked_heading(self):
        """Test that boundary paragraphs are rewritten as marked h2 titles."""
        sections = _by_id(parse(self.DOCUMENT, "en"))

        assert sections["resume-skills"].content.startswith('<h2 class="section-title">Skills</h2>')

    def test_too_few_paragraphs(self):
        """Test that short documents fall through to the single fallback."""
        result = parse_with_details("<p>Jane Smith</p><p>Skills</p><p>Python and SQL daily.</p>", "en")

        assert result.strategy == "single_fallback"


@pytest.mark.unit
class TestFallbacks:
    """Tests for the single fallback and the empty-document path."""

    def test_single_fallback_is_summary(self):
        """Test that unstructured content becomes the summary."""
        result = parse_with_details("<p>Just one paragraph about me and my work.</p>", "en")

        assert result.strategy == "single_fallback"
        assert result.section_ids == ["resume-summary"]
        assert result.sections[0].title == "Professional Summary"
        assert result.sections[0].kind == "summary"

    @pytest.mark.parametrize("document", ["", None, "<div>   </div>"])
    def test_empty_document(self, document):
        """Test that blank documents still yield one empty summary."""
        result = parse_with_details(document, "en")

        assert result.strategy == "fallback"
        assert result.section_ids == ["resume-summary"]
        assert result.sections[0].is_empty

    def test_orders_follow_document(self):
        """Test that order matches document position before sorting."""
        sections = parse(normalize(TestExplicitContainers.DOCUMENT), "en")

        assert [s.order for s in sections] == [0, 1, 2]
