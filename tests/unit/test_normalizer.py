"""
Unit tests for the content normalizer.

Tests vitae.contexts.parsing.normalizer: entity decoding, plain-text
conversion, alternate-id rewriting and title-marker placement.
"""

import pytest
from bs4 import BeautifulSoup

from vitae.contexts.parsing.normalizer import is_section_container, normalize
from vitae.contexts.parsing.section_patterns import ALTERNATE_SECTION_IDS


def _soup(markup):
    return BeautifulSoup(markup, "html.parser")


@pytest.mark.unit
class TestNormalize:
    """Tests for normalize()."""

    def test_blank_input(self):
        """Test that None and whitespace-only input normalize to an empty string."""
        assert normalize(None) == ""
        assert normalize("   \n ") == ""

    def test_alternate_id_rewritten(self):
        """Test that a legacy container id is rewritten to its standard id."""
        result = normalize('<div id="experiences"><h2>Work</h2><p>ACME, 2020-2024</p></div>')

        container = _soup(result).find("div")
        assert container["id"] == "resume-experience"

    def test_title_marker_moved_from_container_to_heading(self):
        """Test that a misplaced section-title marker ends up on the heading only."""
        result = normalize(
            '<section id="resume-skills" class="section-title"><h2>Skills</h2><ul><li>Python</li></ul></section>'
        )

        soup = _soup(result)
        assert soup.find("section").get("class") is None
        assert soup.find("h2")["class"] == ["section-title"]

    def test_duplicate_title_markers_removed(self):
        """Test that only the primary heading keeps the marker."""
        result = normalize(
            '<section id="resume-summary"><h2>Summary</h2>'
            '<p class="section-title">Not a title</p></section>'
        )

        soup = _soup(result)
        assert soup.find("h2")["class"] == ["section-title"]
        assert soup.find("p").get("class") is None

    def test_other_classes_kept(self):
        """Test that unrelated classes survive marker placement."""
        result = normalize(
            '<section id="resume-summary" class="section section-title"><h2 class="big">Summary</h2></section>'
        )

        soup = _soup(result)
        assert soup.find("section")["class"] == ["section"]
        assert soup.find("h2")["class"] == ["big", "section-title"]

    def test_entity_encoded_markup_decoded(self):
        """Test that entity-encoded markup is decoded before parsing."""
        result = normalize("&lt;h2&gt;Skills&lt;/h2&gt;&lt;p&gt;Python and SQL&lt;/p&gt;")

        assert result == "<h2>Skills</h2><p>Python and SQL</p>"

    def test_plain_text_converted(self):
        """Test that plain text becomes a name heading, paragraphs and bullet lists."""
        result = normalize("Jane Smith\nExperience\n- Built payment APIs\n- Led a team of 4")

        assert result == (
            "<h1>Jane Smith</h1>\n<p>Experience</p>\n"
            "<ul><li>Built payment APIs</li><li>Led a team of 4</li></ul>"
        )

    def test_caps_lines_become_section_headings(self):
        result = normalize("Jane Smith\n514-555-1234 jane@email.com\n\nEXPÉRIENCE\nACME Corp, 2020-2024")

        assert result == (
            "<h1>Jane Smith</h1>\n<p>514-555-1234 jane@email.com</p>\n"
            "<h2>EXPÉRIENCE</h2>\n<p>ACME Corp, 2020-2024</p>"
        )

    @pytest.mark.parametrize(
        "first_line",
        ["jane@example.com | 514-555-1234", "Backend developer with eight years of payments experience"],
    )
    def test_contact_or_sentence_first_line_stays_paragraph(self, first_line):
        """Test that only a name-like first line is promoted to the name heading."""
        result = normalize(f"{first_line}\nSKILLS\n- Python")

        assert result.startswith(f"<p>{first_line}</p>")
        assert "<h2>SKILLS</h2>" in result

    def test_markdown_headings_converted(self):
        """Test that markdown headings in plain text become h1-h3."""
        result = normalize("# Jane Smith\n## Skills\nPython")

        assert result == "<h1>Jane Smith</h1>\n<h2>Skills</h2>\n<p>Python</p>"

    def test_invisible_characters_removed(self):
        """Test that zero-width characters don't survive normalization."""
        result = normalize("<h2>Ski\u200blls</h2><p>\ufeffPython</p>")

        assert "\u200b" not in result
        assert "\ufeff" not in result
        assert "<h2>Skills</h2>" in result

    def test_code_fence_unwrapped(self):
        """Test that generated markup wrapped in a code fence is unwrapped."""
        result = normalize("```html\n<p>Hello world, this is me.</p>\n```")

        assert result == "<p>Hello world, this is me.</p>"

    @pytest.mark.parametrize(
        "raw",
        [
            '<div id="experiences" class="section-title"><h2>Work</h2><p>ACME</p></div>',
            "&lt;h2&gt;Skills&lt;/h2&gt;&lt;p&gt;Python&lt;/p&gt;",
            "Jane Smith\n- Python\n- SQL",
            '<section id="formations"><h3>School</h3><p class="section-title">MIT</p></section>',
            "<p>Tom &amp; Jerry &lt;3</p>",
        ],
    )
    def test_idempotent(self, raw):
        """Test that normalizing twice gives the same result as normalizing once."""
        once = normalize(raw)
        assert normalize(once) == once


@pytest.mark.unit
def test_every_alternate_id_maps_to_one_standard_id():
    """Test that each alternate id is rewritten to its table value and stays stable."""
    for alternate, standard in ALTERNATE_SECTION_IDS.items():
        result = normalize(f'<div id="{alternate}"><h2>Title</h2><p>Some content here</p></div>')

        assert _soup(result).find("div")["id"] == standard
        assert normalize(result) == result


@pytest.mark.unit
class TestIsSectionContainer:
    """Tests for is_section_container()."""

    def test_section_with_id(self):
        """Test that any <section> with an id is a container."""
        assert is_section_container(_soup('<section id="mes-loisirs"></section>').section)

    def test_div_with_section_class(self):
        """Test that a div needs the section class or a known id."""
        assert is_section_container(_soup('<div class="section" id="custom"></div>').div)
        assert is_section_container(_soup('<div id="resume-skills"></div>').div)
        assert not is_section_container(_soup('<div id="wrapper"></div>').div)

    def test_missing_id(self):
        """Test that an element without an id never counts."""
        assert not is_section_container(_soup('<section class="section"></section>').section)
        assert not is_section_container(_soup('<section id="  "></section>').section)
