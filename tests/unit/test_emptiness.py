"""
Unit tests for the emptiness predicate and its use on Section.
"""

from dataclasses import replace

import pytest

from vitae.contexts.parsing.data_structures import Section
from vitae.contexts.parsing.emptiness import is_empty


@pytest.mark.unit
class TestIsEmpty:
    """Tests for is_empty()."""

    @pytest.mark.parametrize("content", [None, "", "   \n\t "])
    def test_blank_content(self, content):
        assert is_empty(content, "Skills")

    @pytest.mark.parametrize(
        "content",
        [
            "<h2>Skills</h2>",
            "<h2>Skills</h2><p></p>",
            '<h2 class="section-title">Skills</h2><p class="pro-text"></p>',
            "<h2>\n  Skills \n</h2>\n<p> </p>",
            "<H3>skills</H3>",
        ],
    )
    def test_bare_title_heading(self, content):
        """Test that a heading repeating the title, alone or with an empty paragraph, is empty."""
        assert is_empty(content, "Skills")

    def test_short_text(self):
        """Test the minimum visible-text length."""
        assert is_empty("<p>abc</p>")
        assert not is_empty("<p>Python</p>")

    def test_no_content_bearing_element(self):
        """Test that text outside p/li/table/ul/ol doesn't count."""
        assert is_empty("<div>Python and SQL experience</div>")
        assert is_empty("<h2>Skills</h2>")

    def test_blank_content_bearers(self):
        """Test that only blank lists and paragraphs under a heading are empty."""
        assert is_empty("<h2>Experience at ACME</h2><ul><li> </li></ul><p>\n</p>", "Experience")

    def test_real_content(self):
        """Test sections that carry content."""
        assert not is_empty("<h2>Skills</h2><ul><li>Python, SQL</li></ul>", "Skills")
        assert not is_empty("<h2>Skills</h2><p>Python</p>", "Skills")
        assert not is_empty("<table><tr><td>Python</td><td>5 years</td></tr></table>")

    def test_heading_differs_from_title(self):
        """Test that the bare-heading rule only applies to the section's own title."""
        assert not is_empty("<h2>Skills</h2><p>Python, SQL</p>", "Compétences")


@pytest.mark.unit
class TestSectionEmptiness:
    """Tests for the derived Section.is_empty flag."""

    def test_derived_on_construction(self):
        section = Section(id="resume-skills", title="Skills", content="<h2>Skills</h2><p></p>")

        assert section.is_empty
        assert not section.is_renderable

    def test_rederived_on_replace(self):
        """Test that building a new section from an old one re-evaluates emptiness."""
        section = Section(id="resume-skills", title="Skills", content="<h2>Skills</h2><p></p>")

        filled = replace(section, content="<h2>Skills</h2><ul><li>Python, SQL</li></ul>")

        assert section.is_empty
        assert not filled.is_empty

    def test_hidden_section_not_renderable(self):
        section = Section(
            id="resume-skills",
            title="Skills",
            content="<h2>Skills</h2><ul><li>Python, SQL</li></ul>",
            visible=False,
        )

        assert not section.is_empty
        assert not section.is_renderable

    def test_is_standard(self):
        assert Section(id="resume-skills", title="Skills", content="").is_standard
        assert not Section(id="side-projects", title="Side Projects", content="").is_standard
