"""Tests for HTML to markdown conversion."""

from mcp_runtime.markdown import html_to_markdown


class TestHtmlToMarkdown:
    """Tests for html_to_markdown."""

    def test_converts_headings(self):
        """Should turn headings into # lines."""
        assert html_to_markdown("<h1>Title</h1><h3>Sub</h3>") == "# Title\n### Sub"

    def test_separates_paragraphs(self):
        """Should put a blank line between paragraphs."""
        assert html_to_markdown("<p>One</p><p>Two</p>") == "One\n\nTwo"

    def test_converts_list_items(self):
        """Should turn list items into bullets."""
        assert html_to_markdown("<ul><li>a</li><li>b</li></ul>") == "* a\n* b"

    def test_converts_line_breaks(self):
        """Should turn br into newlines."""
        assert html_to_markdown("a<br>b<br/>c") == "a\nb\nc"

    def test_drops_scripts_and_styles(self):
        """Should remove script and style bodies entirely."""
        source = "<style>p{color:red}</style><script>alert(1)</script><p>Body</p>"
        assert html_to_markdown(source) == "Body"

    def test_decodes_entities(self):
        """Should decode entities and non-breaking spaces."""
        assert html_to_markdown("<p>Fish &amp; chips&nbsp;today</p>") == "Fish & chips today"

    def test_strips_other_tags(self):
        """Should keep the text of unknown tags."""
        assert html_to_markdown('<div class="x"><strong>Bold</strong> text</div>') == "Bold text"

    def test_collapses_blank_runs(self):
        """Should leave at most one blank line in a row."""
        assert html_to_markdown("<p>a</p>\n\n\n<p>b</p>") == "a\n\nb"
