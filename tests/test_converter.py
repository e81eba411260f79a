"""HTML → Markdown converter tests."""

import pytest
from bs4 import BeautifulSoup

from src.scraper.converter import PageMarkdownConverter, code_language, to_markdown


class TestInline:
    def test_link(self) -> None:
        assert to_markdown('<a href="http://x">t</a>') == "[t](http://x)"

    def test_link_without_href_degrades_to_text(self) -> None:
        assert to_markdown("<p>see <a>this</a> page</p>") == "see this page"

    def test_link_with_empty_href_degrades_to_text(self) -> None:
        assert to_markdown('<a href="">plain</a>') == "plain"

    def test_link_wrapping_emphasis(self) -> None:
        assert to_markdown('<a href="/x"><em>hi</em></a>') == "[_hi_](/x)"

    @pytest.mark.parametrize("html", ["<em>hi</em>", "<i>hi</i>"])
    def test_emphasis_uses_underscores(self, html: str) -> None:
        assert to_markdown(html) == "_hi_"

    @pytest.mark.parametrize("html", ["<strong>hi</strong>", "<b>hi</b>"])
    def test_strong_uses_double_asterisks(self, html: str) -> None:
        assert to_markdown(html) == "**hi**"

    @pytest.mark.parametrize("html", ["<del>old</del>", "<s>old</s>"])
    def test_strikethrough(self, html: str) -> None:
        assert to_markdown(html) == "~~old~~"


class TestImages:
    def test_image(self) -> None:
        assert to_markdown('<img src="/a.png" alt="An image">') == "![An image](/a.png)"

    def test_image_missing_attributes(self) -> None:
        assert to_markdown("<img>") == "![]()"

    def test_image_inside_heading_keeps_markdown_syntax(self) -> None:
        assert to_markdown('<h2><img src="i.png" alt="i"> Title</h2>') == "## ![i](i.png) Title"


class TestBlocks:
    @pytest.mark.parametrize("level", range(1, 7))
    def test_atx_headings(self, level: int) -> None:
        assert to_markdown(f"<h{level}>Title</h{level}>") == "#" * level + " Title"

    def test_unordered_list_uses_dash(self) -> None:
        assert to_markdown("<ul><li>one</li><li>two</li></ul>") == "- one\n- two"

    def test_ordered_list(self) -> None:
        assert to_markdown("<ol><li>one</li><li>two</li></ol>") == "1. one\n2. two"

    def test_fenced_code_with_language(self) -> None:
        html = '<pre><code class="language-python">print(1)</code></pre>'
        assert to_markdown(html) == "```python\nprint(1)\n```"

    def test_fenced_code_without_language(self) -> None:
        assert to_markdown("<pre><code>x = 1</code></pre>") == "```\nx = 1\n```"

    def test_code_block_content_is_not_escaped(self) -> None:
        html = "<pre><code>snake_case = a * b</code></pre>"
        assert "snake_case = a * b" in to_markdown(html)

    def test_blockquote_prefixes_every_line(self) -> None:
        result = to_markdown("<blockquote><p>one</p><p>two</p></blockquote>")
        assert result.splitlines() == ["> one", "> ", "> two"]

    def test_blockquote_preserves_line_breaks(self) -> None:
        result = to_markdown("<blockquote>first<br>second</blockquote>")
        assert [line.rstrip() for line in result.splitlines()] == ["> first", "> second"]

    def test_empty_blockquote(self) -> None:
        assert to_markdown("<blockquote> </blockquote>") == ""

    def test_paragraphs_separated_by_blank_line(self) -> None:
        assert to_markdown("<p>one</p><p>two</p>") == "one\n\ntwo"


class TestEdgeCases:
    @pytest.mark.parametrize("html", ["", "   ", "\n\n\t"])
    def test_blank_input_returns_empty_string(self, html: str) -> None:
        assert to_markdown(html) == ""

    def test_accepts_custom_converter(self) -> None:
        converter = PageMarkdownConverter(bullets="*")
        assert to_markdown("<ul><li>x</li></ul>", converter) == "* x"

    def test_deterministic(self) -> None:
        html = "<h2>T</h2><p>a <em>b</em> <a href='/c'>c</a></p><ul><li>d</li></ul>"
        assert to_markdown(html) == to_markdown(html)


class TestCodeLanguage:
    def _pre(self, html: str):
        return BeautifulSoup(html, "html.parser").find("pre")

    def test_reads_language_from_code_child(self) -> None:
        assert code_language(self._pre('<pre><code class="language-rust">x</code></pre>')) == "rust"

    def test_reads_language_from_pre(self) -> None:
        assert code_language(self._pre('<pre class="language-go">x</pre>')) == "go"

    def test_no_language(self) -> None:
        assert code_language(self._pre("<pre><code>x</code></pre>")) == ""
