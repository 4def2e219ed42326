"""
Compiler stage tests

Tests rendering, the single-use deferred term tokens, sanitization and
syntax highlighting of the compile stage.
"""

import asyncio

import pytest
from markdown_it.token import Token
from pygments.lexers import PythonLexer

from mdtransform.lib.transform import pipeline_init
from mdtransform.models import TransformOptions, SanitizeOptions


class TestRender:
    """Test basic rendering"""

    def test_paragraph(self):
        parse, _, compile, _ = pipeline_init(TransformOptions())

        assert compile(parse("Hello *world*")) == "<p>Hello <em>world</em></p>\n"

    def test_breaks_default_on(self):
        """Soft line breaks become <br> by default"""
        parse, _, compile, _ = pipeline_init(TransformOptions())

        assert "<br>" in compile(parse("one\ntwo"))

    def test_breaks_off(self):
        parse, _, compile, _ = pipeline_init(TransformOptions(breaks=False))

        assert "<br>" not in compile(parse("one\ntwo"))

    def test_raw_html_escaped_by_default(self):
        """Without allow_html, raw HTML is text"""
        parse, _, compile, _ = pipeline_init(TransformOptions())

        html = compile(parse("<b>bold</b>"))

        assert "&lt;b&gt;" in html

    def test_raw_html_allowed(self):
        parse, _, compile, _ = pipeline_init(TransformOptions(allow_html=True))

        assert "<b>bold</b>" in compile(parse("<b>bold</b>"))


class TestTermTokens:
    """Test deferred term tokens"""

    def test_term_tokens_rendered_last(self):
        """Deferred tokens follow the main content"""
        parse, _, compile, env = pipeline_init(TransformOptions())
        tokens = parse("Main")
        env.termTokens_defer([Token("html_block", "", 0, content="<aside>later</aside>\n")])

        html = compile(tokens)

        assert html == "<p>Main</p>\n<aside>later</aside>\n"

    def test_term_tokens_consumed_once(self):
        """A second compile does not render the deferred tokens again"""
        parse, _, compile, env = pipeline_init(TransformOptions())
        tokens = parse("Main")
        env.termTokens_defer([Token("html_block", "", 0, content="<aside>later</aside>\n")])

        first = compile(tokens)
        second = compile(tokens)

        assert "<aside>" in first
        assert "<aside>" not in second
        assert env.term_tokens == []

    def test_glossary_terms(self):
        """The term plugin defers a definition list and links its terms"""
        parse, process, compile, env = pipeline_init(TransformOptions())
        source = "Call the [API](*API) directly.\n\n*[API]: Application programming interface\n"

        tokens = asyncio.run(process(parse(source)))
        html = compile(tokens)

        assert '<a href="#term-api" class="term">API</a>' in html
        assert '<dl class="terms">' in html
        assert '<dt id="term-api">API</dt>' in html
        assert '<dd>Application programming interface</dd>' in html
        assert html.index("Call the") < html.index('<dl class="terms">')
        # Definition paragraph no longer rendered in place
        assert "*[API]" not in html

        assert '<dl class="terms">' not in compile(tokens)

    def test_glossary_with_footnotes(self):
        """Term definitions do not repeat the footnote section"""
        parse, process, compile, _ = pipeline_init(TransformOptions())
        source = "Text[^1] and [API](*API).\n\n[^1]: A note.\n\n*[API]: Application interface\n"

        html = compile(asyncio.run(process(parse(source))))

        assert html.count('class="footnotes"') == 1
        assert html.index('class="footnotes"') < html.index('<dl class="terms">')
        assert html.endswith('<dd>Application interface</dd>\n</dl>\n')

    def test_definition_inline_markup(self):
        """Definitions are parsed as inline markdown"""
        parse, process, compile, env = pipeline_init(TransformOptions())
        source = "See [API](*API).\n\n*[API]: Described in [the guide](docs/guide.md)\n"

        html = compile(asyncio.run(process(parse(source))))

        assert '<dd>Described in <a href="docs/guide.md">the guide</a></dd>' in html
        assert env.assets == [{"type": "link", "src": "docs/guide.md"}]

    def test_escaped_definition_text(self):
        parse, process, compile, _ = pipeline_init(TransformOptions())
        source = "[API](*API)\n\n*[API]: Uses \\*stars\\*\n"

        html = compile(asyncio.run(process(parse(source))))

        assert "<dd>Uses *stars*</dd>" in html


class TestSanitize:
    """Test HTML sanitization"""

    SOURCE = (
        '<script>alert(1)</script>\n\n'
        '<a href="javascript:alert(1)" onclick="steal()">click</a>\n\n'
        'Some *safe* text'
    )

    def test_unsanitized_passthrough(self):
        """Sanity check: raw HTML survives without sanitization"""
        parse, _, compile, _ = pipeline_init(TransformOptions(allow_html=True))

        assert "<script>" in compile(parse(self.SOURCE))

    def test_disallowed_markup_removed(self):
        """Scripts, event handlers and unsafe schemes are stripped"""
        parse, _, compile, _ = pipeline_init(
            TransformOptions(allow_html=True, need_to_sanitize_html=True)
        )

        html = compile(parse(self.SOURCE))

        assert "<script" not in html
        assert "onclick" not in html
        assert "javascript:" not in html
        assert "<em>safe</em>" in html

    def test_custom_allow_list(self):
        """Custom options restrict the kept tags"""
        parse, _, compile, _ = pipeline_init(TransformOptions(
            need_to_sanitize_html=True,
            sanitize_options=SanitizeOptions(tags=frozenset({"p"})),
        ))

        html = compile(parse("Some *emphasis*"))

        assert html.startswith("<p>")
        assert "<em>" not in html
        assert "emphasis" in html

    def test_highlight_classes_survive(self):
        """Highlighted code keeps its span classes through the sanitizer"""
        parse, _, compile, _ = pipeline_init(TransformOptions(need_to_sanitize_html=True))

        html = compile(parse("```python\nprint(1)\n```\n"))

        assert '<span class="nb">print</span>' in html


class TestHighlight:
    """Test fenced code highlighting"""

    def test_known_language(self):
        parse, _, compile, _ = pipeline_init(TransformOptions())

        html = compile(parse("```python\nprint(1)\n```\n"))

        assert '<code class="language-python">' in html
        assert '<span class="nb">print</span>' in html

    def test_unknown_language_escaped(self):
        parse, _, compile, _ = pipeline_init(TransformOptions())

        html = compile(parse("```nosuchlang\na < b\n```\n"))

        assert '<code class="language-nosuchlang">a &lt; b\n</code>' in html

    def test_custom_alias(self):
        """highlight_langs maps fence names to Pygments aliases"""
        parse, _, compile, _ = pipeline_init(TransformOptions(highlight_langs={"snake": "python"}))

        html = compile(parse("```snake\nprint(1)\n```\n"))

        assert '<span class="nb">print</span>' in html

    def test_custom_lexer_class(self):
        """highlight_langs accepts lexer classes"""
        parse, _, compile, _ = pipeline_init(TransformOptions(highlight_langs={"py": PythonLexer}))

        html = compile(parse("```py\nprint(1)\n```\n"))

        assert '<span class="nb">print</span>' in html
