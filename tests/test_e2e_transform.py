"""
End-to-end transform tests

Tests the full pipeline: markdown source -> parse -> process -> compile, and
the document data gathered along the way.
"""

import asyncio

import pytest

from mdtransform import transform, TransformOptions


DOCUMENT = """---
title: User guide
---

# Getting **started**

Install the [SDK](*SDK) first.[^1]

## Install {#install}

![diagram](img/setup.png)

### Linux

Term
: Definition

## Usage

[^1]: Version 2 or later.

*[SDK]: Software development kit
"""


class TestTransform:
    """Test a complete document"""

    def test_full_document(self):
        result = asyncio.run(transform(DOCUMENT, TransformOptions(extract_title=True)))

        assert result.title == "Getting <strong>started</strong>"
        assert result.meta == {"title": "User guide"}
        assert result.assets == [{"type": "image", "src": "img/setup.png"}]

        assert [h.title for h in result.headings] == ["Install", "Usage"]
        assert [h.id for h in result.headings] == ["install", "usage"]
        assert [h.title for h in result.headings[0].items] == ["Linux"]

        html = result.html
        assert "<h1" not in html
        assert '<h2 id="install">Install</h2>' in html
        assert "<dt>Term</dt>" in html
        assert 'class="footnotes' in html
        assert '<a href="#term-sdk" class="term">SDK</a>' in html
        assert html.rstrip().endswith("</dl>")

    def test_default_plugins_together(self):
        """Front matter, title, footnotes and terms share one run"""
        source = (
            "---\nauthor: Ada\n---\n\n"
            "# Guide\n\n"
            "Text[^1] and [API](*API).\n\n"
            "## Setup\n\n"
            "[^1]: A note.\n\n"
            "*[API]: Application interface\n"
        )

        result = asyncio.run(transform(source, TransformOptions(extract_title=True)))

        assert result.html == (
            '<p>Text<sup class="footnote-ref"><a href="#fn1" id="fnref1">[1]</a></sup>'
            ' and <a href="#term-api" class="term">API</a>.</p>\n'
            '<h2 id="setup">Setup</h2>\n'
            '<hr class="footnotes-sep">\n'
            '<section class="footnotes">\n'
            '<ol class="footnotes-list">\n'
            '<li id="fn1" class="footnote-item"><p>A note.'
            ' <a href="#fnref1" class="footnote-backref">\u21a9\ufe0e</a></p>\n'
            '</li>\n'
            '</ol>\n'
            '</section>\n'
            '<dl class="terms">\n'
            '<dt id="term-api">API</dt>\n'
            '<dd>Application interface</dd>\n'
            '</dl>\n'
        )
        assert result.title == "Guide"
        assert result.meta == {"author": "Ada"}
        assert [(h.title, h.id) for h in result.headings] == [("Setup", "setup")]

    def test_front_matter_with_headings(self):
        """Compiled output starts at the first block after the front matter"""
        result = asyncio.run(transform("---\ntags: [a]\n---\n## Intro\n\nBody\n"))

        assert result.html == '<h2 id="intro">Intro</h2>\n<p>Body</p>\n'
        assert result.meta == {"tags": ["a"]}
        assert [h.id for h in result.headings] == ["intro"]

    def test_each_call_owns_its_environment(self):
        """Concurrent transforms do not see each other's state"""
        async def both():
            return await asyncio.gather(
                transform("# First\n\n## A", TransformOptions(extract_title=True)),
                transform("# Second\n\n## B", TransformOptions(extract_title=True)),
            )

        first, second = asyncio.run(both())

        assert (first.title, [h.title for h in first.headings]) == ("First", ["A"])
        assert (second.title, [h.title for h in second.headings]) == ("Second", ["B"])

    def test_default_options(self):
        result = asyncio.run(transform("Plain"))

        assert result.html == "<p>Plain</p>\n"
        assert result.title == ""

    def test_sanitized_transform(self):
        result = asyncio.run(transform(
            "<img src=x onerror=alert(1)>\n\ntext",
            TransformOptions(allow_html=True, need_to_sanitize_html=True),
        ))

        assert "onerror" not in result.html
        assert "<p>text</p>" in result.html
