"""
Heading extraction tests

Tests heading descriptors derived by the parse stage:
- Document order, including headings after an extracted title
- Nested tree by default, flat list on request
- Ids from {#id} attributes and generated slugs
"""

import pytest

from mdtransform.lib.transform import pipeline_init
from mdtransform.lib.headings import headings_nest
from mdtransform.models import TransformOptions, Heading


SOURCE = "## A\n\n### B\n\n### C\n\n## D\n"


class TestHeadingTree:
    """Test the default nested mode"""

    def test_nesting(self):
        """Deeper headings nest under the preceding shallower one"""
        parse, _, _, env = pipeline_init(TransformOptions())
        parse(SOURCE)

        assert [h.title for h in env.headings] == ["A", "D"]
        assert [h.title for h in env.headings[0].items] == ["B", "C"]
        assert env.headings[1].items == []

    def test_levels_recorded(self):
        """Levels come from the heading tag"""
        parse, _, _, env = pipeline_init(TransformOptions())
        parse(SOURCE)

        assert env.headings[0].level == 2
        assert env.headings[0].items[0].level == 3

    def test_skipped_levels(self):
        """h1, h3, h2: both deeper headings belong to the h1"""
        roots = headings_nest([Heading(1, "a"), Heading(3, "b"), Heading(2, "c")])

        assert len(roots) == 1
        assert [h.title for h in roots[0].items] == ["b", "c"]
        assert roots[0].items[0].items == []

    def test_headings_after_title(self):
        """Headings after the extracted title are all collected"""
        parse, _, _, env = pipeline_init(TransformOptions(extract_title=True))
        parse("# Title\n\n## A\n\n## B\n")

        assert env.title == "Title"
        assert [h.title for h in env.headings] == ["A", "B"]

    def test_no_headings(self):
        """Plain text yields no descriptors"""
        parse, _, _, env = pipeline_init(TransformOptions())
        parse("Just text")

        assert env.headings == []


class TestFlatHeadings:
    """Test need_flat_list_headings"""

    def test_flat_order(self):
        """All headings in one ordered list"""
        parse, _, _, env = pipeline_init(TransformOptions(need_flat_list_headings=True))
        parse(SOURCE)

        assert [h.title for h in env.headings] == ["A", "B", "C", "D"]
        assert [h.level for h in env.headings] == [2, 3, 3, 2]
        assert all(h.items == [] for h in env.headings)


class TestHeadingIds:
    """Test heading identifiers"""

    def test_explicit_id(self):
        """{#id} sets the identifier"""
        parse, _, _, env = pipeline_init(TransformOptions())
        parse("## Install {#setup}")

        assert env.headings[0].id == "setup"
        assert env.headings[0].href == "#setup"
        assert env.headings[0].title == "Install"

    def test_generated_slug(self):
        """Headings without {#id} get a slug of their text"""
        parse, _, _, env = pipeline_init(TransformOptions())
        parse("## Hello, World!")

        assert env.headings[0].id == "hello-world"

    def test_duplicate_slugs_unique(self):
        """Repeated titles get numbered slugs"""
        parse, _, _, env = pipeline_init(TransformOptions(need_flat_list_headings=True))
        parse("## Usage\n\n## Usage\n\n## Usage")

        assert [h.id for h in env.headings] == ["usage", "usage-1", "usage-2"]

    def test_inline_code_in_heading(self):
        """Code spans contribute their text"""
        parse, _, _, env = pipeline_init(TransformOptions())
        parse("## The `run` command")

        assert env.headings[0].title == "The run command"
        assert env.headings[0].id == "the-run-command"

    def test_markup_dropped_from_title(self):
        """Descriptors carry plain text while the compiled heading keeps its markup"""
        parse, _, compile, env = pipeline_init(TransformOptions())
        tokens = parse("## Using *fast* [docs](https://example.com) `pip`")

        assert env.headings[0].title == "Using fast docs pip"
        assert "<em>fast</em>" in compile(tokens)

    def test_no_anchor_plugin(self):
        """Without the anchors plugin, headings without {#id} have no id"""
        parse, _, _, env = pipeline_init(TransformOptions(plugins=[]))
        parse("## Plain")

        assert env.headings[0].id is None
        assert env.headings[0].href is None

    def test_ids_rendered(self):
        """The id attribute reaches the HTML"""
        parse, _, compile, _ = pipeline_init(TransformOptions())

        html = compile(parse("## Install {#setup .big}"))

        assert '<h2 id="setup" class="big">Install</h2>' in html
