"""Tests for Org body to Markdown conversion."""

from __future__ import annotations

import pytest

from denotepub.domain.links import Link, make_link_renderer
from denotepub.infrastructure.markdown import OrgBodyRenderer, parse_org_link


@pytest.fixture
def renderer() -> OrgBodyRenderer:
    return OrgBodyRenderer(make_link_renderer("internal-link"))


class TestParseOrgLink:
    def test_denote(self) -> None:
        assert parse_org_link("denote:20240101T120000") == Link("denote", "20240101T120000")

    def test_url(self) -> None:
        assert parse_org_link("https://example.com") == Link("https", "//example.com")

    def test_relative_file(self) -> None:
        assert parse_org_link("./img/a.png") == Link("file", "./img/a.png")

    def test_fuzzy(self) -> None:
        assert parse_org_link("Some heading") == Link("fuzzy", "Some heading")

    def test_unknown_prefix_is_fuzzy(self) -> None:
        assert parse_org_link("note: not a type") == Link("fuzzy", "note: not a type")


class TestHeadings:
    def test_offset(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("* One\n** Two\n") == "## One\n### Two\n"

    def test_no_offset(self) -> None:
        assert OrgBodyRenderer(heading_offset=0).render("* One\n") == "# One\n"

    def test_tags_stripped(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("* Heading   :tag:other:\n") == "## Heading\n"


class TestInline:
    @pytest.mark.parametrize(
        ("org", "md"),
        [
            ("a *bold* b", "a **bold** b"),
            ("a /italic/ b", "a *italic* b"),
            ("a =code= b", "a `code` b"),
            ("a ~cmd~ b", "a `cmd` b"),
            ("a +gone+ b", "a ~~gone~~ b"),
            ("a _under_ b", "a under b"),
            ("snake_case_name stays", "snake_case_name stays"),
        ],
    )
    def test_emphasis(self, renderer: OrgBodyRenderer, org: str, md: str) -> None:
        assert renderer.render(org) == md + "\n"

    def test_verbatim_protects_markup(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("run =*args*= now") == "run `*args*` now\n"

    def test_internal_link(self, renderer: OrgBodyRenderer) -> None:
        out = renderer.render("See [[denote:20240101T120000][that note]].")
        assert out == (
            'See <a href="denote:20240101T120000.html" class="internal-link">that note</a>.\n'
        )

    def test_link_markup_untouched_by_emphasis(self, renderer: OrgBodyRenderer) -> None:
        out = renderer.render("[[https://example.com/a_b_c/][x /y/ z]]")
        assert out == "[x /y/ z](https://example.com/a_b_c/)\n"

    def test_link_inside_verbatim_stays_literal(self) -> None:
        seen: list[Link] = []

        def hook(link: Link, label: str | None) -> str:
            seen.append(link)
            return "L"

        out = OrgBodyRenderer(hook).render("See =[[denote:20240101T120000]]= here\n")
        assert out == "See `[[denote:20240101T120000]]` here\n"
        assert "\x00" not in out
        assert seen == []

    def test_link_and_verbatim_on_one_line(self, renderer: OrgBodyRenderer) -> None:
        out = renderer.render("Run ~make~ then see [[https://example.com][docs]].")
        assert out == "Run `make` then see [docs](https://example.com).\n"

    def test_custom_hook_sees_every_link(self) -> None:
        seen: list[Link] = []

        def hook(link: Link, label: str | None) -> str:
            seen.append(link)
            return "L"

        out = OrgBodyRenderer(hook).render("[[denote:1]] and [[file:a.txt][A]]")
        assert out == "L and L\n"
        assert seen == [Link("denote", "1"), Link("file", "a.txt")]


class TestBlocks:
    def test_src_block(self, renderer: OrgBodyRenderer) -> None:
        body = "#+begin_src python :results output\n* not a heading\n,#+x\n#+end_src\n"
        assert renderer.render(body) == "```python\n* not a heading\n#+x\n```\n"

    def test_example_block(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("#+BEGIN_EXAMPLE\n*x*\n#+END_EXAMPLE\n") == "```\n*x*\n```\n"

    def test_quote_block(self, renderer: OrgBodyRenderer) -> None:
        body = "#+begin_quote\nWise *words*.\n#+end_quote\n"
        assert renderer.render(body) == "> Wise **words**.\n"

    def test_drawer_dropped(self, renderer: OrgBodyRenderer) -> None:
        body = "* H\n:PROPERTIES:\n:ID: abc\n:END:\nText\n"
        assert renderer.render(body) == "## H\nText\n"

    def test_unclosed_src_block_is_fenced(self, renderer: OrgBodyRenderer) -> None:
        body = "Intro\n#+begin_src sh\necho hi\n"
        assert renderer.render(body) == "Intro\n```sh\necho hi\n```\n"

    def test_unclosed_example_block_is_fenced(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("#+begin_example\nx\n") == "```\nx\n```\n"

    def test_custom_drawer_dropped(self, renderer: OrgBodyRenderer) -> None:
        body = "Text\n:LOGBOOK:\n- State DONE\n:END:\nMore\n"
        assert renderer.render(body) == "Text\nMore\n"

    def test_colon_word_without_end_is_text(self, renderer: OrgBodyRenderer) -> None:
        body = "Intro\n:note:\nParagraph one.\n\n* Heading\nMore text.\n"
        assert renderer.render(body) == "Intro\n:note:\nParagraph one.\n\n## Heading\nMore text.\n"

    def test_end_after_heading_does_not_close(self, renderer: OrgBodyRenderer) -> None:
        body = ":aside:\nKept.\n* H\n:PROPERTIES:\n:ID: x\n:END:\nBody\n"
        assert renderer.render(body) == ":aside:\nKept.\n## H\nBody\n"

    def test_keywords_and_comments_dropped(self, renderer: OrgBodyRenderer) -> None:
        body = "#+caption: c\n# comment\nText\n"
        assert renderer.render(body) == "Text\n"


class TestLines:
    def test_lists(self, renderer: OrgBodyRenderer) -> None:
        body = "- a\n+ b\n  * c\n1) d\n2. e\n"
        assert renderer.render(body) == "- a\n- b\n  - c\n1. d\n2. e\n"

    def test_fixed_width(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("Out:\n: 42\n") == "Out:\n    42\n"

    def test_rule(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("a\n\n-----\n\nb") == "a\n\n---\n\nb\n"

    def test_blank_runs_collapsed(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("\n\na\n\n\n\nb  \n\n") == "a\n\nb\n"

    def test_crlf(self, renderer: OrgBodyRenderer) -> None:
        assert renderer.render("* H\r\nText\r\n") == "## H\nText\n"
