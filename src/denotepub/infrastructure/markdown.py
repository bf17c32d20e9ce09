"""Org body to Markdown conversion.

Covers the constructs notes actually use: headings, emphasis, lists,
source/example/quote blocks, and links. Links are not rendered here;
every ``[[target][label]]`` outside a verbatim span is handed to the
injected link hook.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from denotepub.domain.links import Link, LinkRenderer, render_markdown_link

_LINK_TYPES = frozenset(
    {"denote", "file", "http", "https", "ftp", "mailto", "id", "attachment", "news", "doi"}
)

_ORG_LINK = r"\[\[(?P<target>[^\[\]]+)\](?:\[(?P<label>[^\[\]]+)\])?\]"
_HEADING = re.compile(r"^(?P<stars>\*+)\s+(?P<text>.*?)(?:\s+:[\w@#%:]+:)?\s*$")
_BLOCK_BEGIN = re.compile(r"^\s*#\+begin_(?P<kind>\w+)(?:\s+(?P<args>.*))?$", re.IGNORECASE)
_BLOCK_END = re.compile(r"^\s*#\+end_(?P<kind>\w+)\s*$", re.IGNORECASE)
_KEYWORD_LINE = re.compile(r"^\s*#\+\w+:")
_COMMENT_LINE = re.compile(r"^\s*#(?:\s.*)?$")
_DRAWER_BEGIN = re.compile(r"^\s*:[A-Za-z_-]+:\s*$")
_DRAWER_END = re.compile(r"^\s*:END:\s*$", re.IGNORECASE)
_PLUS_ITEM = re.compile(r"^(?P<indent>\s*)[+]\s+")
_STAR_ITEM = re.compile(r"^(?P<indent>\s+)\*\s+")
_PAREN_ITEM = re.compile(r"^(?P<indent>\s*)(?P<num>\d+)\)\s+")
_FIXED_WIDTH = re.compile(r"^\s*:(?: (?P<text>.*))?$")
_RULE = re.compile(r"^\s*-{5,}\s*$")

_PRE = r"(?P<pre>^|[\s\-({'\"])"
_POST = r"(?=$|[\s\-.,;:!?')}\"])"


def _emphasis(marker: str) -> re.Pattern[str]:
    m = re.escape(marker)
    return re.compile(_PRE + m + r"(?P<body>\S|\S.*?\S)" + m + _POST)


# Links and verbatim spans in one left-to-right pass: whichever starts
# first wins, and nothing inside a verbatim span is parsed.
_LITERAL = re.compile(
    _ORG_LINK + "|" + _PRE + r"(?P<mark>[=~])(?P<body>\S|\S.*?\S)(?P=mark)" + _POST
)
_BOLD = _emphasis("*")
_ITALIC = _emphasis("/")
_STRIKE = _emphasis("+")
_UNDERLINE = _emphasis("_")


def parse_org_link(target: str) -> Link:
    """Classify a raw Org link target into a :class:`Link`."""
    link_type, sep, path = target.partition(":")
    if sep and link_type.lower() in _LINK_TYPES:
        return Link(type=link_type.lower(), path=path)
    if target.startswith(("./", "../", "/", "~")):
        return Link(type="file", path=target)
    return Link(type="fuzzy", path=target)


class OrgBodyRenderer:
    """Render an Org body as Markdown.

    Args:
        link_renderer: Hook producing the markup for each link.
        heading_offset: Added to every heading level, so a top-level Org
            heading becomes ``##`` when the page title is the ``#``.
    """

    def __init__(
        self,
        link_renderer: LinkRenderer = render_markdown_link,
        *,
        heading_offset: int = 1,
    ) -> None:
        self._link_renderer = link_renderer
        self._heading_offset = heading_offset

    def render(self, body: str) -> str:
        """Convert *body* and return Markdown ending in a single newline."""
        lines = body.replace("\r\n", "\n").split("\n")
        out: list[str] = []
        block: str | None = None
        in_drawer = False

        for pos, line in enumerate(lines):
            if block in ("src", "example"):
                if _BLOCK_END.match(line):
                    out.append("```")
                    block = None
                else:
                    out.append(_unescape_block_line(line))
                continue

            if in_drawer:
                in_drawer = not _DRAWER_END.match(line)
                continue

            begin = _BLOCK_BEGIN.match(line)
            if begin:
                block = begin.group("kind").lower()
                if block == "src":
                    lang = (begin.group("args") or "").split(" ", 1)[0]
                    out.append(f"```{lang}")
                elif block == "example":
                    out.append("```")
                continue
            if _BLOCK_END.match(line):
                block = None
                continue

            if _DRAWER_BEGIN.match(line) and _drawer_closes(lines, pos + 1):
                in_drawer = not _DRAWER_END.match(line)
                continue
            if _KEYWORD_LINE.match(line) or _COMMENT_LINE.match(line):
                continue

            converted = self._convert_line(line)
            if block == "quote":
                converted = f"> {converted}".rstrip()
            out.append(converted)

        if block in ("src", "example"):
            while out and not out[-1].strip():
                out.pop()
            out.append("```")
        return _post_process("\n".join(out))

    # ── Line-level conversion ─────────────────────────────────────────

    def _convert_line(self, line: str) -> str:
        heading = _HEADING.match(line)
        if heading:
            level = len(heading.group("stars")) + self._heading_offset
            return "#" * level + " " + self._convert_inline(heading.group("text"))
        if _RULE.match(line):
            return "---"
        fixed = _FIXED_WIDTH.match(line)
        if fixed:
            return "    " + (fixed.group("text") or "")

        line = _PLUS_ITEM.sub(lambda m: f"{m.group('indent')}- ", line, count=1)
        line = _STAR_ITEM.sub(lambda m: f"{m.group('indent')}- ", line, count=1)
        line = _PAREN_ITEM.sub(lambda m: f"{m.group('indent')}{m.group('num')}. ", line, count=1)
        return self._convert_inline(line)

    def _convert_inline(self, text: str) -> str:
        protected: list[str] = []

        def protect(markup: str) -> str:
            protected.append(markup)
            return f"\x00{len(protected) - 1}\x00"

        def literal_sub(match: re.Match[str]) -> str:
            if match.group("target") is not None:
                link = parse_org_link(match.group("target"))
                return protect(self._link_renderer(link, match.group("label")))
            return match.group("pre") + protect(f"`{match.group('body')}`")

        text = _LITERAL.sub(literal_sub, text)
        text = _BOLD.sub(_wrap(lambda body: f"**{body}**"), text)
        text = _ITALIC.sub(_wrap(lambda body: f"*{body}*"), text)
        text = _STRIKE.sub(_wrap(lambda body: f"~~{body}~~"), text)
        text = _UNDERLINE.sub(_wrap(lambda body: body), text)

        return re.sub(r"\x00(\d+)\x00", lambda m: protected[int(m.group(1))], text)


def _drawer_closes(lines: list[str], start: int) -> bool:
    """True when an ``:END:`` follows *start* before the next heading."""
    for line in lines[start:]:
        if _DRAWER_END.match(line):
            return True
        if _HEADING.match(line):
            return False
    return False


def _wrap(render: Callable[[str], str]) -> Callable[[re.Match[str]], str]:
    """Adapt a body renderer to a substitution keeping the leading context."""

    def sub(match: re.Match[str]) -> str:
        return match.group("pre") + render(match.group("body"))

    return sub


def _unescape_block_line(line: str) -> str:
    """Drop the comma Org uses to escape ``*`` and ``#+`` inside blocks."""
    stripped = line.lstrip()
    if stripped.startswith((",*", ",#+")):
        indent = line[: len(line) - len(stripped)]
        return indent + stripped[1:]
    return line


def _post_process(md: str) -> str:
    """Strip trailing spaces and collapse runs of blank lines."""
    lines = [line.rstrip() for line in md.splitlines()]
    md2 = "\n".join(lines)
    while "\n\n\n" in md2:
        md2 = md2.replace("\n\n\n", "\n\n")
    return md2.strip() + "\n"
