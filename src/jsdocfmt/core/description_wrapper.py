"""
Description Wrapper - Reflows tag descriptions to a target width.

The wrapper understands just enough markdown to avoid damaging it:
- Fenced code blocks and tables are copied verbatim
- Headers stay on their own line
- Indented code blocks are copied verbatim (or converted to fences)
- List items are re-wrapped with a hanging indent
- Everything else is a paragraph and is greedily re-wrapped

Blank lines between blocks collapse to a single blank line.
"""

import logging
import re
from dataclasses import dataclass, field

from jsdocfmt.core.config import JsdocOptions
from jsdocfmt.core.tag_tables import TagTables, default_tag_tables

logger = logging.getLogger(__name__)


@dataclass
class WrappedText:
    """
    Result of wrapping a description.

    Attributes:
        text: Wrapped text; lines after the first carry the indent
        end_column: Length of the final line, counting the first-line offset
            when the text is a single line
    """

    text: str
    end_column: int


@dataclass
class _Chunk:
    kind: str
    lines: list[str] = field(default_factory=list)
    blank_before: bool = False


class DescriptionWrapper:
    """
    Wraps description text for one tag.

    Example:
        >>> wrapper = DescriptionWrapper(JsdocOptions())
        >>> wrapper.wrap("param", "the value to use", width=12).text
        'The value to\\nuse'
    """

    PARAGRAPH = "paragraph"
    LIST_ITEM = "list"
    HEADER = "header"
    CODE = "code"
    VERBATIM = "verbatim"

    # `{@link Foo bar}` must not be split across lines
    _TOKEN = re.compile(r"\{@[^}]*\}\S*|\S+")
    _FENCE = re.compile(r"^\s*(```|~~~)")
    _HEADER = re.compile(r"^\s*#{1,6}\s")
    _TABLE = re.compile(r"^\s*\|")
    _LIST_ITEM = re.compile(r"^(\s*)([-*+]|\d+[.)])\s+")
    _NUMBERED_DASH = re.compile(r"^(\s*)(\d+)-\s+")
    _INDENTED_CODE = re.compile(r"^ {4,}\S")

    def __init__(self, options: JsdocOptions | None = None, tables: TagTables | None = None):
        self._options = options or JsdocOptions()
        self._tables = tables or default_tag_tables()

    def wrap(
        self,
        tag: str,
        text: str,
        width: int,
        first_line_offset: int = 0,
        indent: str = "",
    ) -> WrappedText:
        """
        Wrap a description.

        Args:
            tag: Logical tag the description belongs to
            text: Description text
            width: Maximum line width
            first_line_offset: Columns already used on the first line
            indent: Prefix for every line after the first

        Returns:
            WrappedText with the text and the column where it ends
        """
        if not self._options.format_descriptions or self._tables.roles(tag).no_wrap:
            return WrappedText(text, self._end_column(text.split("\n"), first_line_offset))

        lines = self._prepare(text, indent)
        chunks = self._split_chunks(lines)

        out: list[str] = []
        for chunk in chunks:
            if chunk.blank_before and out:
                out.append("")
            first_width = width - (first_line_offset if not out else len(indent))
            rest_width = width - len(indent)
            out.extend(self._render_chunk(chunk, first_width, rest_width))

        rendered = [
            line if index == 0 or not line else indent + line
            for index, line in enumerate(out)
        ]
        return WrappedText("\n".join(rendered), self._end_column(rendered, first_line_offset))

    def _end_column(self, lines: list[str], first_line_offset: int) -> int:
        if not lines:
            return first_line_offset
        if len(lines) == 1:
            return first_line_offset + len(lines[0])
        return len(lines[-1])

    def _prepare(self, text: str, indent: str) -> list[str]:
        """Dedent continuation lines and normalize list markers."""
        lines = text.strip("\n").split("\n")
        lines[0] = lines[0].lstrip()

        continuation = [line for line in lines[1:] if line.strip()]
        if continuation and indent:
            common = min(len(line) - len(line.lstrip(" ")) for line in continuation)
            strip = min(common, len(indent))
            lines = lines[:1] + [line[strip:] if line.strip() else "" for line in lines[1:]]

        return [self._NUMBERED_DASH.sub(r"\1\2. ", line.rstrip()) for line in lines]

    def _starts_block(self, line: str) -> bool:
        return bool(
            self._FENCE.match(line)
            or self._HEADER.match(line)
            or self._TABLE.match(line)
            or self._LIST_ITEM.match(line)
        )

    def _split_chunks(self, lines: list[str]) -> list[_Chunk]:
        chunks: list[_Chunk] = []
        blank = False
        i = 0
        total = len(lines)

        while i < total:
            line = lines[i]
            if not line.strip():
                blank = True
                i += 1
                continue

            fence = self._FENCE.match(line)
            if fence:
                chunk = _Chunk(self.VERBATIM, [line], blank)
                i += 1
                while i < total:
                    chunk.lines.append(lines[i])
                    i += 1
                    if lines[i - 1].strip().startswith(fence.group(1)):
                        break
            elif self._TABLE.match(line):
                chunk = _Chunk(self.VERBATIM, [], blank)
                while i < total and self._TABLE.match(lines[i]):
                    chunk.lines.append(lines[i])
                    i += 1
            elif self._HEADER.match(line):
                chunk = _Chunk(self.HEADER, [line.strip()], blank)
                i += 1
            elif self._INDENTED_CODE.match(line) and (not chunks or blank):
                chunk = _Chunk(self.CODE, [], blank)
                while i < total and (self._INDENTED_CODE.match(lines[i]) or not lines[i].strip()):
                    chunk.lines.append(lines[i])
                    i += 1
                while chunk.lines and not chunk.lines[-1].strip():
                    chunk.lines.pop()
                    i -= 1
            elif self._LIST_ITEM.match(line):
                chunk = _Chunk(self.LIST_ITEM, [line], blank)
                i += 1
                while i < total and lines[i].strip() and not self._starts_block(lines[i]):
                    chunk.lines.append(lines[i])
                    i += 1
            else:
                chunk = _Chunk(self.PARAGRAPH, [line], blank)
                i += 1
                while i < total and lines[i].strip() and not self._starts_block(lines[i]):
                    chunk.lines.append(lines[i])
                    i += 1

            chunks.append(chunk)
            blank = False

        return chunks

    def _render_chunk(self, chunk: _Chunk, first_width: int, rest_width: int) -> list[str]:
        if chunk.kind == self.PARAGRAPH:
            words = self._TOKEN.findall(" ".join(chunk.lines))
            words = self._punctuate(words)
            return self._fill(words, first_width, rest_width)

        if chunk.kind == self.LIST_ITEM:
            match = self._LIST_ITEM.match(chunk.lines[0])
            lead = match.group(1) + match.group(2) + " "
            text = " ".join([chunk.lines[0][match.end():]] + chunk.lines[1:])
            words = self._TOKEN.findall(text)
            if not words:
                return [lead.rstrip()]
            words[0] = lead + words[0]
            return self._fill(words, first_width, rest_width, hanging=" " * len(lead))

        if chunk.kind == self.CODE and self._options.prefer_code_fences:
            return ["```"] + [line[4:] for line in chunk.lines] + ["```"]

        return list(chunk.lines)

    def _punctuate(self, words: list[str]) -> list[str]:
        if not words:
            return words
        words = list(words)
        first = words[0]
        if self._options.capitalize_description and first[0].islower():
            words[0] = first[0].upper() + first[1:]
        if self._options.description_with_dot and re.search(r"\w$", words[-1]):
            words[-1] += "."
        return words

    def _fill(
        self,
        words: list[str],
        first_width: int,
        rest_width: int,
        hanging: str = "",
    ) -> list[str]:
        """Greedy fill; a word longer than the width gets its own line."""
        lines: list[str] = []
        current = ""
        for word in words:
            limit = first_width if not lines else rest_width
            if current.strip() and len(current) + 1 + len(word) > limit:
                lines.append(current)
                current = hanging + word
            else:
                current = f"{current} {word}" if current.strip() else current + word
        if current:
            lines.append(current)
        return lines
