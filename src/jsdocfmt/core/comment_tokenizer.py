"""
Comment Tokenizer - Splits a JSDoc block into a description and tag entries.

Tokenization runs the classic pipeline over each tag section:
tag -> type (skipped for default tags) -> name -> description. Spacing is
preserved: continuation lines keep their indentation relative to the
single space that follows the leading '*'.
"""

import logging
import re

from jsdocfmt.core.models import Block, SourceLine, TagEntry
from jsdocfmt.core.tag_tables import is_default_tag

logger = logging.getLogger(__name__)


class CommentTokenizer:
    """
    Tokenizes `/** ... */` comment text.

    Lines inside fenced code blocks never start a new tag, so `@decorator`
    lines in examples stay part of the example body.
    """

    _LEADING_WS = re.compile(r"^[ \t]*")
    _TAG_START = re.compile(r"^@\S")
    _TAG = re.compile(r"^@(\S+)\s*")

    def __init__(self, fence: str = "```"):
        self._fence = fence

    def tokenize(self, text: str) -> Block | None:
        """
        Tokenize a comment whose line endings are already '\\n'.

        Args:
            text: Full comment text starting with '/**' and ending with '*/'

        Returns:
            Block with the description and tag entries, or None when the text
            is not a documentation comment
        """
        if not text.startswith("/**") or not text.endswith("*/"):
            return None

        raw_lines = text.split("\n")
        lines = [
            self._split_line(i, raw, is_last=(i == len(raw_lines) - 1))
            for i, raw in enumerate(raw_lines)
        ]

        sections: list[list[SourceLine]] = [[]]
        in_fence = False
        for line in lines:
            if not in_fence and self._TAG_START.match(line.description):
                sections.append([line])
            else:
                sections[-1].append(line)
            if line.description.count(self._fence) % 2:
                in_fence = not in_fence

        description = self._join(sections[0], keep_trailing_blank=True)
        tags = [self._parse_tag(section) for section in sections[1:]]
        logger.debug(f"Tokenized comment into {len(tags)} tags")

        return Block(description=description, tags=tags, source=lines)

    def _split_line(self, number: int, raw: str, is_last: bool) -> SourceLine:
        """Split one raw line into start/delimiter/content/end tokens."""
        start = self._LEADING_WS.match(raw).group()
        rest = raw[len(start):]

        delimiter = ""
        if number == 0 and rest.startswith("/**"):
            delimiter = "/**"
            rest = rest[3:]
        elif rest.startswith("*") and not rest.startswith("*/"):
            delimiter = "*"
            rest = rest[1:]

        end = ""
        stripped = rest.rstrip()
        if is_last and stripped.endswith("*/"):
            end = "*/"
            rest = stripped[:-2]

        post_delimiter = self._LEADING_WS.match(rest).group()
        description = rest[len(post_delimiter):].rstrip()

        return SourceLine(
            number=number,
            source=raw,
            start=start,
            delimiter=delimiter,
            post_delimiter=post_delimiter,
            description=description,
            end=end,
        )

    def _line_text(self, line: SourceLine) -> str:
        """Line content with indentation beyond the first space kept."""
        if not line.description:
            return ""
        if line.delimiter:
            return line.post_delimiter[1:] + line.description
        return line.description

    def _join(
        self,
        lines: list[SourceLine],
        first_text: str | None = None,
        keep_trailing_blank: bool = False,
    ) -> str:
        parts: list[str] = []
        for i, line in enumerate(lines):
            if i == 0 and first_text is not None:
                parts.append(first_text)
                continue
            if not line.description and (line.delimiter == "/**" or line.end):
                continue
            parts.append(self._line_text(line))

        while parts and not parts[0].strip():
            parts.pop(0)

        trailing_blank = False
        while parts and not parts[-1].strip():
            parts.pop()
            trailing_blank = True

        text = "\n".join(parts)
        if text and trailing_blank and keep_trailing_blank:
            text += "\n"
        return text

    def _parse_tag(self, lines: list[SourceLine]) -> TagEntry:
        first = lines[0]
        match = self._TAG.match(first.description)
        tag = match.group(1)
        rest = first.description[match.end():]

        type_ = ""
        type_end_line = 0
        if not is_default_tag(tag) and rest.startswith("{"):
            scanned = self._scan_type(rest, lines)
            if scanned is not None:
                type_, type_end_line, rest = scanned

        name, default, optional, rest = self._scan_name(rest.lstrip())

        description = self._join(lines[type_end_line:], first_text=rest.lstrip())
        if name and description and not rest.strip():
            # Name alone on the tag line
            description = "\n" + description

        return TagEntry(
            tag=tag,
            type=type_,
            name=name,
            description=description,
            default=default,
            optional=optional,
            source=lines,
        )

    def _scan_type(
        self, rest: str, lines: list[SourceLine]
    ) -> tuple[str, int, str] | None:
        """Find a balanced `{...}` type, possibly spanning several lines."""
        pieces: list[str] = []
        depth = 0
        texts = [rest] + [line.description for line in lines[1:]]

        for line_index, text in enumerate(texts):
            for pos, char in enumerate(text):
                if char == "{":
                    depth += 1
                    if depth == 1:
                        continue
                elif char == "}":
                    depth -= 1
                    if depth == 0:
                        pieces.append(text[:pos] if line_index else text[1:pos])
                        type_ = " ".join(p.strip() for p in pieces if p.strip())
                        return type_, line_index, text[pos + 1:]
            pieces.append(text if line_index else text[1:])

        return None

    def _scan_name(self, rest: str) -> tuple[str, str | None, bool, str]:
        """Return (name, default, optional, remaining text)."""
        if not rest:
            return "", None, False, ""

        if rest.startswith("["):
            depth = 0
            for pos, char in enumerate(rest):
                if char == "[":
                    depth += 1
                elif char == "]":
                    depth -= 1
                    if depth == 0:
                        inner = rest[1:pos]
                        if "=" in inner:
                            name, default = inner.split("=", 1)
                            return name.strip(), default.strip(), True, rest[pos + 1:]
                        return inner.strip(), None, True, rest[pos + 1:]

        word = re.match(r"\S+", rest).group()
        return word, None, False, rest[len(word):]
