"""
Fake implementations for testing.

Provides in-memory implementations of collaborator interfaces for use in
unit and integration tests without Tree-sitter or an external formatter.
"""

from __future__ import annotations

import re
from typing import Any

from jsdocfmt.core.models import CommentBlock
from jsdocfmt.core.parsers.base import SourceParserInterface
from jsdocfmt.infrastructure.code_formatter import CodeFormatterInterface


class RegexCommentParser(SourceParserInterface):
    """
    Comment locator based on a regular expression.

    Implements SourceParserInterface without Tree-sitter. Does not know about
    string literals, so `/*` inside a string is treated as a comment start.
    """

    _BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")

    def __init__(self):
        self.parse_calls = 0

    def parse(self, text: str) -> list[CommentBlock]:
        self.parse_calls += 1
        return [
            self.make_comment(text, match.start(), match.end())
            for match in self._BLOCK_COMMENT.finditer(text)
        ]


class RecordingCodeFormatter(CodeFormatterInterface):
    """
    Code formatter that records its calls.

    Returns the code indented line by line, or a canned response when one is
    configured.
    """

    def __init__(self, response: str | None = None):
        self.calls: list[tuple[str, str]] = []
        self._response = response

    async def format(self, code: str, indent: str, config: Any = None) -> str:
        self.calls.append((code, indent))
        if self._response is not None:
            return self._response
        lines = [line.strip() for line in code.strip("\n").split("\n")]
        return "".join(f"\n{indent}{line}" if line else "\n" for line in lines)


class FailingCodeFormatter(CodeFormatterInterface):
    """Code formatter that always raises, for error propagation tests."""

    def __init__(self, error: Exception | None = None):
        self._error = error or RuntimeError("Code formatter failed")

    async def format(self, code: str, indent: str, config: Any = None) -> str:
        raise self._error
