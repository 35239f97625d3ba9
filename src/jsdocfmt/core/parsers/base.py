"""
Base classes for source parsers.

A source parser locates the block comments of a source file; everything else
about the file's syntax is left to the host formatter.
"""

import logging
from abc import ABC, abstractmethod

from jsdocfmt.core.models import CommentBlock

logger = logging.getLogger(__name__)


class SourceParserInterface(ABC):
    """Abstract interface for locating block comments in source text."""

    @abstractmethod
    def parse(self, text: str) -> list[CommentBlock]:
        """
        Find every block comment in the text.

        Args:
            text: Full source file content

        Returns:
            CommentBlock objects in source order, with character offsets
            and 0-based line/column positions filled in
        """
        pass

    # Common utility methods

    def make_comment(self, text: str, start: int, end: int) -> CommentBlock:
        """Build a CommentBlock from character offsets."""
        line_start = text.rfind("\n", 0, start) + 1
        return CommentBlock(
            text=text[start:end],
            start=start,
            end=end,
            line=text.count("\n", 0, start),
            column=start - line_start,
        )
