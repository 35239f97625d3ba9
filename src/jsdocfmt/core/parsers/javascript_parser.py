"""
JavaScript/TypeScript source parser.

Locates block comments using Tree-sitter. The JavaScript grammar is used for
TypeScript sources as well; comments are tokenized the same way in both.
"""

import logging
from typing import Any

from jsdocfmt.core.models import CommentBlock
from jsdocfmt.core.parsers.base import SourceParserInterface

logger = logging.getLogger(__name__)


class TreeSitterCommentParser(SourceParserInterface):
    """Tree-sitter based comment locator."""

    def __init__(self):
        self._parser: Any = None

    def _ensure_loaded(self) -> Any:
        """Lazily create the Tree-sitter parser."""
        if self._parser is not None:
            return self._parser

        import tree_sitter
        import tree_sitter_javascript

        lang_obj = tree_sitter_javascript.language()
        lang = lang_obj if isinstance(lang_obj, tree_sitter.Language) else tree_sitter.Language(lang_obj)
        self._parser = tree_sitter.Parser(lang)
        logger.debug("Loaded Tree-sitter parser for 'javascript'")
        return self._parser

    def parse(self, text: str) -> list[CommentBlock]:
        parser = self._ensure_loaded()
        content = text.encode("utf-8")
        tree = parser.parse(content)

        comments: list[CommentBlock] = []
        self._collect(tree.root_node, content, text, comments)
        comments.sort(key=lambda comment: comment.start)
        logger.debug(f"Found {len(comments)} block comments")
        return comments

    def _collect(
        self,
        node: Any,
        content: bytes,
        text: str,
        comments: list[CommentBlock],
    ) -> None:
        """Recursively collect block comment nodes."""
        if node.type == "comment":
            if content[node.start_byte:node.start_byte + 2] == b"/*":
                start = self._char_offset(content, node.start_byte)
                end = self._char_offset(content, node.end_byte)
                comments.append(self.make_comment(text, start, end))
            return

        for child in node.children:
            self._collect(child, content, text, comments)

    def _char_offset(self, content: bytes, byte_offset: int) -> int:
        """Convert a UTF-8 byte offset into a character offset."""
        return len(content[:byte_offset].decode("utf-8", errors="replace"))
