"""
Tests for the Tree-sitter comment locator.
"""

import asyncio

import pytest

pytest.importorskip("tree_sitter_javascript")

from jsdocfmt.core.orchestrator import CommentOrchestrator  # noqa: E402
from jsdocfmt.core.parsers import TreeSitterCommentParser  # noqa: E402


class TestTreeSitterCommentParser:
    """Locating block comments."""

    def setup_method(self):
        self.parser = TreeSitterCommentParser()

    def test_finds_block_comments(self):
        """Block comments are found with their positions."""
        text = "let a;\n  /** doc */\nfunction f() {}\n"

        comments = self.parser.parse(text)

        assert len(comments) == 1
        assert comments[0].text == "/** doc */"
        assert comments[0].line == 1
        assert comments[0].column == 2
        assert text[comments[0].start:comments[0].end] == "/** doc */"

    def test_ignores_line_comments_and_strings(self):
        """Line comments and comment-like strings are not block comments."""
        text = "// line\nconst s = '/** not a comment */';\n/* real */\n"

        comments = self.parser.parse(text)

        assert [comment.text for comment in comments] == ["/* real */"]

    def test_character_offsets_after_multibyte_text(self):
        """Offsets are characters, not bytes."""
        text = "const s = 'héllo';\n/** doc */\n"

        comment = self.parser.parse(text)[0]

        assert text[comment.start:comment.end] == "/** doc */"

    def test_nested_comments_in_order(self):
        """Comments inside classes are found in source order."""
        text = "/** a */\nclass A {\n  /** b */\n  m() {}\n}\n"

        assert [c.text for c in self.parser.parse(text)] == ["/** a */", "/** b */"]

    def test_default_orchestrator_parser(self):
        """The orchestrator uses Tree-sitter when no parser is given."""
        text = "const s = '/** hi */';\n/** hello */\nlet a;\n"

        result = asyncio.run(CommentOrchestrator().format_text(text))

        assert result == "const s = '/** hi */';\n/** Hello */\nlet a;\n"
