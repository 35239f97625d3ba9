"""
Tests for the example code formatters.
"""

import asyncio

import pytest

from jsdocfmt.infrastructure.code_formatter import ReindentCodeFormatter
from jsdocfmt.infrastructure.fakes import FailingCodeFormatter, RecordingCodeFormatter


class TestReindentCodeFormatter:
    """Re-indentation of example bodies."""

    def setup_method(self):
        self.formatter = ReindentCodeFormatter()

    def test_common_indent_replaced(self):
        """Common indentation is replaced by the prefix."""
        code = "\n    if (a) {\n      b();\n    }\n"

        result = asyncio.run(self.formatter.format(code, "  "))

        assert result == "\n  if (a) {\n    b();\n  }"

    def test_inner_blank_lines_kept_without_indent(self):
        """Blank lines inside the code stay empty."""
        result = asyncio.run(self.formatter.format("a();\n\nb();", "  "))

        assert result == "\n  a();\n\n  b();"

    def test_empty_code(self):
        """Whitespace-only code yields an empty string."""
        assert asyncio.run(self.formatter.format("\n   \n", "  ")) == ""


class TestFakeFormatters:
    """Behavior of the test doubles."""

    def test_recording_formatter_canned_response(self):
        """A configured response is returned and the call recorded."""
        formatter = RecordingCodeFormatter(response="\n  x")

        assert asyncio.run(formatter.format("y", "  ")) == "\n  x"
        assert formatter.calls == [("y", "  ")]

    def test_failing_formatter_raises(self):
        """The failing formatter raises its error."""
        formatter = FailingCodeFormatter(ValueError("boom"))

        with pytest.raises(ValueError, match="boom"):
            asyncio.run(formatter.format("x", "  "))
