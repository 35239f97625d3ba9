"""
Code formatter collaborator for `@example` bodies.

The default implementation only re-indents the example; hosts that own a real
JavaScript formatter can inject their own CodeFormatterInterface.
"""

import logging
from abc import ABC, abstractmethod
from textwrap import dedent
from typing import Any

logger = logging.getLogger(__name__)


class CodeFormatterInterface(ABC):
    """Abstract interface for example code formatters."""

    @abstractmethod
    async def format(self, code: str, indent: str, config: Any = None) -> str:
        """
        Format an example body.

        Args:
            code: Example code as written in the comment
            indent: Prefix to put in front of every non-blank line
            config: Formatter configuration (implementation specific)

        Returns:
            The formatted code, starting with a newline, or an empty string
            when there is no code
        """
        pass


class ReindentCodeFormatter(CodeFormatterInterface):
    """
    Re-indents example code without changing it otherwise.

    Common leading indentation is removed, leading and trailing blank lines
    are dropped, and every remaining non-blank line gets the indent prefix.
    """

    async def format(self, code: str, indent: str, config: Any = None) -> str:
        lines = dedent(code).split("\n")
        lines = [line.rstrip() for line in lines]

        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()

        if not lines:
            return ""

        return "".join(f"\n{indent}{line}" if line else "\n" for line in lines)
