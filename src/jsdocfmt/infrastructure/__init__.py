"""
Infrastructure Layer - Code formatter collaborators and test fakes.
"""

from jsdocfmt.infrastructure.code_formatter import (
    CodeFormatterInterface,
    ReindentCodeFormatter,
)
from jsdocfmt.infrastructure.fakes import (
    FailingCodeFormatter,
    RecordingCodeFormatter,
    RegexCommentParser,
)

__all__ = [
    # Code formatter
    "CodeFormatterInterface",
    "ReindentCodeFormatter",
    # Fakes
    "RegexCommentParser",
    "RecordingCodeFormatter",
    "FailingCodeFormatter",
]
