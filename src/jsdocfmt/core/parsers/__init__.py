"""
Source parsers.

This package contains the strategies used to locate block comments in
source files.
"""

from jsdocfmt.core.parsers.base import SourceParserInterface
from jsdocfmt.core.parsers.javascript_parser import TreeSitterCommentParser

__all__ = [
    "SourceParserInterface",
    "TreeSitterCommentParser",
]
