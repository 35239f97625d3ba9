"""
Core Layer - Comment tokenizing, tag normalization, grouping, and rendering components.
"""

from jsdocfmt.core.aliases import AliasResolver, parse_preferred_aliases
from jsdocfmt.core.comment_tokenizer import CommentTokenizer
from jsdocfmt.core.config import (
    FormatterConfig,
    HostOptions,
    JsdocOptions,
    LoggingConfig,
    load_config,
)
from jsdocfmt.core.description_wrapper import DescriptionWrapper, WrappedText
from jsdocfmt.core.grouping import (
    TagGrouper,
    separate_returns_from_params,
    separate_tag_groups,
)
from jsdocfmt.core.models import (
    AliasConflict,
    AliasMode,
    Block,
    CommentBlock,
    CommentLineStrategy,
    ConflictStrategy,
    NormalizationResult,
    SourceLine,
    TagEntry,
    TypeSeparator,
)
from jsdocfmt.core.normalizer import TagNormalizer
from jsdocfmt.core.orchestrator import (
    CommentOrchestrator,
    CommentResult,
    DocumentResult,
    detect_end_of_line,
)
from jsdocfmt.core.parsers import SourceParserInterface, TreeSitterCommentParser
from jsdocfmt.core.renderer import Alignment, TagRenderer, compute_alignment
from jsdocfmt.core.tag_tables import (
    AliasGroup,
    TagRoles,
    TagTables,
    default_tag_tables,
)

__all__ = [
    # Config
    "FormatterConfig",
    "JsdocOptions",
    "HostOptions",
    "LoggingConfig",
    "load_config",
    # Models
    "AliasConflict",
    "AliasMode",
    "Block",
    "CommentBlock",
    "CommentLineStrategy",
    "ConflictStrategy",
    "NormalizationResult",
    "SourceLine",
    "TagEntry",
    "TypeSeparator",
    # Tag tables
    "AliasGroup",
    "TagRoles",
    "TagTables",
    "default_tag_tables",
    # Aliases
    "AliasResolver",
    "parse_preferred_aliases",
    # Pipeline
    "CommentTokenizer",
    "TagNormalizer",
    "TagGrouper",
    "separate_returns_from_params",
    "separate_tag_groups",
    "DescriptionWrapper",
    "WrappedText",
    "Alignment",
    "TagRenderer",
    "compute_alignment",
    "CommentOrchestrator",
    "CommentResult",
    "DocumentResult",
    "detect_end_of_line",
    # Parsers
    "SourceParserInterface",
    "TreeSitterCommentParser",
]
