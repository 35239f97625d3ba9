"""
Data models for documentation comment processing.

Contains the tag entry, tokenizer block, and comment block dataclasses plus
the option enums shared by the normalizer, grouper, and renderer.
"""

from dataclasses import dataclass, field
from enum import Enum

# Tag value of the synthetic entry that only requests a blank output line
SPACER_TAG = ""


class AliasMode(str, Enum):
    """How alias tag spellings are rendered."""

    NORMALIZE = "normalize"
    PRESERVE = "preserve"
    PREFER = "prefer"
    STRICT = "strict"


class ConflictStrategy(str, Enum):
    """How duplicate non-repeatable alias tags are reconciled in strict mode."""

    MERGE = "merge"
    FIRST = "first"
    LAST = "last"
    ERROR = "error"


class TypeSeparator(str, Enum):
    """Field separator used inside object literal types."""

    SEMICOLON = "semicolon"
    COMMA = "comma"

    @property
    def char(self) -> str:
        return ";" if self is TypeSeparator.SEMICOLON else ","


class CommentLineStrategy(str, Enum):
    """Whether short comments collapse onto a single line."""

    SINGLE_LINE = "singleLine"
    MULTILINE = "multiline"
    KEEP = "keep"


@dataclass
class SourceLine:
    """
    One raw line of a comment, split the way the tokenizer sees it.

    Attributes:
        number: 0-based line index within the comment
        source: The raw line text
        start: Leading whitespace
        delimiter: '/**', '*' or '' for lines without a star
        post_delimiter: Whitespace between the delimiter and the content
        description: Line content without delimiters
        end: '*/' on the closing line, else ''
    """

    number: int
    source: str
    start: str = ""
    delimiter: str = ""
    post_delimiter: str = ""
    description: str = ""
    end: str = ""


@dataclass
class TagEntry:
    """
    One documentation field (`@tag {type} name description`).

    `tag` is the logical tag used for ordering and role lookups; `render_tag`
    is an optional spelling used only when printing. An entry with an empty
    tag is a spacer and renders as a blank line.
    """

    tag: str
    type: str = ""
    name: str = ""
    description: str = ""
    default: str | None = None
    optional: bool = False
    render_tag: str | None = None
    source: list[SourceLine] = field(default_factory=list)

    @classmethod
    def spacer(cls) -> "TagEntry":
        """Create a blank-line spacer entry."""
        return cls(tag=SPACER_TAG)

    @property
    def is_spacer(self) -> bool:
        return self.tag == SPACER_TAG


@dataclass
class Block:
    """
    Tokenizer output for one comment.

    Attributes:
        description: Free text preceding the first tag
        tags: Tag entries in source order
        source: Every line of the comment
    """

    description: str = ""
    tags: list[TagEntry] = field(default_factory=list)
    source: list[SourceLine] = field(default_factory=list)


@dataclass
class CommentBlock:
    """
    A block comment located in host source text.

    Attributes:
        text: Raw comment text including the '/*' and '*/' delimiters
        start: Character offset of the comment in the host text
        end: Character offset just past the comment
        line: 0-based line of the comment start
        column: 0-based column of the comment start
        indent: Leading whitespace of the comment's first line
        eol: End-of-line sequence used when writing the comment back
    """

    text: str
    start: int
    end: int
    line: int = 0
    column: int = 0
    indent: str = ""
    eol: str = "\n"
    description: str = ""
    tags: list[TagEntry] = field(default_factory=list)

    @property
    def value(self) -> str:
        """Comment body between '/*' and '*/'."""
        return self.text[2:-2]


@dataclass
class AliasConflict:
    """Diagnostic recorded when strict mode finds duplicate alias tags."""

    group_id: str
    tags: list[str]
    kept_index: int
    message: str = ""


@dataclass
class NormalizationResult:
    """Normalized entries plus any alias conflict diagnostics."""

    tags: list[TagEntry] = field(default_factory=list)
    conflicts: list[AliasConflict] = field(default_factory=list)
