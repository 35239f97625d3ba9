"""
Comment Orchestrator - Drives the formatting pipeline for each comment.

Per comment:
    raw text -> line endings normalized -> doc-block check -> tokenize
    -> normalize -> group/sort -> enrich (default notes, optional names)
    -> render -> stars/indentation -> original line endings

Comments of one file are processed concurrently; each owns its entries and
its result is spliced back at the comment's original offsets.
"""

import asyncio
import logging
import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from jsdocfmt.core.aliases import AliasResolver
from jsdocfmt.core.comment_tokenizer import CommentTokenizer
from jsdocfmt.core.config import FormatterConfig
from jsdocfmt.core.grouping import (
    TagGrouper,
    separate_returns_from_params,
    separate_tag_groups,
)
from jsdocfmt.core.literals import add_default_note, extract_default_literal
from jsdocfmt.core.models import AliasConflict, CommentBlock, CommentLineStrategy, TagEntry
from jsdocfmt.core.normalizer import TagNormalizer
from jsdocfmt.core.parsers.base import SourceParserInterface
from jsdocfmt.core.renderer import TagRenderer, compute_alignment
from jsdocfmt.core.signature import extract_param_order
from jsdocfmt.core.tag_tables import TagTables, default_tag_tables, is_default_tag
from jsdocfmt.core.type_formatter import modernize, normalize_separators, split_optional_marker

if TYPE_CHECKING:
    from jsdocfmt.infrastructure.code_formatter import CodeFormatterInterface

logger = logging.getLogger(__name__)

_EOL_SEQUENCES = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


@dataclass
class CommentResult:
    """
    Outcome for one block comment.

    Attributes:
        comment: The comment as found in the source
        value: New comment text, "" to remove the comment, or None to leave
            it untouched
        conflicts: Alias conflicts reported while normalizing
    """

    comment: CommentBlock
    value: str | None
    conflicts: list[AliasConflict] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.value is not None and self.value != self.comment.text


@dataclass
class DocumentResult:
    """Outcome of formatting a whole source text."""

    text: str
    changed: bool
    comments: list[CommentResult] = field(default_factory=list)

    @property
    def conflicts(self) -> list[AliasConflict]:
        return [conflict for result in self.comments for conflict in result.conflicts]


def detect_end_of_line(text: str) -> str:
    """Return the most common line ending of the text ('lf', 'crlf' or 'cr')."""
    counts = {
        "crlf": text.count("\r\n"),
        "cr": len(re.findall(r"\r(?!\n)", text)),
        "lf": len(re.findall(r"(?<!\r)\n", text)),
    }
    best = max(counts, key=lambda key: counts[key])
    return best if counts[best] else "lf"


class CommentOrchestrator:
    """
    Formats the documentation comments of source text.

    Example:
        >>> orchestrator = CommentOrchestrator()
        >>> asyncio.run(orchestrator.format_text("/** hello */\\nlet a;\\n"))
        '/** Hello */\\nlet a;\\n'
    """

    _LEADING_STARS = re.compile(r"^\*+")
    _DOC_BLOCK = re.compile(r"^/\*\*[\s\S]+?\*/$")
    _LINE_BREAKS = re.compile(r"\r\n?")

    def __init__(
        self,
        config: FormatterConfig | None = None,
        parser: SourceParserInterface | None = None,
        code_formatter: "CodeFormatterInterface | None" = None,
        tables: TagTables | None = None,
        tokenizer: CommentTokenizer | None = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Formatter configuration (defaults when omitted)
            parser: Comment locator used by format_text; Tree-sitter when omitted
            code_formatter: Formatter for `@example` bodies; re-indents when omitted
            tables: Tag classification tables
            tokenizer: Comment tokenizer
        """
        if code_formatter is None:
            from jsdocfmt.infrastructure.code_formatter import ReindentCodeFormatter

            code_formatter = ReindentCodeFormatter()

        self._config = config or FormatterConfig()
        self._parser = parser
        self._tables = tables or default_tag_tables()
        self._tokenizer = tokenizer or CommentTokenizer()
        self._resolver = AliasResolver(self._tables)
        self._normalizer = TagNormalizer(self._tables, self._resolver)

        options = self._config.jsdoc
        self._grouper = TagGrouper(self._tables, options.tags_order, options.description_tag)
        self._renderer = TagRenderer(options, self._config.host, code_formatter, self._tables)

    @property
    def config(self) -> FormatterConfig:
        return self._config

    def _get_parser(self) -> SourceParserInterface:
        if self._parser is None:
            from jsdocfmt.core.parsers.javascript_parser import TreeSitterCommentParser

            self._parser = TreeSitterCommentParser()
        return self._parser

    async def format_text(self, text: str) -> str:
        """Format every documentation comment of the text."""
        result = await self.format_document(text)
        return result.text

    async def format_document(self, text: str) -> DocumentResult:
        """
        Format every documentation comment of the text.

        Returns:
            DocumentResult with the new text and per-comment outcomes
        """
        comments = self._get_parser().parse(text)
        results = await asyncio.gather(
            *(self.process_comment(comment, text) for comment in comments)
        )

        output = text
        # Reverse order keeps earlier offsets valid
        for result in sorted(results, key=lambda r: r.comment.start, reverse=True):
            if result.value is None:
                continue
            start, end = result.comment.start, result.comment.end
            if result.value == "":
                start, end = self._removal_span(output, start, end)
            output = output[:start] + result.value + output[end:]

        return DocumentResult(text=output, changed=output != text, comments=list(results))

    def _removal_span(self, text: str, start: int, end: int) -> tuple[int, int]:
        """Widen a removed comment's span to its whole line when nothing else is on it."""
        line_start = text.rfind("\n", 0, start) + 1
        newline = text.find("\n", end)
        line_end = len(text) if newline == -1 else newline + 1
        if text[line_start:start].strip() or text[end:line_end].strip():
            return start, end
        return line_start, line_end

    async def process(self, comment: CommentBlock, text: str) -> str | None:
        """
        Format one comment.

        Args:
            comment: Located comment
            text: Full source text the comment belongs to

        Returns:
            The new comment text, "" when the comment should be removed, or
            None when the comment is not a documentation comment
        """
        result = await self.process_comment(comment, text)
        return result.value

    async def process_comment(self, comment: CommentBlock, text: str) -> CommentResult:
        """Format one comment and report its diagnostics."""
        value = self._LEADING_STARS.sub("*", comment.value)
        comment_string = "/*" + self._LINE_BREAKS.sub("\n", value) + "*/"

        if not self._DOC_BLOCK.match(comment_string):
            return CommentResult(comment, None)

        block = self._tokenizer.tokenize(comment_string)
        if block is None:
            logger.debug(f"Comment at line {comment.line + 1} produced no tokens")
            return CommentResult(comment, "")

        options = self._config.jsdoc
        normalized = self._normalizer.normalize(
            block, options.alias_tags_mode, options.alias_conflict_strategy
        )

        width = self._content_width(comment, text)
        param_order = extract_param_order(text[comment.end:])

        tags = [self._prepare_type(entry) for entry in normalized.tags]
        tags = self._grouper.sort(tags, param_order)

        if options.separate_returns_from_param:
            tags = separate_returns_from_params(tags)

        if options.add_default_to_description and options.format_descriptions:
            tags = [self._add_default_note(entry) for entry in tags]

        tags = [self._assign_optional_and_default(entry) for entry in tags]
        tags = [self._finish_entry(entry) for entry in tags]

        alignment = compute_alignment(tags, self._tables) if options.vertical_alignment else None

        if options.separate_tag_groups:
            tags = separate_tag_groups(tags)

        tags = [
            entry
            for entry in tags
            if entry.description or not self._tables.roles(entry.tag).description_required
        ]

        rendered = []
        for index, entry in enumerate(tags):
            rendered.append(await self._renderer.render(entry, index, tags, alignment, width))
        body = "".join(rendered).rstrip()

        if not body.strip():
            return CommentResult(comment, "", normalized.conflicts)

        output = self._add_stars(body, comment, text)
        output = output.replace("\n", self._eol(text))
        return CommentResult(comment, output, normalized.conflicts)

    def _prepare_type(self, entry: TagEntry) -> TagEntry:
        """Move a trailing `=` to the optional flag and modernize the type."""
        if not entry.type:
            return entry
        type_, optional = split_optional_marker(entry.type)
        return replace(entry, type=modernize(type_), optional=entry.optional or optional)

    def _add_default_note(self, entry: TagEntry) -> TagEntry:
        if entry.optional and entry.default:
            return replace(entry, description=add_default_note(entry.description, entry.default))
        return entry

    def _assign_optional_and_default(self, entry: TagEntry) -> TagEntry:
        """Fold optional/default into `[name=default]` or `type | undefined`."""
        if entry.is_spacer:
            return entry

        if is_default_tag(entry.tag):
            marker = f"@{entry.tag}".lower()
            index, line = next(
                (
                    (index, line.source)
                    for index, line in enumerate(entry.source)
                    if marker in line.source.lower()
                ),
                (0, ""),
            )
            extracted = extract_default_literal(line)
            if extracted:
                value, description = extracted
                # Only the literal comes from the tag line; continuation lines stay
                continuation = [line.description for line in entry.source[index + 1:]]
                description = "\n".join([description, *continuation]).strip()
                return replace(entry, type=value, name="", description=description)
            return entry

        if entry.optional:
            if entry.name:
                if entry.default:
                    return replace(entry, name=f"[{entry.name}={entry.default}]")
                return replace(entry, name=f"[{entry.name}]")
            if entry.type:
                return replace(entry, type=f"{entry.type} | undefined")
        return entry

    def _finish_entry(self, entry: TagEntry) -> TagEntry:
        """Normalize type separators and choose the rendered tag spelling."""
        if entry.is_spacer:
            return entry
        options = self._config.jsdoc
        type_ = normalize_separators(entry.type, options.type_separator.char) if entry.type else ""
        render_tag = self._resolver.render_tag_for(
            entry, options.alias_tags_mode, options.preferred_aliases
        )
        return replace(entry, type=type_, render_tag=render_tag)

    def _line_prefix(self, comment: CommentBlock, text: str) -> str:
        line_start = text.rfind("\n", 0, comment.start) + 1
        return text[line_start:comment.start]

    def _content_width(self, comment: CommentBlock, text: str) -> int:
        """Print width minus the comment's indentation and the ' * ' prefix."""
        prefix = self._line_prefix(comment, text)
        whitespace = prefix[len(prefix.rstrip(" \t")):]
        spaces = whitespace.count(" ")
        tabs = whitespace.count("\t")
        host = self._config.host
        return self._config.effective_print_width - (spaces + tabs * host.tab_width) - len(" * ")

    def _add_stars(self, body: str, comment: CommentBlock, text: str) -> str:
        strategy = self._config.jsdoc.comment_line_strategy
        content = body.strip("\n")
        single_line = "\n" not in content.strip()

        if (strategy == CommentLineStrategy.SINGLE_LINE and single_line) or (
            strategy == CommentLineStrategy.KEEP
            and single_line
            and not self._LINE_BREAKS.sub("\n", comment.text).count("\n")
        ):
            return f"/** {content.strip()} */"

        prefix = self._line_prefix(comment, text)
        indent = prefix[: len(prefix) - len(prefix.lstrip(" \t"))]

        lines = ["/**"]
        for line in content.split("\n"):
            lines.append(f"{indent} * {line.rstrip()}" if line.strip() else f"{indent} *")
        lines.append(f"{indent} */")
        return "\n".join(lines)

    def _eol(self, text: str) -> str:
        end_of_line = self._config.host.end_of_line
        if end_of_line == "auto":
            end_of_line = detect_end_of_line(text)
        return _EOL_SEQUENCES[end_of_line]
