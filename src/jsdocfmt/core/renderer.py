"""
Tag Renderer - Turns one normalized tag entry into comment text.

The output of render() starts with a newline and carries no comment stars;
the orchestrator concatenates the rendered entries and adds the stars.
"""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from jsdocfmt.core.config import HostOptions, JsdocOptions
from jsdocfmt.core.description_wrapper import DescriptionWrapper
from jsdocfmt.core.models import TagEntry
from jsdocfmt.core.tag_tables import (
    DESCRIPTION,
    EXAMPLE,
    PRIVATE_REMARKS,
    REMARKS,
    TODO,
    TagTables,
    default_tag_tables,
    is_default_tag,
)
from jsdocfmt.core.type_formatter import normalize_separators

if TYPE_CHECKING:
    from jsdocfmt.infrastructure.code_formatter import CodeFormatterInterface

logger = logging.getLogger(__name__)

_CAPTION = re.compile(r"<caption>([\s\S]*?)</caption>", re.IGNORECASE)
_FIRST_WORD = re.compile(r"^\s*(\S+)")
_LEADING_BLANK_LINE = re.compile(r"^\n[ \t]*\n")

# Google style continuation indent
_CONTINUATION_INDENT = "  "


@dataclass(frozen=True)
class Alignment:
    """Column widths used for vertical alignment."""

    title: int = 0
    type: int = 0
    name: int = 0


def compute_alignment(entries: Sequence[TagEntry], tables: TagTables | None = None) -> Alignment:
    """Measure the widest display tag, type and name among alignable entries."""
    tables = tables or default_tag_tables()
    title = type_ = name = 0
    for entry in entries:
        if entry.is_spacer or not tables.roles(entry.tag).alignable:
            continue
        title = max(title, len(entry.render_tag or entry.tag))
        type_ = max(type_, len(entry.type))
        name = max(name, len(entry.name))
    return Alignment(title=title, type=type_, name=name)


class TagRenderer:
    """
    Renders tag entries.

    Responsibilities:
    - Title, type and name tokens with alignment padding
    - `@example` captions and bodies (through the code formatter)
    - Description wrapping, inline or starting on a new line
    - Blank lines after descriptions and description-like tags
    """

    def __init__(
        self,
        options: JsdocOptions,
        host: HostOptions,
        code_formatter: "CodeFormatterInterface",
        tables: TagTables | None = None,
        wrapper: DescriptionWrapper | None = None,
    ):
        self._options = options
        self._host = host
        self._code_formatter = code_formatter
        self._tables = tables or default_tag_tables()
        self._wrapper = wrapper or DescriptionWrapper(options, self._tables)

    async def render(
        self,
        entry: TagEntry,
        index: int,
        entries: Sequence[TagEntry],
        alignment: Alignment | None = None,
        width: int = 80,
    ) -> str:
        """
        Render one entry of a tag sequence.

        Args:
            entry: Entry to render
            index: Position of the entry in entries
            entries: The full, final entry sequence
            alignment: Column widths when vertical alignment is enabled
            width: Usable width of the comment content

        Returns:
            Rendered text starting with a newline
        """
        if entry.is_spacer:
            return "\n"

        options = self._options
        roles = self._tables.roles(entry.tag)
        gap = " " * options.spaces
        display = entry.render_tag or entry.tag
        description = entry.description or ""

        title_pad = type_pad = name_pad = description_pad = 0
        if options.vertical_alignment and roles.alignable and alignment:
            title_pad += alignment.title - len(display)
            if entry.type:
                type_pad += alignment.type - len(entry.type)
            elif alignment.type:
                description_pad += alignment.type + len(gap)
            if entry.name:
                name_pad += alignment.name - len(entry.name)
            elif alignment.name:
                description_pad += alignment.name + len(gap)

        use_title = entry.tag != DESCRIPTION or options.description_tag

        text = "\n"
        if use_title:
            text += f"@{display}" + " " * title_pad
        if entry.type:
            text += gap + self._format_type(entry) + " " * type_pad
        if entry.name:
            text += f"{gap}{entry.name}" + " " * name_pad

        if entry.tag == EXAMPLE and not options.tsdoc:
            text = await self._render_example(text, description)
        elif description:
            if use_title:
                text += gap + " " * description_pad
            text += self._render_description(entry, text, description, width)

        text += self._end_line(entry, index, entries)
        return text

    def _format_type(self, entry: TagEntry) -> str:
        separator = self._options.type_separator.char
        if not is_default_tag(entry.tag):
            return f"{{{normalize_separators(entry.type, separator)}}}"

        # Spaced empty literals read better in proportional fonts
        if entry.type == "[]":
            return "[ ]"
        if entry.type == "{}":
            return "{ }"
        return normalize_separators(entry.type, separator)

    async def _render_example(self, text: str, description: str) -> str:
        caption = _CAPTION.search(description)
        if caption:
            description = description.replace(caption.group(0), "", 1)
            text = f"{text} {caption.group(0)}"

        indent = "\t" if self._host.use_tabs else " " * self._host.tab_width
        formatted = await self._code_formatter.format(description, indent, self._options)
        return text + _LEADING_BLANK_LINE.sub("", formatted).rstrip()

    def _render_description(
        self, entry: TagEntry, prefix: str, description: str, width: int
    ) -> str:
        tag = entry.tag
        options = self._options

        if self._tables.roles(tag).no_wrap or not self._tables.is_known(tag):
            rendered = description
        elif not options.format_descriptions:
            rendered = description
        else:
            if tag == DESCRIPTION or (tag in (EXAMPLE, REMARKS, PRIVATE_REMARKS) and options.tsdoc):
                indent = ""
            else:
                indent = _CONTINUATION_INDENT

            match = _FIRST_WORD.match(description)
            first_word = match.group(1) if match else ""

            if (
                tag != DESCRIPTION and len(prefix) + len(first_word) > width
            ) or tag in (REMARKS, PRIVATE_REMARKS):
                # The prefix is already too long; start on a new line
                wrapped = self._wrapper.wrap(tag, description, width, len(indent), indent)
                rendered = f"\n{indent}{wrapped.text}"
            else:
                # `prefix` starts with the newline of this entry
                wrapped = self._wrapper.wrap(tag, description, width, len(prefix) - 1, indent)
                rendered = wrapped.text

        if options.separate_tag_groups:
            rendered = rendered.rstrip()

        if tag == DESCRIPTION:
            # The blank line after the description comes from _end_line
            rendered = rendered.rstrip()

        if rendered.startswith("\n"):
            return _LEADING_BLANK_LINE.sub("\n", rendered)
        return rendered.lstrip()

    def _end_line(self, entry: TagEntry, index: int, entries: Sequence[TagEntry]) -> str:
        is_last = index == len(entries) - 1
        if is_last:
            return ""

        if entry.tag == DESCRIPTION:
            if self._options.separate_description_from_tags:
                return "\n"
            # Keep a blank line only where the author wrote one
            return "\n" if (entry.description or "").endswith("\n") else ""

        if entry.tag in (EXAMPLE, TODO) and not entries[index + 1].is_spacer:
            return "\n"
        return ""
