"""
Tag Normalizer - Restructures freshly tokenized tag entries.

Responsibilities:
- Repair tokenizer mis-splits (tag glued to type, stray names, `-` separators)
- Resolve alias spellings to logical tags
- Fold the block description and `@description` tags into one entry
- De-duplicate non-repeatable alias groups in strict mode
"""

import logging
import re
from dataclasses import replace

from jsdocfmt.core.aliases import AliasResolver
from jsdocfmt.core.literals import original_tag_spelling
from jsdocfmt.core.models import (
    AliasConflict,
    AliasMode,
    Block,
    ConflictStrategy,
    NormalizationResult,
    TagEntry,
)
from jsdocfmt.core.tag_tables import DESCRIPTION, EXAMPLE, TagTables, default_tag_tables

logger = logging.getLogger(__name__)


class TagNormalizer:
    """
    Normalizes the tag entries of a tokenized block.

    The tokenizer splits every tag the same way (tag, type, name,
    description) without knowing which tags take names or types. The
    normalizer uses the classification tables to undo the wrong guesses.
    """

    _DASH_SEPARATOR = re.compile(r"^-[ \t]+")

    def __init__(self, tables: TagTables | None = None, resolver: AliasResolver | None = None):
        self._tables = tables or default_tag_tables()
        self._resolver = resolver or AliasResolver(self._tables)

    def normalize(
        self,
        block: Block,
        mode: AliasMode = AliasMode.NORMALIZE,
        strategy: ConflictStrategy = ConflictStrategy.MERGE,
    ) -> NormalizationResult:
        """
        Normalize a block's tags and fold its description.

        Args:
            block: Tokenizer output (not modified)
            mode: Alias resolution mode
            strategy: Conflict strategy used in strict mode

        Returns:
            NormalizationResult with the normalized entries and any conflict
            diagnostics
        """
        tags = [self.normalize_entry(entry) for entry in block.tags]

        conflicts: list[AliasConflict] = []
        if mode == AliasMode.STRICT:
            tags, conflicts = self.resolve_conflicts(tags, strategy)

        tags = self.fold_description(block.description, tags)
        return NormalizationResult(tags=tags, conflicts=conflicts)

    def normalize_entry(self, entry: TagEntry) -> TagEntry:
        """Normalize one tag entry; returns a new entry."""
        tag = entry.tag or ""
        type_ = entry.type or ""
        name = entry.name or ""
        description = entry.description or ""

        # Missing space between tag and type: `@returns{Object}`
        brace = tag.find("{")
        if brace != -1 and tag.endswith("}"):
            type_ = f"{tag[brace + 1:-1]} {type_}"
            tag = tag[:brace]

        logical = self._resolver.logical_tag(tag.strip())
        roles = self._tables.roles(logical)
        type_ = type_.strip()
        name = name.strip()

        if logical not in (DESCRIPTION, EXAMPLE):
            if name == "-":
                name = ""
                description = description.lstrip()
            description = self._DASH_SEPARATOR.sub("", description)

        if name and roles.nameless:
            if description.startswith("\n"):
                description = name + description
            else:
                rest = description[1:] if description.startswith(" ") else description
                description = f"{name} {rest}" if rest else name
            name = ""

        if type_ and roles.typeless:
            prefix = f"{{{type_}}}"
            if name:
                prefix = f"{prefix} {name}"
                name = ""
            if description.startswith("\n"):
                description = prefix + description
            else:
                description = f"{prefix} {description}" if description else prefix
            type_ = ""

        if name:
            description = description.lstrip("\n")

        default = entry.default.strip() if entry.default else entry.default

        return replace(
            entry,
            tag=logical,
            type=type_,
            name=name,
            description=description,
            default=default,
        )

    def fold_description(self, block_description: str, tags: list[TagEntry]) -> list[TagEntry]:
        """
        Merge the block description and all `@description` tags into one
        description entry placed first.
        """
        description = block_description or ""
        remaining: list[TagEntry] = []

        for entry in tags:
            if entry.tag.lower() != DESCRIPTION:
                remaining.append(entry)
                continue
            if entry.description.strip():
                # A separating blank line only when something precedes it
                separator = "\n\n" if description else ""
                description += separator + entry.description

        if description.strip():
            remaining.insert(0, TagEntry(tag=DESCRIPTION, description=description))

        return remaining

    def resolve_conflicts(
        self, tags: list[TagEntry], strategy: ConflictStrategy
    ) -> tuple[list[TagEntry], list[AliasConflict]]:
        """
        Keep at most one entry per non-repeatable alias group.

        Returns:
            (remaining entries, conflict diagnostics)
        """
        groups: dict[str, list[int]] = {}
        for index, entry in enumerate(tags):
            group_id = self._resolver.group_of(entry.tag)
            if group_id and group_id in self._tables.non_repeatable_groups:
                groups.setdefault(group_id, []).append(index)

        out = list(tags)
        to_remove: set[int] = set()
        conflicts: list[AliasConflict] = []

        for group_id, indices in groups.items():
            if len(indices) <= 1:
                continue

            if strategy == ConflictStrategy.LAST:
                to_remove.update(indices[:-1])
            elif strategy in (ConflictStrategy.FIRST, ConflictStrategy.ERROR):
                to_remove.update(indices[1:])
                if strategy == ConflictStrategy.ERROR:
                    conflict = AliasConflict(
                        group_id=group_id,
                        tags=[self._spelling(tags[i]) for i in indices],
                        kept_index=indices[0],
                        message=(
                            f"Duplicate '@{self._resolver.canonical_of(group_id)}' tags "
                            f"({len(indices)} occurrences); keeping the first"
                        ),
                    )
                    logger.warning(conflict.message)
                    conflicts.append(conflict)
            else:
                base = replace(out[indices[0]])
                for index in indices[1:]:
                    current = out[index]
                    if not base.type and current.type:
                        base.type = current.type
                    if not base.name and current.name:
                        base.name = current.name
                    if len(current.description or "") > len(base.description or ""):
                        base.description = current.description
                    to_remove.add(index)
                out[indices[0]] = base

        remaining = [entry for i, entry in enumerate(out) if i not in to_remove]
        return remaining, conflicts

    def _spelling(self, entry: TagEntry) -> str:
        return original_tag_spelling(entry.source) or entry.tag
