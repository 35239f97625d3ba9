"""
Tag Grouper/Sorter - Orders normalized tags into visual groups.

A new group starts at a group-head tag (`@typedef`, `@callback`) once the
current group has seen a group-condition tag. Each group is sorted by tag
weight, `@param` tags follow the declaration's parameter order when known,
and groups are separated by spacer entries.
"""

import logging
from typing import Mapping, Sequence

from jsdocfmt.core.models import TagEntry
from jsdocfmt.core.tag_tables import (
    DESCRIPTION,
    EXAMPLE,
    PARAM,
    RETURNS,
    TagTables,
    default_tag_tables,
)

logger = logging.getLogger(__name__)


class TagGrouper:
    """Groups and sorts tag entries until the order is stable."""

    MAX_PASSES = 16

    def __init__(
        self,
        tables: TagTables | None = None,
        tag_order: Mapping[str, int] | None = None,
        description_tag: bool = False,
    ):
        """
        Args:
            tables: Classification tables
            tag_order: Per-tag weight overrides
            description_tag: Whether `@description` is printed as a tag; when
                False the description always sorts first
        """
        self._tables = tables or default_tag_tables()
        self._tag_order = dict(tag_order or {})
        self._description_tag = description_tag

    def weight(self, tag: str) -> int:
        return self._tables.weight(tag, self._tag_order, self._description_tag)

    def sort(
        self,
        entries: Sequence[TagEntry],
        param_order: Sequence[str] | None = None,
    ) -> list[TagEntry]:
        """
        Group and sort entries, joining groups with spacer entries.

        The grouping pass is repeated until sorting no longer changes the
        order, up to MAX_PASSES times. A settled order partitions into the
        same groups when it is sorted again.
        """
        current = tuple(entry for entry in entries if not entry.is_spacer)
        groups: list[list[TagEntry]] = []

        for _ in range(self.MAX_PASSES):
            groups = self._sorted_groups(current, param_order)
            flattened = tuple(entry for group in groups for entry in group)
            if flattened == current:
                break
            current = flattened
        else:
            logger.warning(
                f"Tag grouping did not settle after {self.MAX_PASSES} passes; "
                "using the last order"
            )

        result: list[TagEntry] = []
        for index, group in enumerate(groups):
            result.extend(group)
            if index != len(groups) - 1:
                result.append(TagEntry.spacer())
        return result

    def _partition(self, entries: Sequence[TagEntry]) -> list[list[TagEntry]]:
        groups: list[list[TagEntry]] = []
        can_group_next = False

        for entry in entries:
            roles = self._tables.roles(entry.tag)
            if not groups or (roles.group_head and can_group_next):
                can_group_next = False
                groups.append([])
            if roles.group_condition:
                can_group_next = True
            groups[-1].append(entry)

        return groups

    def _sorted_groups(
        self,
        entries: Sequence[TagEntry],
        param_order: Sequence[str] | None,
    ) -> list[list[TagEntry]]:
        groups = []
        for group in self._partition(entries):
            ordered = sorted(group, key=lambda entry: self.weight(entry.tag))
            if param_order and len(param_order) > 1:
                ordered = self._apply_param_order(ordered, param_order)
            groups.append(ordered)
        return groups

    def _apply_param_order(
        self, group: list[TagEntry], param_order: Sequence[str]
    ) -> list[TagEntry]:
        """Reorder the hinted `@param` entries within the slots they occupy."""
        positions = {name: index for index, name in enumerate(param_order)}
        slots = [
            index
            for index, entry in enumerate(group)
            if entry.tag == PARAM and entry.name in positions
        ]
        hinted = sorted((group[i] for i in slots), key=lambda entry: positions[entry.name])

        result = list(group)
        for slot, entry in zip(slots, hinted):
            result[slot] = entry
        return result


def separate_returns_from_params(entries: Sequence[TagEntry]) -> list[TagEntry]:
    """Insert a spacer before `@returns` when it directly follows `@param`."""
    result: list[TagEntry] = []
    for index, entry in enumerate(entries):
        if entry.tag == RETURNS and index > 0 and entries[index - 1].tag == PARAM:
            result.append(TagEntry.spacer())
        result.append(entry)
    return result


def separate_tag_groups(entries: Sequence[TagEntry]) -> list[TagEntry]:
    """Insert a spacer between consecutive entries with different tags."""
    result: list[TagEntry] = []
    for index, entry in enumerate(entries):
        previous = entries[index - 1] if index > 0 else None
        if (
            previous is not None
            and previous.tag not in (DESCRIPTION, EXAMPLE)
            and not previous.is_spacer
            and not entry.is_spacer
            and previous.tag != entry.tag
        ):
            result.append(TagEntry.spacer())
        result.append(entry)
    return result
