"""
Alias Resolver - Maps tag spellings onto alias groups and output spellings.
"""

import json
import logging
from typing import Any, Mapping

from jsdocfmt.core.literals import original_tag_spelling
from jsdocfmt.core.models import AliasMode, TagEntry
from jsdocfmt.core.tag_tables import TagTables, default_tag_tables

logger = logging.getLogger(__name__)


def parse_preferred_aliases(value: Mapping[str, str] | str | None) -> dict[str, str]:
    """
    Parse the preferred-alias option.

    Accepts a mapping of group id to spelling, or the same mapping encoded as
    JSON text. Anything unparseable is ignored with a warning.
    """
    if not value:
        return {}
    if isinstance(value, Mapping):
        return {str(k): str(v) for k, v in value.items()}

    try:
        parsed: Any = json.loads(value)
    except (TypeError, ValueError) as e:
        logger.warning(f"Ignoring invalid preferred aliases {value!r}: {e}")
        return {}

    if not isinstance(parsed, dict):
        logger.warning(f"Ignoring preferred aliases that are not an object: {value!r}")
        return {}
    return {str(k): str(v) for k, v in parsed.items()}


class AliasResolver:
    """
    Resolves raw tag spellings against the alias groups of a TagTables.

    Lookups are case-insensitive. A tag outside every group is its own
    identity.
    """

    def __init__(self, tables: TagTables | None = None):
        self._tables = tables or default_tag_tables()
        self._group_by_spelling: dict[str, str] = {}
        for group_id, group in self._tables.alias_groups.items():
            self._group_by_spelling[group.canonical.lower()] = group_id
            for alias in group.aliases:
                self._group_by_spelling[alias.lower()] = group_id

    @property
    def tables(self) -> TagTables:
        return self._tables

    def group_of(self, raw_tag: str) -> str | None:
        """Return the alias group id of a spelling, if any."""
        return self._group_by_spelling.get(raw_tag.lower())

    def canonical_of(self, group_id: str) -> str:
        """Return the canonical spelling of a group."""
        group = self._tables.alias_groups.get(group_id)
        return group.canonical if group else group_id

    def logical_tag(self, raw_tag: str) -> str:
        """
        Resolve the logical tag used for ordering and role lookups.

        Alias-known spellings map to their group canonical, table-known tags
        get their table casing, anything else is returned unchanged.
        """
        group_id = self.group_of(raw_tag)
        if group_id:
            return self.canonical_of(group_id)
        known = self._tables.canonical_case(raw_tag)
        return known or raw_tag

    def render_spelling_for(
        self,
        group_id: str,
        mode: AliasMode,
        preferred: Mapping[str, str] | None = None,
    ) -> str | None:
        """
        Spelling to print for a group under the given mode.

        Returns None in normalize mode, meaning the logical tag is printed.
        Preserve mode is resolved per entry by render_tag_for().
        """
        if mode in (AliasMode.PREFER, AliasMode.STRICT):
            if preferred and preferred.get(group_id):
                return preferred[group_id]
            return self.canonical_of(group_id)
        return None

    def render_tag_for(
        self,
        entry: TagEntry,
        mode: AliasMode,
        preferred: Mapping[str, str] | None = None,
    ) -> str | None:
        """Compute the render override of one entry."""
        if mode == AliasMode.PRESERVE:
            return original_tag_spelling(entry.source) or entry.tag

        group_id = self.group_of(entry.tag)
        if group_id is None:
            return None
        return self.render_spelling_for(group_id, mode, preferred)
