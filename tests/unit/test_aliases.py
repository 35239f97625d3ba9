"""
Tests for alias resolution and preferred alias parsing.
"""

from jsdocfmt.core.aliases import AliasResolver, parse_preferred_aliases
from jsdocfmt.core.models import AliasMode, SourceLine, TagEntry


def _entry(tag: str, line: str) -> TagEntry:
    return TagEntry(tag=tag, source=[SourceLine(number=1, source=line)])


class TestParsePreferredAliases:
    """Preferred alias option parsing."""

    def test_mapping_is_copied(self):
        """A mapping is returned as a plain dict."""
        assert parse_preferred_aliases({"returns": "return"}) == {"returns": "return"}

    def test_json_text(self):
        """JSON text is decoded."""
        assert parse_preferred_aliases('{"param": "arg"}') == {"param": "arg"}

    def test_invalid_json_is_ignored(self):
        """Unparseable text yields no preferences."""
        assert parse_preferred_aliases("{not json") == {}

    def test_non_object_json_is_ignored(self):
        """JSON that is not an object yields no preferences."""
        assert parse_preferred_aliases('["return"]') == {}

    def test_empty_values(self):
        """None and empty input yield no preferences."""
        assert parse_preferred_aliases(None) == {}
        assert parse_preferred_aliases("") == {}


class TestAliasResolver:
    """Spelling to group and output spelling resolution."""

    def setup_method(self):
        self.resolver = AliasResolver()

    def test_group_of_is_case_insensitive(self):
        """Aliases and canonicals map to their group in any case."""
        assert self.resolver.group_of("Return") == "returns"
        assert self.resolver.group_of("returns") == "returns"
        assert self.resolver.group_of("ARG") == "param"
        assert self.resolver.group_of("customThing") is None

    def test_augments_group_prefers_extends(self):
        """The augments group prints as @extends."""
        assert self.resolver.canonical_of("augments") == "extends"
        assert self.resolver.logical_tag("augments") == "extends"

    def test_logical_tag(self):
        """Aliases, table casing and unknown tags resolve as expected."""
        assert self.resolver.logical_tag("return") == "returns"
        assert self.resolver.logical_tag("desc") == "description"
        assert self.resolver.logical_tag("typeparam") == "typeParam"
        assert self.resolver.logical_tag("customThing") == "customThing"

    def test_normalize_mode_prints_logical_tag(self):
        """Normalize mode never overrides the printed tag."""
        entry = _entry("returns", " * @return {number} x")

        assert self.resolver.render_tag_for(entry, AliasMode.NORMALIZE) is None

    def test_preserve_mode_recovers_author_spelling(self):
        """Preserve mode prints what the author wrote."""
        entry = _entry("returns", " * @return {number} x")

        assert self.resolver.render_tag_for(entry, AliasMode.PRESERVE) == "return"

    def test_preserve_mode_without_source(self):
        """Preserve mode falls back to the logical tag."""
        entry = TagEntry(tag="returns")

        assert self.resolver.render_tag_for(entry, AliasMode.PRESERVE) == "returns"

    def test_prefer_mode_uses_canonical_by_default(self):
        """Prefer mode prints the group canonical without a preference."""
        entry = _entry("returns", " * @return {number} x")

        assert self.resolver.render_tag_for(entry, AliasMode.PREFER) == "returns"

    def test_prefer_mode_uses_preferred_spelling(self):
        """A configured preference wins in prefer and strict modes."""
        entry = _entry("returns", " * @returns {number} x")
        preferred = {"returns": "return"}

        assert self.resolver.render_tag_for(entry, AliasMode.PREFER, preferred) == "return"
        assert self.resolver.render_tag_for(entry, AliasMode.STRICT, preferred) == "return"

    def test_tags_outside_groups_are_not_overridden(self):
        """Tags without an alias group keep their logical spelling."""
        entry = _entry("since", " * @since 1.0")

        assert self.resolver.render_tag_for(entry, AliasMode.PREFER) is None
