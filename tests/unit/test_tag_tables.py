"""
Tests for the tag classification tables.
"""

import pytest

from jsdocfmt.core.tag_tables import (
    TagTables,
    default_tag_tables,
    is_default_tag,
)


class TestTagRoles:
    """Capability records of logical tags."""

    def setup_method(self):
        self.tables = default_tag_tables()

    def test_param_is_alignable_condition_with_name(self):
        """@param is aligned, arms grouping and takes a name."""
        roles = self.tables.roles("param")

        assert roles.alignable
        assert roles.group_condition
        assert not roles.nameless
        assert not roles.group_head

    def test_returns_is_nameless_but_typed(self):
        """@returns takes a type but never a name."""
        roles = self.tables.roles("returns")

        assert roles.nameless
        assert not roles.typeless

    def test_typedef_and_callback_start_groups(self):
        """@typedef and @callback are the only group heads."""
        assert self.tables.roles("typedef").group_head
        assert self.tables.roles("callback").group_head
        assert not self.tables.roles("param").group_head

    def test_no_wrap_tags(self):
        """License-like tags are never re-wrapped."""
        assert self.tables.roles("license").no_wrap
        assert self.tables.roles("borrows").no_wrap
        assert not self.tables.roles("description").no_wrap

    def test_unknown_tag_has_no_roles(self):
        """An unknown tag gets an all-false record."""
        roles = self.tables.roles("customThing")

        assert not any(
            [
                roles.alignable,
                roles.nameless,
                roles.typeless,
                roles.no_wrap,
                roles.description_required,
                roles.group_head,
                roles.group_condition,
            ]
        )


class TestTagWeights:
    """Ordering weights."""

    def setup_method(self):
        self.tables = default_tag_tables()

    def test_description_sorts_first_without_title(self):
        """The untitled description always comes first."""
        assert self.tables.weight("description") == -1

    def test_description_uses_table_weight_with_title(self):
        """A titled description takes its place in the order table."""
        assert self.tables.weight("description", description_tag=True) == 17

    def test_unknown_tag_uses_other_weight(self):
        """Unknown tags sort where "other" sits."""
        assert self.tables.weight("customThing") == self.tables.order["other"]
        assert self.tables.weight("param") < self.tables.weight("customThing")
        assert self.tables.weight("customThing") < self.tables.weight("see")

    def test_overrides_take_precedence(self):
        """A configured weight replaces the table weight."""
        assert self.tables.weight("param", {"param": 1}) == 1
        assert self.tables.weight("returns", {"param": 1}) == 42

    def test_param_before_returns_before_throws(self):
        """Function tags follow the conventional order."""
        weights = [self.tables.weight(tag) for tag in ("param", "yields", "returns", "throws")]

        assert weights == sorted(weights)


class TestTagLookups:
    """Known-tag and spelling lookups."""

    def setup_method(self):
        self.tables = default_tag_tables()

    def test_is_known(self):
        """Only table tags other than the "other" slot are known."""
        assert self.tables.is_known("param")
        assert self.tables.is_known("privateRemarks")
        assert not self.tables.is_known("other")
        assert not self.tables.is_known("customThing")

    def test_canonical_case(self):
        """Tags are matched case-insensitively against the table."""
        assert self.tables.canonical_case("PARAM") == "param"
        assert self.tables.canonical_case("typeparam") == "typeParam"
        assert self.tables.canonical_case("defaultvalue") == "defaultValue"
        assert self.tables.canonical_case("nope") is None

    def test_is_default_tag(self):
        """Both default spellings are recognized in any case."""
        assert is_default_tag("default")
        assert is_default_tag("DefaultValue")
        assert not is_default_tag("defaults")


class TestTableIsolation:
    """Tables are immutable and replaceable."""

    def test_default_tables_are_shared(self):
        """The process-wide tables are created once."""
        assert default_tag_tables() is default_tag_tables()

    def test_order_is_read_only(self):
        """The shared order table cannot be modified."""
        with pytest.raises(TypeError):
            default_tag_tables().order["param"] = 0

    def test_custom_tables(self):
        """Custom tables can redefine roles without touching the defaults."""
        tables = TagTables(group_head=frozenset({"module"}))

        assert tables.roles("module").group_head
        assert not tables.roles("typedef").group_head
        assert default_tag_tables().roles("typedef").group_head
