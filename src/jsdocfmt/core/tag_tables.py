"""
Tag Classification Tables - Static roles, weights and alias groups of JSDoc tags.

Everything here is immutable data. Components receive a TagTables instance
instead of reading module globals, so tests can substitute custom tables.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

ABSTRACT = "abstract"
ASYNC = "async"
AUGMENTS = "augments"
AUTHOR = "author"
BORROWS = "borrows"
CALLBACK = "callback"
CATEGORY = "category"
CLASS = "class"
CONSTANT = "constant"
DEFAULT = "default"
DEFAULT_VALUE = "defaultValue"
DEPRECATED = "deprecated"
DESCRIPTION = "description"
EXAMPLE = "example"
EXTENDS = "extends"
EXTERNAL = "external"
FILE = "file"
FIRES = "fires"
FLOW = "flow"
FUNCTION = "function"
IGNORE = "ignore"
LICENSE = "license"
MEMBER = "member"
MEMBEROF = "memberof"
MODULE = "module"
NAMESPACE = "namespace"
OVERLOAD = "overload"
OVERRIDE = "override"
PARAM = "param"
PRIVATE = "private"
PRIVATE_REMARKS = "privateRemarks"
PROPERTY = "property"
PROVIDES_MODULE = "providesModule"
REMARKS = "remarks"
RETURNS = "returns"
SATISFIES = "satisfies"
SEE = "see"
SINCE = "since"
TEMPLATE = "template"
THROWS = "throws"
TODO = "todo"
TYPE = "type"
TYPE_PARAM = "typeParam"
TYPEDEF = "typedef"
VERSION = "version"
YIELDS = "yields"

OTHER = "other"

DEFAULT_TAGS = frozenset({DEFAULT, DEFAULT_VALUE})


@dataclass(frozen=True)
class AliasGroup:
    """A set of synonymous tag spellings with one canonical form."""

    canonical: str
    aliases: frozenset[str]


@dataclass(frozen=True)
class TagRoles:
    """Capability record of a logical tag."""

    alignable: bool = False
    nameless: bool = False
    typeless: bool = False
    no_wrap: bool = False
    description_required: bool = False
    group_head: bool = False
    group_condition: bool = False


_TAGS_ORDER = {
    REMARKS: 1,
    PRIVATE_REMARKS: 2,
    PROVIDES_MODULE: 3,
    MODULE: 4,
    LICENSE: 5,
    FLOW: 6,
    ASYNC: 7,
    PRIVATE: 8,
    IGNORE: 9,
    MEMBEROF: 10,
    VERSION: 11,
    FILE: 12,
    AUTHOR: 13,
    DEPRECATED: 14,
    SINCE: 15,
    CATEGORY: 16,
    DESCRIPTION: 17,
    EXAMPLE: 18,
    ABSTRACT: 19,
    AUGMENTS: 20,
    CONSTANT: 21,
    DEFAULT: 22,
    DEFAULT_VALUE: 23,
    EXTERNAL: 24,
    OVERLOAD: 25,
    FIRES: 26,
    TEMPLATE: 27,
    TYPE_PARAM: 28,
    FUNCTION: 29,
    NAMESPACE: 30,
    BORROWS: 31,
    CLASS: 32,
    EXTENDS: 33,
    MEMBER: 34,
    TYPEDEF: 35,
    TYPE: 36,
    SATISFIES: 37,
    PROPERTY: 38,
    CALLBACK: 39,
    PARAM: 40,
    YIELDS: 41,
    RETURNS: 42,
    THROWS: 43,
    OTHER: 44,
    SEE: 45,
    TODO: 46,
}

# Official JSDoc synonyms; "augments" prefers "extends" as its canonical spelling
_ALIAS_GROUPS = {
    "abstract": AliasGroup(ABSTRACT, frozenset({"virtual"})),
    "augments": AliasGroup(EXTENDS, frozenset({AUGMENTS})),
    "class": AliasGroup(CLASS, frozenset({"constructor"})),
    "constant": AliasGroup(CONSTANT, frozenset({"const"})),
    "default": AliasGroup(DEFAULT, frozenset({DEFAULT_VALUE})),
    "description": AliasGroup(DESCRIPTION, frozenset({"desc"})),
    "emits": AliasGroup(FIRES, frozenset({"emits"})),
    "external": AliasGroup(EXTERNAL, frozenset({"host"})),
    "file": AliasGroup(FILE, frozenset({"fileoverview", "overview"})),
    "function": AliasGroup(FUNCTION, frozenset({"func", "method"})),
    "member": AliasGroup(MEMBER, frozenset({"var"})),
    "param": AliasGroup(PARAM, frozenset({"arg", "argument", "params"})),
    "property": AliasGroup(PROPERTY, frozenset({"prop"})),
    "returns": AliasGroup(RETURNS, frozenset({"return"})),
    "throws": AliasGroup(THROWS, frozenset({"exception"})),
    "yields": AliasGroup(YIELDS, frozenset({"yield"})),
}

_NON_REPEATABLE_GROUPS = frozenset({"returns", "class", "emits", "augments", "yields"})

# Spellings outside the alias groups that still map onto a known tag
_TAGS_SYNONYMS = {
    "typeparam": TYPE_PARAM,
    "privateremarks": PRIVATE_REMARKS,
    "providesmodule": PROVIDES_MODULE,
    "defaultvalue": DEFAULT,
}

_GROUP_HEAD = frozenset({CALLBACK, TYPEDEF})

_GROUP_CONDITION = frozenset(
    {CALLBACK, TYPEDEF, PARAM, PROPERTY, RETURNS, THROWS, TYPE, YIELDS, TEMPLATE}
)

_VERTICALLY_ALIGNABLE = frozenset(
    {AUTHOR, BORROWS, CALLBACK, PARAM, PROPERTY, RETURNS, TEMPLATE, THROWS, TYPE,
     TYPE_PARAM, TYPEDEF, YIELDS}
)

_TYPELESS = frozenset(
    {ABSTRACT, ASYNC, AUTHOR, BORROWS, CATEGORY, DEPRECATED, DESCRIPTION, EXAMPLE,
     FILE, FLOW, IGNORE, LICENSE, OVERRIDE, PRIVATE, PRIVATE_REMARKS,
     PROVIDES_MODULE, REMARKS, SEE, SINCE, TODO, VERSION}
)

_NAMELESS = frozenset(
    {ABSTRACT, ASYNC, AUTHOR, CATEGORY, DEPRECATED, DESCRIPTION, EXAMPLE, FILE,
     FLOW, IGNORE, LICENSE, OVERLOAD, OVERRIDE, PRIVATE, PRIVATE_REMARKS, REMARKS,
     RETURNS, SATISFIES, SEE, SINCE, THROWS, TODO, TYPE, VERSION, YIELDS}
)

_NO_WRAP = frozenset({BORROWS, CATEGORY, LICENSE, PROVIDES_MODULE, FLOW})

_DESCRIPTION_REQUIRED = frozenset(
    {BORROWS, CATEGORY, DESCRIPTION, EXAMPLE, PRIVATE_REMARKS, REMARKS, SEE, SINCE, TODO}
)


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class TagTables:
    """
    Immutable classification tables for JSDoc tags.

    The role sets are keyed by logical tag. `roles()` is the single lookup the
    normalizer and renderer consult.
    """

    order: Mapping[str, int] = field(default_factory=lambda: _frozen(_TAGS_ORDER))
    alias_groups: Mapping[str, AliasGroup] = field(
        default_factory=lambda: _frozen(_ALIAS_GROUPS)
    )
    non_repeatable_groups: frozenset[str] = _NON_REPEATABLE_GROUPS
    synonyms: Mapping[str, str] = field(default_factory=lambda: _frozen(_TAGS_SYNONYMS))
    group_head: frozenset[str] = _GROUP_HEAD
    group_condition: frozenset[str] = _GROUP_CONDITION
    alignable: frozenset[str] = _VERTICALLY_ALIGNABLE
    typeless: frozenset[str] = _TYPELESS
    nameless: frozenset[str] = _NAMELESS
    no_wrap: frozenset[str] = _NO_WRAP
    description_required: frozenset[str] = _DESCRIPTION_REQUIRED

    def roles(self, tag: str) -> TagRoles:
        """Return the capability record of a logical tag."""
        return TagRoles(
            alignable=tag in self.alignable,
            nameless=tag in self.nameless,
            typeless=tag in self.typeless,
            no_wrap=tag in self.no_wrap,
            description_required=tag in self.description_required,
            group_head=tag in self.group_head,
            group_condition=tag in self.group_condition,
        )

    def is_known(self, tag: str) -> bool:
        """Whether the tag has an entry in the order table."""
        return tag in self.order and tag != OTHER

    def canonical_case(self, tag: str) -> str | None:
        """Return the table spelling of a tag matched case-insensitively."""
        lower = tag.lower()
        for key in self.order:
            if key != OTHER and key.lower() == lower:
                return key
        return self.synonyms.get(lower)

    def weight(
        self,
        tag: str,
        overrides: Mapping[str, int] | None = None,
        description_tag: bool = False,
    ) -> int:
        """
        Ordering weight of a tag; smaller values sort first.

        The description entry always comes first when it is printed without
        an explicit `@description` title.
        """
        if tag == DESCRIPTION and not description_tag:
            return -1
        if overrides and tag in overrides:
            return overrides[tag]
        return self.order.get(tag, self.order[OTHER])


def is_default_tag(tag: str) -> bool:
    """Whether the tag is `@default` or `@defaultValue` (any case)."""
    return tag.lower() in {t.lower() for t in DEFAULT_TAGS}


_default_tables: TagTables | None = None


def default_tag_tables() -> TagTables:
    """Return the process-wide default tables."""
    global _default_tables

    if _default_tables is None:
        _default_tables = TagTables()
    return _default_tables
