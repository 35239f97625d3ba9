"""
Literal extraction helpers.

Heuristic, regex-based pure functions over single comment source lines.
Kept isolated so their accepted grammar stays a fixed, testable contract.

Default literal grammar (`@default` / `@defaultValue`), first match wins:
    [ ... ]  { ... }  ( ... )  ' ... '  " ... "  ` ... `
    (each greedy up to the last closer on the line), or a bare word
    (any run of non-space characters). An optional description may follow
    after whitespace; a trailing `*/` is never part of it.
"""

import re
from typing import Iterable

from jsdocfmt.core.models import SourceLine

_DEFAULT_LITERAL = re.compile(
    r"@default(?:value)?[ \t]+"
    r"(\[.*\]|\{.*\}|\(.*\)|'.*'|\".*\"|`.*`|[^\s*]\S*)"
    r"(?:[ \t]+((?:(?!\*/).)+))?",
    re.IGNORECASE,
)

_TAG_SPELLING = re.compile(r"@([A-Za-z]+)")

# A note previously injected by add_default_note()
DEFAULT_NOTE_PATTERN = re.compile(r"(?:\s*Default\s+is\s+`.*?`\.?)+")


def extract_default_literal(line: str) -> tuple[str, str] | None:
    """
    Split a `@default` source line into its literal value and trailing prose.

    Args:
        line: One raw comment line containing the tag

    Returns:
        (value, description) or None when no literal follows the tag

    Examples:
        >>> extract_default_literal(" * @default {a: 1} The default")
        ('{a: 1}', 'The default')
        >>> extract_default_literal(" * @defaultValue 'x'")
        ("'x'", '')
    """
    match = _DEFAULT_LITERAL.search(line)
    if not match:
        return None
    value = match.group(1).strip()
    if value.endswith("*/"):
        value = value[:-2].rstrip()
    if not value:
        return None
    description = (match.group(2) or "").strip()
    return value, description


def original_tag_spelling(lines: Iterable[SourceLine]) -> str | None:
    """Recover the tag spelling the author wrote."""
    for line in lines:
        match = _TAG_SPELLING.search(line.source)
        if match:
            return match.group(1)
    return None


def add_default_note(description: str, default: str) -> str:
    """
    Append "Default is `value`" to a description, replacing an older note.

    A period is added to the preceding sentence when it has none.
    """
    description = DEFAULT_NOTE_PATTERN.sub("", description)

    if description and not re.search(r"[.\n]$", description):
        description += "."

    description += f" Default is `{default}`"
    return description.strip()
