"""
Type expression helpers.

Light-weight rewriting of JSDoc type expressions: legacy syntax to modern
syntax, and object-literal field separator normalization. String literals
inside types are never modified.
"""

import re
from typing import Callable

_STRING_LITERAL = re.compile(r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\"|`(?:\\.|[^`\\])*`")

_SIMPLE_TYPE = r"[\w.$<>\[\]]+"
_NULLABLE_PREFIX = re.compile(rf"^\?\s*({_SIMPLE_TYPE})$")
_NULLABLE_SUFFIX = re.compile(rf"^({_SIMPLE_TYPE})\s*\?$")
_NON_NULL_PREFIX = re.compile(rf"^!\s*({_SIMPLE_TYPE})$")
_NON_NULL_SUFFIX = re.compile(rf"^({_SIMPLE_TYPE})\s*!$")

_OPENERS = {"{": "}", "(": ")", "[": "]", "<": ">"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


def _map_outside_strings(text: str, fn: Callable[[str], str]) -> str:
    """Apply fn to every segment of text that is not a string literal."""
    out: list[str] = []
    last = 0
    for match in _STRING_LITERAL.finditer(text):
        out.append(fn(text[last:match.start()]))
        out.append(match.group())
        last = match.end()
    out.append(fn(text[last:]))
    return "".join(out)


def split_optional_marker(type_: str) -> tuple[str, bool]:
    """
    Strip the JSDoc optional marker (`number=`) from a type.

    Returns:
        (type without marker, whether the marker was present)
    """
    stripped = type_.rstrip()
    if stripped.endswith("=") and not stripped.endswith("=>"):
        return stripped[:-1].rstrip(), True
    return type_, False


def _modernize_segment(segment: str) -> str:
    # JSDoc generics `Foo.<Bar>`
    segment = segment.replace(".<", "<")
    # JSDoc `*` means any type
    segment = re.sub(r"(?<![\w$])\*(?![\w$])", "any", segment)
    segment = re.sub(r"\s*\|\s*", " | ", segment)
    return re.sub(r"\s+", " ", segment)


def modernize(type_: str) -> str:
    """
    Convert legacy JSDoc type syntax into its modern equivalent.

    Examples:
        >>> modernize("Array.<*>")
        'Array<any>'
        >>> modernize("?number")
        'number | null'
        >>> modernize("string|number")
        'string | number'
    """
    if not type_:
        return type_

    result = _map_outside_strings(type_.strip(), _modernize_segment).strip()

    for pattern, replacement in (
        (_NULLABLE_PREFIX, r"\1 | null"),
        (_NULLABLE_SUFFIX, r"\1 | null"),
        (_NON_NULL_PREFIX, r"\1"),
        (_NON_NULL_SUFFIX, r"\1"),
    ):
        result = pattern.sub(replacement, result)

    return result


def normalize_separators(type_: str, separator: str) -> str:
    """
    Use one field separator throughout the object literals of a type.

    Only separators whose innermost enclosing bracket is `{` are rewritten,
    so commas of generics, tuples and parameter lists stay as they are.
    Each rewritten separator is followed by exactly one space; a trailing
    separator before `}` is dropped.

    Args:
        type_: Type expression text
        separator: ';' or ','

    Examples:
        >>> normalize_separators("{a:'x', b:{c:'d'; e:'f'}}", ";")
        "{a:'x'; b:{c:'d'; e:'f'}}"
    """
    out: list[str] = []
    stack: list[str] = []
    i = 0
    length = len(type_)

    while i < length:
        char = type_[i]

        if char in "'\"`":
            match = _STRING_LITERAL.match(type_, i)
            if match:
                out.append(match.group())
                i = match.end()
                continue

        if char in _OPENERS:
            # `=>` is an arrow, not a closing generic
            stack.append(char)
        elif char in _CLOSERS and not (char == ">" and i > 0 and type_[i - 1] == "="):
            if stack and stack[-1] == _CLOSERS[char]:
                stack.pop()
        elif char in ",;" and stack and stack[-1] == "{":
            j = i + 1
            while j < length and type_[j] in " \t\n":
                j += 1
            if j >= length or type_[j] == "}":
                i += 1
                continue
            out.append(f"{separator} ")
            i = j
            continue

        out.append(char)
        i += 1

    return "".join(out)
