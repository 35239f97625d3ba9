"""
Tests for parameter order extraction.
"""

import pytest

from jsdocfmt.core.signature import extract_param_order


@pytest.mark.parametrize(
    "source,expected",
    [
        ("\nfunction add(a, b) {}", ["a", "b"]),
        ("\nexport async function load(url, options) {}", ["url", "options"]),
        ("\nfunction* gen(first, second) {}", ["first", "second"]),
        ("\nconst f = async (x, y) => x", ["x", "y"]),
        ("\nexport let g = (left, right) => left", ["left", "right"]),
        ("\n  static compute(left, right) {", ["left", "right"]),
        ("\nfunction f(a = 1, b?: number) {}", ["a", "b"]),
        ("\nfunction f(name: string, ...rest: any[]) {}", ["name", "rest"]),
        ("\nfunction f() {}", []),
    ],
)
def test_declaration_shapes(source, expected):
    """Supported declaration shapes yield their parameter names."""
    assert extract_param_order(source) == expected


@pytest.mark.parametrize(
    "source",
    [
        "\nlet a = 5;",
        "\nexport default {};",
        "",
    ],
)
def test_unrecognized_text_yields_none(source):
    """Anything that is not a declaration gives no hint."""
    assert extract_param_order(source) is None
