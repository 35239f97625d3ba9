"""
Property-based tests for CommentOrchestrator.

Uses Hypothesis to verify universal properties across generated comments.
"""

import asyncio
import re

from hypothesis import given, settings
from hypothesis import strategies as st

from jsdocfmt.core.config import FormatterConfig, JsdocOptions
from jsdocfmt.core.orchestrator import CommentOrchestrator
from jsdocfmt.core.type_formatter import normalize_separators
from jsdocfmt.infrastructure.fakes import RegexCommentParser

# =============================================================================
# Custom Strategies for Generating Comments
# =============================================================================

word = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=10)

sentence = st.lists(word, min_size=1, max_size=30).map(" ".join)

identifier = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8)

type_name = st.sampled_from(["string", "number", "boolean", "Object", "Array<string>"])


@st.composite
def doc_comment(draw):
    """Generate a JSDoc comment with a description, params and maybe a return."""
    lines = ["/**", f" * {draw(sentence)}"]

    params = draw(st.lists(st.tuples(type_name, identifier, sentence), max_size=4))
    for type_, name, description in params:
        lines.append(f" * @param {{{type_}}} {name} {description}")

    if draw(st.booleans()):
        lines.append(f" * @returns {{{draw(type_name)}}} {draw(sentence)}")

    lines.append(" */")
    return "\n".join(lines) + "\n"


default_literal = st.sampled_from(["5", "true", "'x'", "[1, 2]", "{a: 1}"])


@st.composite
def tag_line(draw):
    """Generate one tag section, including group heads and default values."""
    kind = draw(
        st.sampled_from(
            ["param", "typedef", "callback", "template", "property", "default", "example"]
        )
    )
    if kind == "param":
        return [f" * @param {{{draw(type_name)}}} {draw(identifier)} {draw(sentence)}"]
    if kind == "typedef":
        return [f" * @typedef {{Object}} {draw(identifier)}"]
    if kind == "callback":
        return [f" * @callback {draw(identifier)} {draw(sentence)}"]
    if kind == "template":
        return [f" * @template {draw(identifier).upper()} {draw(sentence)}"]
    if kind == "property":
        return [f" * @property {{{draw(type_name)}}} {draw(identifier)} {draw(sentence)}"]
    if kind == "default":
        tag = draw(st.sampled_from(["default", "defaultValue"]))
        return [f" * @{tag} {draw(default_literal)} {draw(sentence)}"]
    return [" * @example", f" * {draw(identifier)}(1);"]


@st.composite
def grouped_comment(draw):
    """Generate a JSDoc comment mixing group heads, conditions and defaults."""
    lines = ["/**", f" * {draw(sentence)}"]
    for section in draw(st.lists(tag_line(), min_size=1, max_size=6)):
        lines.extend(section)
    lines.append(" */")
    return "\n".join(lines) + "\n"


option_sets = st.sampled_from(
    [
        {},
        {"vertical_alignment": True},
        {"separate_tag_groups": True},
        {"alias_tags_mode": "strict"},
        {"alias_tags_mode": "strict", "alias_conflict_strategy": "merge"},
    ]
)


@st.composite
def object_type(draw, depth=0):
    """Generate an object literal type with mixed separators."""
    fields = []
    for name in draw(st.lists(identifier, min_size=1, max_size=4, unique=True)):
        if depth < 2 and draw(st.booleans()):
            value = draw(object_type(depth=depth + 1))
        else:
            value = draw(st.sampled_from(["string", "number", "'a;b'", "Map<K, V>"]))
        fields.append(f"{name}: {value}")

    text = fields[0]
    for field in fields[1:]:
        text += draw(st.sampled_from([", ", "; ", ",", ";"])) + field
    return "{" + text + "}"


def _format(text: str, **jsdoc) -> str:
    config = FormatterConfig(jsdoc=JsdocOptions(**jsdoc))
    orchestrator = CommentOrchestrator(config, parser=RegexCommentParser())
    return asyncio.run(orchestrator.format_text(text))


# =============================================================================
# Idempotence
# =============================================================================


class TestIdempotenceProperty:
    """
    For any generated comment: format(format(c)) == format(c)
    """

    @given(comment=doc_comment())
    @settings(max_examples=100, deadline=None)
    def test_formatting_twice_is_stable(self, comment):
        """Formatting an already formatted comment changes nothing."""
        once = _format(comment)

        assert _format(once) == once

    @given(comment=doc_comment())
    @settings(max_examples=100, deadline=None)
    def test_vertical_alignment_is_stable(self, comment):
        """Aligned output is stable as well."""
        once = _format(comment, vertical_alignment=True)

        assert _format(once, vertical_alignment=True) == once

    @given(comment=grouped_comment(), options=option_sets)
    @settings(max_examples=200, deadline=None)
    def test_grouped_tags_are_stable(self, comment, options):
        """Group heads, condition tags and defaults settle in one run."""
        once = _format(comment, **options)

        assert _format(once, **options) == once

    @given(comment=grouped_comment())
    @settings(max_examples=100, deadline=None)
    def test_no_words_lost(self, comment):
        """Every word of the input survives formatting twice."""
        twice = _format(_format(comment))

        # Type names and tag synonyms may be rewritten
        missing = set(re.findall(r"[a-z]+", comment.lower())) - set(
            re.findall(r"[a-z]+", twice.lower())
        )
        assert missing <= {"array", "defaultvalue"}


# =============================================================================
# Layout
# =============================================================================


class TestLayoutProperty:
    """
    For any generated comment: every line fits the print width and no tag
    is lost.
    """

    @given(comment=doc_comment())
    @settings(max_examples=100, deadline=None)
    def test_lines_fit_print_width(self, comment):
        """No output line is wider than the print width."""
        result = _format(comment)

        assert all(len(line) <= 80 for line in result.split("\n"))

    @given(comment=doc_comment())
    @settings(max_examples=100, deadline=None)
    def test_tags_preserved(self, comment):
        """Every @param and @returns tag survives formatting."""
        result = _format(comment)

        assert result.count("@param") == comment.count("@param")
        assert result.count("@returns") == comment.count("@returns")

    @given(comment=doc_comment())
    @settings(max_examples=100, deadline=None)
    def test_comment_delimiters(self, comment):
        """The result is still a single documentation comment."""
        result = _format(comment)

        assert result.startswith("/**")
        assert result.rstrip("\n").endswith("*/")
        assert result.count("/**") == 1


# =============================================================================
# Type separators
# =============================================================================


class TestTypeSeparatorProperty:
    """
    For any object literal type: one separator is used at every depth, and
    normalizing twice equals normalizing once.
    """

    @given(type_=object_type(), separator=st.sampled_from([",", ";"]))
    @settings(max_examples=100)
    def test_single_separator_style(self, type_, separator):
        """Only the chosen separator remains between object fields."""
        other = ";" if separator == "," else ","
        result = normalize_separators(type_, separator)

        stripped = result.replace("'a;b'", "").replace("Map<K, V>", "")
        assert other not in stripped

    @given(type_=object_type(), separator=st.sampled_from([",", ";"]))
    @settings(max_examples=100)
    def test_normalization_is_idempotent(self, type_, separator):
        """Normalizing a normalized type changes nothing."""
        once = normalize_separators(type_, separator)

        assert normalize_separators(once, separator) == once

    @given(type_=object_type(), separator=st.sampled_from([",", ";"]))
    @settings(max_examples=100)
    def test_protected_text_kept(self, type_, separator):
        """String literals and generic arguments are untouched."""
        result = normalize_separators(type_, separator)

        assert result.count("'a;b'") == type_.count("'a;b'")
        assert result.count("Map<K, V>") == type_.count("Map<K, V>")
