"""
Tests for DescriptionWrapper.
"""

from jsdocfmt.core.config import JsdocOptions
from jsdocfmt.core.description_wrapper import DescriptionWrapper


class TestParagraphs:
    """Paragraph re-wrapping."""

    def setup_method(self):
        self.wrapper = DescriptionWrapper(JsdocOptions())

    def test_greedy_fill(self):
        """Words are packed up to the width."""
        assert self.wrapper.wrap("param", "the value to use", width=12).text == "The value to\nuse"

    def test_first_line_offset_and_indent(self):
        """The first line is shortened by the offset, later lines are indented."""
        result = self.wrapper.wrap(
            "param", "alpha beta gamma delta", width=20, first_line_offset=10, indent="  "
        )

        assert result.text == "Alpha beta\n  gamma delta"
        assert result.end_column == len("  gamma delta")

    def test_single_line_end_column(self):
        """A single line ends after the offset plus its length."""
        result = self.wrapper.wrap("param", "short", width=40, first_line_offset=10)

        assert result.end_column == 15

    def test_existing_line_breaks_are_reflowed(self):
        """Lines of one paragraph are joined before wrapping."""
        assert self.wrapper.wrap("description", "one\ntwo\nthree", width=80).text == "One two three"

    def test_continuation_indent_is_removed(self):
        """Continuation lines lose up to the indent width before reflowing."""
        text = "first line\n  second line"

        assert self.wrapper.wrap("param", text, width=80, indent="  ").text == (
            "First line second line"
        )

    def test_paragraphs_separated_by_one_blank_line(self):
        """Several blank lines collapse into one."""
        result = self.wrapper.wrap("description", "first\n\n\nsecond", width=80)

        assert result.text == "First\n\nSecond"

    def test_inline_link_is_not_split(self):
        """`{@link ...}` stays on one line."""
        result = self.wrapper.wrap("description", "see {@link Foo bar} now", width=10)

        assert "{@link Foo bar}" in result.text.split("\n")

    def test_long_word_gets_own_line(self):
        """A word wider than the width is not broken."""
        result = self.wrapper.wrap("description", "a extraordinarily b", width=8)

        assert result.text.split("\n") == ["A", "extraordinarily", "b"]

    def test_description_with_dot(self):
        """A period is added when the text ends with a word character."""
        wrapper = DescriptionWrapper(JsdocOptions(description_with_dot=True))

        assert wrapper.wrap("param", "ends here", width=80).text == "Ends here."
        assert wrapper.wrap("param", "really?", width=80).text == "Really?"

    def test_capitalization_can_be_disabled(self):
        """The first letter is kept when capitalization is off."""
        wrapper = DescriptionWrapper(JsdocOptions(capitalize_description=False))

        assert wrapper.wrap("param", "lower case", width=80).text == "lower case"


class TestMarkdownBlocks:
    """Markdown structures survive wrapping."""

    def setup_method(self):
        self.wrapper = DescriptionWrapper(JsdocOptions())

    def test_fenced_code_is_verbatim(self):
        """Fenced code keeps its spacing."""
        text = "intro text\n\n```js\nconst  a = 1;\n```"

        assert self.wrapper.wrap("description", text, width=80).text == (
            "Intro text\n\n```js\nconst  a = 1;\n```"
        )

    def test_list_items_stay_on_their_lines(self):
        """Each list item starts its own line."""
        text = "Options:\n- first item\n- second item"

        assert self.wrapper.wrap("description", text, width=80).text == text

    def test_list_item_hanging_indent(self):
        """Wrapped list items continue under their text."""
        result = self.wrapper.wrap("description", "- alpha beta gamma", width=12)

        assert result.text == "- alpha beta\n  gamma"

    def test_numbered_dash_list(self):
        """`1-` markers become `1.`."""
        assert self.wrapper.wrap("description", "1- one\n2- two", width=80).text == "1. one\n2. two"

    def test_header_on_own_line(self):
        """Headers are not merged into the following paragraph."""
        assert self.wrapper.wrap("description", "# Title\nbody text", width=80).text == (
            "# Title\nBody text"
        )

    def test_table_is_verbatim(self):
        """Markdown tables are copied as written."""
        text = "Values:\n\n| a | b |\n|---|---|\n| 1 | 2 |"

        assert self.wrapper.wrap("description", text, width=10).text == text

    def test_indented_code_kept(self):
        """Indented code after a blank line is copied as written."""
        text = "Example:\n\n    const a = 1;"

        assert self.wrapper.wrap("description", text, width=80).text == text

    def test_indented_code_as_fence(self):
        """Indented code becomes a fence when fences are preferred."""
        wrapper = DescriptionWrapper(JsdocOptions(prefer_code_fences=True))

        result = wrapper.wrap("description", "Example:\n\n    const a = 1;", width=80)

        assert result.text == "Example:\n\n```\nconst a = 1;\n```"


class TestVerbatimTags:
    """Cases where the text is returned unchanged."""

    def test_no_wrap_tag(self):
        """No-wrap tags are never reflowed."""
        wrapper = DescriptionWrapper(JsdocOptions())

        assert wrapper.wrap("license", "MIT  licensed text", width=5).text == "MIT  licensed text"

    def test_formatting_disabled(self):
        """Nothing is reflowed when description formatting is off."""
        wrapper = DescriptionWrapper(JsdocOptions(format_descriptions=False))

        assert wrapper.wrap("param", "one\ntwo", width=3).text == "one\ntwo"
