"""Tests for formatting helpers available inside templates."""
import os

import pytest

from tmplgen.core.errors import FormatArgumentError
from tmplgen.rendering.helpers import FormattingHelpers, format_text, title_case


@pytest.fixture
def helpers():
    return FormattingHelpers(indent="\t", newline="\n")


class TestWriteLine:
    """Test write_line call shapes."""

    def test_indent_count_and_text(self, helpers):
        assert helpers.write_line(2, "x") == "\t\tx\n"

    def test_text_only(self, helpers):
        assert helpers.write_line("x") == "x\n"

    def test_indent_only(self, helpers):
        assert helpers.write_line(3) == "\t\t\t\n"

    def test_format_args(self, helpers):
        assert helpers.write_line("Hi {0}", "World") == "Hi World\n"

    def test_indent_with_format_args(self, helpers):
        assert helpers.write_line(1, "{0} = {1};", "x", 42) == "\tx = 42;\n"

    def test_missing_argument_names_format_string(self, helpers):
        with pytest.raises(FormatArgumentError) as exc_info:
            helpers.write_line("Hi {0}")
        assert exc_info.value.format_string == "Hi {0}"
        assert "Hi {0}" in str(exc_info.value)

    def test_too_few_arguments(self, helpers):
        with pytest.raises(FormatArgumentError):
            helpers.write_line(1, "{0}-{1}", "a")

    def test_stray_brace_passes_through(self, helpers):
        """Code lines with braces are written verbatim when no args are given."""
        assert helpers.write_line(1, "class Foo {") == "\tclass Foo {\n"
        assert helpers.write_line("}") == "}\n"

    def test_custom_indent_unit(self):
        helpers = FormattingHelpers(indent="    ", newline="\r\n")
        assert helpers.write_line(2, "x") == "        x\r\n"

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            format_text("{0} {1}", "only-one")


class TestSimpleHelpers:
    """Test newline, tab, escape, raw and title_case."""

    def test_defaults_use_platform_newline(self):
        helpers = FormattingHelpers()
        assert helpers.newline() == os.linesep
        assert helpers.tab() == "\t"

    def test_escape_marker(self, helpers):
        assert helpers.escape() == "{"

    def test_raw(self, helpers):
        assert helpers.raw("{{ not evaluated }}") == "{{ not evaluated }}"

    def test_title_case_lowers_first(self):
        assert title_case("hELLO wORLD") == "Hello World"

    def test_title_case_apostrophe(self):
        assert title_case("don't STOP") == "Don't Stop"

    def test_title_case_word_boundaries(self):
        assert title_case("first_name") == "First_Name"
        assert title_case("1st place") == "1St Place"
        assert title_case("o'neil-smith") == "O'neil-Smith"

    def test_title_case_unicode(self):
        assert title_case("élan vital") == "Élan Vital"

    def test_globals_are_exposed(self, helpers):
        names = helpers.as_globals()
        for name in ("newline", "NL", "tab", "T", "write_line", "wl", "title_case", "escape", "raw"):
            assert name in names


class TestHelpersInTemplates:
    """Test helpers as seen by template authors."""

    def test_write_line_in_template(self, engine, make_descriptor):
        descriptor = make_descriptor("{{ write_line(1, 'int {0};', name) }}")
        assert engine.render_descriptor(descriptor, {"name": "count"}) == "int count;"

    def test_tab_and_newline(self, engine, make_descriptor):
        descriptor = make_descriptor("a{{ NL }}{{ T }}b{{ newline() }}{{ tab() }}c")
        assert engine.render_descriptor(descriptor, {}) == "a\n\tb\n\tc"

    def test_escape_emits_delimiter(self, engine, make_descriptor):
        descriptor = make_descriptor("{{ escape() }}{{ escape() }} x }}")
        assert engine.render_descriptor(descriptor, {}) == "{{ x }}"

    def test_format_error_aborts_main_template(self, engine, make_descriptor):
        descriptor = make_descriptor("{{ wl('Hi {0}') }}")
        with pytest.raises(FormatArgumentError):
            engine.render_descriptor(descriptor, {})
