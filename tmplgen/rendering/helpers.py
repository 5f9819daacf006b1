"""Formatting helpers exposed to template authors as Jinja2 globals."""

from __future__ import annotations

import os
import re
from string import Formatter
from typing import Any

from ..core.errors import FormatArgumentError

ESCAPE_MARKER = "{"

# A word starts at a letter not preceded by a letter or apostrophe.
_WORD_START = re.compile(r"(?<!['’])(?<![^\W\d_])([^\W\d_])")


def _has_fields(text: str) -> bool:
    """Return True when text contains str.format replacement fields."""
    try:
        return any(field is not None for _, field, _, _ in Formatter().parse(text))
    except ValueError:
        # Stray braces: not a format string.
        return False


def format_text(format_string: str, *args: Any) -> str:
    """Apply positional substitution, failing loudly on missing arguments.

    Args:
        format_string: Text with ``{0}``-style placeholders
        *args: Positional substitution values

    Returns:
        Formatted text

    Raises:
        FormatArgumentError: If args do not satisfy every placeholder
    """
    if not args:
        if _has_fields(format_string):
            raise FormatArgumentError(format_string)
        return format_string
    try:
        return format_string.format(*args)
    except (IndexError, KeyError, ValueError) as e:
        raise FormatArgumentError(format_string) from e


def title_case(text: str) -> str:
    """Lower-case text then capitalise the first letter of each word."""
    return _WORD_START.sub(lambda m: m.group(1).upper(), text.lower())


class FormattingHelpers:
    """Stateless line-writing helpers bound to an indent unit and line terminator."""

    def __init__(self, indent: str = "\t", newline: str = os.linesep) -> None:
        self.indent = indent
        self.newline_str = newline

    def newline(self) -> str:
        return self.newline_str

    def tab(self) -> str:
        return self.indent

    def write_line(self, *args: Any) -> str:
        """Write one line, optionally indented and formatted.

        Accepted call shapes::

            write_line(text)
            write_line(count)
            write_line(count, text)
            write_line(format, *values)
            write_line(count, format, *values)
        """
        count = 0
        if args and isinstance(args[0], int) and not isinstance(args[0], bool):
            count, args = args[0], args[1:]
        if not args:
            return self.indent * count + self.newline_str
        text, values = str(args[0]), args[1:]
        return self.indent * count + format_text(text, *values) + self.newline_str

    @staticmethod
    def escape() -> str:
        return ESCAPE_MARKER

    @staticmethod
    def raw(text: str) -> str:
        return text

    def as_globals(self) -> dict[str, Any]:
        """Return the names under which helpers are visible in templates."""
        return {
            "newline": self.newline,
            "NL": self.newline_str,
            "tab": self.tab,
            "T": self.indent,
            "write_line": self.write_line,
            "wl": self.write_line,
            "title_case": title_case,
            "escape": self.escape,
            "raw": self.raw,
        }
