"""Error taxonomy for template compilation, rendering and output."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class TemplateGenError(Exception):
    """Base class for all tmplgen errors."""


class DescriptorError(TemplateGenError):
    """Raised when a template or one of its include files cannot be read."""


class CompilationError(TemplateGenError):
    """Raised when template source fails to compile. Never cached."""

    def __init__(self, key: Any, diagnostic: str) -> None:
        self.key = key
        self.diagnostic = diagnostic
        super().__init__(f"Failed to compile {key}: {diagnostic}")


class RenderError(TemplateGenError):
    """Raised when a compiled main template fails while executing."""


class FormatArgumentError(TemplateGenError, ValueError):
    """Raised when a format string has placeholders its arguments cannot fill."""

    def __init__(self, format_string: str) -> None:
        self.format_string = format_string
        super().__init__(f"params string input not enough : [ {format_string} ]")


class PartialError(TemplateGenError):
    """Base for partial failures. Contained by the partial resolver."""

    def __init__(self, path: Path | str, diagnostic: str = "") -> None:
        self.path = str(path)
        self.diagnostic = diagnostic
        super().__init__(f"{self.path}: {diagnostic}" if diagnostic else self.path)


class PartialNotFoundError(PartialError):
    pass


class PartialCompileError(PartialError):
    pass


class PartialRenderError(PartialError):
    pass


class OutputWriteError(TemplateGenError):
    """Raised when rendered output cannot be written to its destination."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Can't write file with path +{self.path}")
