"""tmplgen - Template-driven source code generator.

Renders Jinja2 templates against arbitrary data models, with cached
compilation, ordered include files and fail-soft partial templates.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .cli import main
from .core.errors import (
    CompilationError,
    FormatArgumentError,
    OutputWriteError,
    RenderError,
    TemplateGenError,
)
from .core.loader import load_descriptor
from .core.models import RenderContext, TemplateDescriptor, TemplateKey
from .core.settings import EngineSettings
from .rendering.engine import TemplateEngine

__all__ = [
    "main",
    "TemplateEngine",
    "EngineSettings",
    "TemplateDescriptor",
    "TemplateKey",
    "RenderContext",
    "load_descriptor",
    "TemplateGenError",
    "CompilationError",
    "RenderError",
    "FormatArgumentError",
    "OutputWriteError",
]
