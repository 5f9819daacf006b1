"""Nested template resolution with inline diagnostics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import pass_context
from jinja2.runtime import Context

from ..core.errors import (
    CompilationError,
    PartialCompileError,
    PartialError,
    PartialNotFoundError,
    PartialRenderError,
)
from ..core.models import RenderContext, TemplateKey
from .compiler import RENDER_MODEL
from .io import read_text

if TYPE_CHECKING:
    from .engine import TemplateEngine

logger = logging.getLogger(__name__)

RENDER_SCOPE = "__render_scope__"

NOT_FOUND_PREFIX = "Partial file Not Found "
RENDER_ERROR_PREFIX = "Partial Render Error"


@dataclass(frozen=True)
class RenderScope:
    """Per-render state passed down through nested partials."""

    context: RenderContext = field(default_factory=RenderContext)
    depth: int = 0

    def nested(self) -> RenderScope:
        return RenderScope(context=self.context, depth=self.depth + 1)


def resolve_partial_path(name: str, context: RenderContext) -> Path:
    """Resolve a partial name against the context's input folder, if any."""
    if context.input_folder is not None:
        return context.input_folder / name
    return Path(name)


class PartialResolver:
    """Renders partial templates on behalf of an engine.

    Every failure below this point is turned into diagnostic text in the
    generated output. Nothing raised while resolving a partial reaches the
    enclosing template.
    """

    def __init__(self, engine: TemplateEngine) -> None:
        self._engine = engine

    @pass_context
    def template_global(self, ctx: Context, name: str, model: Any = None) -> str:
        """Entry point bound as ``partial(name, model=None)`` inside templates."""
        scope = ctx.get(RENDER_SCOPE) or RenderScope()
        if model is None:
            model = ctx.get(RENDER_MODEL)
        return self.render_partial(name, model, scope)

    def render_partial(self, name: str, model: Any, scope: RenderScope) -> str:
        """Render a partial, returning its text or an inline diagnostic."""
        path = resolve_partial_path(name, scope.context)
        try:
            return self._render(path, model, scope)
        except PartialNotFoundError as e:
            logger.warning(f"Partial not found: {e.path}")
            return f"{NOT_FOUND_PREFIX}{e.path}"
        except PartialError as e:
            logger.warning(f"Partial failed: {e.path}: {e.diagnostic}")
            return f"{RENDER_ERROR_PREFIX}{e.path}\n{e.diagnostic}"

    def _render(self, path: Path, model: Any, scope: RenderScope) -> str:
        if not path.is_file():
            raise PartialNotFoundError(path)

        max_depth = self._engine.settings.max_partial_depth
        if scope.depth >= max_depth:
            raise PartialRenderError(path, f"Partial nesting exceeds {max_depth} levels")

        model_type = type(model)
        key = TemplateKey.for_partial(path, model_type)
        try:
            artifact = self._engine.cache.get_or_compile(
                key, lambda: read_text(path), model_type
            )
        except CompilationError as e:
            raise PartialCompileError(path, e.diagnostic) from e
        except (OSError, UnicodeDecodeError) as e:
            raise PartialCompileError(path, str(e)) from e

        try:
            return self._engine.execute(artifact, model, scope.nested())
        except Exception as e:
            raise PartialRenderError(path, str(e)) from e
