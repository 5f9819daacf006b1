"""Template compilation against a model type."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError, Undefined
from pydantic import BaseModel

from ..core.errors import CompilationError
from ..core.models import TemplateKey
from ..core.settings import EngineSettings

logger = logging.getLogger(__name__)

ModelBinder = Callable[[Any], dict[str, Any]]

RENDER_MODEL = "__render_model__"


def build_environment(settings: EngineSettings, helpers: Mapping[str, Any]) -> Environment:
    """Create the Jinja2 environment shared by every template of an engine.

    Args:
        settings: Engine settings
        helpers: Globals visible to every template

    Returns:
        Configured Jinja2 environment
    """
    env = Environment(
        undefined=StrictUndefined if settings.strict_undefined else Undefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.globals.update(helpers)
    return env


def _bind_mapping(model: Mapping[str, Any]) -> dict[str, Any]:
    return dict(model)


def _bind_pydantic(model: BaseModel) -> dict[str, Any]:
    return {name: getattr(model, name) for name in type(model).model_fields}


def _bind_dataclass(model: Any) -> dict[str, Any]:
    return {f.name: getattr(model, f.name) for f in dataclasses.fields(model)}


def _bind_attributes(model: Any) -> dict[str, Any]:
    attrs = getattr(model, "__dict__", {})
    return {k: v for k, v in attrs.items() if not k.startswith("_")}


def select_binder(model_type: type) -> ModelBinder:
    """Choose how a model of the given type exposes its values to templates."""
    if issubclass(model_type, Mapping):
        return _bind_mapping
    if issubclass(model_type, BaseModel):
        return _bind_pydantic
    if dataclasses.is_dataclass(model_type):
        return _bind_dataclass
    return _bind_attributes


@dataclass(frozen=True)
class CompiledArtifact:
    """A compiled template bound to exactly one key and model type."""

    key: TemplateKey
    model_type: type
    template: Template
    binder: ModelBinder

    def variables(self, model: Any) -> dict[str, Any]:
        """Build top-level template variables for a model. The model is not mutated.

        The whole model is visible as ``model`` unless the model has its own
        ``model`` value. It is always stored under RENDER_MODEL.
        """
        values = self.binder(model)
        values.setdefault("model", model)
        values[RENDER_MODEL] = model
        return values


def _diagnostic(error: TemplateSyntaxError) -> str:
    return f"line {error.lineno}: {error.message}"


def compile_template(
    env: Environment, key: TemplateKey, source: str, model_type: type
) -> CompiledArtifact:
    """Compile template source for a model type.

    Args:
        env: Engine Jinja2 environment
        key: Cache key for the unit being compiled
        source: Full template text (includes already prepended)
        model_type: Runtime type of the model the template renders

    Returns:
        Compiled artifact

    Raises:
        CompilationError: If the source is not a valid template
    """
    logger.debug(f"Compiling {key}")
    try:
        template = env.from_string(source)
    except TemplateSyntaxError as e:
        raise CompilationError(key, _diagnostic(e)) from e

    return CompiledArtifact(
        key=key,
        model_type=model_type,
        template=template,
        binder=select_binder(model_type),
    )
