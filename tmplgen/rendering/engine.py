"""Template rendering engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ..core.errors import RenderError, TemplateGenError
from ..core.models import RenderContext, TemplateDescriptor, TemplateKey
from ..core.settings import EngineSettings
from .cache import CompilationCache
from .compiler import CompiledArtifact, build_environment, compile_template
from .helpers import FormattingHelpers
from .io import write_output
from .partials import RENDER_SCOPE, PartialResolver, RenderScope

logger = logging.getLogger(__name__)

_RULE = "//" + "-" * 78

BANNER_LINES = (
    _RULE,
    "// <auto-generated>",
    "//     This code was generated from a template.",
    "//",
    "//     Manual changes to this file may cause unexpected behavior in your application.",
    "//     Manual changes to this file will be overwritten if the code is regenerated.",
    "// </auto-generated>",
    _RULE,
)


def banner(newline: str) -> str:
    """Return the generated-file banner, each line terminated by newline."""
    return "".join(line + newline for line in BANNER_LINES)


def assemble_source(descriptor: TemplateDescriptor) -> str:
    """Concatenate include contents, in order, ahead of the template body."""
    return "".join(descriptor.include_contents) + descriptor.template_text


def assemble_output(body: str, header: bool, newline: str) -> str:
    """Trim the rendered body and prepend the banner when requested."""
    text = body.strip()
    return banner(newline) + text if header else text


class TemplateEngine:
    """Compiles and renders templates, owning one compilation cache.

    Create one engine per generation run. Use it as a context manager, or call
    :meth:`clear`, so artifacts do not leak into an unrelated run.

    Example:
        >>> with TemplateEngine() as engine:
        ...     text = engine.render_descriptor(descriptor, {"name": "World"})
    """

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()
        self.helpers = FormattingHelpers(
            indent=self.settings.indent, newline=self.settings.newline
        )
        self.partials = PartialResolver(self)

        template_globals = self.helpers.as_globals()
        template_globals["partial"] = self.partials.template_global
        self.env = build_environment(self.settings, template_globals)
        self.cache = CompilationCache(self._compile)

    def __enter__(self) -> TemplateEngine:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.clear()

    def _compile(self, key: TemplateKey, source: str, model_type: type) -> CompiledArtifact:
        return compile_template(self.env, key, source, model_type)

    def clear(self) -> None:
        """Drop every compiled artifact."""
        self.cache.clear()

    def compile(self, key: TemplateKey, source: str, model_type: type) -> CompiledArtifact:
        """Return the artifact for key, compiling source on first use."""
        return self.cache.get_or_compile(key, source, model_type)

    def execute(self, artifact: CompiledArtifact, model: Any, scope: RenderScope) -> str:
        """Run an artifact and return its raw, untrimmed output."""
        if type(model) is not artifact.model_type:
            raise RenderError(
                f"{artifact.key} was compiled for {artifact.model_type.__name__}, "
                f"got {type(model).__name__}"
            )
        variables = artifact.variables(model)
        variables[RENDER_SCOPE] = scope
        return artifact.template.render(variables)

    def render(
        self,
        artifact: CompiledArtifact,
        model: Any,
        context: RenderContext | None = None,
        header: bool = False,
    ) -> str:
        """Render an artifact, trim it and optionally prepend the banner.

        Args:
            artifact: Compiled template
            model: Model instance of the artifact's bound type
            context: Render context (input folder for partials)
            header: Prepend the generated-file banner

        Returns:
            Final text

        Raises:
            RenderError: If the template fails while executing
            FormatArgumentError: If a write_line call lacks format arguments
        """
        scope = RenderScope(context=context or RenderContext())
        try:
            body = self.execute(artifact, model, scope)
        except TemplateGenError:
            raise
        except Exception as e:
            raise RenderError(f"Failed to render {artifact.key}: {e}") from e
        return assemble_output(body, header, self.settings.newline)

    def render_descriptor(self, descriptor: TemplateDescriptor, model: Any) -> str:
        """Compile (if needed) and render a descriptor's template against model."""
        model_type = type(model)
        key = TemplateKey.for_template(descriptor.cache_name, model_type)
        logger.debug(f"Rendering template: {descriptor.name}")
        artifact = self.cache.get_or_compile(
            key, lambda: assemble_source(descriptor), model_type
        )
        return self.render(
            artifact, model, descriptor.render_context(), header=descriptor.header
        )

    def generate(self, descriptor: TemplateDescriptor, model: Any) -> str:
        """Render a descriptor and write the result to its output path, if any.

        Raises:
            CompilationError: If the main template does not compile
            RenderError: If the main template fails while executing
            OutputWriteError: If the output file cannot be written
        """
        text = self.render_descriptor(descriptor, model)
        if descriptor.output_path is not None:
            write_output(Path(descriptor.output_path), text, mode=self.settings.file_mode)
            logger.info(f"Rendered {descriptor.name} → {descriptor.output_path}")
        return text
