"""Domain models for template descriptors, cache keys and render context."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAIN_TEMPLATE = "__main__"


def qualified_name(model_type: type) -> str:
    """Return the fully-qualified name of a model type."""
    return f"{model_type.__module__}.{model_type.__qualname__}"


class TemplateKey(BaseModel):
    """Identifies one compilable unit of text bound to one model type."""

    model_config = ConfigDict(
        frozen=True, protected_namespaces=(), arbitrary_types_allowed=True
    )

    kind: Literal["template", "partial"] = Field(..., description="Unit kind")
    name: str = Field(..., description="Template name or resolved partial path")
    model_type: type[Any] = Field(..., description="Runtime type of the model")

    @classmethod
    def for_template(cls, name: str, model_type: type) -> TemplateKey:
        return cls(kind="template", name=name, model_type=model_type)

    @classmethod
    def for_partial(cls, path: Path | str, model_type: type) -> TemplateKey:
        return cls(kind="partial", name=str(path), model_type=model_type)

    def __str__(self) -> str:
        return f"{self.kind}:{self.name}[{qualified_name(self.model_type)}]"


class RenderContext(BaseModel):
    """Values available while rendering. Unknown fields are rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    input_folder: Path | None = Field(
        default=None, description="Folder used to resolve partial names"
    )


class TemplateDescriptor(BaseModel):
    """A loaded template ready to be compiled and rendered."""

    model_config = ConfigDict(frozen=True)

    source_path: Path | None = Field(default=None, description="Template file path")
    template_text: str = Field(..., description="Raw template body")
    include_files: list[Path] = Field(
        default_factory=list, description="Files prepended to the body, in order"
    )
    include_contents: list[str] = Field(
        default_factory=list, description="Contents of include_files, same order"
    )
    output_path: Path | None = Field(default=None, description="Output file path")
    header: bool = Field(default=False, description="Prepend the generated banner")
    input_folder: Path | None = Field(
        default=None, description="Folder used to resolve partial names"
    )

    @model_validator(mode="after")
    def _check_includes(self) -> TemplateDescriptor:
        if self.include_files and len(self.include_files) != len(self.include_contents):
            raise ValueError(
                f"include_contents has {len(self.include_contents)} item(s) "
                f"for {len(self.include_files)} include file(s)"
            )
        return self

    @property
    def name(self) -> str:
        return str(self.source_path) if self.source_path is not None else MAIN_TEMPLATE

    @property
    def cache_name(self) -> str:
        """Template name qualified by a digest of the include contents and body."""
        digest = hashlib.sha1(
            "\0".join([*self.include_contents, self.template_text]).encode("utf-8")
        ).hexdigest()[:12]
        return f"{self.name}:{digest}"

    def render_context(self) -> RenderContext:
        return RenderContext(input_folder=self.input_folder)
