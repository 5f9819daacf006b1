"""CLI argument parsers and validators."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml


def parse_template(value: str) -> tuple[Path, Path]:
    """Parse a template argument in format TEMPLATE=OUTPUT."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be TEMPLATE=OUTPUT, got: {value!r}")
    tpl, out = value.split("=", 1)
    return Path(tpl), Path(out)


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def load_model(path: Path | None) -> dict[str, Any]:
    """Load a JSON or YAML model file into a dict."""
    if path is None:
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise typer.BadParameter(f"Cannot read model file {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise typer.BadParameter(f"Invalid model file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(f"Model file {path} must contain a mapping")
    return data
