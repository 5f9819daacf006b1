"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import TemplateGenError
from ..core.loader import load_descriptor
from ..core.settings import EngineSettings
from ..rendering.engine import TemplateEngine
from .parsers import load_model, parse_file_mode, parse_template

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tmplgen",
    help="Generate source files from Jinja2 templates and a data model.",
)


@app.callback()
def callback() -> None:
    """Template-driven source code generator."""


@app.command()
def render(
    templates: Annotated[
        list[str],
        typer.Option(
            "--template",
            "-t",
            help="Render TEMPLATE to OUTPUT (format: TEMPLATE=OUTPUT). Repeatable.",
            metavar="TEMPLATE=OUTPUT",
        ),
    ],
    includes: Annotated[
        list[Path],
        typer.Option(
            "--include",
            "-i",
            help="File prepended to every template, in the order given. Repeatable.",
            metavar="FILE",
        ),
    ] = [],
    model_file: Annotated[
        Optional[Path],
        typer.Option(
            "--model",
            "-m",
            help="JSON or YAML file with the model data.",
            metavar="FILE",
        ),
    ] = None,
    input_folder: Annotated[
        Optional[Path],
        typer.Option(
            "--input-folder",
            help="Folder used to resolve partials (default: each template's folder).",
            metavar="DIR",
        ),
    ] = None,
    header: Annotated[
        bool,
        typer.Option(
            "--header/--no-header",
            help="Prepend the auto-generated banner.",
        ),
    ] = False,
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "0644",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render templates against a model and write the generated files."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting tmplgen")

    pairs = [parse_template(value) for value in templates]
    mode = parse_file_mode(file_mode)
    model = load_model(model_file)
    settings = EngineSettings(file_mode=mode)

    logger.debug(f"Config: {len(pairs)} template(s), {len(includes)} include(s)")

    failed = 0
    with TemplateEngine(settings) as engine:
        for template_path, output_path in pairs:
            try:
                descriptor = load_descriptor(
                    source_path=template_path,
                    include_files=includes,
                    output_path=output_path,
                    header=header,
                    input_folder=input_folder,
                )
                engine.generate(descriptor, model)
            except TemplateGenError as e:
                failed += 1
                logger.error(f"{template_path}: {e}")

    logger.info(f"Rendered {len(pairs) - failed} of {len(pairs)} file(s)")
    if failed:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
