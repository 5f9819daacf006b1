"""Build template descriptors from files on disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .errors import DescriptorError
from .models import TemplateDescriptor

logger = logging.getLogger(__name__)


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DescriptorError(f"Cannot read {what} {path}: {e}") from e


def load_descriptor(
    source_path: Path | None = None,
    template_text: str | None = None,
    include_files: Iterable[Path] = (),
    output_path: Path | None = None,
    header: bool = False,
    input_folder: Path | None = None,
) -> TemplateDescriptor:
    """Load a template descriptor, reading the template and include files.

    Args:
        source_path: Template file path
        template_text: Template body; read from source_path when omitted
        include_files: Files prepended to the body, in order
        output_path: Where the rendered text is written
        header: Prepend the generated-file banner
        input_folder: Folder for partials; defaults to the template's folder

    Returns:
        Immutable descriptor with include contents already read

    Raises:
        DescriptorError: If neither text nor path is given, or a file cannot be read
    """
    if template_text is None:
        if source_path is None:
            raise DescriptorError("Either template_text or source_path is required")
        template_text = _read(source_path, "template")

    includes = list(include_files)
    contents = [_read(path, "include file") for path in includes]

    if input_folder is None and source_path is not None:
        input_folder = source_path.parent

    logger.debug(f"Loaded descriptor for {source_path} with {len(includes)} include(s)")

    return TemplateDescriptor(
        source_path=source_path,
        template_text=template_text,
        include_files=includes,
        include_contents=contents,
        output_path=output_path,
        header=header,
        input_folder=input_folder,
    )
