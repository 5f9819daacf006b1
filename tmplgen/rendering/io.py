"""File I/O for template sources and rendered output."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..core.errors import OutputWriteError

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read a template or include file as UTF-8 text."""
    return path.read_text(encoding="utf-8")


def write_output(path: Path, text: str, mode: int = 0o644) -> Path:
    """Write trimmed output through a temp file, replacing any existing file.

    Line endings are written exactly as rendered.

    Args:
        path: Destination file path
        text: Rendered text
        mode: File permissions (octal)

    Returns:
        The written path

    Raises:
        OutputWriteError: If the file cannot be written
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text.strip())
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    except OSError as e:
        raise OutputWriteError(path) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)

    logger.debug(f"Wrote {path}")
    return path
