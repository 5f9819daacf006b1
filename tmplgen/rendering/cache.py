"""Compilation cache with at-most-one compile per key."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Union

from ..core.models import TemplateKey
from .compiler import CompiledArtifact

logger = logging.getLogger(__name__)

SourceText = Union[str, Callable[[], str]]
Compiler = Callable[[TemplateKey, str, type], CompiledArtifact]


class CompilationCache:
    """Maps template keys to compiled artifacts.

    Concurrent requests for the same key block on a per-key lock so only one
    caller compiles. Failed compilations are not stored, so the next request
    for that key compiles again.
    """

    def __init__(self, compiler: Compiler) -> None:
        self._compiler = compiler
        self._artifacts: dict[TemplateKey, CompiledArtifact] = {}
        self._key_locks: dict[TemplateKey, threading.Lock] = {}
        self._guard = threading.Lock()
        self.compile_count = 0

    def __contains__(self, key: object) -> bool:
        return key in self._artifacts

    def __len__(self) -> int:
        return len(self._artifacts)

    def _lock_for(self, key: TemplateKey) -> threading.Lock:
        with self._guard:
            return self._key_locks.setdefault(key, threading.Lock())

    def get_or_compile(
        self, key: TemplateKey, source: SourceText, model_type: type
    ) -> CompiledArtifact:
        """Return the cached artifact for key, compiling it on first use.

        Args:
            key: Template key
            source: Template text, or a callable producing it (not called on a hit)
            model_type: Runtime type of the model

        Returns:
            Compiled artifact

        Raises:
            CompilationError: If compilation fails
        """
        artifact = self._artifacts.get(key)
        if artifact is not None:
            logger.debug(f"Cache hit for {key}")
            return artifact

        with self._lock_for(key):
            artifact = self._artifacts.get(key)
            if artifact is not None:
                logger.debug(f"Cache hit for {key}")
                return artifact

            text = source() if callable(source) else source
            with self._guard:
                self.compile_count += 1
            artifact = self._compiler(key, text, model_type)
            self._artifacts[key] = artifact
            logger.info(f"Compiled {key}")
            return artifact

    def clear(self) -> None:
        """Drop every cached artifact."""
        with self._guard:
            self._artifacts.clear()
            self._key_locks.clear()
        logger.debug("Compilation cache cleared")
