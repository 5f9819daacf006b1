from __future__ import annotations

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TMPLGEN_", case_sensitive=False)

    indent: str = "\t"
    newline: str = os.linesep
    max_partial_depth: int = Field(default=16, ge=1)
    strict_undefined: bool = True
    file_mode: int = 0o644
