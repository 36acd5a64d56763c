"""Runtime settings for the curlx command line, read from the environment."""

import os
from typing import Literal, Mapping

from pydantic import BaseModel

ENV_PREFIX = "CURLX_"
TRUTHY = {"1", "true", "yes", "on"}
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    output_format: Literal["yaml", "json"] = "yaml"
    log_level: LogLevel = "WARNING"
    strict: bool = False  # warnings make the CLI exit non-zero

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from CURLX_* variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        fmt = env.get(f"{ENV_PREFIX}OUTPUT_FORMAT")
        if fmt:
            values["output_format"] = fmt.lower()
        level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
        if level:
            values["log_level"] = level.upper()
        strict = env.get(f"{ENV_PREFIX}STRICT")
        if strict:
            values["strict"] = strict.lower() in TRUTHY
        return cls(**values)
