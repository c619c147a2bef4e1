"""Runtime configuration for ngsreports.

Settings come from ``~/.ngsreports/config`` (``KEY=VALUE`` lines) and from
``NGSREPORTS_*`` environment variables, the environment taking precedence.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, Field

from ngsreports.fastqc.accessors import DEFAULT_NAME_PATTERN
from ngsreports.fastqc.models import Status

logger = logging.getLogger(__name__)

ENV_PREFIX = "NGSREPORTS_"


class StatusColours(BaseModel):
    """Colours for PASS/WARN/FAIL flags, passed explicitly to display code.

    MAX marks an extreme FAIL.
    """

    PASS: str = Field(default="#00CC00", description="Colour for PASS")
    WARN: str = Field(default="#E6E633", description="Colour for WARN")
    FAIL: str = Field(default="#CC3333", description="Colour for FAIL")
    MAX: str = Field(default="#FFFFFF", description="Colour for an extreme FAIL")

    def colour_for(self, status: Status | str) -> str:
        return getattr(self, Status(status).value)


class Settings(BaseModel):
    """Configuration consumed by the CLI and API layers."""

    concurrency: int = Field(default=4, ge=1, description="Worker threads for collections")
    scan_depth: int = Field(default=10, ge=0, description="Maximum directory scan depth")
    log_level: str = Field(default="WARNING", description="Root logging level")
    name_pattern: str = Field(
        default=DEFAULT_NAME_PATTERN, description="Regex used to trim file names"
    )
    colours: StatusColours = Field(default_factory=StatusColours)


def get_config_dir() -> Path:
    """Get the global ngsreports config directory."""
    return Path.home() / ".ngsreports"


def read_config_file(path: Path) -> dict[str, str]:
    """Read ``KEY=VALUE`` lines; blank lines and ``#`` comments are skipped."""
    values: dict[str, str] = {}
    if not path.is_file():
        return values
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def load_settings(
    environ: Mapping[str, str] | None = None,
    config_file: Path | None = None,
) -> Settings:
    """Merge the config file and environment into a validated Settings."""
    environ = os.environ if environ is None else environ
    config_file = config_file or get_config_dir() / "config"

    raw = read_config_file(config_file)
    raw.update({k: v for k, v in environ.items() if k.startswith(ENV_PREFIX)})

    data: dict = {}
    colours: dict[str, str] = {}
    for key, value in raw.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()
        if name.startswith("colour_"):
            colours[name[len("colour_"):].upper()] = value
        elif name in Settings.model_fields and name != "colours":
            data[name] = value
        else:
            logger.debug("Ignoring unknown setting %s", key)
    if colours:
        data["colours"] = colours
    return Settings.model_validate(data)
