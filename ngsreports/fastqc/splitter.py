"""Split the lines of a ``fastqc_data.txt`` report into named modules."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ngsreports.fastqc.errors import MalformedReport, MissingModule
from ngsreports.fastqc.models import REQUIRED_MODULES

logger = logging.getLogger(__name__)

MODULE_START = ">>"
MODULE_END = ">>END_MODULE"


class SplitReport(BaseModel):
    """Version line plus the body lines of every module, keyed by name."""

    model_config = ConfigDict(frozen=True)

    version: str = Field(..., description="FastQC version line")
    sections: tuple[tuple[str, tuple[str, ...]], ...] = Field(
        default=(),
        description="(module name, lines following its start marker) in report order",
    )

    @property
    def modules(self) -> Mapping[str, tuple[str, ...]]:
        """Read-only view of the module bodies, keyed by name."""
        return MappingProxyType(dict(self.sections))

    def module_names(self) -> list[str]:
        return [name for name, _ in self.sections]


def module_name(marker: str) -> str:
    """Turn ``>>Per base sequence quality\\tpass`` into ``Per_base_sequence_quality``."""
    name = marker[len(MODULE_START):].split("\t", 1)[0]
    return name.strip().replace(" ", "_")


def clean_version(line: str) -> str:
    """Normalize the first report line (``##FastQC\\t0.11.9`` -> ``FastQC 0.11.9``)."""
    fields = [f.strip() for f in line.lstrip("#").split("\t")]
    return " ".join(f for f in fields if f)


def split_modules(lines: Iterable[str]) -> SplitReport:
    """Partition report lines into modules and check the required set.

    Raises:
        MalformedReport: the input is empty or a module occurs twice.
        MissingModule: any of the twelve required modules is absent.
    """
    body = [line.rstrip("\r\n") for line in lines]
    body = [line for line in body if line.strip() and not line.startswith(MODULE_END)]
    if not body or body[0].startswith(MODULE_START):
        raise MalformedReport("Report does not start with a version line")

    version = clean_version(body[0])
    modules: dict[str, list[str]] = {}
    current: list[str] | None = None

    for line in body[1:]:
        if line.startswith(MODULE_START):
            name = module_name(line)
            if name in modules:
                raise MalformedReport(f"Module {name} appears more than once")
            current = modules[name] = []
        elif current is not None:
            current.append(line)

    missing = [name for name in REQUIRED_MODULES if name not in modules]
    if missing:
        raise MissingModule(missing)

    extra = [name for name in modules if name not in REQUIRED_MODULES]
    if extra:
        logger.debug("Ignoring unknown module(s): %s", ", ".join(extra))

    return SplitReport(
        version=version,
        sections=tuple((name, tuple(section)) for name, section in modules.items()),
    )
