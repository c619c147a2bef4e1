"""Decoder registry for looking up FastQC module decoders by name."""

from __future__ import annotations

import logging
from typing import Type

from ngsreports.fastqc.decoders.base import ModuleDecoder

logger = logging.getLogger(__name__)


class DecoderRegistry:
    """Central registry of module decoders, keyed by canonical module name."""

    def __init__(self) -> None:
        self._decoders: dict[str, Type[ModuleDecoder]] = {}

    def register(self, decoder_cls: Type[ModuleDecoder]) -> Type[ModuleDecoder]:
        """Register a ModuleDecoder subclass.

        Can be used as a decorator::

            @registry.register
            class KmerContent(ModuleDecoder):
                name = "Kmer_Content"
                ...
        """
        name = decoder_cls.name
        if not name:
            raise ValueError(f"Decoder class {decoder_cls.__name__} has no name")
        if name in self._decoders:
            logger.warning("Overwriting decoder '%s' in registry", name)
        self._decoders[name] = decoder_cls
        return decoder_cls

    def get(self, name: str) -> Type[ModuleDecoder] | None:
        """Look up a decoder class by module name."""
        return self._decoders.get(name)

    def has(self, name: str) -> bool:
        return name in self._decoders

    def names(self) -> list[str]:
        """Return sorted list of registered module names."""
        return sorted(self._decoders.keys())

    def info(self) -> list[dict[str, str]]:
        """Return metadata for every registered decoder."""
        out = []
        for name in sorted(self._decoders):
            cls = self._decoders[name]()
            out.append({
                "name": name,
                "description": cls.description,
                "required_columns": ", ".join(cls.required()),
                "may_be_empty": "yes" if cls.allow_empty else "no",
            })
        return out
