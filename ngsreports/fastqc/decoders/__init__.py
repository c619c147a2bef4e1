"""FastQC module decoders.

Each of the twelve modules of a ``fastqc_data.txt`` report has a decoder
class registered under its canonical name. A decoder is a pure function
of the module's lines: it checks the header against the required columns,
coerces every cell to its declared type and returns a typed table.

Usage:
    from ngsreports.fastqc.decoders import registry

    decoder = registry.get("Per_base_sequence_quality")()
    decoded = decoder.decode(module_lines)
    decoded.table.column("Mean")
"""

from ngsreports.fastqc.decoders.base import DecodedModule, ModuleDecoder
from ngsreports.fastqc.decoders.registry import DecoderRegistry

# Singleton registry
registry = DecoderRegistry()

# Auto-register built-in decoders
from ngsreports.fastqc.decoders import basic_statistics  # noqa: E402, F401
from ngsreports.fastqc.decoders import quality  # noqa: E402, F401
from ngsreports.fastqc.decoders import content  # noqa: E402, F401
from ngsreports.fastqc.decoders import distribution  # noqa: E402, F401
from ngsreports.fastqc.decoders import sequences  # noqa: E402, F401

__all__ = ["DecodedModule", "ModuleDecoder", "DecoderRegistry", "registry"]
