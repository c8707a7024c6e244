"""Save codec pipeline for game save editors.

Detects which nested text/binary encoding an unknown save file uses, decodes
it to a JSON-compatible value, and re-encodes edited values with the same
encoding so the originating game can still load them.
"""

from save_codec.domain.configuration import CodecConfig
from save_codec.domain.errors import (
    EncodeFailure,
    SaveCodecError,
    StrategyInapplicable,
    UnrecognizedFormat,
)
from save_codec.domain.models import (
    EditSession,
    EncodeOutput,
    FormatTag,
    GameCategory,
    ParseResult,
    RawInput,
)
from save_codec.application.classifier import ContainerClassifier
from save_codec.application.codec_service import SaveCodecService
from save_codec.application.encoder import RoundTripEncoder
from save_codec.application.probe import FormatProbe

__version__ = "0.1.0"

__all__ = [
    "CodecConfig",
    "ContainerClassifier",
    "EditSession",
    "EncodeFailure",
    "EncodeOutput",
    "FormatProbe",
    "FormatTag",
    "GameCategory",
    "ParseResult",
    "RawInput",
    "RoundTripEncoder",
    "SaveCodecError",
    "SaveCodecService",
    "StrategyInapplicable",
    "UnrecognizedFormat",
]
