"""Codec strategies for every supported save representation."""
from typing import Optional, Tuple

from ...domain.configuration import CodecConfig
from .base import CodecStrategy
from .binary_codecs import (
    RPGMV_HEADER_LENGTH,
    RPGMV_SIGNATURE,
    MessagePackStrategy,
    ZlibJsonStrategy,
    strip_rpgmv_header,
)
from .json_codecs import Base64JsonStrategy, Base64ZlibJsonStrategy, PlainJsonStrategy
from .lz_codecs import LzBase64JsonStrategy, LzRawJsonStrategy

# Probing order. Earlier entries win when bytes are valid under several encodings.
STRATEGY_ORDER = (
    PlainJsonStrategy,
    Base64JsonStrategy,
    Base64ZlibJsonStrategy,
    LzBase64JsonStrategy,
    LzRawJsonStrategy,
    ZlibJsonStrategy,
    MessagePackStrategy,
)


def default_strategies(config: Optional[CodecConfig] = None) -> Tuple[CodecStrategy, ...]:
    """
    Build the ordered, immutable strategy chain.

    Args:
        config: Codec configuration (defaults to ``CodecConfig()``)

    Returns:
        Tuple of strategy instances in probing order
    """
    config = config or CodecConfig()
    return tuple(
        strategy_cls(
            max_decoded_bytes=config.max_decoded_bytes,
            json_indent=config.json_indent,
        )
        for strategy_cls in STRATEGY_ORDER
    )


__all__ = [
    "CodecStrategy",
    "PlainJsonStrategy",
    "Base64JsonStrategy",
    "Base64ZlibJsonStrategy",
    "LzBase64JsonStrategy",
    "LzRawJsonStrategy",
    "ZlibJsonStrategy",
    "MessagePackStrategy",
    "RPGMV_SIGNATURE",
    "RPGMV_HEADER_LENGTH",
    "STRATEGY_ORDER",
    "default_strategies",
    "strip_rpgmv_header",
]
