"""Binary strategies: bare zlib streams and MessagePack."""
from __future__ import annotations

import zlib
from typing import Any

import msgpack

from ...domain.errors import EncodeFailure
from ...domain.models import FormatTag, MimeType
from .base import CodecStrategy

RPGMV_SIGNATURE = b"RPGMV"
RPGMV_HEADER_LENGTH = 16


def strip_rpgmv_header(data: bytes) -> bytes:
    """Drop the fixed-size RPG Maker MV container header when the signature matches.

    A buffer of exactly ``RPGMV_HEADER_LENGTH`` bytes is returned untouched.
    """
    if len(data) > RPGMV_HEADER_LENGTH and data[: len(RPGMV_SIGNATURE)] == RPGMV_SIGNATURE:
        return data[RPGMV_HEADER_LENGTH:]
    return data


class ZlibJsonStrategy(CodecStrategy):
    """JSON text deflated with zlib and stored without any text wrapping."""

    tag = FormatTag.ZLIB_JSON
    mime_type = MimeType.BINARY

    def decode(self, data: bytes) -> Any:
        inflated = self.inflate(strip_rpgmv_header(data))
        return self.parse_json(self.decode_utf8(inflated))

    def encode(self, value: Any) -> bytes:
        return zlib.compress(self.dump_json(value).encode("utf-8"))


class MessagePackStrategy(CodecStrategy):
    """MessagePack document holding a map or array."""

    tag = FormatTag.MESSAGEPACK
    mime_type = MimeType.BINARY

    def decode(self, data: bytes) -> Any:
        if not data:
            raise self.inapplicable("empty input")
        if len(data) > self.max_decoded_bytes:
            raise self.inapplicable("payload exceeds size limit")
        try:
            value = msgpack.unpackb(data, raw=False, strict_map_key=False)
        except (ValueError, TypeError, msgpack.UnpackException) as exc:
            raise self.inapplicable(f"invalid MessagePack ({exc})") from exc
        # bin, ext and timestamp values or non-string keys have no JSON form.
        return self.require_json_compatible(self.require_structured(value))

    def encode(self, value: Any) -> bytes:
        self.require_encodable(value)
        try:
            return msgpack.packb(value, use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as exc:
            raise EncodeFailure(self.tag, str(exc), exc) from exc
