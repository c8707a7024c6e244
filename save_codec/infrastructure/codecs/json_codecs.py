"""Text strategies built on JSON, base64 and zlib."""
from __future__ import annotations

import base64
import binascii
import zlib
from typing import Any

from ...domain.models import FormatTag, MimeType
from .base import CodecStrategy


def _strip_whitespace(text: str) -> str:
    return "".join(text.split())


class PlainJsonStrategy(CodecStrategy):
    """UTF-8 JSON text stored as-is."""

    tag = FormatTag.PLAIN_JSON
    mime_type = MimeType.JSON
    requires_text = True

    def decode(self, data: bytes) -> Any:
        return self.parse_json(self.as_text(data))

    def encode(self, value: Any) -> bytes:
        return self.dump_json(value, indent=self.json_indent).encode("utf-8")


class Base64JsonStrategy(CodecStrategy):
    """JSON text wrapped in base64."""

    tag = FormatTag.BASE64_JSON
    mime_type = MimeType.TEXT
    requires_text = True

    def b64decode(self, data: bytes) -> bytes:
        compact = _strip_whitespace(self.as_text(data))
        if not compact:
            raise self.inapplicable("empty input")
        # Padding is optional in saves written by browser-based engines.
        padded = compact + "=" * (-len(compact) % 4)
        try:
            return base64.b64decode(padded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise self.inapplicable(f"invalid base64 ({exc})") from exc

    def decode(self, data: bytes) -> Any:
        return self.parse_json(self.decode_utf8(self.b64decode(data)))

    def encode(self, value: Any) -> bytes:
        return base64.b64encode(self.dump_json(value).encode("utf-8"))


class Base64ZlibJsonStrategy(Base64JsonStrategy):
    """JSON text deflated with zlib, then wrapped in base64."""

    tag = FormatTag.BASE64_ZLIB_JSON
    mime_type = MimeType.TEXT

    def decode(self, data: bytes) -> Any:
        inflated = self.inflate(self.b64decode(data))
        return self.parse_json(self.decode_utf8(inflated))

    def encode(self, value: Any) -> bytes:
        return base64.b64encode(zlib.compress(self.dump_json(value).encode("utf-8")))
