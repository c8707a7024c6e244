"""LZ-String strategies used by browser-based RPG engines."""
from __future__ import annotations

from typing import Any, Optional

from lzstring import LZString

from ...domain.models import FormatTag, MimeType
from .base import CodecStrategy

# Malformed LZ input surfaces as lookup or conversion errors deep inside lzstring.
_LZ_ERRORS = (KeyError, IndexError, TypeError, ValueError, OverflowError)


class LzBase64JsonStrategy(CodecStrategy):
    """JSON compressed with LZ-String's base64 alphabet."""

    tag = FormatTag.LZ_BASE64_JSON
    mime_type = MimeType.TEXT
    requires_text = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._lz = LZString()

    def _decompress(self, text: str) -> Optional[str]:
        return self._lz.decompressFromBase64(text.strip())

    def _compress(self, text: str) -> str:
        return self._lz.compressToBase64(text)

    def decode(self, data: bytes) -> Any:
        text = self.as_text(data)
        if not text.strip():
            raise self.inapplicable("empty input")
        try:
            decompressed = self._decompress(text)
        except _LZ_ERRORS as exc:
            raise self.inapplicable(f"LZ decompression failed ({exc!r})") from exc
        if not decompressed:
            raise self.inapplicable("LZ decompression produced no output")
        return self.parse_json(decompressed)

    def encode(self, value: Any) -> bytes:
        # ASCII-only JSON keeps every code unit inside the 16-bit range LZ-String handles.
        payload = self.dump_json(value, ensure_ascii=True)
        return self._compress(payload).encode("utf-8", "surrogatepass")


class LzRawJsonStrategy(LzBase64JsonStrategy):
    """JSON compressed with LZ-String's raw 16-bit variant."""

    tag = FormatTag.LZ_RAW_JSON
    mime_type = MimeType.TEXT

    def _decompress(self, text: str) -> Optional[str]:
        return self._lz.decompress(text)

    def _compress(self, text: str) -> str:
        return self._lz.compress(text)
