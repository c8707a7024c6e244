"""Base class and shared helpers for codec strategies."""
from __future__ import annotations

import json
import zlib
from abc import ABC, abstractmethod
from typing import Any, Optional

from ...domain.configuration import DEFAULT_MAX_DECODED_BYTES
from ...domain.errors import EncodeFailure, StrategyInapplicable
from ...domain.models import FormatTag


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


class CodecStrategy(ABC):
    """Paired decode/encode for one byte representation of a save.

    Subclasses set ``tag`` and ``mime_type``. Strategies flagged with
    ``requires_text`` are skipped by the probe when the input is not UTF-8.
    """

    tag: FormatTag
    mime_type: str
    requires_text: bool = False

    def __init__(
        self,
        max_decoded_bytes: int = DEFAULT_MAX_DECODED_BYTES,
        json_indent: Optional[int] = None,
    ) -> None:
        self.max_decoded_bytes = max_decoded_bytes
        self.json_indent = json_indent

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """
        Decode raw save bytes into a structured value.

        Args:
            data: Raw file contents

        Returns:
            Decoded dict or list

        Raises:
            StrategyInapplicable: If the bytes are not in this representation
        """

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """
        Encode a structured value into this representation.

        Raises:
            EncodeFailure: If the value cannot be serialised
        """

    # helpers shared by the concrete strategies

    def inapplicable(self, reason: str) -> StrategyInapplicable:
        return StrategyInapplicable(self.tag, reason)

    def as_text(self, data: bytes) -> str:
        try:
            return data.decode("utf-8", "surrogatepass")
        except UnicodeDecodeError as exc:
            raise self.inapplicable(f"not UTF-8 text ({exc.reason})") from exc

    def parse_json(self, text: str) -> Any:
        if len(text) > self.max_decoded_bytes:
            raise self.inapplicable("decoded text exceeds size limit")
        try:
            value = json.loads(text, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise self.inapplicable(f"invalid JSON ({exc})") from exc
        return self.require_structured(value)

    def require_structured(self, value: Any) -> Any:
        if not isinstance(value, (dict, list)):
            raise self.inapplicable(f"decoded {type(value).__name__}, expected object or array")
        return value

    def require_json_compatible(self, value: Any) -> Any:
        """Reject containers holding anything JSON cannot represent."""
        pending = [value]
        while pending:
            item = pending.pop()
            if isinstance(item, dict):
                for key, child in item.items():
                    if not isinstance(key, str):
                        raise self.inapplicable(f"map key of type {type(key).__name__} is not a string")
                    pending.append(child)
            elif isinstance(item, list):
                pending.extend(item)
            elif item is not None and not isinstance(item, (str, int, float, bool)):
                raise self.inapplicable(f"{type(item).__name__} value is not JSON-compatible")
        return value

    def require_encodable(self, value: Any) -> Any:
        if not isinstance(value, (dict, list)):
            raise EncodeFailure(self.tag, f"expected object or array, got {type(value).__name__}")
        return value

    def dump_json(self, value: Any, ensure_ascii: bool = False, indent: Optional[int] = None) -> str:
        self.require_encodable(value)
        separators = (",", ": ") if indent is not None else (",", ":")
        try:
            return json.dumps(
                value,
                ensure_ascii=ensure_ascii,
                allow_nan=False,
                indent=indent,
                separators=separators,
            )
        except (TypeError, ValueError, RecursionError) as exc:
            raise EncodeFailure(self.tag, str(exc), exc) from exc

    def inflate(self, data: bytes) -> bytes:
        """Inflate a zlib stream, refusing output larger than the size cap."""
        decompressor = zlib.decompressobj()
        try:
            output = decompressor.decompress(data, self.max_decoded_bytes + 1)
        except zlib.error as exc:
            raise self.inapplicable(f"inflate failed ({exc})") from exc
        if len(output) > self.max_decoded_bytes:
            raise self.inapplicable("inflated payload exceeds size limit")
        if not decompressor.eof:
            raise self.inapplicable("truncated zlib stream")
        return output

    def decode_utf8(self, data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self.inapplicable(f"payload is not UTF-8 ({exc.reason})") from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tag={self.tag.value})"
