"""Domain models for the save codec pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


SESSION_VERSION = "1.0.0"


class FormatTag(str, Enum):
    """Identifies the codec strategy that decoded a save file."""

    PLAIN_JSON = "PLAIN_JSON"
    BASE64_JSON = "BASE64_JSON"
    BASE64_ZLIB_JSON = "BASE64_ZLIB_JSON"
    ZLIB_JSON = "ZLIB_JSON"
    LZ_BASE64_JSON = "LZ_BASE64_JSON"
    LZ_RAW_JSON = "LZ_RAW_JSON"
    MESSAGEPACK = "MESSAGEPACK"


class GameCategory(str, Enum):
    """Coarse content category derived from a file extension."""

    RPG = "RPG"
    VISUAL_NOVEL = "VISUAL_NOVEL"
    UNKNOWN = "UNKNOWN"


class MimeType:
    """MIME types attached to encoded output."""

    JSON = "application/json"
    TEXT = "text/plain"
    BINARY = "application/octet-stream"


@dataclass(frozen=True)
class RawInput:
    """Uploaded save bytes and the name they arrived with."""

    data: bytes
    file_name: str = ""


@dataclass(frozen=True)
class ParseResult:
    """Decoded save value and the tag needed to re-encode it."""

    value: Any
    format: FormatTag
    file_name: str = ""
    category: GameCategory = GameCategory.UNKNOWN


@dataclass(frozen=True)
class EncodeOutput:
    """Bytes ready to persist plus download hints."""

    data: bytes
    mime_type: str
    suggested_extension: str
    suggested_file_name: str


@dataclass
class EditSession:
    """Serialisable editing state that threads the format tag between load and save."""

    file_name: str
    format: FormatTag
    value: Any
    category: GameCategory = GameCategory.UNKNOWN
    version: str = SESSION_VERSION

    @classmethod
    def from_result(cls, result: ParseResult) -> "EditSession":
        return cls(
            file_name=result.file_name,
            format=result.format,
            value=result.value,
            category=result.category,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the session into a JSON serialisable structure."""
        return {
            "version": self.version,
            "file_name": self.file_name,
            "format": self.format.value,
            "category": self.category.value,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "EditSession":
        """Rebuild a session from :meth:`to_dict` output.

        Raises:
            ValueError: If the document is not an object, a required key is missing
                or the format tag is unknown
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Session document must be a JSON object, got {type(payload).__name__}")
        missing = [key for key in ("file_name", "format", "value") if key not in payload]
        if missing:
            raise ValueError(f"Session document is missing keys: {', '.join(missing)}")
        return cls(
            file_name=str(payload["file_name"]),
            format=FormatTag(payload["format"]),
            value=payload["value"],
            category=GameCategory(payload.get("category", GameCategory.UNKNOWN.value)),
            version=str(payload.get("version", SESSION_VERSION)),
        )
