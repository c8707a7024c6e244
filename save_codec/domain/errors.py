"""Error taxonomy for the save codec pipeline.

Strategies raise :class:`StrategyInapplicable` and the probe swallows it while
falling through to the next strategy. Only :class:`UnrecognizedFormat` and
:class:`EncodeFailure` cross the package boundary.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .models import FormatTag


class SaveCodecError(Exception):
    """Base class for every error raised by save_codec."""


class StrategyInapplicable(SaveCodecError):
    """A single strategy could not decode the input."""

    def __init__(self, tag: FormatTag, reason: str) -> None:
        super().__init__(f"{tag.value}: {reason}")
        self.tag = tag
        self.reason = reason


class UnrecognizedFormat(SaveCodecError):
    """Every strategy was exhausted without a successful decode."""

    def __init__(self, file_name: str, attempted: Sequence[FormatTag]) -> None:
        label = file_name or "<input>"
        super().__init__(f"Unsupported or corrupted save file: {label}")
        self.file_name = file_name
        self.attempted = tuple(attempted)


class EncodeFailure(SaveCodecError):
    """The strategy for a tag could not serialise the given value."""

    def __init__(self, tag: FormatTag, reason: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Cannot encode value as {tag.value}: {reason}")
        self.tag = tag
        self.reason = reason
        self.cause = cause


__all__ = [
    "SaveCodecError",
    "StrategyInapplicable",
    "UnrecognizedFormat",
    "EncodeFailure",
]
