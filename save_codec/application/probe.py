"""Ordered-fallback detection of save file encodings."""
from __future__ import annotations

import logging
from typing import List, Sequence

from ..domain.errors import StrategyInapplicable, UnrecognizedFormat
from ..domain.models import FormatTag, ParseResult, RawInput
from ..infrastructure.codecs import CodecStrategy

logger = logging.getLogger(__name__)


class FormatProbe:
    """Tries each strategy in order and returns the first successful decode."""

    def __init__(self, strategies: Sequence[CodecStrategy]):
        """
        Initialize the probe.

        Args:
            strategies: Strategies in probing order

        Raises:
            ValueError: If the chain is empty or repeats a format tag
        """
        if not strategies:
            raise ValueError("FormatProbe requires at least one strategy")
        tags = [strategy.tag for strategy in strategies]
        duplicates = sorted({tag.value for tag in tags if tags.count(tag) > 1})
        if duplicates:
            raise ValueError(f"Duplicate strategies for: {', '.join(duplicates)}")
        self._strategies = tuple(strategies)

    @property
    def strategies(self) -> Sequence[CodecStrategy]:
        return self._strategies

    @property
    def tags(self) -> List[FormatTag]:
        return [strategy.tag for strategy in self._strategies]

    def probe(self, raw: RawInput) -> ParseResult:
        """
        Detect the encoding of ``raw`` and decode it.

        Args:
            raw: Uploaded bytes and file name

        Returns:
            ParseResult with the decoded value and the winning tag

        Raises:
            UnrecognizedFormat: If no strategy applies
        """
        is_text = _is_text(raw.data)
        if not is_text:
            logger.debug("%s is not UTF-8 text; probing binary strategies only", raw.file_name)

        attempted: List[FormatTag] = []
        for strategy in self._strategies:
            if strategy.requires_text and not is_text:
                continue
            attempted.append(strategy.tag)
            try:
                value = strategy.decode(raw.data)
            except StrategyInapplicable as exc:
                logger.debug("Strategy %s skipped for %s: %s", exc.tag.value, raw.file_name, exc.reason)
                continue
            logger.info("Detected %s for %s", strategy.tag.value, raw.file_name or "<input>")
            return ParseResult(value=value, format=strategy.tag, file_name=raw.file_name)

        logger.warning("No strategy recognised %s", raw.file_name or "<input>")
        raise UnrecognizedFormat(raw.file_name, attempted)

    def probe_bytes(self, data: bytes, file_name: str = "") -> ParseResult:
        return self.probe(RawInput(data=data, file_name=file_name))


def _is_text(data: bytes) -> bool:
    try:
        data.decode("utf-8", "surrogatepass")
    except UnicodeDecodeError:
        return False
    return True
