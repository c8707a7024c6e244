"""Facade wiring classifier, probe and encoder from one configuration."""
from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Optional, Union

from ..domain.configuration import CodecConfig
from ..domain.models import EditSession, EncodeOutput, FormatTag, ParseResult, RawInput
from ..infrastructure.codecs import default_strategies
from .classifier import ContainerClassifier
from .encoder import RoundTripEncoder
from .probe import FormatProbe


class SaveCodecService:
    """Entry point for the editing layer: load saves, then save edits back."""

    def __init__(self, config: Optional[CodecConfig] = None):
        """Initialize the service.

        Args:
            config: Codec configuration
        """
        self.config = config or CodecConfig()
        self.config.validate()

        self.strategies = default_strategies(self.config)
        self.classifier = ContainerClassifier(self.config.classifier)
        self.probe = FormatProbe(self.strategies)
        self.encoder = RoundTripEncoder(self.strategies, self.classifier)

    def load(self, data: bytes, file_name: str = "") -> ParseResult:
        """Decode uploaded bytes; raises UnrecognizedFormat when nothing matches."""
        result = self.probe.probe(RawInput(data=data, file_name=file_name))
        return dataclasses.replace(result, category=self.classifier.classify(file_name))

    def load_path(self, path: Path) -> ParseResult:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return self.load(path.read_bytes(), path.name)

    def save(
        self,
        value: Any,
        tag: Union[FormatTag, str],
        original_file_name: str,
    ) -> EncodeOutput:
        return self.encoder.encode(value, tag, original_file_name)

    def save_session(self, session: EditSession) -> EncodeOutput:
        return self.save(session.value, session.format, session.file_name)
