"""Re-encoding of edited save values using the tag recorded at load time."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Union

from ..domain.models import EncodeOutput, FormatTag
from ..infrastructure.codecs import CodecStrategy
from .classifier import ContainerClassifier, split_name

logger = logging.getLogger(__name__)

JSON_EXTENSION = ".json"

# Extension policy per tag: "json" always writes .json, "original" always keeps
# the uploaded extension, "category" keeps it only for compressed RPG saves.
EXTENSION_POLICY: Dict[FormatTag, str] = {
    FormatTag.PLAIN_JSON: "json",
    FormatTag.BASE64_JSON: "json",
    FormatTag.BASE64_ZLIB_JSON: "category",
    FormatTag.ZLIB_JSON: "category",
    FormatTag.LZ_BASE64_JSON: "category",
    FormatTag.LZ_RAW_JSON: "original",
    FormatTag.MESSAGEPACK: "original",
}


class RoundTripEncoder:
    """Encodes values back into the container they were loaded from."""

    def __init__(
        self,
        strategies: Sequence[CodecStrategy],
        classifier: Optional[ContainerClassifier] = None,
    ):
        self._strategies: Dict[FormatTag, CodecStrategy] = {
            strategy.tag: strategy for strategy in strategies
        }
        self.classifier = classifier or ContainerClassifier()

    def suggested_extension(self, tag: FormatTag, original_file_name: str) -> str:
        original_extension = split_name(original_file_name)[1]
        policy = EXTENSION_POLICY[tag]
        if policy == "original":
            return original_extension
        if policy == "category" and self.classifier.is_compressed_save(original_file_name):
            return original_extension
        return JSON_EXTENSION

    def encode(
        self,
        value: Any,
        tag: Union[FormatTag, str],
        original_file_name: str,
    ) -> EncodeOutput:
        """
        Encode ``value`` with the strategy named by ``tag``.

        Args:
            value: Edited save value
            tag: Format tag returned when the file was probed
            original_file_name: Name of the uploaded file

        Returns:
            EncodeOutput with bytes, MIME type and suggested file name

        Raises:
            ValueError: If the tag is unknown or has no strategy
            EncodeFailure: If the strategy cannot serialise the value
        """
        tag = FormatTag(tag)
        strategy = self._strategies.get(tag)
        if strategy is None:
            raise ValueError(f"No strategy registered for {tag.value}")

        data = strategy.encode(value)
        extension = self.suggested_extension(tag, original_file_name)
        base_name = split_name(original_file_name)[0] or "save"
        suggested_file_name = f"{base_name}_edited{extension}"
        logger.info("Encoded %d bytes as %s -> %s", len(data), tag.value, suggested_file_name)
        return EncodeOutput(
            data=data,
            mime_type=strategy.mime_type,
            suggested_extension=extension,
            suggested_file_name=suggested_file_name,
        )
