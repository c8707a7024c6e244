"""Domain models for codec configuration."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple


CONFIG_VERSION = "1.0.0"

DEFAULT_MAX_DECODED_BYTES = 64 * 1024 * 1024


@dataclass(frozen=True)
class ClassifierOptions:
    """Extension tables used to categorise uploaded saves."""

    rpg_extensions: Tuple[str, ...] = (
        ".rpgsave",
        ".rvdata2",
        ".rvdata",
        ".rxdata",
        ".lsd",
        ".sav",
        ".save",
        ".rsv",
    )
    visual_novel_extensions: Tuple[str, ...] = (
        ".dat",
        ".sol",
    )


@dataclass(frozen=True)
class LoggingSettings:
    """Logging defaults for the codec pipeline."""

    max_message_chars: int = 400
    fmt: str = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


@dataclass(frozen=True)
class CodecConfig:
    """Aggregated configuration for the codec pipeline."""

    version: str = CONFIG_VERSION
    max_decoded_bytes: int = DEFAULT_MAX_DECODED_BYTES
    json_indent: Optional[int] = None
    classifier: ClassifierOptions = field(default_factory=ClassifierOptions)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.max_decoded_bytes <= 0:
            raise ValueError("max_decoded_bytes must be positive")
        if self.json_indent is not None and self.json_indent < 0:
            raise ValueError("json_indent must not be negative")
        if self.logging.max_message_chars <= 0:
            raise ValueError("max_message_chars must be positive")

    def to_dict(self) -> Dict[str, object]:
        """Convert the configuration into a JSON serialisable structure."""

        def dataclass_to_dict(obj):
            if hasattr(obj, "__dict__"):
                return {
                    key: dataclass_to_dict(value)
                    for key, value in obj.__dict__.items()
                }
            if isinstance(obj, tuple):
                return [dataclass_to_dict(item) for item in obj]
            return obj

        return dataclass_to_dict(self)


def with_cli_overrides(base_config: CodecConfig, overrides: Dict[str, object]) -> CodecConfig:
    """Create a new configuration with CLI overrides applied."""

    changes: Dict[str, object] = {}
    if overrides.get("max_decoded_bytes") is not None:
        changes["max_decoded_bytes"] = int(overrides["max_decoded_bytes"])
    if overrides.get("json_indent") is not None:
        changes["json_indent"] = int(overrides["json_indent"])

    logging_settings = base_config.logging
    if overrides.get("max_message_chars") is not None:
        logging_settings = replace(
            logging_settings, max_message_chars=int(overrides["max_message_chars"])
        )
    changes["logging"] = logging_settings

    config = replace(base_config, **changes)
    config.validate()
    return config
