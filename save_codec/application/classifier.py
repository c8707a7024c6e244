"""Extension-based classification of save containers."""
from __future__ import annotations

from pathlib import PurePath
from typing import Optional, Tuple

from ..domain.configuration import ClassifierOptions
from ..domain.models import GameCategory


def split_name(file_name: str) -> Tuple[str, str]:
    """Split a file name into its base name and final extension (with the dot)."""
    name = PurePath(file_name).name if file_name else ""
    suffix = PurePath(name).suffix if name else ""
    base = name[: -len(suffix)] if suffix else name
    return base, suffix


class ContainerClassifier:
    """Maps file extensions to coarse game categories."""

    def __init__(self, options: Optional[ClassifierOptions] = None):
        self.options = options or ClassifierOptions()
        self._rpg = {ext.lower() for ext in self.options.rpg_extensions}
        self._visual_novel = {ext.lower() for ext in self.options.visual_novel_extensions}

    def classify(self, file_name: str) -> GameCategory:
        extension = split_name(file_name)[1].lower()
        if extension in self._rpg:
            return GameCategory.RPG
        if extension in self._visual_novel:
            return GameCategory.VISUAL_NOVEL
        return GameCategory.UNKNOWN

    def is_compressed_save(self, file_name: str) -> bool:
        """RPG saves are the category whose extension survives re-encoding."""
        return self.classify(file_name) is GameCategory.RPG
