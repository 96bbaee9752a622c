"""Old object files and executables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..classifier import EXECUTABLE_TYPE, OBJECT_TYPE
from .base import Entry, FileEntry, Suggestion, remove_file

if TYPE_CHECKING:
    from ..config import TidyConfig

_BINARY_TYPES = frozenset({OBJECT_TYPE, EXECUTABLE_TYPE})


class StaleBinariesRule:
    """Flags compiled objects and executables not touched for a long time."""

    RULE_ENABLED: bool = True
    name: str = "stale_binaries"
    scope = "file"

    def __init__(self, config: TidyConfig) -> None:
        self.config = config

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, FileEntry) or entry.file_type not in _BINARY_TYPES:
            return []

        if entry.age_days <= self.config.old_binary_days:
            return []

        return [remove_file(entry.path, f"old {entry.file_type}, {entry.age_days} days old", self.name)]
