"""Empty directory rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import DirectoryEntry, Entry, Suggestion, remove_directory

if TYPE_CHECKING:
    from ..config import TidyConfig

# Version-control bookkeeping keeps empty directories on purpose (refs/tags, branches, ...)
VCS_METADATA_DIRS = frozenset({".git", ".hg", ".svn", ".bzr", "CVS"})


class EmptyDirectoriesRule:
    """Suggests removing directories that contain nothing."""

    RULE_ENABLED: bool = True
    name: str = "empty_directories"
    scope = "directory"

    def __init__(self, config: TidyConfig) -> None:
        self.config = config

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, DirectoryEntry) or not entry.is_empty:
            return []

        if VCS_METADATA_DIRS.intersection(entry.scanned_parts):
            return []

        return [remove_directory(entry.path, "empty directory", self.name)]
