"""Tag index files (ctags/etags)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..classifier import TAGS_TYPE
from .base import Entry, FileEntry, Suggestion, remove_file

if TYPE_CHECKING:
    from ..config import TidyConfig


class TagFilesRule:
    """Flags source-code tag indexes, which editors can regenerate."""

    RULE_ENABLED: bool = True
    name: str = "tag_files"
    scope = "file"

    def __init__(self, config: TidyConfig) -> None:
        self.config = config

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, FileEntry) or entry.file_type != TAGS_TYPE:
            return []

        return [remove_file(entry.path, "tag index, regenerate with ctags", self.name)]
