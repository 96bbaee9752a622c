"""Name-pattern rules for files left behind by other tools.

Each rule is an ordered list of (pattern, reason) records matched against
the file name. The first matching record of a rule wins.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from .base import Entry, FileEntry, Suggestion, remove_file

if TYPE_CHECKING:
    from ..config import TidyConfig


class PatternRule:
    """Base class for rules that match file names against regular expressions."""

    RULE_ENABLED: bool = False
    name: str = "patterns"
    scope = "file"
    PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = []

    def __init__(self, config: TidyConfig) -> None:
        self.config = config

    def match(self, filename: str) -> str | None:
        """Return the reason of the first pattern matching filename."""
        for pattern, reason in self.PATTERNS:
            if pattern.search(filename):
                return reason
        return None

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, FileEntry):
            return []

        reason = self.match(entry.name)
        if reason is None:
            return []

        return [remove_file(entry.path, reason, self.name)]


class BackupFilesRule(PatternRule):
    """Editor and patch backups."""

    RULE_ENABLED = True
    name = "backup_files"
    PATTERNS = [
        (re.compile(r".~$"), "editor backup file"),
        (re.compile(r".\.bak$", re.IGNORECASE), "backup file"),
        (re.compile(r".\.old$", re.IGNORECASE), "old copy"),
        (re.compile(r".\.orig$", re.IGNORECASE), "original saved by patch or merge"),
    ]


class SyncConflictsRule(PatternRule):
    """Conflict copies left by file synchronizers."""

    RULE_ENABLED = True
    name = "sync_conflicts"
    PATTERNS = [
        (re.compile(r" \(.*conflicted copy.*\)"), "Dropbox conflicted copy"),
        (re.compile(r"\.sync-conflict-\d{8}-\d{6}"), "Syncthing conflict copy"),
        (re.compile(r"^\.unison\.|\.unison\.tmp$"), "Unison temporary copy"),
    ]


class SwapFilesRule(PatternRule):
    """Editor swap and lock files."""

    RULE_ENABLED = True
    name = "swap_files"
    PATTERNS = [
        (re.compile(r"^\..+\.sw[a-p]$"), "vim swap file"),
        (re.compile(r"^#.+#$"), "emacs auto-save file"),
        (re.compile(r"^\.#."), "emacs lock file"),
    ]


class ConversionTempsRule(PatternRule):
    """Intermediate output of document converters."""

    RULE_ENABLED = True
    name = "conversion_temps"
    PATTERNS = [
        (re.compile(r"^texput\.(?:log|dvi|aux|pdf)$"), "LaTeX run without an input file"),
        (re.compile(r"^_region_\.(?:tex|log|dvi|pdf|aux)$"), "AUCTeX region file"),
        (re.compile(r"-eps-converted-to\.pdf$"), "epstopdf conversion output"),
        (re.compile(r"^pdfjam-\w+\.(?:tex|pdf)$"), "pdfjam temporary file"),
    ]
