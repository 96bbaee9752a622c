"""Depth-first directory walker that collects suggestions and type statistics."""

from __future__ import annotations

import logging
import os
import stat
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .report import format_entry
from .rules.base import DirectoryEntry, Entry, FileEntry, Suggestion

if TYPE_CHECKING:
    from .classifier import TypeClassifier
    from .rules.base import SuggestionRule

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


@dataclass
class TypeBucket:
    """Aggregate of all files sharing one classified type."""

    total_bytes: int = 0
    count: int = 0
    entries: list[str] = field(default_factory=list)


@dataclass
class ScanContext:
    """Mutable state for one walk, passed through the walker."""

    root: Path
    types: dict[str, TypeBucket] = field(default_factory=dict)
    suggestions: list[Suggestion] = field(default_factory=list)
    files_scanned: int = 0
    directories_scanned: int = 0
    bytes_scanned: int = 0
    errors: int = 0

    @property
    def suggestion_count(self) -> int:
        return len(self.suggestions)

    def record_file(self, entry: FileEntry) -> None:
        """Add a file to its type bucket."""
        bucket = self.types.setdefault(entry.file_type, TypeBucket())
        bucket.total_bytes += entry.size
        bucket.count += 1
        bucket.entries.append(format_entry(entry.size, entry.path))
        self.files_scanned += 1
        self.bytes_scanned += entry.size


class DirectoryWalker:
    """Visits every directory under a root, pre-order, without following symlinks."""

    def __init__(
        self,
        classifier: TypeClassifier,
        rules: list[SuggestionRule],
        *,
        freshness_days: int = 7,
        now: float | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            classifier: Maps files to type buckets.
            rules: Directory and file rules; each is routed by its scope.
            freshness_days: Entities younger than this get no suggestions.
            now: Reference time for ages. Read from the clock at each walk if None.

        """
        self.classifier = classifier
        self.directory_rules = [r for r in rules if r.scope == "directory"]
        self.file_rules = [r for r in rules if r.scope == "file"]
        self.freshness_days = freshness_days
        self.now = now
        self._walk_started: float | None = None

    def walk(self, root: Path) -> ScanContext:
        """Walk a directory tree.

        Args:
            root: Directory to start from.

        Returns:
            Context holding suggestions and per-type statistics.

        """
        self._walk_started = time.time()
        context = ScanContext(root=root)
        pending = [root]

        while pending:
            directory = pending.pop()
            subdirectories = self._visit_directory(directory, context)
            # Reversed so the stack yields them in sorted order
            pending.extend(reversed(subdirectories))

        logger.info(
            "Scanned %d files in %d directories, %d suggestions",
            context.files_scanned,
            context.directories_scanned,
            context.suggestion_count,
        )
        return context

    def age_days(self, mtime: float) -> int:
        """Whole days since mtime; negative for timestamps in the future."""
        return int((self._reference_time() - mtime) // SECONDS_PER_DAY)

    def is_fresh(self, age_days: int) -> bool:
        return age_days < self.freshness_days

    def _reference_time(self) -> float:
        if self.now is not None:
            return self.now
        # Pinned at the start of each walk
        return self._walk_started if self._walk_started is not None else time.time()

    def _visit_directory(self, directory: Path, context: ScanContext) -> list[Path]:
        """Suggest on a directory and its files; return its subdirectories."""
        try:
            dir_stat = directory.lstat()
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            context.errors += 1
            return []

        context.directories_scanned += 1

        dir_entry = DirectoryEntry(
            path=directory,
            names=tuple(e.name for e in entries),
            age_days=self.age_days(dir_stat.st_mtime),
            root=context.root,
        )
        if not self.is_fresh(dir_entry.age_days):
            self._apply_rules(self.directory_rules, dir_entry, context)

        subdirectories: list[Path] = []
        for item in entries:
            path = Path(item.path)
            try:
                item_stat = item.stat(follow_symlinks=False)
            except OSError as e:
                logger.warning("Cannot stat %s: %s", path, e)
                context.errors += 1
                continue

            if stat.S_ISLNK(item_stat.st_mode):
                logger.debug("Skipping symlink: %s", path)
            elif stat.S_ISDIR(item_stat.st_mode):
                subdirectories.append(path)
            elif stat.S_ISREG(item_stat.st_mode):
                self._visit_file(path, item_stat, context)

        return subdirectories

    def _visit_file(self, path: Path, file_stat: os.stat_result, context: ScanContext) -> None:
        entry = FileEntry(
            path=path,
            size=file_stat.st_size,
            mtime=file_stat.st_mtime,
            age_days=self.age_days(file_stat.st_mtime),
            file_type=self.classifier.classify(path),
        )
        if not self.is_fresh(entry.age_days):
            self._apply_rules(self.file_rules, entry, context)
        context.record_file(entry)

    def _apply_rules(self, rules: list[SuggestionRule], entry: Entry, context: ScanContext) -> None:
        for rule in rules:
            for suggestion in rule.check(entry):
                logger.debug("%s: %s", rule.name, suggestion.command)
                context.suggestions.append(suggestion)
