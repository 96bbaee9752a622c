"""Git loose object rule, using ``git count-objects``."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from .base import DirectoryEntry, Entry, Suggestion, quote

if TYPE_CHECKING:
    from ..config import TidyConfig

logger = logging.getLogger(__name__)

_COUNT_PATTERN = re.compile(r"^(\d+) objects?, (\d+) kilobytes?")


class LooseObjectsRule:
    """Suggests ``git gc`` for repositories with unpacked objects."""

    RULE_ENABLED: bool = True
    name: str = "loose_objects"
    scope = "directory"

    def __init__(self, config: TidyConfig) -> None:
        self.config = config

    def count_loose_objects(self, git_dir: Path) -> tuple[int, int] | None:
        """Count loose objects in a git metadata directory.

        Args:
            git_dir: Path to a ``.git`` directory.

        Returns:
            (object count, size in kilobytes), or None if git failed.

        """
        try:
            result = subprocess.run(
                [self.config.git_command, "--git-dir", str(git_dir), "count-objects"],
                capture_output=True,
                text=True,
                check=False,
                timeout=self.config.classify_timeout,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug("git count-objects failed for %s: %s", git_dir, e)
            return None

        match = _COUNT_PATTERN.match(result.stdout.strip())
        if result.returncode != 0 or not match:
            logger.debug("Unexpected git count-objects output for %s: %r", git_dir, result.stdout)
            return None

        return int(match.group(1)), int(match.group(2))

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, DirectoryEntry) or entry.name != ".git":
            return []

        counted = self.count_loose_objects(entry.path)
        if counted is None:
            return []

        count, kilobytes = counted
        if count <= self.config.loose_object_threshold:
            return []

        return [
            Suggestion(
                path=entry.path,
                command=f"git --git-dir={quote(entry.path)} gc",
                reason=f"{count} loose objects ({kilobytes}K) can be packed",
                rule_name=self.name,
            )
        ]
