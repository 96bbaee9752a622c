"""Base protocol and types for suggestion rules."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol, Union, runtime_checkable

# Marks an advisory command so it stays inert and is easy to grep for
SUGGESTION_MARKER = "##"

Scope = Literal["directory", "file"]


@dataclass(frozen=True)
class FileEntry:
    """A regular file as seen by the walker."""

    path: Path
    size: int
    mtime: float
    age_days: int
    file_type: str

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class DirectoryEntry:
    """A directory and the names it contains."""

    path: Path
    names: tuple[str, ...]
    age_days: int
    root: Path | None = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def scanned_parts(self) -> tuple[str, ...]:
        """Components from the scan root (inclusive) down to this directory."""
        if self.root is None:
            return self.path.parts
        try:
            relative = self.path.relative_to(self.root)
        except ValueError:
            return self.path.parts
        return (self.root.name, *relative.parts)

    @property
    def is_empty(self) -> bool:
        return not self.names


Entry = Union[FileEntry, DirectoryEntry]


@dataclass(frozen=True)
class Suggestion:
    """Immutable advisory command with its justification and rule provenance."""

    path: Path
    command: str
    reason: str
    rule_name: str

    def render(self) -> str:
        """Format as a commented-out shell line."""
        return f"{SUGGESTION_MARKER} {self.command}  # {self.reason}"


def quote(path: Path) -> str:
    """Quote a path for the generated script."""
    return shlex.quote(str(path))


def remove_file(path: Path, reason: str, rule_name: str) -> Suggestion:
    return Suggestion(path=path, command=f"rm -- {quote(path)}", reason=reason, rule_name=rule_name)


def remove_directory(path: Path, reason: str, rule_name: str) -> Suggestion:
    return Suggestion(path=path, command=f"rmdir -- {quote(path)}", reason=reason, rule_name=rule_name)


@runtime_checkable
class SuggestionRule(Protocol):
    """Interface for pluggable suggestion strategies."""

    RULE_ENABLED: bool
    name: str
    scope: Scope

    def check(self, entry: Entry) -> list[Suggestion]:
        """Produce suggestions for a single entry.

        Args:
            entry: A FileEntry for file rules, a DirectoryEntry for directory rules.

        Returns:
            Zero or more suggestions.

        """
        ...
