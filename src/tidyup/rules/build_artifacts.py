"""Intermediate build artifact rule.

Directories that hold compiler or typesetter leftovers get the clean command
of the tool that produced them, rather than one rm per file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import DirectoryEntry, Entry, Suggestion, quote

if TYPE_CHECKING:
    from ..config import TidyConfig

# extension -> (command template, reason); {dir} is the quoted directory
ARTIFACT_CLEANERS: dict[str, tuple[str, str]] = {
    ".o": ("make -C {dir} clean", "object files from a C build"),
    ".obj": ("make -C {dir} clean", "object files from a C build"),
    ".lo": ("make -C {dir} clean", "object files from a C build"),
    ".pyc": ("find {dir} -maxdepth 1 -name '*.py[co]' -delete", "compiled Python bytecode"),
    ".pyo": ("find {dir} -maxdepth 1 -name '*.py[co]' -delete", "compiled Python bytecode"),
    ".class": ("find {dir} -maxdepth 1 -name '*.class' -delete", "compiled Java classes"),
    ".aux": ("(cd {dir} && latexmk -c)", "LaTeX auxiliary files"),
    ".toc": ("(cd {dir} && latexmk -c)", "LaTeX auxiliary files"),
    ".fls": ("(cd {dir} && latexmk -c)", "LaTeX auxiliary files"),
    ".fdb_latexmk": ("(cd {dir} && latexmk -c)", "LaTeX auxiliary files"),
}


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:].lower() if dot > 0 else ""


class BuildArtifactsRule:
    """Suggests a project clean command for directories with build leftovers."""

    RULE_ENABLED: bool = True
    name: str = "build_artifacts"
    scope = "directory"

    def __init__(self, config: TidyConfig) -> None:
        self.config = config

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, DirectoryEntry):
            return []

        suggestions: list[Suggestion] = []
        seen: set[str] = set()
        for name in entry.names:
            cleaner = ARTIFACT_CLEANERS.get(_extension(name))
            if cleaner is None:
                continue
            template, reason = cleaner
            command = template.format(dir=quote(entry.path))
            if command in seen:
                continue
            seen.add(command)
            suggestions.append(
                Suggestion(path=entry.path, command=command, reason=reason, rule_name=self.name)
            )

        return suggestions
