"""Well-known transient file names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Entry, FileEntry, Suggestion, remove_file

if TYPE_CHECKING:
    from ..config import TidyConfig


@dataclass(frozen=True)
class NameRule:
    """Exact file name and why it is safe to remove."""

    name: str
    reason: str

    def matches(self, filename: str) -> bool:
        return filename == self.name


NAME_RULES: list[NameRule] = [
    # editor and mailer recovery
    NameRule("dead.letter", "unsent mail saved by the mailer"),
    NameRule("DEADJOE", "joe editor crash recovery"),
    NameRule("vi.recover", "vi recovery file"),
    NameRule(".emacs.desktop.lock", "stale emacs desktop lock"),
    # redirected output
    NameRule("nohup.out", "output of a nohup run"),
    NameRule("typescript", "session log from script(1)"),
    NameRule("errors", "redirected error output"),
    NameRule("errs", "redirected error output"),
    NameRule("out", "redirected output"),
    NameRule("output", "redirected output"),
    # generated by builds and profilers
    NameRule("a.out", "default compiler output"),
    NameRule("gmon.out", "gprof profile data"),
    NameRule("mon.out", "prof profile data"),
    NameRule("ktrace.out", "ktrace dump"),
    NameRule("nosetests.xml", "test runner report"),
    NameRule(".coverage", "coverage.py data"),
    # crashes
    NameRule("core", "core dump"),
    NameRule("vgcore", "valgrind core dump"),
    # screenshots
    NameRule("screenshot.png", "temporary screenshot"),
    NameRule("snapshot.png", "temporary screenshot"),
    NameRule("screendump.xwd", "temporary screen dump"),
    # accidental writes
    NameRule("1", "probably meant 2>&1"),
    NameRule("2", "probably meant 2>&1"),
    NameRule("-", "output redirected to a file named '-'"),
    NameRule("=", "output redirected to a file named '='"),
]


class TransientNamesRule:
    """Flags files whose exact name marks them as transient."""

    RULE_ENABLED: bool = True
    name: str = "transient_names"
    scope = "file"

    def __init__(self, config: TidyConfig, rules: list[NameRule] | None = None) -> None:
        self.config = config
        self.rules = NAME_RULES if rules is None else rules

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, FileEntry):
            return []

        return [
            remove_file(entry.path, rule.reason, self.name)
            for rule in self.rules
            if rule.matches(entry.name)
        ]
