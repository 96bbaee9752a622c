"""Tests for rule base types: entries, Suggestion and the SuggestionRule protocol."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from tidyup.config import TidyConfig
from tidyup.rules.base import (
    DirectoryEntry,
    FileEntry,
    Suggestion,
    SuggestionRule,
    quote,
    remove_directory,
    remove_file,
)
from tidyup.rules.empty_directories import EmptyDirectoriesRule


class TestSuggestion:
    """Tests for the Suggestion frozen dataclass."""

    def test_creation_with_all_fields(self, tmp_path: Path) -> None:
        """Test creating a Suggestion with all required fields."""
        suggestion = Suggestion(
            path=tmp_path / "notes.bak",
            command="rm -- notes.bak",
            reason="backup file",
            rule_name="backup_files",
        )

        assert suggestion.path == tmp_path / "notes.bak"
        assert suggestion.command == "rm -- notes.bak"
        assert suggestion.reason == "backup file"
        assert suggestion.rule_name == "backup_files"

    def test_frozen_prevents_attribute_mutation(self, tmp_path: Path) -> None:
        """Test that frozen dataclass rejects attribute assignment."""
        suggestion = Suggestion(path=tmp_path, command="c", reason="r", rule_name="n")

        with pytest.raises(FrozenInstanceError):
            suggestion.command = "changed"  # type: ignore[misc]

    def test_usable_in_set(self, tmp_path: Path) -> None:
        """Test that equal suggestions collapse in a set."""
        first = Suggestion(path=tmp_path, command="c", reason="r", rule_name="n")
        second = Suggestion(path=tmp_path, command="c", reason="r", rule_name="n")

        assert len({first, second}) == 1

    def test_render_is_commented_out(self, tmp_path: Path) -> None:
        """Rendered lines start with the double-comment marker and carry the reason."""
        suggestion = Suggestion(path=tmp_path, command="rm -- x.bak", reason="backup file", rule_name="n")

        assert suggestion.render() == "## rm -- x.bak  # backup file"


class TestCommandHelpers:
    """Tests for command construction helpers."""

    def test_quote_plain_path(self) -> None:
        """Paths without special characters are left bare."""
        assert quote(Path("/data/old.log")) == "/data/old.log"

    def test_quote_path_with_spaces(self) -> None:
        """Paths with spaces or quotes are shell-quoted."""
        assert quote(Path("/data/my notes.bak")) == "'/data/my notes.bak'"
        assert quote(Path("/data/it's.bak")) == "'/data/it'\"'\"'s.bak'"

    def test_remove_file(self, tmp_path: Path) -> None:
        """remove_file builds an rm command."""
        suggestion = remove_file(tmp_path / "core", "core dump", "transient_names")

        assert suggestion.command == f"rm -- {quote(tmp_path / 'core')}"
        assert suggestion.reason == "core dump"
        assert suggestion.rule_name == "transient_names"

    def test_remove_directory(self, tmp_path: Path) -> None:
        """remove_directory builds an rmdir command."""
        suggestion = remove_directory(tmp_path / "empty", "empty directory", "empty_directories")

        assert suggestion.command.startswith("rmdir -- ")


class TestEntries:
    """Tests for FileEntry and DirectoryEntry."""

    def test_file_entry_name(self, tmp_path: Path) -> None:
        """name is the last path component."""
        entry = FileEntry(path=tmp_path / "a.o", size=1, mtime=0.0, age_days=3, file_type="")
        assert entry.name == "a.o"

    def test_directory_entry_empty(self, tmp_path: Path) -> None:
        """A directory with no names is empty."""
        assert DirectoryEntry(path=tmp_path, names=(), age_days=10).is_empty
        assert not DirectoryEntry(path=tmp_path, names=("x",), age_days=10).is_empty


class TestSuggestionRuleProtocol:
    """Tests for the runtime-checkable SuggestionRule protocol."""

    def test_builtin_rule_satisfies_protocol(self) -> None:
        """A built-in rule is a SuggestionRule."""
        assert isinstance(EmptyDirectoriesRule(TidyConfig()), SuggestionRule)

    def test_object_missing_check_rejected(self) -> None:
        """Objects without check() do not satisfy the protocol."""

        class NotARule:
            RULE_ENABLED = True
            name = "nope"
            scope = "file"

        assert not isinstance(NotARule(), SuggestionRule)
