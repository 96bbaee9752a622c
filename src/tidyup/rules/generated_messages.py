"""ROS packages with generated message code."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Entry, FileEntry, Suggestion, quote

if TYPE_CHECKING:
    from ..config import TidyConfig

MANIFEST_NAMES = frozenset({"manifest.xml", "package.xml"})
GENERATED_DIRS = ("msg_gen", "srv_gen")


class GeneratedMessagesRule:
    """Suggests a package clean when a manifest sits next to generated message code."""

    RULE_ENABLED: bool = True
    name: str = "generated_messages"
    scope = "file"

    def __init__(self, config: TidyConfig) -> None:
        self.config = config

    def check(self, entry: Entry) -> list[Suggestion]:
        if not isinstance(entry, FileEntry) or entry.name not in MANIFEST_NAMES:
            return []

        package_dir = entry.path.parent
        generated = [name for name in GENERATED_DIRS if (package_dir / name).is_dir()]
        if not generated:
            return []

        return [
            Suggestion(
                path=package_dir,
                command=f"make -C {quote(package_dir)} clean",
                reason=f"package with generated code in {', '.join(generated)}",
                rule_name=self.name,
            )
        ]
