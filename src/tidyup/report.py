"""Render and write the advisory script and type inventory."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from .rules.base import SUGGESTION_MARKER
from .sizes import format_size

if TYPE_CHECKING:
    from .walker import ScanContext, TypeBucket

logger = logging.getLogger(__name__)

UNCLASSIFIED_LABEL = "(unclassified)"


def display_path(path: Path, home: Path | None = None) -> str:
    """Show a path relative to the home directory when it lies inside it."""
    home = home if home is not None else Path.home()
    try:
        relative = path.relative_to(home)
    except ValueError:
        return str(path)
    return f"~/{relative}" if relative.parts else "~"


def format_entry(size: int, path: Path) -> str:
    """One inventory line: right-aligned size, then the path."""
    return f"{format_size(size):>6} {display_path(path)}"


def sorted_buckets(types: dict[str, TypeBucket]) -> list[tuple[str, TypeBucket]]:
    """Buckets by descending total size, then by type name."""
    return sorted(types.items(), key=lambda item: (-item[1].total_bytes, item[0]))


class ReportWriter:
    """Turns a finished ScanContext into the advisory script."""

    def render(self, context: ScanContext, generated: datetime | None = None) -> str:
        """Render the full report.

        Args:
            context: Result of a walk.
            generated: Timestamp for the header. Defaults to now.

        Returns:
            Report text ending in a newline.

        """
        generated = generated or datetime.now()
        lines = [
            "#!/bin/sh",
            f"# tidyup suggestions for {display_path(context.root)}",
            f"# generated {generated:%Y-%m-%d %H:%M}",
            f"# Review each line starting with '{SUGGESTION_MARKER}' and uncomment what you want to run.",
            "",
        ]

        if context.suggestions:
            lines.extend(s.render() for s in context.suggestions)
        else:
            lines.append("# no suggestions")
        lines.append("")

        lines.extend(self.render_inventory(context))
        return "\n".join(lines) + "\n"

    def render_inventory(self, context: ScanContext) -> list[str]:
        """Type-by-type listing, largest bucket first, then the grand total."""
        lines = ["# File types by total size", "#"]
        for file_type, bucket in sorted_buckets(context.types):
            label = file_type or UNCLASSIFIED_LABEL
            noun = "file" if bucket.count == 1 else "files"
            lines.append(f"# {label}: {bucket.count} {noun}, {format_size(bucket.total_bytes)}")
            lines.extend(f"#   {entry}" for entry in bucket.entries)
            lines.append("#")

        total_files = sum(b.count for b in context.types.values())
        total_bytes = sum(b.total_bytes for b in context.types.values())
        lines.append(f"# Total: {total_files} files, {format_size(total_bytes)}")
        return lines

    def write(self, context: ScanContext, output_path: Path) -> Path:
        """Render the report and write it to output_path.

        Returns:
            The path written.

        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(context), encoding="utf-8")
        logger.info("Wrote report: %s", output_path)
        return output_path
