"""Classify files by content type using file(1)."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import TidyConfig

logger = logging.getLogger(__name__)

# Canonical buckets that rules match on
OBJECT_TYPE = "relocatable object"
EXECUTABLE_TYPE = "executable"
TAGS_TYPE = "tag index"

_ENCODINGS = (
    r"(?:ASCII|UTF-8(?: Unicode)?|Unicode|ISO-8859|Non-ISO extended-ASCII"
    r"|(?:Little|Big)-endian UTF-16(?: Unicode)?)(?: \(with BOM\))?"
)

# Leading text kept when a description starts with or contains one of these
_TRUNCATE_AT = (
    "image data",
    "PDF document",
    "PostScript document",
    "compressed data",
    "archive data",
    "SQLite 3.x database",
    "ISO Media",
    "Audio file",
    "RIFF (little-endian) data",
    "Matroska data",
    "MPEG ADTS",
    "Composite Document File V2 Document",
    "Microsoft OOXML",
    "HTML document",
    "XML 1.0 document",
    "Git pack",
    "Git index",
    "Web Open Font Format",
    "TrueType Font data",
    "OpenType font data",
)

# Applied in order; each (pattern, replacement) sees the previous result.
REWRITE_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r", with (?:very long lines(?: \(\d+\))?|(?:CRLF|CR|no) line terminators|CRLF, LF line terminators"
                r"|CR, LF line terminators|escape sequences|overstriking|NEL line terminators)"), ""),
    (re.compile(rf", {_ENCODINGS} text(?: executable)?$"), ""),
    (re.compile(rf"^{_ENCODINGS} text"), "text"),
    (re.compile(r"\bC\+\+"), "C"),
    (re.compile(r"^ELF .*\brelocatable\b.*"), OBJECT_TYPE),
    (re.compile(r"^ELF .*\bexecutable\b.*"), EXECUTABLE_TYPE),
    (re.compile(r"^ELF .*\bshared object\b.*"), "shared object"),
    (re.compile(r"^Mach-O .*\bobject\b.*"), OBJECT_TYPE),
    (re.compile(r"^Mach-O .*\bexecutable\b.*"), EXECUTABLE_TYPE),
    (re.compile(r"^(?:a\.out|.*\bdemand paged\b).*\bexecutable\b.*"), EXECUTABLE_TYPE),
    (re.compile(r"^.*\b(?:[Cc]tags tag|[Ee]tags|TAGS) file\b.*"), TAGS_TYPE),
    (re.compile(r"^.*\b[Vv]i(?:m)? swap file\b.*"), "vim swap file"),
    (re.compile(r"^current ar archive.*"), "ar archive"),
    *[
        (re.compile(rf"^(.*?{re.escape(prefix)}).*"), r"\1")
        for prefix in _TRUNCATE_AT
    ],
    (re.compile(r"[\s,]+$"), ""),
]


def normalize(description: str) -> str:
    """Collapse a file(1) description into a coarse bucket name.

    Args:
        description: Raw output of ``file -b``.

    Returns:
        Normalized type string.

    """
    text = description.strip()
    for pattern, replacement in REWRITE_RULES:
        text = pattern.sub(replacement, text)
    return text


class TypeClassifier:
    """Maps file paths to normalized content-type strings."""

    def __init__(self, config: TidyConfig) -> None:
        """Initialize the classifier.

        Args:
            config: Tidy configuration.

        """
        self.config = config
        self.enabled = config.classify

    def describe(self, path: Path) -> str | None:
        """Run file(1) on a path.

        Returns:
            The raw description, or None if the tool could not be run.

        """
        try:
            result = subprocess.run(
                [self.config.file_command, "-b", str(path)],
                capture_output=True,
                text=True,
                check=False,
                timeout=self.config.classify_timeout,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug("file(1) failed for %s: %s", path, e)
            return None

        if result.returncode != 0:
            logger.debug("file(1) exited %d for %s", result.returncode, path)
            return None

        return result.stdout

    def classify(self, path: Path) -> str:
        """Get the type bucket for a file.

        Returns an empty string when classification is disabled or file(1)
        could not describe the file.
        """
        if not self.enabled:
            return ""

        description = self.describe(path)
        if not description:
            return ""

        return normalize(description)
