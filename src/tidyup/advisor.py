"""Scan orchestration: wires config, classifier, rules, walker and report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

from .classifier import TypeClassifier
from .report import ReportWriter
from .rules import discover_rules
from .walker import DirectoryWalker, ScanContext

if TYPE_CHECKING:
    from .config import TidyConfig

_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass
class ScanResult:
    """Outcome of one advisory run."""

    context: ScanContext
    output_path: Path

    @property
    def suggestion_count(self) -> int:
        return self.context.suggestion_count


class TidyAdvisor:
    """Runs one scan and writes the advisory script."""

    def __init__(self, config: TidyConfig, *, now: float | None = None) -> None:
        """Initialize the advisor.

        Args:
            config: Tidy configuration.
            now: Reference time for file ages, for reproducible runs.

        Raises:
            ValueError: If config.log_level is not a logging level name.

        """
        if config.log_level not in _VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {config.log_level!r}")

        self.config = config
        self.logger = self._setup_logging()

        # Initialize components
        self.classifier = TypeClassifier(config)
        self.rules = discover_rules(config)
        self.walker = DirectoryWalker(
            self.classifier,
            self.rules,
            freshness_days=config.freshness_days,
            now=now,
        )
        self.writer = ReportWriter()

    def _setup_logging(self) -> logging.Logger:
        """Set up logging for the run.

        Returns:
            Configured logger instance.

        """
        logger = logging.getLogger("tidyup")
        logger.setLevel(getattr(logging, self.config.log_level))

        # Clear existing handlers to avoid duplicates if the advisor is recreated
        if logger.handlers:
            logger.handlers.clear()

        # Console handler with Rich; stderr keeps stdout for the summary line
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        console_handler.setLevel(getattr(logging, self.config.log_level))
        logger.addHandler(console_handler)

        if self.config.log_file is not None:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
            )
            logger.addHandler(file_handler)

        return logger

    def scan(self, root: Path) -> ScanContext:
        """Walk root and collect suggestions and statistics."""
        self.logger.info(
            "Scanning %s (types %s, %d rules)",
            root,
            "on" if self.classifier.enabled else "off",
            len(self.rules),
        )
        return self.walker.walk(root)

    def run(self, root: Path, output_path: Path | None = None) -> ScanResult:
        """Scan root and write the report.

        Args:
            root: Directory to scan.
            output_path: Report destination. Uses config.output_file if None.

        Returns:
            ScanResult with the context and the written path.

        """
        context = self.scan(root)
        if context.errors:
            self.logger.warning("%d entries could not be read", context.errors)

        written = self.writer.write(context, output_path or self.config.output_file)
        return ScanResult(context=context, output_path=written)
