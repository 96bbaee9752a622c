"""Suggestion rules with auto-discovery."""

from __future__ import annotations

import importlib
import logging
import pkgutil
from collections.abc import Iterator
from typing import TYPE_CHECKING

from .base import SuggestionRule

if TYPE_CHECKING:
    from ..config import TidyConfig

logger = logging.getLogger(__name__)


def discover_rules(config: TidyConfig) -> list[SuggestionRule]:
    """Discover and instantiate all enabled suggestion rules.

    Every module in this package except ``base`` is imported, and each class
    it defines with RULE_ENABLED = True is instantiated with the config.
    Rules named in config.rules_disabled are dropped. Order is module name,
    then class name.
    """
    rules: list[SuggestionRule] = []
    for rule_class in _rule_classes():
        try:
            rule = rule_class(config)
        except (TypeError, ValueError):
            logger.warning("Failed to instantiate rule: %s", rule_class.__name__, exc_info=True)
            continue

        if rule.name in config.rules_disabled:
            logger.info("Rule disabled by config: %s", rule.name)
            continue

        rules.append(rule)
        logger.debug("Loaded rule: %s", rule.name)
    return rules


def _rule_classes() -> Iterator[type]:
    """Yield enabled rule classes, each from the module that defines it."""
    for module_info in sorted(pkgutil.iter_modules(__path__), key=lambda m: m.name):
        if module_info.name == "base":
            continue
        try:
            module = importlib.import_module(f"{__name__}.{module_info.name}")
        except ImportError:
            logger.warning("Failed to import rule module: %s", module_info.name)
            continue

        for attr_name in sorted(vars(module)):
            attr = getattr(module, attr_name)
            if (
                isinstance(attr, type)
                and attr.__module__ == module.__name__
                and getattr(attr, "RULE_ENABLED", False) is True
            ):
                yield attr
