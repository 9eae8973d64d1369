"""Rule registry with auto-discovery of AdaptationRule subclasses."""

from __future__ import annotations

import importlib
import logging
import pkgutil

from training_engine.rules.base import AdaptationRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Discovers and manages all AdaptationRule implementations.

    Auto-discovers rules by scanning the rules/ package tree for any
    concrete subclasses of AdaptationRule. New rules are added simply by
    placing a .py file in the appropriate tier subpackage.
    """

    def __init__(self) -> None:
        self._rules: dict[str, AdaptationRule] = {}

    def discover_rules(self) -> None:
        """Scan the rules package tree and register all AdaptationRule subclasses."""
        import training_engine.rules as rules_pkg

        for _, module_name, _ in pkgutil.walk_packages(
            rules_pkg.__path__, prefix=rules_pkg.__name__ + "."
        ):
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                logger.warning("Skipping rule module %s: %s", module_name, e)
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, AdaptationRule)
                    and attr is not AdaptationRule
                    and not getattr(attr, "__abstractmethods__", set())
                    and attr.__module__ == module.__name__
                ):
                    self.register(attr())

    def register(self, rule: AdaptationRule) -> None:
        """Register a rule instance by its rule_id."""
        self._rules[rule.rule_id] = rule

    def get(self, rule_id: str) -> AdaptationRule | None:
        return self._rules.get(rule_id)

    def get_all_rules(self) -> list[AdaptationRule]:
        """Return all registered rules sorted by priority (SAFETY first)."""
        return sorted(self._rules.values(), key=lambda r: (r.priority, r.rule_id))

    @property
    def rule_ids(self) -> list[str]:
        return list(self._rules.keys())
