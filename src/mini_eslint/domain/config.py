"""Lint configuration: which rules run, at which severity, with which options."""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from mini_eslint.domain.entities import Severity

logger = logging.getLogger(__name__)

DEFAULT_RULES: dict[str, object] = {
    "no-unused-vars": "error",
    "semi": "warn",
}


@dataclass(frozen=True)
class RuleSetting:
    """A resolved rule entry: severity plus rule-specific options."""

    severity: Severity
    options: tuple[Any, ...] = ()


class RuleEntryParser:
    """Parses one configuration entry. No top-level functions."""

    @staticmethod
    def parse(entry: object) -> RuleSetting:
        """
        Parse `"warn"`, `2`, or `["error", "never"]` style entries.

        Raises:
            ValueError: If the entry is not a recognizable severity or list.
        """
        if isinstance(entry, (list, tuple)):
            if not entry:
                raise ValueError("Empty rule entry.")
            return RuleSetting(Severity.parse(entry[0]), tuple(entry[1:]))
        if isinstance(entry, (str, int)):
            return RuleSetting(Severity.parse(entry))
        raise ValueError(f"Invalid rule entry: {entry!r}")


@dataclass(frozen=True)
class LintConfig:
    """Rule configuration for a run, already merged over the defaults."""

    rules: Mapping[str, object] = field(default_factory=lambda: dict(DEFAULT_RULES))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, object]]) -> "LintConfig":
        """Merge a loaded config (`{"rules": {...}}`) over the default rule levels."""
        merged: dict[str, object] = dict(DEFAULT_RULES)
        if not data:
            return cls(rules=merged)
        raw_rules = data.get("rules", {})
        if isinstance(raw_rules, Mapping):
            for rule_id, entry in raw_rules.items():
                merged[str(rule_id)] = entry
        else:
            logger.warning("Configuration Warning: 'rules' must be a table, ignoring %r.", raw_rules)
        return cls(rules=merged)

    def entry_for(self, rule_id: str) -> Optional[object]:
        return self.rules.get(rule_id)
