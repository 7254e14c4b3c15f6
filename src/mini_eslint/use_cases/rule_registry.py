"""Rule registry: resolves configuration and instantiates rule listeners per unit."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from mini_eslint.domain.config import LintConfig, RuleEntryParser, RuleSetting
from mini_eslint.domain.entities import Finding, Severity
from mini_eslint.domain.rules import Listener, Rule, RuleContext
from mini_eslint.domain.rules.no_unused_vars import NoUnusedVarsRule
from mini_eslint.domain.rules.semi import SemiRule
from mini_eslint.domain.source_code import SourceCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfiguredRule:
    """An enabled rule together with its resolved severity and options."""

    rule: Rule
    setting: RuleSetting

    @property
    def rule_id(self) -> str:
        return self.rule.meta.rule_id

    @property
    def severity(self) -> Severity:
        return self.setting.severity

    def instantiate(
        self, source_code: SourceCode, file_path: str, sink: Callable[[Finding], None]
    ) -> Listener:
        """Create a fresh listener whose context reports into `sink`."""
        context = RuleContext(
            rule_id=self.rule_id,
            severity=self.setting.severity,
            source_code=source_code,
            options=self.setting.options,
            file_path=file_path,
            sink=sink,
        )
        return self.rule.create(context)


class RuleRegistry:
    """An explicit, caller-owned set of rule definitions."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        seen: set[str] = set()
        for rule in rules:
            rule_id = rule.meta.rule_id
            if rule_id in seen:
                raise ValueError(f"Duplicate rule id '{rule_id}'.")
            seen.add(rule_id)
        self._rules: tuple[Rule, ...] = tuple(rules)

    @classmethod
    def builtin(cls) -> "RuleRegistry":
        return cls([NoUnusedVarsRule(), SemiRule()])

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def get(self, rule_id: str) -> Optional[Rule]:
        return next((r for r in self._rules if r.meta.rule_id == rule_id), None)

    def configure(self, config: LintConfig) -> list[ConfiguredRule]:
        """Return the rules whose resolved severity is not off, in registry order."""
        known = {rule.meta.rule_id for rule in self._rules}
        for rule_id in config.rules:
            if rule_id not in known:
                logger.debug("Ignoring configuration for unknown rule '%s'.", rule_id)

        enabled: list[ConfiguredRule] = []
        for rule in self._rules:
            setting = self.resolve(rule, config.entry_for(rule.meta.rule_id))
            if setting.severity is Severity.OFF:
                continue
            enabled.append(ConfiguredRule(rule=rule, setting=setting))
        return enabled

    @staticmethod
    def resolve(rule: Rule, entry: Optional[object]) -> RuleSetting:
        """Resolve one rule's entry, falling back to its documented defaults."""
        meta = rule.meta
        default = RuleSetting(meta.default_severity, meta.default_options)
        if entry is None:
            return default
        try:
            setting = RuleEntryParser.parse(entry)
        except ValueError as exc:
            logger.warning("Configuration Warning: %s for rule '%s'; using its default.", exc, meta.rule_id)
            return default

        options = setting.options or meta.default_options
        if meta.schema and options and options[0] not in meta.schema:
            logger.warning(
                "Configuration Warning: option %r is not one of %s for rule '%s'; using %r.",
                options[0], list(meta.schema), meta.rule_id, list(meta.default_options),
            )
            options = meta.default_options
        return RuleSetting(setting.severity, tuple(options))
