"""Use Case: Lint Files - parse each unit and run every enabled rule over its tree."""

import logging
from typing import Optional, Sequence

from mini_eslint.domain.config import LintConfig
from mini_eslint.domain.entities import Finding, LintResult, ParseError, RuleFailure
from mini_eslint.domain.protocols import FileSystemProtocol, ParserProtocol, TelemetryPort
from mini_eslint.domain.source_code import SourceCode
from mini_eslint.domain.traversal import traverse
from mini_eslint.use_cases.collector import DiagnosticCollector
from mini_eslint.use_cases.rule_registry import ConfiguredRule, RuleRegistry

logger = logging.getLogger(__name__)


class LintFilesUseCase:
    """Lint units one at a time, isolating failures per unit and per rule."""

    def __init__(
        self,
        parser: ParserProtocol,
        registry: RuleRegistry,
        config: LintConfig,
        filesystem: Optional[FileSystemProtocol] = None,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.parser = parser
        self.registry = registry
        self.config = config
        self.filesystem = filesystem
        self.telemetry = telemetry
        self._rules: list[ConfiguredRule] = registry.configure(config)

    def execute(self, patterns: Sequence[str]) -> list[LintResult]:
        """
        Expand `patterns`, then lint every matched file in discovery order.

        Files that cannot be read are logged and left out of the results.
        """
        if self.filesystem is None:
            raise ValueError("LintFilesUseCase.execute needs a filesystem gateway.")

        files = self.filesystem.expand_patterns(patterns)
        self._step(f"Linting {len(files)} file(s) with {len(self._rules)} rule(s)...")

        results: list[LintResult] = []
        for path in files:
            try:
                source = self.filesystem.read_text(path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.error("Could not read %s: %s", path, exc)
                continue
            results.append(self.lint_source(source, path))
        return results

    def lint_source(self, source: str, file_path: str = "<input>") -> LintResult:
        """Parse one unit and walk its tree once per enabled rule."""
        try:
            tree = self.parser.parse(source, self.parser.options_for(file_path))
        except ParseError as exc:
            logger.info("Parsing error in %s: %s", file_path, exc)
            return LintResult(file_path=file_path, parse_error=exc)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Parser crashed on %s", file_path)
            return LintResult(
                file_path=file_path,
                parse_error=ParseError(f"Internal parser error: {type(exc).__name__}: {exc}"),
            )

        source_code = SourceCode(source)
        collector = DiagnosticCollector()
        failures: list[RuleFailure] = []

        for configured in self._rules:
            pending: list[Finding] = []
            try:
                listener = configured.instantiate(source_code, file_path, pending.append)
                traverse(tree, listener)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Rule '%s' crashed while linting %s", configured.rule_id, file_path)
                failures.append(
                    RuleFailure(
                        rule_id=configured.rule_id,
                        file_path=file_path,
                        error=f"{type(exc).__name__}: {exc}",
                    )
                )
                continue
            collector.extend(pending)

        return LintResult(
            file_path=file_path,
            findings=collector.sorted(),
            rule_failures=tuple(failures),
        )

    def _step(self, message: str) -> None:
        if self.telemetry is not None:
            self.telemetry.step(message)
        else:
            logger.info(message)
