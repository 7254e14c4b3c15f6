"""Terminal reporting of lint results in ESLint's "stylish" layout."""

from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from mini_eslint.domain.entities import Finding, LintResult, Severity


class StylishReporter:
    """
    Groups findings by file, sorted by line then column, and prints a summary.

    A file that failed to parse is listed with its parsing error and counts
    as one error. Rule crashes are listed after the summary; they are not
    lint problems.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)

    @staticmethod
    def pluralize(word: str, count: int) -> str:
        return word if count == 1 else f"{word}s"

    def report(self, results: Sequence[LintResult]) -> None:
        error_count = 0
        warning_count = 0

        for result in results:
            rows = self._rows(result)
            if not rows:
                continue
            self.console.print(Text(result.file_path, style="underline"))
            for row in rows:
                self.console.print(row)
            self.console.print()
            error_count += result.error_count + (0 if result.is_parsed else 1)
            warning_count += result.warning_count

        total = error_count + warning_count
        if total == 0:
            self.console.print(Text("✓ No problems found", style="green"))
        else:
            summary = (
                f"✖ {total} {self.pluralize('problem', total)} "
                f"({error_count} {self.pluralize('error', error_count)}, "
                f"{warning_count} {self.pluralize('warning', warning_count)})"
            )
            self.console.print(Text(summary, style="bold red" if error_count else "bold yellow"))

        failures = [failure for result in results for failure in result.rule_failures]
        for failure in failures:
            self.console.print(
                Text(f"Internal error: rule '{failure.rule_id}' failed on {failure.file_path}: {failure.error}",
                     style="magenta")
            )

    def _rows(self, result: LintResult) -> list[Text]:
        if result.parse_error is not None:
            error = result.parse_error
            return [self._row(error.line, error.column, Severity.ERROR, f"Parsing error: {error.message}", "")]
        findings = sorted(result.findings, key=lambda f: f.sort_key)
        return [self._finding_row(f) for f in findings]

    def _finding_row(self, finding: Finding) -> Text:
        return self._row(finding.line, finding.column, finding.severity, finding.message, finding.rule_id)

    @staticmethod
    def _row(line: int, column: int, severity: Severity, message: str, rule_id: str) -> Text:
        is_error = severity is Severity.ERROR
        row = Text(f"  {line}:{column}  ")
        row.append("error" if is_error else "warning", style="red" if is_error else "yellow")
        row.append(f"  {message}  ")
        row.append(rule_id or "", style="bright_black")
        return row
