"""Unit tests for StylishReporter."""

import io

from rich.console import Console

from mini_eslint.domain.entities import Finding, LintResult, ParseError, RuleFailure, Severity
from mini_eslint.interface.reporters import StylishReporter


def render(results: list[LintResult]) -> str:
    buffer = io.StringIO()
    reporter = StylishReporter(Console(file=buffer, width=200, color_system=None, highlight=False))
    reporter.report(results)
    return buffer.getvalue()


def test_no_problems() -> None:
    output = render([LintResult("a.js")])

    assert "✓ No problems found" in output
    assert "a.js" not in output


def test_groups_by_file_and_sorts_by_line_then_column() -> None:
    result = LintResult(
        "src/a.js",
        findings=(
            Finding("semi", "Missing semicolon.", Severity.WARN, 3, 5),
            Finding("no-unused-vars", "'b' is declared but never used", Severity.ERROR, 1, 6),
            Finding("semi", "Missing semicolon.", Severity.WARN, 1, 2),
        ),
    )

    lines = render([result]).splitlines()

    assert lines[0] == "src/a.js"
    assert lines[1] == "  1:2  warning  Missing semicolon.  semi"
    assert lines[2] == "  1:6  error  'b' is declared but never used  no-unused-vars"
    assert lines[3] == "  3:5  warning  Missing semicolon.  semi"
    assert "✖ 3 problems (1 error, 2 warnings)" in lines


def test_summary_pluralization() -> None:
    result = LintResult("a.js", findings=(Finding("semi", "Extra semicolon.", Severity.WARN, 1, 12),))

    assert "✖ 1 problem (0 errors, 1 warning)" in render([result])


def test_parse_failure_is_listed_as_error() -> None:
    result = LintResult("bad.js", parse_error=ParseError("Missing '}'", 1, 11))

    output = render([result])

    assert "bad.js" in output
    assert "1:11  error  Parsing error: Missing '}'" in output
    assert "✖ 1 problem (1 error, 0 warnings)" in output


def test_rule_failures_are_listed_separately() -> None:
    result = LintResult("a.js", rule_failures=(RuleFailure("semi", "a.js", "KeyError: 'x'"),))

    output = render([result])

    assert "✓ No problems found" in output
    assert "Internal error: rule 'semi' failed on a.js: KeyError: 'x'" in output


def test_pluralize() -> None:
    assert StylishReporter.pluralize("error", 1) == "error"
    assert StylishReporter.pluralize("error", 0) == "errors"
