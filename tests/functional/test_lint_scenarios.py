"""End-to-end scenarios: real tree-sitter parsing, built-in rules, lint use case."""

import pytest

from mini_eslint.domain.config import LintConfig
from mini_eslint.domain.entities import Severity
from mini_eslint.infrastructure.gateways.tree_sitter_gateway import TreeSitterParser
from mini_eslint.use_cases.lint_files import LintFilesUseCase
from mini_eslint.use_cases.rule_registry import RuleRegistry


def linter(rules: dict) -> LintFilesUseCase:
    return LintFilesUseCase(
        parser=TreeSitterParser(),
        registry=RuleRegistry.builtin(),
        config=LintConfig.from_dict({"rules": rules}),
    )


ONLY_SEMI_ALWAYS = {"no-unused-vars": "off", "semi": ["warn", "always"]}
ONLY_SEMI_NEVER = {"no-unused-vars": "off", "semi": ["warn", "never"]}
ONLY_UNUSED = {"no-unused-vars": "error", "semi": "off"}


def messages(source: str, rules: dict) -> list[tuple[str, int]]:
    result = linter(rules).lint_source(source, "test.js")
    assert result.is_parsed
    return [(f.message, f.line) for f in result.findings]


class TestSemiScenarios:
    def test_missing_semicolon_on_first_line(self) -> None:
        result = linter(ONLY_SEMI_ALWAYS).lint_source("const a = 1\nconst b = 2;", "test.js")

        assert len(result.findings) == 1
        finding = result.findings[0]
        assert (finding.message, finding.line, finding.column) == ("Missing semicolon.", 1, 11)
        assert finding.severity is Severity.WARN

    def test_all_terminated(self) -> None:
        assert messages("const a = 1;\nconst b = 2;", ONLY_SEMI_ALWAYS) == []

    def test_extra_semicolon_on_first_line(self) -> None:
        assert messages("const a = 1;\nconst b = 2", ONLY_SEMI_NEVER) == [("Extra semicolon.", 1)]

    def test_never_mode_without_semicolons(self) -> None:
        assert messages("const a = 1\nconst b = 2", ONLY_SEMI_NEVER) == []

    @pytest.mark.parametrize(
        "source",
        [
            "var a = 1",
            "let a = 1",
            "foo()",
            "import { a } from 'b'",
            "export { a }",
            "export default a",
            "export * from 'm'",
            "function f() { return 1 }",
            "function f() { throw new Error('x') }",
            "for (;;) { break }",
            "for (;;) { continue }",
        ],
    )
    def test_checked_statement_kinds(self, source: str) -> None:
        assert [m for m, _ in messages(source, ONLY_SEMI_ALWAYS)] == ["Missing semicolon."]

    def test_exported_declaration_is_checked_once(self) -> None:
        assert messages("export const a = 1", ONLY_SEMI_ALWAYS) == [("Missing semicolon.", 1)]
        assert messages("export function f() {}", ONLY_SEMI_ALWAYS) == []

    @pytest.mark.parametrize(
        "source",
        [
            "for (let i = 0; i < 3; i++) { console.log(i); }",
            "for (var i = 0; i < 3; i++) {}",
            "for (const k in o) { console.log(k); }",
        ],
    )
    def test_for_headers_pass_in_always_mode(self, source: str) -> None:
        assert messages(source, ONLY_SEMI_ALWAYS) == []

    @pytest.mark.parametrize(
        "source",
        [
            "for (let i = 0; i < 3; i++) console.log(i)",
            "for (var i = 0; i < 3; i++) {}",
            "for (i = 0; i < 3; i++) {}",
        ],
    )
    def test_for_headers_pass_in_never_mode(self, source: str) -> None:
        assert messages(source, ONLY_SEMI_NEVER) == []

    def test_for_body_is_still_checked(self) -> None:
        result = linter(ONLY_SEMI_ALWAYS).lint_source("for (let i = 0; i < 3; i++) console.log(i)", "test.js")

        assert [(f.message, f.line, f.column) for f in result.findings] == [("Missing semicolon.", 1, 42)]

    def test_column_counts_characters_on_non_ascii_lines(self) -> None:
        source = "console.log('ééé')\nconst ü = 'ñ'"

        result = linter(ONLY_SEMI_ALWAYS).lint_source(source, "test.js")

        assert [(f.line, f.column) for f in result.findings] == [(1, 18), (2, 13)]


class TestNoUnusedVarsScenarios:
    def test_one_unused(self) -> None:
        result = linter(ONLY_UNUSED).lint_source("const a = 1; const b = 2; console.log(a);", "test.js")

        assert [f.message for f in result.findings] == ["'b' is declared but never used"]
        assert result.findings[0].node.kind == "variable_declarator"
        assert result.findings[0].severity is Severity.ERROR

    def test_all_used(self) -> None:
        assert messages("const a = 1; const b = 2; console.log(a, b);", ONLY_UNUSED) == []

    def test_property_name_is_not_a_use(self) -> None:
        assert messages("const log = 1; console.log(2);", ONLY_UNUSED) == [("'log' is declared but never used", 1)]

    def test_nested_scope_shares_the_flat_scope(self) -> None:
        source = "function f() { const a = 1; }\nconst a = 2;\nconsole.log(a);\nf();"

        assert messages(source, ONLY_UNUSED) == []

    def test_exported_declaration_is_reported(self) -> None:
        assert messages("export const a = 1;", ONLY_UNUSED) == [("'a' is declared but never used", 1)]

    def test_export_clause_counts_as_use(self) -> None:
        assert messages("const a = 1;\nexport { a };", ONLY_UNUSED) == []


class TestPipeline:
    def test_malformed_input_produces_no_findings(self) -> None:
        use_case = linter({})

        bad = use_case.lint_source("const a = {", "bad.js")
        good = use_case.lint_source("const a = 1\nconsole.log(a);", "good.js")

        assert not bad.is_parsed
        assert bad.findings == ()
        assert good.is_parsed
        assert [(f.rule_id, f.line) for f in good.findings] == [("semi", 1)]

    def test_default_configuration(self) -> None:
        result = linter({}).lint_source("const a = 1\nconst b = 2;\nconsole.log(b);", "test.js")

        assert [(f.rule_id, f.severity, f.line) for f in result.findings] == [
            ("no-unused-vars", Severity.ERROR, 1),
            ("semi", Severity.WARN, 1),
        ]

    def test_runs_are_deterministic(self) -> None:
        source = "const z = 1\nconst m = 2\nconst a = 3\nlet q = z"

        first = linter({}).lint_source(source, "test.js")
        second = linter({}).lint_source(source, "test.js")

        assert [f.to_dict() for f in first.findings] == [f.to_dict() for f in second.findings]
        assert [f.message for f in first.findings if f.rule_id == "no-unused-vars"] == [
            "'m' is declared but never used",
            "'a' is declared but never used",
            "'q' is declared but never used",
        ]

    def test_units_are_isolated(self) -> None:
        use_case = linter({})

        first = use_case.lint_source("const a = 1;", "a.js")
        second = use_case.lint_source("console.log(a);", "b.js")

        assert [f.file_path for f in first.findings] == ["a.js"]
        assert second.findings == ()

    def test_typescript_unit(self) -> None:
        result = LintFilesUseCase(TreeSitterParser(), RuleRegistry.builtin(), LintConfig()).lint_source(
            "const x: number = 1\nexport const y: string = 'a';", "thing.ts"
        )

        assert [(f.rule_id, f.line) for f in result.findings] == [
            ("no-unused-vars", 1),
            ("semi", 1),
            ("no-unused-vars", 2),
        ]

    def test_deeply_nested_unit_is_linted(self) -> None:
        source = "const a = " + " + ".join(["1"] * 1500) + ";\nconsole.log(a);"
        use_case = linter({})

        result = use_case.lint_source(source, "deep.js")
        after = use_case.lint_source("const b = 1", "after.js")

        assert result.is_parsed
        assert result.findings == ()
        assert result.rule_failures == ()
        assert [f.rule_id for f in after.findings] == ["no-unused-vars", "semi"]
