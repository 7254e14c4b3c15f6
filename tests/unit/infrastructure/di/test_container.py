import pytest

from mini_eslint.infrastructure.di.container import MiniLintContainer
from mini_eslint.infrastructure.gateways.tree_sitter_gateway import TreeSitterParser


class TestMiniLintContainer:
    def test_initialization_registers_telemetry(self) -> None:
        container = MiniLintContainer()
        telemetry = container.get("TelemetryPort")
        assert telemetry.name == "MiniESLint"

    def test_default_registry_holds_builtin_rules(self) -> None:
        container = MiniLintContainer()
        rule_ids = [rule.meta.rule_id for rule in container.get("RuleRegistry").rules]
        assert rule_ids == ["no-unused-vars", "semi"]
        assert isinstance(container.get("Parser"), TreeSitterParser)

    def test_register_and_get_singleton(self) -> None:
        container = MiniLintContainer()
        mock_dep = {"foo": "bar"}
        container.register_singleton("MockDep", mock_dep)

        assert container.get("MockDep") is mock_dep

    def test_get_missing_dependency_raises_error(self) -> None:
        container = MiniLintContainer()
        with pytest.raises(ValueError, match=r"Dependency 'Missing' not registered\."):
            container.get("Missing")
