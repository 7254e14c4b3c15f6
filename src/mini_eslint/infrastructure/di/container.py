from typing import Any

from mini_eslint.infrastructure.config_file_loader import ConfigFileLoader
from mini_eslint.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from mini_eslint.infrastructure.gateways.tree_sitter_gateway import TreeSitterParser
from mini_eslint.interface.reporters import StylishReporter
from mini_eslint.interface.telemetry import ProjectTelemetry
from mini_eslint.use_cases.rule_registry import RuleRegistry


class MiniLintContainer:
    """Dependency Injection Container for mini-eslint. Built once at the composition root."""

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        self.register_singleton("TelemetryPort", ProjectTelemetry("MiniESLint", "cyan", "lightweight code checker"))
        self.register_singleton("Parser", TreeSitterParser())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("RuleRegistry", RuleRegistry.builtin())
        self.register_singleton("Reporter", StylishReporter())
        self.register_singleton("ConfigFileLoader", ConfigFileLoader())

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")
