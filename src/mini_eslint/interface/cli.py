"""CLI entry point for mini-eslint - Thin Controller using Typer."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from mini_eslint import __version__
from mini_eslint.domain.config import LintConfig
from mini_eslint.domain.entities import ConfigError
from mini_eslint.domain.protocols import ParserProtocol, ReporterProtocol, TelemetryPort
from mini_eslint.infrastructure.config_file_loader import ConfigFileLoader
from mini_eslint.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from mini_eslint.interface.telemetry import ProjectTelemetry
from mini_eslint.use_cases.lint_files import LintFilesUseCase
from mini_eslint.use_cases.rule_registry import RuleRegistry

EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_CONFIG_ERROR = 2


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    telemetry: TelemetryPort
    parser: ParserProtocol
    filesystem: FileSystemGateway
    registry: RuleRegistry
    reporter: ReporterProtocol
    config_loader: ConfigFileLoader


class CLIAppFactory:
    """Creates the Typer app. No top-level functions."""

    @staticmethod
    def load_config(deps: CLIDependencies, config_path: Optional[Path]) -> LintConfig:
        """Explicit --config path, else discovery from the working directory upwards."""
        if config_path is not None:
            return LintConfig.from_dict(deps.config_loader.load_file(config_path))
        return LintConfig.from_dict(deps.config_loader.load_config_from_fs())

    @staticmethod
    def resolve_patterns(deps: CLIDependencies, files: Optional[list[str]]) -> list[str]:
        if files:
            return list(files)
        patterns = deps.filesystem.default_patterns()
        if not patterns[0].startswith("src/"):
            deps.telemetry.warning(
                "Note: 'src' directory does not exist, checking all JS/TS files in the current directory"
            )
        return patterns

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="mini-eslint",
            help="A lightweight JavaScript/TypeScript linter.",
            add_completion=False,
        )

        def show_version(value: bool) -> None:
            if value:
                typer.echo(__version__)
                raise typer.Exit()

        @app.command()
        def lint(
            files: Optional[list[str]] = typer.Argument(  # noqa: B008
                None, help='Files or glob patterns to lint (default: "src/**/*.{js,ts,jsx,tsx}")'
            ),
            config: Optional[Path] = typer.Option(  # noqa: B008
                None, "--config", "-c", help='Config file (default: ".minlintrc.json" or pyproject.toml)'
            ),
            verbose: bool = typer.Option(False, "--verbose", help="Show debug logging"),
            version: bool = typer.Option(
                False, "--version", "-v", callback=show_version, is_eager=True, help="Show the version"
            ),
        ) -> None:
            """Lint the given files and print the findings."""
            ProjectTelemetry.configure_logging(verbose)
            deps.telemetry.handshake()
            try:
                lint_config = CLIAppFactory.load_config(deps, config)
            except ConfigError as exc:
                deps.telemetry.error(str(exc))
                raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

            use_case = LintFilesUseCase(
                parser=deps.parser,
                registry=deps.registry,
                config=lint_config,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
            )
            results = use_case.execute(CLIAppFactory.resolve_patterns(deps, files))
            deps.reporter.report(results)

            if any(result.has_errors() for result in results):
                raise typer.Exit(code=EXIT_LINT_ERRORS)
            raise typer.Exit(code=EXIT_OK)

        return app
