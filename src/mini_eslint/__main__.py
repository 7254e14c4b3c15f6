"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from mini_eslint.infrastructure.di.container import MiniLintContainer
from mini_eslint.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = MiniLintContainer()

    deps = CLIDependencies(
        telemetry=container.get("TelemetryPort"),
        parser=container.get("Parser"),
        filesystem=container.get("FileSystemGateway"),
        registry=container.get("RuleRegistry"),
        reporter=container.get("Reporter"),
        config_loader=container.get("ConfigFileLoader"),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
