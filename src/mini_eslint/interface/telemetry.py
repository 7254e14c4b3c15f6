"""Console telemetry for the CLI: banner, progress steps and log routing through rich."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


class ProjectTelemetry:
    """Prints user-facing progress with rich and mirrors it to a logger."""

    def __init__(self, name: str, color: str, welcome: str, console: Optional[Console] = None) -> None:
        self.name = name
        self.color = color
        self.welcome = welcome
        self.console = console or Console(stderr=True)
        self.logger = logging.getLogger(name.lower())

    def handshake(self) -> None:
        self.console.print(f"\n[bold {self.color}]=== {self.name} ===[/] {self.welcome}\n")
        self.logger.info("%s: %s", self.name, self.welcome)

    def step(self, message: str) -> None:
        self.console.print(f"[{self.color}]>[/] {message}", highlight=False)
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{message}[/]", highlight=False)
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]{message}[/]", highlight=False)
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    @staticmethod
    def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
        """Route the `logging` module through rich. DEBUG with verbose, WARNING otherwise."""
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=verbose,
            markup=False,
        )
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(message)s",
            handlers=[handler],
            force=True,
        )
