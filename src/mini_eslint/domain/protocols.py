from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from mini_eslint.domain.entities import LintResult
    from mini_eslint.domain.nodes import Node


@dataclass(frozen=True)
class ParserOptions:
    """Options handed to the parser for one unit."""

    language: str = "javascript"  # "javascript", "typescript" or "tsx"
    source_type: str = "module"
    jsx: bool = False


class ParserProtocol(Protocol):
    def parse(self, source: str, options: ParserOptions) -> "Node":
        """Parse source text into a tree. Raises ParseError on malformed input."""
        ...

    def options_for(self, file_path: str) -> ParserOptions:
        """Pick parser options from a file name."""
        ...


class FileSystemProtocol(Protocol):
    def expand_patterns(self, patterns: Sequence[str]) -> list[str]:
        """Expand glob patterns into a de-duplicated, ordered list of files."""
        ...

    def read_text(self, path: str) -> str:
        ...

    def exists(self, path: str) -> bool:
        ...


class ReporterProtocol(Protocol):
    def report(self, results: Sequence["LintResult"]) -> None:
        """Render lint results for the user."""
        ...


class TelemetryPort(Protocol):
    def handshake(self) -> None:
        ...

    def step(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def debug(self, message: str) -> None:
        ...
