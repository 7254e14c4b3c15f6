from typing import Iterable

from mini_eslint.domain.entities import Finding


class DiagnosticCollector:
    """Append-only store for the findings of one analyzed unit."""

    def __init__(self) -> None:
        self._findings: list[Finding] = []

    def add(self, finding: Finding) -> None:
        self._findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        self._findings.extend(findings)

    @property
    def findings(self) -> tuple[Finding, ...]:
        """Findings in the order they were reported."""
        return tuple(self._findings)

    def sorted(self) -> tuple[Finding, ...]:
        """Findings ordered by line, then column; report order breaks ties."""
        return tuple(sorted(self._findings, key=lambda f: f.sort_key))

    def __len__(self) -> int:
        return len(self._findings)
