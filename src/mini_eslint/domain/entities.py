from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from mini_eslint.domain.nodes import Node


class Severity(Enum):
    """Rule severity. OFF removes the rule from the run entirely."""
    OFF = "off"
    WARN = "warn"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Union[str, int, "Severity"]) -> "Severity":
        """Parse "off"/"warn"/"error" (also "warning") or the numeric levels 0/1/2."""
        if isinstance(value, Severity):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid severity: {value!r}")
        if isinstance(value, int):
            levels = {0: cls.OFF, 1: cls.WARN, 2: cls.ERROR}
            if value in levels:
                return levels[value]
            raise ValueError(f"Invalid severity: {value!r}")
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "warning":
                return cls.WARN
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError(f"Invalid severity: {value!r}")


class ParseError(Exception):
    """The parser rejected a unit's source text."""

    def __init__(self, message: str, line: int = 0, column: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line:
            return f"{self.message} ({self.line}:{self.column})"
        return self.message


class ConfigError(Exception):
    """An explicitly requested configuration file could not be used."""


@dataclass(frozen=True)
class Finding:
    """One diagnostic reported by a rule."""
    rule_id: str
    message: str
    severity: Severity
    line: int
    column: int
    node: Optional[Node] = field(default=None, compare=False, repr=False)
    file_path: Optional[str] = None

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.line, self.column)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "ruleId": self.rule_id,
            "message": self.message,
            "severity": self.severity.value,
            "line": self.line,
            "column": self.column,
            "filePath": self.file_path,
        }


@dataclass(frozen=True)
class RuleFailure:
    """A rule crashed while analyzing a unit. Internal error, not a finding."""
    rule_id: str
    file_path: str
    error: str


@dataclass(frozen=True)
class LintResult:
    """Outcome of analyzing one unit."""
    file_path: str
    findings: tuple[Finding, ...] = ()
    parse_error: Optional[ParseError] = field(default=None, compare=False)
    rule_failures: tuple[RuleFailure, ...] = ()

    @property
    def is_parsed(self) -> bool:
        return self.parse_error is None

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.severity is Severity.WARN)

    def has_errors(self) -> bool:
        """A failed parse counts as an error, a clean unit with zero findings does not."""
        return not self.is_parsed or self.error_count > 0
