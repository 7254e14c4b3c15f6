"""Domain models for rules: metadata, listeners and the reporting context."""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from mini_eslint.domain.entities import Finding, Severity
from mini_eslint.domain.nodes import Node
from mini_eslint.domain.source_code import SourceCode

Handler = Callable[[Node], None]

EXIT_SUFFIX = ":exit"


class Listener:
    """
    Dispatch table from node kind to handler, one table per event phase.

    Event keys are `"<kind>"` (entering a node) and `"<kind>:exit"` (after
    all of the node's children have been visited). A key can be bound once.
    """

    def __init__(self) -> None:
        self._enter: dict[str, Handler] = {}
        self._exit: dict[str, Handler] = {}

    @classmethod
    def from_mapping(cls, handlers: Mapping[str, Handler]) -> "Listener":
        """Build a listener from an event-key mapping such as {"program:exit": fn}."""
        listener = cls()
        for key, handler in handlers.items():
            if key.endswith(EXIT_SUFFIX):
                listener.on_exit(key[: -len(EXIT_SUFFIX)], handler)
            else:
                listener.on(key, handler)
        return listener

    def on(self, kind: str, handler: Handler) -> "Listener":
        self._bind(self._enter, kind, handler, kind)
        return self

    def on_exit(self, kind: str, handler: Handler) -> "Listener":
        self._bind(self._exit, kind, handler, kind + EXIT_SUFFIX)
        return self

    def enter_handler(self, kind: str) -> Optional[Handler]:
        return self._enter.get(kind)

    def exit_handler(self, kind: str) -> Optional[Handler]:
        return self._exit.get(kind)

    @property
    def event_keys(self) -> list[str]:
        return list(self._enter) + [kind + EXIT_SUFFIX for kind in self._exit]

    @staticmethod
    def _bind(table: dict[str, Handler], kind: str, handler: Handler, key: str) -> None:
        if not kind:
            raise ValueError("Event key needs a node kind.")
        if not callable(handler):
            raise TypeError(f"Handler for '{key}' is not callable.")
        if kind in table:
            raise ValueError(f"Duplicate handler for event '{key}'.")
        table[kind] = handler


@dataclass(frozen=True)
class RuleMeta:
    """Declared metadata of a rule."""

    rule_id: str
    description: str
    default_severity: Severity = Severity.ERROR
    schema: tuple[str, ...] = ()
    default_options: tuple[Any, ...] = ()


class RuleContext:
    """What a rule sees while analyzing one unit."""

    def __init__(
        self,
        rule_id: str,
        severity: Severity,
        source_code: SourceCode,
        options: Sequence[Any],
        file_path: str,
        sink: Callable[[Finding], None],
    ) -> None:
        self.rule_id = rule_id
        self.severity = severity
        self.source_code = source_code
        self.options = tuple(options)
        self.file_path = file_path
        self._sink = sink

    def report(
        self,
        message: str,
        node: Optional[Node] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> Finding:
        """Report a finding at `node`'s start, or at an explicit line/column."""
        if line is None or column is None:
            if node is None:
                raise ValueError("A finding needs a node or an explicit line and column.")
            line = node.loc.start.line if line is None else line
            column = node.loc.start.column if column is None else column
        finding = Finding(
            rule_id=self.rule_id,
            message=message,
            severity=self.severity,
            line=line,
            column=column,
            node=node,
            file_path=self.file_path,
        )
        self._sink(finding)
        return finding


class Rule(Protocol):
    """A pluggable check: metadata plus a factory for fresh per-unit listeners."""

    meta: RuleMeta

    def create(self, context: RuleContext) -> Listener:
        """Return a new listener, with new state, bound to `context`."""
        ...
