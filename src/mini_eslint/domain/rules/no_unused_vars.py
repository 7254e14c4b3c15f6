"""Unused variable rule (no-unused-vars)."""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from mini_eslint.domain.entities import Severity
from mini_eslint.domain.nodes import Node
from mini_eslint.domain.rules import Listener, RuleContext, RuleMeta

DECLARATOR_KIND = "variable_declarator"
REFERENCE_KINDS: tuple[str, ...] = ("identifier", "shorthand_property_identifier")
UNIT_KIND = "program"


@dataclass
class UnusedVarsState:
    """
    Flat, whole-unit bookkeeping of declared and referenced names.

    There is a single scope per unit: a name declared in a nested block is
    the same binding as an outer declaration of that name, and exported
    declarations are not exempt.
    """

    # dicts keep declaration order so reports come out deterministically
    declared: dict[str, Node] = field(default_factory=dict)
    shadow_guard: set[str] = field(default_factory=set)
    used: set[str] = field(default_factory=set)

    def declare(self, name: str, node: Node) -> None:
        """Record a declaration and guard the name against its own identifier."""
        self.declared[name] = node
        self.shadow_guard.add(name)

    def release(self, name: str) -> None:
        self.shadow_guard.discard(name)

    def reference(self, name: str) -> None:
        if name not in self.shadow_guard:
            self.used.add(name)

    def unused(self) -> list[tuple[str, Node]]:
        return [(name, node) for name, node in self.declared.items() if name not in self.used]


class NoUnusedVarsRule:
    """Reports variables that are declared but never referenced."""

    meta: ClassVar[RuleMeta] = RuleMeta(
        rule_id="no-unused-vars",
        description="Disallow unused variables",
        default_severity=Severity.ERROR,
    )

    def create(self, context: RuleContext) -> Listener:
        state = UnusedVarsState()

        def declared_name(node: Node) -> Optional[str]:
            target = node.child("name")
            if target is None or target.kind != "identifier":
                # destructuring patterns declare nothing here
                return None
            return target.text

        def enter_declarator(node: Node) -> None:
            name = declared_name(node)
            if name:
                state.declare(name, node)

        def exit_declarator(node: Node) -> None:
            name = declared_name(node)
            if name:
                state.release(name)

        def enter_reference(node: Node) -> None:
            if node.text:
                state.reference(node.text)

        def exit_unit(node: Node) -> None:
            for name, declaration in state.unused():
                context.report(f"'{name}' is declared but never used", node=declaration)

        listener = Listener()
        listener.on(DECLARATOR_KIND, enter_declarator)
        listener.on_exit(DECLARATOR_KIND, exit_declarator)
        for kind in REFERENCE_KINDS:
            listener.on(kind, enter_reference)
        listener.on_exit(UNIT_KIND, exit_unit)
        return listener
