"""Statement terminator rule (semi)."""

from typing import ClassVar

from mini_eslint.domain.entities import Severity
from mini_eslint.domain.nodes import Node
from mini_eslint.domain.rules import Listener, RuleContext, RuleMeta

ALWAYS = "always"
NEVER = "never"

STATEMENT_KINDS: tuple[str, ...] = (
    "lexical_declaration",    # const a = 1;
    "variable_declaration",   # var a = 1;
    "expression_statement",   # console.log();
    "return_statement",
    "throw_statement",
    "break_statement",
    "continue_statement",
    "import_statement",       # import { a } from 'b';
    "export_statement",       # export { a }; export default a; export * from 'm';
)

LOOP_KIND = "for_statement"
# Header parts whose terminator belongs to the loop syntax, not to a statement
LOOP_HEADER_FIELDS: tuple[str, ...] = ("initializer", "condition")


class SemiRule:
    """Requires or forbids a semicolon at the end of statements."""

    meta: ClassVar[RuleMeta] = RuleMeta(
        rule_id="semi",
        description="Require or disallow semicolons instead of ASI",
        default_severity=Severity.WARN,
        schema=(ALWAYS, NEVER),
        default_options=(ALWAYS,),
    )

    def create(self, context: RuleContext) -> Listener:
        mode = context.options[0] if context.options else ALWAYS
        required = mode != NEVER
        source = context.source_code
        loop_headers: set[Node] = set()

        def enter_loop(node: Node) -> None:
            for name in LOOP_HEADER_FIELDS:
                part = node.child(name)
                if part is not None:
                    loop_headers.add(part)

        def check(node: Node) -> None:
            if node in loop_headers:
                return
            if node.kind == "export_statement" and node.child("declaration") is not None:
                # the wrapped declaration is checked on its own
                return
            has_semicolon = source.char_before(node.end) == ";"
            end = node.loc.end
            if required and not has_semicolon:
                context.report("Missing semicolon.", node=node, line=end.line, column=end.column)
            elif not required and has_semicolon:
                context.report("Extra semicolon.", node=node, line=end.line, column=end.column)

        listener = Listener()
        listener.on(LOOP_KIND, enter_loop)
        for kind in STATEMENT_KINDS:
            listener.on(kind, check)
        return listener
