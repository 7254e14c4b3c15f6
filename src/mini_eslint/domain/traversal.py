"""Depth-first walker dispatching enter/exit events to a rule listener."""

from typing import TYPE_CHECKING, Union

from mini_eslint.domain.nodes import Node

if TYPE_CHECKING:
    from mini_eslint.domain.rules import Listener


def traverse(root: Union[Node, object], listener: "Listener") -> None:
    """
    Walk the tree under `root`, calling the listener's handlers.

    A node's enter handler runs before any of its children are visited and
    its exit handler runs after every descendant has been entered and
    exited. Children are visited in field order. Values that are not
    nodes end the branch. The tree must be acyclic.

    The walk keeps its own stack, so tree depth is not bounded by the
    interpreter's recursion limit.
    """
    if not isinstance(root, Node):
        return

    # (node, leaving) frames; a node's exit frame sits below its children
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, leaving = stack.pop()
        if leaving:
            leave = listener.exit_handler(node.kind) if node.kind else None
            if leave is not None:
                leave(node)
            continue

        if node.kind:
            enter = listener.enter_handler(node.kind)
            if enter is not None:
                enter(node)

        stack.append((node, True))
        stack.extend((child, False) for child in reversed(list(node.children())))
