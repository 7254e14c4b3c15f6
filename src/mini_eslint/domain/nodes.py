"""Generic, self-describing syntax tree produced by the parser gateway."""

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Union

Scalar = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Position:
    """A point in the source: 1-based line, 0-based column."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    start: Position
    end: Position


# Nodes compare by identity so that rule state can key on them.
@dataclass(frozen=True, eq=False)
class Node:
    """
    One node of an analyzed unit's tree.

    `kind` is the discriminator, `span` the (start, end) offsets into the
    UTF-8 encoded source and `loc` the line/column location. Everything
    else lives in `fields`, an ordered mapping whose values are a child
    Node, a tuple of Nodes, or a scalar leaf. Field order follows the
    order in which the children occur in the source.

    When a field repeats after another field has started (e.g. decorators
    interleaved with class members), `fields` cannot keep that order on its
    own; `source_order` then lists every child in document order and
    `children()` follows it instead.
    """

    kind: str
    span: tuple[int, int]
    loc: SourceLocation
    fields: Mapping[str, Union["Node", tuple["Node", ...], Scalar]] = field(default_factory=dict)
    source_order: tuple["Node", ...] = ()

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    def get(self, name: str) -> Union["Node", tuple["Node", ...], Scalar]:
        """Return a field value, or None when the node has no such field."""
        return self.fields.get(name)

    def child(self, name: str) -> Optional["Node"]:
        """Return a singular child node, or None when the field is absent or not a Node."""
        value = self.fields.get(name)
        return value if isinstance(value, Node) else None

    @property
    def text(self) -> Optional[str]:
        value = self.fields.get("text")
        return value if isinstance(value, str) else None

    def children(self) -> Iterator["Node"]:
        """Yield child nodes in field order, sequence elements in sequence order."""
        if self.source_order:
            yield from self.source_order
            return
        for value in self.fields.values():
            if isinstance(value, (tuple, list)):
                for item in value:
                    if isinstance(item, Node):
                        yield item
            elif isinstance(value, Node):
                yield value

    def __repr__(self) -> str:
        return f"Node({self.kind!r}, span={self.span!r})"
