"""Source code parser using tree-sitter, converting its trees into domain nodes."""

from pathlib import Path
from typing import Optional, Union

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser
from tree_sitter import Node as TSNode

from mini_eslint.domain.entities import ParseError
from mini_eslint.domain.nodes import Node, Position, SourceLocation
from mini_eslint.domain.protocols import ParserOptions

_DEFAULT_ENCODING = "utf-8"

# Field under which children without a grammar field name are collected
_UNNAMED_FIELD = "children"

# Line index offset (tree-sitter uses 0-based rows, findings use 1-based lines)
_LINE_INDEX_OFFSET = 1

_LANGUAGE_REGISTRY: dict[str, Language] = {}
_LANGUAGE_REGISTRY["javascript"] = Language(tree_sitter_javascript.language())
_LANGUAGE_REGISTRY["typescript"] = Language(tree_sitter_typescript.language_typescript())
_LANGUAGE_REGISTRY["tsx"] = Language(tree_sitter_typescript.language_tsx())

_EXTENSIONS: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


class TreeSitterParser:
    """Infrastructure implementation of ParserProtocol backed by tree-sitter grammars."""

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    def options_for(self, file_path: str) -> ParserOptions:
        """Choose the grammar from the file extension; unknown extensions parse as JavaScript."""
        extension = Path(file_path).suffix.lower()
        language = _EXTENSIONS.get(extension, "javascript")
        return ParserOptions(language=language, jsx=extension in (".jsx", ".tsx"))

    def parse(self, source: str, options: Optional[ParserOptions] = None) -> Node:
        """
        Parse source text into a domain tree.

        Args:
            source: Source text of one unit
            options: Parser options (default: JavaScript module)

        Returns:
            The root node, of kind "program"

        Raises:
            ParseError: If the grammar is unknown or the source has syntax errors

        """
        options = options or ParserOptions()
        data = source.encode(_DEFAULT_ENCODING)
        tree = self._get_parser(options.language).parse(data)
        root = tree.root_node
        columns = ColumnIndex(data)
        if root.has_error:
            raise self._syntax_error(root, columns)
        return self._convert(root, data, columns)

    def _get_parser(self, language: str) -> Parser:
        if language not in _LANGUAGE_REGISTRY:
            raise ParseError(
                f"Language '{language}' not supported. Available: {list(_LANGUAGE_REGISTRY)}"
            )
        if language not in self._parsers:
            parser = Parser()
            parser.language = _LANGUAGE_REGISTRY[language]
            self._parsers[language] = parser
        return self._parsers[language]

    def _convert(self, root: TSNode, data: bytes, columns: "ColumnIndex") -> Node:
        """Convert bottom-up with an explicit stack so tree depth is not bounded by recursion."""
        # frames: (tree-sitter node, its named (field, child) pairs, children converted so far)
        stack: list[tuple[TSNode, list[tuple[str, TSNode]], list[Node]]] = [
            (root, self._named_children(root), [])
        ]
        while True:
            ts_node, pending, converted = stack[-1]
            if len(converted) < len(pending):
                child = pending[len(converted)][1]
                stack.append((child, self._named_children(child), []))
                continue

            stack.pop()
            keyed = [(key, node) for (key, _), node in zip(pending, converted)]
            node = self._build_node(ts_node, keyed, data, columns)
            if not stack:
                return node
            stack[-1][2].append(node)

    @staticmethod
    def _named_children(ts_node: TSNode) -> list[tuple[str, TSNode]]:
        children: list[tuple[str, TSNode]] = []
        cursor = ts_node.walk()
        if cursor.goto_first_child():
            while True:
                child = cursor.node
                if child is not None and child.is_named:
                    children.append((cursor.field_name or _UNNAMED_FIELD, child))
                if not cursor.goto_next_sibling():
                    break
        return children

    def _build_node(
        self, ts_node: TSNode, children: list[tuple[str, Node]], data: bytes, columns: "ColumnIndex"
    ) -> Node:
        fields, source_order = self.group_fields(children)
        if not children:
            fields["text"] = data[ts_node.start_byte:ts_node.end_byte].decode(
                _DEFAULT_ENCODING, errors="replace"
            )
        return Node(
            kind=ts_node.type,
            span=(ts_node.start_byte, ts_node.end_byte),
            loc=SourceLocation(
                start=columns.position(ts_node.start_point),
                end=columns.position(ts_node.end_point),
            ),
            fields=fields,
            source_order=source_order,
        )

    @staticmethod
    def group_fields(
        children: list[tuple[str, Node]],
    ) -> tuple[dict[str, Union[Node, tuple[Node, ...], str]], tuple[Node, ...]]:
        """
        Group (field name, child) pairs into node fields.

        Unnamed children and repeated fields become tuples. When a field
        repeats after a different field has started, the grouped mapping
        no longer matches document order, so the children are also returned
        in their original order.
        """
        grouped: dict[str, list[Node]] = {}
        interleaved = False
        previous: Optional[str] = None
        for key, child in children:
            if key in grouped and key != previous:
                interleaved = True
            grouped.setdefault(key, []).append(child)
            previous = key

        fields: dict[str, Union[Node, tuple[Node, ...], str]] = {}
        for key, nodes in grouped.items():
            if key == _UNNAMED_FIELD or len(nodes) > 1:
                fields[key] = tuple(nodes)
            else:
                fields[key] = nodes[0]
        source_order = tuple(child for _, child in children) if interleaved else ()
        return fields, source_order

    def _syntax_error(self, root: TSNode, columns: "ColumnIndex") -> ParseError:
        culprit = self._first_error(root) or root
        position = columns.position(culprit.start_point)
        if culprit.is_missing:
            return ParseError(f"Missing '{culprit.type}'", position.line, position.column)
        return ParseError("Unexpected token", position.line, position.column)

    @staticmethod
    def _first_error(root: TSNode) -> Optional[TSNode]:
        """First ERROR or MISSING node in document order."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node
            stack.extend(
                reversed([child for child in node.children if child.has_error or child.is_missing])
            )
        return None


class ColumnIndex:
    """
    Maps tree-sitter points to finding positions.

    tree-sitter reports 0-based rows and byte columns; findings use 1-based
    lines and character columns.
    """

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._line_starts = [0]
        newline = data.find(b"\n")
        while newline != -1:
            self._line_starts.append(newline + 1)
            newline = data.find(b"\n", newline + 1)

    def position(self, point: tuple[int, int]) -> Position:
        row, byte_column = point[0], point[1]
        line_start = self._line_starts[min(row, len(self._line_starts) - 1)]
        prefix = self._data[line_start:line_start + byte_column]
        column = byte_column if prefix.isascii() else len(prefix.decode(_DEFAULT_ENCODING, errors="replace"))
        return Position(line=row + _LINE_INDEX_OFFSET, column=column)
