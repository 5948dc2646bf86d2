from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Node, Tree
from tree_sitter_language_pack import get_parser

BLOCK_NODE_TYPES = frozenset(
    {
        "block",
        "expression_switch_statement",
        "type_switch_statement",
        "select_statement",
    }
)
FUNCTION_NODE_TYPES = frozenset({"function_declaration", "method_declaration", "func_literal"})


class SourceReadError(Exception):
    """A source file could not be read."""


@dataclass(frozen=True)
class CommentGroup:
    comments: tuple[Node, ...]
    text: str

    @property
    def start_byte(self) -> int:
        return self.comments[0].start_byte

    @property
    def end_byte(self) -> int:
        return self.comments[-1].end_byte


def parse_go_source(source_bytes: bytes) -> Tree:
    parser = get_parser("go")
    return parser.parse(source_bytes)


def read_source_file(path: str | Path) -> bytes:
    file_path = Path(path)
    try:
        return file_path.read_bytes()
    except OSError as exc:
        raise SourceReadError(f"Error reading file {path}: {exc}") from exc


def walk(root: Node) -> Iterator[Node]:
    """Yield ``root`` and all its descendants in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def find_token(node: Node, token: str) -> Node | None:
    """First direct child token of the given type, ignoring parser-inserted ones."""
    for child in node.children:
        if child.type == token and not child.is_missing:
            return child
    return None


def find_last_token(node: Node, token: str) -> Node | None:
    for child in reversed(node.children):
        if child.type == token and not child.is_missing:
            return child
    return None


def block_statements(block: Node) -> list[Node]:
    """Statements directly inside a block, comments excluded."""
    statements: list[Node] = []
    for child in block.named_children:
        if child.type == "statement_list":
            statements.extend(c for c in child.named_children if c.type != "comment")
        elif child.type != "comment":
            statements.append(child)
    return statements


def collect_comments(root: Node) -> list[Node]:
    return [node for node in walk(root) if node.type == "comment"]


def group_comments(comments: list[Node], source: bytes) -> list[CommentGroup]:
    """Merge comments separated only by whitespace holding at most one line break."""
    groups: list[list[Node]] = []
    for comment in comments:
        if groups:
            previous = groups[-1][-1]
            gap = source[previous.end_byte : comment.start_byte]
            if not gap.strip() and gap.count(b"\n") <= 1:
                groups[-1].append(comment)
                continue
        groups.append([comment])

    return [
        CommentGroup(
            comments=tuple(group),
            text="".join(node_text(c, source) for c in group),
        )
        for group in groups
    ]
