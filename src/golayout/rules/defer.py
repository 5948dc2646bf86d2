from tree_sitter import Node

from golayout.core.ast import FUNCTION_NODE_TYPES, find_token, walk
from golayout.core.context import FileContext
from golayout.core.source import PositionMapper
from golayout.models import Category, Diagnostic


def collect_function_body_lines(root: Node, mapper: PositionMapper) -> frozenset[int]:
    """Lines (0-based) holding the opening brace of a function or closure body."""
    lines = set()
    for node in walk(root):
        if node.type not in FUNCTION_NODE_TYPES:
            continue
        body = node.child_by_field_name("body")
        if body is None:
            continue
        lbrace = find_token(body, "{")
        if lbrace is not None:
            lines.add(mapper.start_line(lbrace))
    return frozenset(lines)


class DeferPlacementRule:
    name = "defer-placement"
    category = Category.LINE_BREAKS
    description = "Checks that deferred statements are not preceded by an empty line."

    def check(self, context: FileContext) -> list[Diagnostic]:
        body_lines = collect_function_body_lines(context.root, context.mapper)
        return self.check_defer_statements(context, body_lines)

    def check_defer_statements(self, context: FileContext, body_lines: frozenset[int]) -> list[Diagnostic]:
        message = context.config.messages.blank_line_before_defer.format(keyword=context.config.cleanup_keyword)
        diagnostics = []
        for node in walk(context.root):
            if node.type != "defer_statement":
                continue
            previous = context.mapper.start_line(node) - 1
            if previous < 0 or not context.index.is_blank(previous):
                continue
            # first statement of a body, after the post-signature blank line
            if previous - 1 in body_lines:
                continue
            diagnostics.append(context.diagnostic(self.name, self.category, message, node.start_byte))
        return diagnostics
