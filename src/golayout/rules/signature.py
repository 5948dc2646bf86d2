from tree_sitter import Node

from golayout.core.ast import block_statements, find_last_token, find_token, walk
from golayout.core.context import FileContext
from golayout.models import Category, Diagnostic

_FUNCTION_DECLARATIONS = frozenset({"function_declaration", "method_declaration"})


def _is_multiline(parameters: Node, context: FileContext) -> bool:
    opening = find_token(parameters, "(")
    closing = find_last_token(parameters, ")")
    if opening is None or closing is None:
        return False
    return context.mapper.start_line(opening) < context.mapper.start_line(closing)


def _first_comment_between(context: FileContext, after_line: int, before_line: int) -> Node | None:
    for comment in context.comments:
        line = context.mapper.start_line(comment)
        if after_line < line < before_line:
            return comment
    return None


class SignatureGapRule:
    name = "multiline-signature"
    category = Category.LINE_BREAKS
    description = "Checks for line breaks after multiline function signatures."

    def check(self, context: FileContext) -> list[Diagnostic]:
        diagnostics = []
        for node in walk(context.root):
            if node.type in _FUNCTION_DECLARATIONS:
                diagnostic = self._check_function(context, node)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)
        return diagnostics

    def _check_function(self, context: FileContext, function: Node) -> Diagnostic | None:
        parameters = function.child_by_field_name("parameters")
        body = function.child_by_field_name("body")
        if parameters is None or body is None or not _is_multiline(parameters, context):
            return None

        lbrace = find_token(body, "{")
        rbrace = find_last_token(body, "}")
        if lbrace is None or rbrace is None:
            return None

        statements = block_statements(body)
        first = statements[0] if statements else rbrace
        brace_line = context.mapper.start_line(lbrace)
        content_line = context.mapper.start_line(first)
        comment = _first_comment_between(context, brace_line, content_line)
        if comment is not None:
            content_line = context.mapper.start_line(comment)

        gap = content_line - brace_line
        if gap == 2:
            return None

        messages = context.config.messages
        if gap > 2:
            message = messages.signature_gap_too_large.format(excess=gap - 1)
        else:
            message = messages.signature_gap_required
        return context.diagnostic(self.name, self.category, message, lbrace.start_byte, first.start_byte)
