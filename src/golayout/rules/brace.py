import re
from collections import defaultdict

from tree_sitter import Node

from golayout.core.ast import BLOCK_NODE_TYPES, find_last_token, find_token, walk
from golayout.core.context import FileContext
from golayout.models import Category, Diagnostic

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/")
_CONTINUATION_ENDINGS = (",", ")", "}", "{")
_CLOSING_TOKENS = ("}", ")", "]")
_CLAUSE_LABEL = re.compile(r"^(case\b|default\s*:)")


def _trailer(context: FileContext, rbrace: Node) -> str:
    """Code after a closing brace on its line, comments removed."""
    rest = _BLOCK_COMMENT.sub("", context.index.rest_of_line(rbrace.end_byte))
    comment_at = rest.find("//")
    if comment_at != -1:
        rest = rest[:comment_at]
    return rest.strip()


class BraceLineRule:
    name = "line-breaks"
    category = Category.LINE_BREAKS
    description = "Checks for line breaks around code block closures."

    def check(self, context: FileContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        closing_by_line: dict[int, list[Node]] = defaultdict(list)

        for node in walk(context.root):
            if node.type not in BLOCK_NODE_TYPES:
                continue
            lbrace = find_token(node, "{")
            rbrace = find_last_token(node, "}")
            if lbrace is None or rbrace is None:
                continue

            diagnostics.extend(self._check_no_blank_line_before_close(context, lbrace, rbrace))
            diagnostics.extend(self._check_line_break_after_close(context, rbrace))
            closing_by_line[context.mapper.start_line(rbrace)].append(rbrace)

        messages = context.config.messages
        for line in sorted(closing_by_line):
            braces = closing_by_line[line]
            if len(braces) > 1:
                first = min(braces, key=lambda b: b.start_byte)
                diagnostics.append(
                    context.diagnostic(self.name, self.category, messages.multiple_closing_braces, first.start_byte)
                )
        return diagnostics

    def _check_no_blank_line_before_close(self, context: FileContext, lbrace: Node, rbrace: Node) -> list[Diagnostic]:
        close_line = context.mapper.start_line(rbrace)
        if close_line - context.mapper.start_line(lbrace) < 2:
            return []
        if not context.index.is_blank(close_line - 1):
            return []
        message = context.config.messages.blank_line_before_close
        return [context.diagnostic(self.name, self.category, message, rbrace.start_byte)]

    def _check_line_break_after_close(self, context: FileContext, rbrace: Node) -> list[Diagnostic]:
        next_line = context.mapper.start_line(rbrace) + 1
        if next_line >= len(context.index):
            return []

        following = context.index.trimmed(next_line)
        if not following:
            return []
        if following.startswith(context.config.cleanup_keyword):
            return []
        if following.startswith(_CLOSING_TOKENS) or _CLAUSE_LABEL.match(following):
            return []
        if _trailer(context, rbrace).endswith(_CONTINUATION_ENDINGS):
            return []

        message = context.config.messages.missing_line_break_after_close
        return [context.diagnostic(self.name, self.category, message, rbrace.start_byte)]
