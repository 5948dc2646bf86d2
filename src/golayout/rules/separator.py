import logging
from bisect import bisect_left

from tree_sitter import Node

from golayout.core.ast import CommentGroup, walk
from golayout.core.constructors import returns_struct
from golayout.core.context import FileContext
from golayout.core.declarations import Declaration, DeclarationKind
from golayout.models import Category, Diagnostic

logger = logging.getLogger(__name__)

# Kinds that may fill a group on their own without further checks.
_STANDALONE_KINDS = frozenset(
    {
        DeclarationKind.IMPORT,
        DeclarationKind.CONST,
        DeclarationKind.VAR,
        DeclarationKind.TYPE_ALIAS,
        DeclarationKind.INTERFACE,
    }
)
_STRUCT_GROUP_KINDS = frozenset({DeclarationKind.FUNC, DeclarationKind.STRUCT})


def _import_specs(root: Node) -> list[Node]:
    specs = []
    for child in root.named_children:
        if child.type == "import_declaration":
            specs.extend(n for n in walk(child) if n.type == "import_spec")
    return sorted(specs, key=lambda n: (n.start_byte, n.end_byte))


def _package_clause(root: Node) -> Node | None:
    return next((c for c in root.named_children if c.type == "package_clause"), None)


def partition(declarations: list[Declaration], separators: list[CommentGroup]) -> list[list[Declaration]]:
    """Split declarations into ``len(separators) + 1`` buckets by position.

    Bucket ``i`` holds the declarations starting after exactly ``i`` separators have started.
    """
    starts = [separator.start_byte for separator in separators]
    buckets: list[list[Declaration]] = [[] for _ in range(len(separators) + 1)]
    for declaration in declarations:
        buckets[bisect_left(starts, declaration.start_byte)].append(declaration)
    return buckets


class SeparatorAnalysis:
    def __init__(self, context: FileContext, rule: str) -> None:
        self.context = context
        self.rule = rule
        self.messages = context.config.messages
        token = context.config.separator
        self.separators = sorted(
            (group for group in context.comment_groups if token in group.text),
            key=lambda g: (g.start_byte, g.end_byte),
        )
        self.declarations = context.declarations
        self.imports = _import_specs(context.root)
        self.package = _package_clause(context.root)
        self.diagnostics: list[Diagnostic] = []

    def run(self) -> list[Diagnostic]:
        self.forbidden_separator_at_the_end()
        self.forbidden_separator_before_imports()
        self.forbidden_multiline_separators()
        self.forbidden_separator_over_code()
        self.empty_lines_around_separator()
        self.no_declarations_between_two_separators()
        self.separator_after_package_without_imports()
        self.separator_groups_contain_correct_entities()
        return self.diagnostics

    def report(self, message: str, start: int, end: int | None = None) -> None:
        self.diagnostics.append(self.context.diagnostic(self.rule, Category.SEPARATOR, message, start, end))

    def report_declaration(self, message: str, declaration: Declaration) -> None:
        self.report(message, declaration.start_byte, declaration.end_byte)

    def report_separator(self, message: str, separator: CommentGroup) -> None:
        self.report(message, separator.start_byte, separator.end_byte)

    def _line(self, offset: int) -> int:
        return self.context.mapper.at(offset).line

    # -- placement ----------------------------------------------------------

    def forbidden_separator_at_the_end(self) -> None:
        if not self.separators or not self.declarations:
            return
        last_separator = self.separators[-1]
        last_end = max(d.end_byte for d in self.declarations)
        if last_separator.start_byte > last_end:
            self.report_separator(self.messages.separator_at_end, last_separator)

    def forbidden_separator_before_imports(self) -> None:
        if not self.separators:
            return
        first = self.separators[0]
        if not self.imports:
            if self.package is not None and first.end_byte <= self.package.start_byte:
                self.report_separator(self.messages.separator_before_package, first)
            return
        if first.start_byte < self.imports[-1].end_byte:
            self.report_separator(self.messages.separator_before_imports, first)

    def forbidden_multiline_separators(self) -> None:
        for separator in self.separators:
            if self._line(separator.start_byte) != self._line(separator.end_byte):
                self.report_separator(self.messages.separator_multiline, separator)

    def forbidden_separator_over_code(self) -> None:
        for separator in self.separators:
            first_line = self._line(separator.start_byte)
            last_line = self._line(separator.end_byte)
            for declaration in self.declarations:
                if first_line > self._line(declaration.end_byte):
                    continue
                if last_line < self._line(declaration.start_byte):
                    continue
                self.report_separator(self.messages.separator_over_code, separator)

    # -- spacing ------------------------------------------------------------

    def empty_lines_around_separator(self) -> None:
        index = self.context.index
        last_index = len(index) - 1
        for separator in self.separators:
            first_line = self._line(separator.start_byte)
            last_line = self._line(separator.end_byte)

            after = 0
            while index.is_blank(last_line + 1 + after):
                after += 1
            before = 0
            while index.is_blank(first_line - 1 - before):
                before += 1

            if before == 1 and after == 1:
                continue
            if after == 0 and last_line == last_index and before == 1:
                continue
            if before == 0 and first_line == 0 and after == 1:
                continue
            self.report_separator(self.messages.separator_spacing, separator)

    def no_declarations_between_two_separators(self) -> None:
        for current, following in zip(self.separators, self.separators[1:]):
            if any(
                d.start_byte > current.end_byte and d.end_byte < following.start_byte for d in self.declarations
            ):
                continue
            self.report(self.messages.empty_section, current.end_byte, following.start_byte)

    def separator_after_package_without_imports(self) -> None:
        if self.imports or self.package is None:
            return
        package_start = self.package.start_byte
        if self.separators:
            first_line = self._line(self.separators[0].start_byte)
            if first_line == self._line(package_start) + 2:
                return
        self.report(self.messages.missing_separator_after_package, package_start, package_start)

    # -- groups -------------------------------------------------------------

    def separator_groups_contain_correct_entities(self) -> None:
        for bucket in partition(self.declarations, self.separators):
            if bucket:
                self._check_bucket(bucket)

    def _check_bucket(self, bucket: list[Declaration]) -> None:
        by_kind: dict[DeclarationKind, list[Declaration]] = {}
        for declaration in bucket:
            if declaration.kind is None:
                logger.debug("Unclassified top-level node %s in %s", declaration.node.type, self.context.path)
                self.report_declaration(self.messages.unknown_declaration, declaration)
                continue
            if declaration.kind is DeclarationKind.TYPE_ALIAS and declaration.spec_count != 1:
                self.report_declaration(self.messages.type_declaration_specs, declaration)
            by_kind.setdefault(declaration.kind, []).append(declaration)

        if not by_kind:
            return

        for kind in (DeclarationKind.INTERFACE, DeclarationKind.STRUCT):
            declarations = by_kind.get(kind, [])
            if len(declarations) > 1:
                self.report(
                    self.messages.single_interface_or_struct,
                    declarations[0].start_byte,
                    declarations[-1].end_byte,
                )
                return

        kinds = set(by_kind)
        functions = by_kind.get(DeclarationKind.FUNC, [])
        if len(kinds) == 1:
            if kinds <= _STANDALONE_KINDS:
                return
            if DeclarationKind.FUNC in kinds:
                self._check_public_and_private(functions)
                self._check_testing_and_code(functions)
                self._check_receivers(functions)
                return

        if not kinds <= _STRUCT_GROUP_KINDS:
            message = self.messages.forbidden_mix.format(kinds=", ".join(kind.value for kind in by_kind))
            for declaration in bucket:
                if declaration.kind is not None:
                    self.report_declaration(message, declaration)
            return

        self._check_testing_and_code(functions)
        self._check_struct_group(by_kind[DeclarationKind.STRUCT][0], functions)

    def _check_public_and_private(self, functions: list[Declaration]) -> None:
        if not functions:
            return
        first_is_public = functions[0].function.is_public
        for position, declaration in enumerate(functions):
            if declaration.function.is_public != first_is_public:
                for offending in functions[position:]:
                    self.report_declaration(self.messages.mixing_public_and_private, offending)
                return

    def _check_testing_and_code(self, functions: list[Declaration]) -> None:
        groups: dict[tuple[str | None, bool, bool], list[Declaration]] = {}
        for declaration in functions:
            groups.setdefault(declaration.function.group_key, []).append(declaration)
        if not groups:
            return

        first, *rest = groups.values()
        for group in rest:
            if group[0].function.is_testing != first[0].function.is_testing:
                self.report_declaration(self.messages.mixing_testing_and_code, first[0])
                self.report_declaration(self.messages.mixing_testing_and_code, group[0])
                return

    def _check_receivers(self, functions: list[Declaration]) -> None:
        label = self.context.config.empty_receiver_label
        receivers = list(dict.fromkeys(d.function.receiver or label for d in functions))
        if len(receivers) < 2:
            return
        message = self.messages.mixing_receivers.format(receivers=", ".join(f"'{r}'" for r in receivers))
        for declaration in functions:
            self.report_declaration(message, declaration)

    def _check_struct_group(self, struct: Declaration, functions: list[Declaration]) -> None:
        struct_name = struct.name
        if struct_name is None:
            return
        for declaration in functions:
            receiver = declaration.function.receiver
            if receiver is None:
                if not returns_struct(declaration.node, struct_name, self.context.source):
                    message = self.messages.not_a_constructor.format(name=declaration.name, struct=struct_name)
                    self.report_declaration(message, declaration)
            elif receiver != struct_name:
                message = self.messages.foreign_method.format(receiver=receiver, struct=struct_name)
                self.report_declaration(message, declaration)


class SeparatorRule:
    name = "separator"
    category = Category.SEPARATOR
    description = "Checks that 80-character separator comments delimit logical groups of declarations."

    def check(self, context: FileContext) -> list[Diagnostic]:
        return SeparatorAnalysis(context, self.name).run()
