from dataclasses import dataclass, field
from functools import cached_property

from tree_sitter import Node, Tree

from golayout.config import LintConfig
from golayout.core.ast import CommentGroup, collect_comments, group_comments, parse_go_source
from golayout.core.declarations import Declaration, collect_declarations
from golayout.core.source import PositionMapper, SourceIndex
from golayout.models import Category, Diagnostic, Position


@dataclass
class FileContext:
    """Everything the rules need about one file. Built once per analysis and never shared."""

    path: str
    source: bytes
    tree: Tree
    config: LintConfig = field(default_factory=LintConfig)

    @classmethod
    def from_source(cls, source: bytes, path: str = "<memory>", config: LintConfig | None = None) -> "FileContext":
        return cls(path=path, source=source, tree=parse_go_source(source), config=config or LintConfig())

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @cached_property
    def index(self) -> SourceIndex:
        return SourceIndex(self.source)

    @cached_property
    def mapper(self) -> PositionMapper:
        return PositionMapper(self.source)

    @cached_property
    def comments(self) -> list[Node]:
        return collect_comments(self.root)

    @cached_property
    def comment_groups(self) -> list[CommentGroup]:
        return group_comments(self.comments, self.source)

    @cached_property
    def declarations(self) -> list[Declaration]:
        return collect_declarations(self.root, self.source, self.config.test_prefix)

    def diagnostic(
        self,
        rule: str,
        category: Category,
        message: str,
        start: int,
        end: int | None = None,
    ) -> Diagnostic:
        return Diagnostic(
            rule=rule,
            category=category,
            message=message,
            start=self.mapper.at(start),
            end=self.mapper.at(end) if end is not None else None,
        )

    def position(self, offset: int) -> Position:
        return self.mapper.at(offset)
