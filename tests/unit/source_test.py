"""Unit tests for SourceIndex and PositionMapper."""

from tree_sitter import Parser

from golayout.core.source import PositionMapper, SourceIndex
from golayout.models import Position


class TestSourceIndex:
    """Tests for line lookups."""

    def test_splits_on_newlines_keeping_trailing_empty_line(self) -> None:
        index = SourceIndex(b"package main\n\nfunc f() {}\n")
        assert len(index) == 4
        assert index.line(0) == "package main"
        assert index.line(3) == ""

    def test_trimmed_strips_whitespace(self) -> None:
        index = SourceIndex(b"\t  return x  \r\n")
        assert index.trimmed(0) == "return x"

    def test_whitespace_only_line_is_blank(self) -> None:
        index = SourceIndex(b"a\n \t \nb")
        assert index.is_blank(1)
        assert not index.is_blank(0)

    def test_out_of_range_lines_are_not_blank(self) -> None:
        index = SourceIndex(b"\n\n")
        assert not index.is_blank(-1)
        assert not index.is_blank(3)

    def test_rest_of_line_stops_at_newline(self) -> None:
        source = b"\t}() // done\nnext"
        index = SourceIndex(source)
        assert index.rest_of_line(2) == "() // done"

    def test_rest_of_line_on_last_line(self) -> None:
        index = SourceIndex(b"a\n})")
        assert index.rest_of_line(3) == ")"


class TestPositionMapper:
    """Tests for offset to position conversion."""

    def test_first_offset_is_origin(self) -> None:
        assert PositionMapper(b"ab\ncd\n").at(0) == Position(line=0, column=0)

    def test_offsets_after_newlines(self) -> None:
        mapper = PositionMapper(b"ab\ncd\n")
        assert mapper.at(2) == Position(line=0, column=2)
        assert mapper.at(3) == Position(line=1, column=0)
        assert mapper.at(4) == Position(line=1, column=1)
        assert mapper.at(6) == Position(line=2, column=0)

    def test_columns_are_byte_offsets(self) -> None:
        mapper = PositionMapper("é = 1\nx".encode())
        assert mapper.at(2) == Position(line=0, column=2)

    def test_agrees_with_tree_sitter_points(self, go_parser: Parser) -> None:
        source = b"package main\n\nfunc f() {\n\tdefer g()\n}\n"
        tree = go_parser.parse(source)
        mapper = PositionMapper(source)
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            position = mapper.start(node)
            assert (position.line, position.column) == (node.start_point[0], node.start_point[1])
            stack.extend(node.children)
