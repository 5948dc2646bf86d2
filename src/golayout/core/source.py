from bisect import bisect_right

from tree_sitter import Node

from golayout.models import Position


class SourceIndex:
    """Raw file text as an ordered sequence of lines, line 0 first."""

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._lines = source.decode("utf-8", errors="replace").split("\n")

    def __len__(self) -> int:
        return len(self._lines)

    def line(self, index: int) -> str:
        return self._lines[index]

    def trimmed(self, index: int) -> str:
        return self._lines[index].strip()

    def is_blank(self, index: int) -> bool:
        return 0 <= index < len(self._lines) and not self._lines[index].strip()

    def rest_of_line(self, offset: int) -> str:
        """Text from byte ``offset`` up to (not including) the end of its line."""
        end = self._source.find(b"\n", offset)
        if end == -1:
            end = len(self._source)
        return self._source[offset:end].decode("utf-8", errors="replace")

    def text(self, start: int, end: int) -> str:
        return self._source[start:end].decode("utf-8", errors="replace")


class PositionMapper:
    """Translate absolute byte offsets into zero-based ``Position`` values."""

    def __init__(self, source: bytes) -> None:
        starts = [0]
        offset = source.find(b"\n")
        while offset != -1:
            starts.append(offset + 1)
            offset = source.find(b"\n", offset + 1)
        self._line_starts = starts

    def at(self, offset: int) -> Position:
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line=line, column=offset - self._line_starts[line])

    def start(self, node: Node) -> Position:
        return self.at(node.start_byte)

    def end(self, node: Node) -> Position:
        return self.at(node.end_byte)

    def start_line(self, node: Node) -> int:
        return self.at(node.start_byte).line

    def end_line(self, node: Node) -> int:
        return self.at(node.end_byte).line
