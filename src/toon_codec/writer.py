"""Line-oriented output buffer used by the encoder."""

from typing import Dict, List

from .constants import DEFAULT_INDENT, NEWLINE
from .types import Depth


class LineWriter:
    """Collects indented lines, caching the indentation string per depth."""

    def __init__(self, indent_size: int) -> None:
        if indent_size <= 0:
            indent_size = DEFAULT_INDENT
        self._lines: List[str] = []
        self._indentation_string = " " * indent_size
        self._indent_cache: Dict[int, str] = {0: ""}

    def indent(self, depth: Depth) -> str:
        if depth not in self._indent_cache:
            self._indent_cache[depth] = self._indentation_string * depth
        return self._indent_cache[depth]

    def push(self, depth: Depth, content: str) -> None:
        self._lines.append(self.indent(depth) + content)

    def to_string(self) -> str:
        """Join the collected lines; every line, the last included, ends with a newline."""
        if not self._lines:
            return ""
        return NEWLINE.join(self._lines) + NEWLINE
