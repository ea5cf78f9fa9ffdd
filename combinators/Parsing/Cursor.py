from __future__ import annotations

from typing import Any, Sequence as Content

from combinators.Parsing.Result import FAILURE, ParseResult


class Cursor:
    """
    The read position over a fully materialized input. Each parse gets its own cursor -- the parser graph itself holds
    no per-parse state, so any number of cursors can be driven through the same graph.
    """

    _content: Content[Any]
    _position: int

    def __init__(self, content: Content[Any]):
        self._content = content
        self._position = 0

    def read(self) -> ParseResult:
        # Running off the end is an ordinary parse failure, not an error -- a Literal at the end of the input simply
        # doesn't match.
        if self._position >= len(self._content):
            return FAILURE

        element = self._content[self._position]
        self._position += 1
        return element

    def at_end(self) -> bool:
        return self._position == len(self._content)

    def save(self) -> int:
        return self._position

    def restore(self, mark: int) -> None:
        self._position = mark

    def remaining(self) -> Content[Any]:
        return self._content[self._position:]

    @property
    def position(self) -> int:
        return self._position

    def __repr__(self):
        return f"Cursor(position={self._position}, length={len(self._content)})"
