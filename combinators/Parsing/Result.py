from __future__ import annotations

from typing import Any, Final, Union


class ParseFailure:
    """
    The "did not match" marker returned from every parser in place of a result. There is exactly one instance,
    FAILURE, so callers test for it with "is". It carries no payload -- where or why the match failed is not recorded.
    """

    _instance: ParseFailure = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "FAILURE"


FAILURE: Final[ParseFailure] = ParseFailure()

ParseResult = Union[Any, ParseFailure]
