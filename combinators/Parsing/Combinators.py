from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from combinators.Parsing.Cursor import Cursor
from combinators.Parsing.Errors import ParserError
from combinators.Parsing.Result import FAILURE, ParseResult


class CombinatorialParser:
    """
    The combinator operators shared by every parser node. Each operator builds a new node around the existing ones --
    nothing is parsed until the (compacted) graph is handed to try_parse.
    """

    # Set by the compaction pass the first time the node is visited. Forward references never set it, as they are
    # removed from the graph rather than compacted.
    compacted: bool = False

    def then(self, that: ParserNode) -> Sequence:
        return Sequence([self, that])

    def or_(self, that: ParserNode) -> Alternation:
        return Alternation(self, that)

    def __or__(self, that: ParserNode) -> Alternation:
        return Alternation(self, that)

    def star(self) -> Repetition:
        return Repetition(self)

    def plus(self) -> Map:
        # One or more: the first match followed by any further ones, flattened into a single list.
        return Map(Sequence([self, Repetition(self)]), lambda results: [results[0], *results[1]])

    def map(self, transform: Callable[[Any], Any]) -> Map:
        return Map(self, transform)


@dataclass(eq=False)
class Literal(CombinatorialParser):
    lower: Any
    upper: Any

    def __post_init__(self):
        if self.upper < self.lower:
            raise ParserError(f"Empty literal range: {self.lower!r}..{self.upper!r}")


@dataclass(eq=False)
class Sequence(CombinatorialParser):
    parsers: list[ParserNode]

    def __post_init__(self):
        if not self.parsers:
            raise ParserError("A sequence needs at least one parser")

    def then(self, that: ParserNode) -> Sequence:
        # Chained "then"s build one flat sequence, so "a.then(b).then(c)" produces three results, not two.
        return Sequence([*self.parsers, that])


@dataclass(eq=False)
class Alternation(CombinatorialParser):
    first: ParserNode
    second: ParserNode


@dataclass(eq=False)
class Repetition(CombinatorialParser):
    parser: ParserNode


@dataclass(eq=False)
class EndOfInput(CombinatorialParser):
    pass


@dataclass(eq=False)
class Map(CombinatorialParser):
    parser: ParserNode
    transform: Callable[[Any], Any]


@dataclass(eq=False)
class Forward(CombinatorialParser):
    name: str = "<anonymous>"
    target: Optional[ParserNode] = field(default=None, repr=False)

    def bind(self, parser: ParserNode) -> None:
        if self.target is not None:
            raise ParserError(f"Forward reference parser '{self.name}' already bound")
        if not isinstance(parser, CombinatorialParser):
            raise ParserError(f"Forward reference parser '{self.name}' bound to a non-parser: {parser!r}")
        self.target = parser

    @property
    def is_bound(self) -> bool:
        return self.target is not None


ParserNode = Union[Literal, Sequence, Alternation, Repetition, EndOfInput, Map, Forward]


def char(c: Any) -> Literal:
    return Literal(c, c)


def char_range(lower: Any, upper: Any) -> Literal:
    return Literal(lower, upper)


def eoi() -> EndOfInput:
    return EndOfInput()


def forward(name: str = "<anonymous>") -> Forward:
    return Forward(name)


def try_parse(parser: ParserNode, cursor: Cursor) -> ParseResult:
    """
    Run one parser node against the cursor. A match returns the node's result and leaves the cursor after the matched
    input; a mismatch returns FAILURE. Only Sequence, Alternation and Repetition restore the cursor after a failed
    sub-parse -- a failing Literal leaves the cursor wherever its read stopped, and it is the enclosing node's job to
    roll back.

    @param parser: A compacted parser node.
    @param cursor: The cursor for this parse.
    @return: The parse result, or FAILURE.
    """

    match parser:
        case Literal(lower=lower, upper=upper):
            element = cursor.read()
            if element is FAILURE or not (lower <= element <= upper):
                return FAILURE
            return element

        case Sequence(parsers=parsers):
            # Save the index for restoring if any of the sub-parsers fail, so the sequence fails as a whole.
            mark = cursor.save()
            results = []
            for sub_parser in parsers:
                result = try_parse(sub_parser, cursor)
                if result is FAILURE:
                    cursor.restore(mark)
                    return FAILURE
                results.append(result)
            return results

        case Alternation(first=first, second=second):
            # Ordered choice: if the first alternative matches, its result is final and the second is never tried.
            mark = cursor.save()
            result = try_parse(first, cursor)
            if result is not FAILURE:
                return result
            cursor.restore(mark)
            return try_parse(second, cursor)

        case Repetition(parser=sub_parser):
            # Keep parsing until the sub-parser fails. The failed attempt is rolled back and the matches so far are the
            # result -- a repetition never fails, zero matches is an empty list.
            results = []
            while True:
                mark = cursor.save()
                result = try_parse(sub_parser, cursor)
                if result is FAILURE:
                    cursor.restore(mark)
                    return results
                if cursor.save() == mark:
                    raise ParserError(f"Repeated parser matched without consuming input: {sub_parser!r}")
                results.append(result)

        case EndOfInput():
            return None if cursor.at_end() else FAILURE

        case Map(parser=sub_parser, transform=transform):
            result = try_parse(sub_parser, cursor)
            if result is FAILURE:
                return FAILURE
            return transform(result)

        case Forward(name=name):
            raise ParserError(f"Forward reference parser '{name}' should be compacted away before parsing")

        case _:
            raise ParserError(f"Not a parser node: {parser!r}")


def children(parser: ParserNode) -> tuple[ParserNode, ...]:
    match parser:
        case Sequence(parsers=parsers):
            return tuple(parsers)
        case Alternation(first=first, second=second):
            return first, second
        case Repetition(parser=sub_parser) | Map(parser=sub_parser):
            return sub_parser,
        case Forward(target=target):
            return () if target is None else (target,)
        case Literal() | EndOfInput():
            return ()
        case _:
            raise ParserError(f"Not a parser node: {parser!r}")
