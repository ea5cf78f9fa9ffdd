from typing import Iterator

from multimethod import multimethod

from combinators.Parsing.Combinators import (
    Alternation, EndOfInput, Forward, Literal, Map, ParserNode, Repetition, Sequence, children)
from combinators.Parsing.Errors import ParserError


# Compaction rewrites every edge that points at a Forward reference so that it points straight at the Forward's
# (compacted) target. Nodes are marked as compacted before their children are visited, so a cycle (which can only be
# closed through a Forward) comes back round to a node that is already marked and stops there.


@multimethod
def compact(parser: Literal) -> ParserNode:
    parser.compacted = True
    return parser


@multimethod
def compact(parser: EndOfInput) -> ParserNode:
    parser.compacted = True
    return parser


@multimethod
def compact(parser: Sequence) -> ParserNode:
    if parser.compacted:
        return parser
    parser.compacted = True
    for i, sub_parser in enumerate(parser.parsers):
        parser.parsers[i] = compact(sub_parser)
    return parser


@multimethod
def compact(parser: Alternation) -> ParserNode:
    if parser.compacted:
        return parser
    parser.compacted = True
    parser.first = compact(parser.first)
    parser.second = compact(parser.second)
    return parser


@multimethod
def compact(parser: Repetition) -> ParserNode:
    if parser.compacted:
        return parser
    parser.compacted = True
    parser.parser = compact(parser.parser)
    return parser


@multimethod
def compact(parser: Map) -> ParserNode:
    if parser.compacted:
        return parser
    parser.compacted = True
    parser.parser = compact(parser.parser)
    return parser


@multimethod
def compact(parser: Forward) -> ParserNode:
    # Follow a chain of Forwards (a placeholder bound directly to another placeholder) down to the first real node.
    # A chain that loops back on itself never reaches one, so there is nothing to compact it into.
    seen = set()
    target = parser
    while isinstance(target, Forward):
        if target.target is None:
            raise ParserError(f"Forward reference parser '{target.name}' was never bound")
        if target in seen:
            raise ParserError(f"Forward reference parser '{target.name}' is bound to itself")
        seen.add(target)
        target = target.target
    return compact(target)


@multimethod
def compact(parser: object) -> ParserNode:
    raise ParserError(f"Not a parser node: {parser!r}")


def reachable(root: ParserNode) -> Iterator[ParserNode]:
    """
    Every node reachable from the root, each yielded once. Cycles are fine -- nodes are tracked by identity.
    """
    seen = {root}
    stack = [root]
    while stack:
        parser = stack.pop()
        yield parser
        for child in children(parser):
            if child not in seen:
                seen.add(child)
                stack.append(child)


def forward_count(root: ParserNode) -> int:
    return sum(1 for parser in reachable(root) if isinstance(parser, Forward))
