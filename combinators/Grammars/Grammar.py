from __future__ import annotations

import logging
from typing import Any, Optional, Sequence as Content

from combinators.Parsing.Combinators import CombinatorialParser, Forward, ParserNode, try_parse
from combinators.Parsing.Compaction import compact, reachable
from combinators.Parsing.Cursor import Cursor
from combinators.Parsing.Errors import ParserError
from combinators.Parsing.Result import ParseResult

logger = logging.getLogger("combinators.grammar")


class Grammar:
    """
    Two-phase grammar builder. First every production is allocated as a named Forward reference, so productions can
    refer to each other (and to themselves) before they are defined. Then each one is bound, in any order, to an
    expression built from the others. Finally compile() compacts the graph from the entry production, removing all the
    Forward references, and the compacted root is what gets parsed with.

    Subclasses do the allocation and binding in their constructor and finish by calling compile(), after which the
    grammar is read-only and can be shared between threads.
    """

    _forwards: dict[str, Forward]
    _root: Optional[ParserNode]

    def __init__(self):
        self._forwards = {}
        self._root = None

    def forward(self, name: str) -> Forward:
        if name in self._forwards:
            raise ParserError(f"Production '{name}' is already declared")
        self._forwards[name] = Forward(name)
        return self._forwards[name]

    def _production(self, production: str | Forward) -> Forward:
        if not isinstance(production, str):
            return production
        if production not in self._forwards:
            raise ParserError(f"Production '{production}' is not declared")
        return self._forwards[production]

    def bind(self, production: str | Forward, parser: ParserNode) -> Forward:
        placeholder = self._production(production)
        placeholder.bind(parser)
        return placeholder

    def unbound(self) -> list[str]:
        return [name for name, placeholder in self._forwards.items() if not placeholder.is_bound]

    def compile(self, entry: str | Forward) -> ParserNode:
        placeholder = self._production(entry)
        if not isinstance(placeholder, CombinatorialParser):
            raise ParserError(f"Not a parser node: {placeholder!r}")

        # Compaction marks nodes as it goes and a later compile skips marked nodes, so nothing may be marked unless
        # every placeholder in the graph can be resolved.
        self._check_resolvable(placeholder)
        self._root = compact(placeholder)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Compiled %s from '%s': %d productions, %d nodes reachable",
                         type(self).__name__, placeholder.name if isinstance(placeholder, Forward) else "<root>",
                         len(self._forwards), sum(1 for _ in reachable(self._root)))
        return self._root

    @staticmethod
    def _check_resolvable(entry: ParserNode) -> None:
        unbound = []
        for parser in reachable(entry):
            if not isinstance(parser, Forward):
                continue
            if not parser.is_bound:
                unbound.append(parser.name)
                continue

            # A chain of placeholders bound to each other must reach a real node.
            seen = {parser}
            target = parser.target
            while isinstance(target, Forward) and target.is_bound:
                if target in seen:
                    raise ParserError(f"Forward reference parser '{parser.name}' is bound to itself")
                seen.add(target)
                target = target.target

        if unbound:
            raise ParserError(f"Forward reference parsers never bound: {', '.join(sorted(unbound))}")

    def parse(self, content: Content[Any]) -> ParseResult:
        if self._root is None:
            raise ParserError(f"{type(self).__name__} has not been compiled")
        return try_parse(self._root, Cursor(content))

    @property
    def root(self) -> ParserNode:
        if self._root is None:
            raise ParserError(f"{type(self).__name__} has not been compiled")
        return self._root

    @property
    def productions(self) -> dict[str, Forward]:
        return dict(self._forwards)
