from __future__ import annotations

from typing import Final

from combinators.Grammars.Grammar import Grammar
from combinators.Parsing.Combinators import char, char_range, eoi

# Every "+" and "*" is reduced by this, so intermediate values stay small however long the expression is.
MODULUS: Final[int] = 0xFFFF


class ExpressionGrammar(Grammar):
    """
    [Start]    => [Exp] [EOI]
    [Exp]      => [E1] ([Plus] [E1])*
    [E1]       => [E2] ([Times] [E2])*
    [E2]       => [Number] | [ParenExp]
    [ParenExp] => [LParen] [Exp] [RParen]
    [Number]   => [Digit]

    Arithmetic over single digits, "+", "*" and parentheses, evaluated while parsing. Precedence comes from the
    nesting of the productions: [Exp] sums products, [E1] multiplies factors. [ParenExp] refers back to [Exp], which is
    the cycle that needs the Forward references.
    """

    def __init__(self):
        super().__init__()

        # Declare every production up front so they can refer to each other before they're defined.
        self.start = self.forward("start")
        self.exp = self.forward("exp")
        self.e1 = self.forward("e1")
        self.e2 = self.forward("e2")
        self.paren_exp = self.forward("paren_exp")
        self.number = self.forward("number")
        self.plus = self.forward("plus")
        self.times = self.forward("times")
        self.digit = self.forward("digit")
        self.lparen = self.forward("lparen")
        self.rparen = self.forward("rparen")

        self.start.bind(self.exp.then(eoi()).map(self._first))
        self.exp.bind(self.e1.then(self.plus.then(self.e1).star()).map(self._fold_sum))
        self.e1.bind(self.e2.then(self.times.then(self.e2).star()).map(self._fold_product))
        self.e2.bind(self.number | self.paren_exp)
        self.paren_exp.bind(self.lparen.then(self.exp).then(self.rparen).map(self._second))
        self.number.bind(self.digit.map(int))

        self.plus.bind(char("+"))
        self.times.bind(char("*"))
        self.digit.bind(char_range("0", "9"))
        self.lparen.bind(char("("))
        self.rparen.bind(char(")"))

        self.compile(self.start)

    @staticmethod
    def _first(results: list) -> int:
        return results[0]

    @staticmethod
    def _second(results: list) -> int:
        return results[1]

    @staticmethod
    def _fold_sum(results: list) -> int:
        # [lhs, [[op, rhs], [op, rhs], ...]]
        lhs, rhss = results
        for _, rhs in rhss:
            lhs = (lhs + rhs) % MODULUS
        return lhs

    @staticmethod
    def _fold_product(results: list) -> int:
        lhs, rhss = results
        for _, rhs in rhss:
            lhs = (lhs * rhs) % MODULUS
        return lhs
