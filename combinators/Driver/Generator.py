from __future__ import annotations

from combinators.Driver.Config import DEFAULT_SEED


class ExpressionGenerator:
    """
    Builds the benchmark's input: a random arithmetic expression from a fixed pseudo-random sequence, so the same seed
    always produces the same expression (and so the same value).
    """

    _seed: int

    def __init__(self, seed: int = DEFAULT_SEED):
        self._seed = seed

    def next_random(self) -> int:
        # Only the low 12 bits are kept, so there is no dependence on integer width.
        self._seed = (self._seed * 0xDEAD + 0xC0DE) & 0x0FFF
        return self._seed

    def expression(self, depth: int) -> str:
        """
        [Expression] => [Digit] (at depth 0)
                      | [Expression] "+" [Expression]
                      | [Expression] "*" [Expression]
                      | "(" [Expression] ")"

        @param depth: How many more levels to nest. Every branch goes down exactly this many levels before reaching a
        digit.
        @return: The expression text.
        """
        if depth < 1:
            return str(self.next_random() % 10)

        match self.next_random() % 3:
            case 0:
                return self.expression(depth - 1) + "+" + self.expression(depth - 1)
            case 1:
                return self.expression(depth - 1) + "*" + self.expression(depth - 1)
            case _:
                return "(" + self.expression(depth - 1) + ")"
