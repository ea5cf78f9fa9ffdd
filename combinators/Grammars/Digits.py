from combinators.Grammars.Grammar import Grammar
from combinators.Parsing.Combinators import char_range, eoi


class DigitsGrammar(Grammar):
    """
    [Start]  => [Number] [EOI]
    [Number] => [Digit]+

    A run of decimal digits read as one integer (leading zeros allowed).
    """

    def __init__(self):
        super().__init__()
        self.start = self.forward("start")
        self.number = self.forward("number")
        self.digit = self.forward("digit")

        self.start.bind(self.number.then(eoi()).map(lambda results: results[0]))
        self.number.bind(self.digit.plus().map(lambda digits: int("".join(digits))))
        self.digit.bind(char_range("0", "9"))

        self.compile(self.start)
