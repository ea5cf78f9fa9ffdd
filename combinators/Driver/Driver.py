from __future__ import annotations

import logging
import sys
from typing import Any, Optional, TextIO

import colorama

from combinators.Grammars.Grammar import Grammar
from combinators.Parsing.Errors import ParseSyntaxError
from combinators.Parsing.Result import FAILURE

logger = logging.getLogger("combinators.driver")


class Driver:
    """
    Feeds inputs to a compiled grammar and turns the result into something for the outside world: a value or a
    ParseSyntaxError from evaluate(), or a coloured line from report().
    """

    _grammar: Grammar

    def __init__(self, grammar: Grammar):
        self._grammar = grammar

    def evaluate(self, text: str) -> Any:
        result = self._grammar.parse(text)
        if result is FAILURE:
            raise ParseSyntaxError(text)
        return result

    def report(self, text: str, stream: Optional[TextIO] = None) -> bool:
        stream = stream or sys.stdout
        try:
            value = self.evaluate(text)
        except ParseSyntaxError as e:
            logger.debug("%s", e)
            stream.write("".join([
                f"{colorama.Fore.RED}{colorama.Style.BRIGHT}",
                text,
                f"{colorama.Style.RESET_ALL}",
                " <- does not match\n"]))
            return False

        stream.write("".join([
            f"{colorama.Fore.WHITE}{colorama.Style.BRIGHT}",
            text,
            f"{colorama.Style.RESET_ALL} = ",
            f"{colorama.Fore.GREEN}",
            str(value),
            f"{colorama.Style.RESET_ALL}\n"]))
        return True
