from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from combinators.Driver.Config import BenchmarkConfig, EXPECTED_LENGTH, EXPECTED_VALUE
from combinators.Driver.Generator import ExpressionGenerator
from combinators.Driver.Profiler import Profiler
from combinators.Grammars.Expression import ExpressionGrammar
from combinators.Parsing.Combinators import try_parse
from combinators.Parsing.Cursor import Cursor
from combinators.Parsing.Errors import BenchmarkCheckError

logger = logging.getLogger("combinators.benchmark")


@dataclass
class BenchmarkResult:
    runs: int
    duration: float
    value: int

    @property
    def runs_per_second(self) -> float:
        return self.runs / self.duration

    def __str__(self):
        return f"ParserCombinators: {self.runs_per_second} runs/sec"


class Benchmark:
    _config: BenchmarkConfig
    _grammar: ExpressionGrammar
    _expression: str
    _profiler: Optional[Profiler]

    def __init__(self, config: BenchmarkConfig, grammar: Optional[ExpressionGrammar] = None):
        self._config = config
        self._grammar = grammar or ExpressionGrammar()
        self._expression = ExpressionGenerator(config.seed).expression(config.depth)
        self._profiler = Profiler(try_parse) if config.profile else None
        logger.info("Generated a depth %d expression of %d characters", config.depth, len(self._expression))

    def check(self) -> int:
        # Check the expression before its value, as a wrong expression will (almost certainly) give a wrong value too,
        # and the length is the more useful clue.
        if len(self._expression) != EXPECTED_LENGTH:
            raise BenchmarkCheckError("length", EXPECTED_LENGTH, len(self._expression))

        value = self._grammar.parse(self._expression)
        if value != EXPECTED_VALUE:
            raise BenchmarkCheckError("value", EXPECTED_VALUE, value)
        return value

    def run(self) -> BenchmarkResult:
        if self._config.check and self._config.is_reference_run:
            self.check()
        elif self._config.check:
            logger.warning("Skipping the self-check: expected results are only known for the reference expression")

        for _ in range(self._config.warmup):
            self._parse_once()

        # Measure for at least the configured duration.
        if self._profiler is not None:
            with self._profiler:
                runs, duration, value = self._timed_runs()
        else:
            runs, duration, value = self._timed_runs()

        logger.debug("%d runs in %.3fs", runs, duration)
        return BenchmarkResult(runs, duration, value)

    def _timed_runs(self) -> tuple[int, float, int]:
        runs = 0
        start = time.perf_counter()
        while True:
            value = self._parse_once()
            runs += 1
            duration = time.perf_counter() - start
            if duration >= self._config.seconds:
                return runs, duration, value

    def _parse_once(self) -> int:
        return try_parse(self._grammar.root, Cursor(self._expression))

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def profiler(self) -> Optional[Profiler]:
        return self._profiler
