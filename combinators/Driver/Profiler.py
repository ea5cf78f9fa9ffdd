from __future__ import annotations

from typing import Callable, Optional, TextIO

from line_profiler import LineProfiler


class Profiler:
    """
    Line-by-line timings for the functions on the parsing path. Used as a context manager around the code to measure;
    the counts accumulate over every entry.
    """

    _profiler: LineProfiler

    def __init__(self, *functions: Callable):
        self._profiler = LineProfiler()
        for function in functions:
            self._profiler.add_function(function)

    def __enter__(self) -> Profiler:
        self._profiler.enable_by_count()
        return self

    def __exit__(self, *exc_info) -> None:
        self._profiler.disable_by_count()

    def print_stats(self, stream: Optional[TextIO] = None) -> None:
        self._profiler.print_stats(stream=stream)
