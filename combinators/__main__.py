"""Command line entry point.

Provides commands: eval, bench, graph
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from combinators.Driver.Benchmark import Benchmark
from combinators.Driver.Config import BenchmarkConfig, DEFAULT_DEPTH, DEFAULT_SEED
from combinators.Driver.Driver import Driver
from combinators.Driver.Printer import format_json, graph_json, save_json
from combinators.Grammars.Digits import DigitsGrammar
from combinators.Grammars.Expression import ExpressionGrammar
from combinators.Logs import setup_logging
from combinators.Parsing.Errors import BenchmarkCheckError

__version__ = "1.0.0"

logger = logging.getLogger("combinators.cli")

GRAMMARS = {
    "expression": ExpressionGrammar,
    "digits": DigitsGrammar,
}


def eval_command(args: argparse.Namespace) -> int:
    driver = Driver(GRAMMARS[args.grammar]())
    results = [driver.report(text) for text in args.expressions]
    return 0 if all(results) else 1


def bench_command(args: argparse.Namespace) -> int:
    try:
        config = BenchmarkConfig(
            depth=args.depth,
            seconds=args.seconds,
            warmup=args.warmup,
            seed=args.seed,
            check=not args.no_check,
            profile=args.profile)
    except ValidationError as e:
        logger.error("Invalid benchmark options:\n%s", e)
        return 2

    benchmark = Benchmark(config)
    try:
        result = benchmark.run()
    except BenchmarkCheckError as e:
        logger.error("%s", e)
        return 1

    print(result)
    if benchmark.profiler is not None:
        benchmark.profiler.print_stats()
    return 0


def graph_command(args: argparse.Namespace) -> int:
    graph = graph_json(GRAMMARS[args.grammar]().root)
    if args.output:
        save_json(graph, args.output)
        logger.info("Wrote %d nodes to %s", len(graph["nodes"]), args.output)
    else:
        print(format_json(graph))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="combinators",
        description="Parser combinators - arithmetic expression grammar",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    eval_parser = subparsers.add_parser("eval", help="Parse and evaluate expressions")
    eval_parser.add_argument("expressions", nargs="+", help="Expressions to evaluate")
    eval_parser.add_argument("--grammar", choices=sorted(GRAMMARS), default="expression", help="Grammar to parse with")

    bench_parser = subparsers.add_parser("bench", help="Time repeated parses of a generated expression")
    bench_parser.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="Nesting depth of the expression")
    bench_parser.add_argument("--seconds", type=float, default=10.0, help="Minimum time to measure for")
    bench_parser.add_argument("--warmup", type=int, default=3, help="Untimed parses before measuring")
    bench_parser.add_argument("--seed", type=lambda s: int(s, 0), default=DEFAULT_SEED, help="Generator seed")
    bench_parser.add_argument("--no-check", action="store_true", help="Skip the length/value self-check")
    bench_parser.add_argument("--profile", action="store_true", help="Line-profile the parser while timing")

    graph_parser = subparsers.add_parser("graph", help="Dump a compacted grammar graph")
    graph_parser.add_argument("--grammar", choices=sorted(GRAMMARS), default="expression", help="Grammar to dump")
    graph_parser.add_argument("-o", "--output", help="Write the dump to a file instead of stdout")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    match args.command:
        case "eval":
            return eval_command(args)
        case "bench":
            return bench_command(args)
        case "graph":
            return graph_command(args)
        case _:
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
