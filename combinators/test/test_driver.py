import contextlib
import io
import json
import os
import tempfile
import unittest

from pydantic import ValidationError

from combinators.__main__ import main
from combinators.Driver.Benchmark import Benchmark, BenchmarkResult
from combinators.Driver.Config import BenchmarkConfig, EXPECTED_LENGTH, EXPECTED_VALUE
from combinators.Driver.Driver import Driver
from combinators.Driver.Generator import ExpressionGenerator
from combinators.Driver.Printer import format_json, graph_json
from combinators.Grammars.Digits import DigitsGrammar
from combinators.Grammars.Expression import ExpressionGrammar
from combinators.Grammars.Grammar import Grammar
from combinators.Parsing.Combinators import char, char_range, eoi
from combinators.Parsing.Errors import BenchmarkCheckError, ParseSyntaxError


class TestExpressionGenerator(unittest.TestCase):
    def test_first_random(self):
        self.assertEqual(ExpressionGenerator().next_random(), 644)

    def test_leaf_is_a_digit(self):
        self.assertEqual(ExpressionGenerator().expression(0), "4")

    def test_deterministic(self):
        self.assertEqual(ExpressionGenerator(7).expression(8), ExpressionGenerator(7).expression(8))

    def test_reference_expression(self):
        expression = ExpressionGenerator().expression(20)
        self.assertEqual(len(expression), EXPECTED_LENGTH)
        self.assertEqual(ExpressionGrammar().parse(expression), EXPECTED_VALUE)

    def test_generated_expressions_parse(self):
        grammar = ExpressionGrammar()
        generator = ExpressionGenerator(1)
        for depth in range(6):
            with self.subTest(depth=depth):
                self.assertIsInstance(grammar.parse(generator.expression(depth)), int)


class TestBenchmark(unittest.TestCase):
    def test_reference_run(self):
        benchmark = Benchmark(BenchmarkConfig(seconds=0.01, warmup=1))
        self.assertEqual(len(benchmark.expression), EXPECTED_LENGTH)
        result = benchmark.run()
        self.assertGreaterEqual(result.runs, 1)
        self.assertGreaterEqual(result.duration, 0.01)
        self.assertEqual(result.value, EXPECTED_VALUE)
        self.assertTrue(str(result).startswith("ParserCombinators: "))
        self.assertTrue(str(result).endswith(" runs/sec"))

    def test_check_only_for_reference_expression(self):
        benchmark = Benchmark(BenchmarkConfig(depth=3, seconds=0.001, warmup=0))
        self.assertIsInstance(benchmark.run(), BenchmarkResult)
        with self.assertRaises(BenchmarkCheckError):
            benchmark.check()

    def test_profile(self):
        benchmark = Benchmark(BenchmarkConfig(depth=3, seconds=0.001, warmup=0, check=False, profile=True))
        benchmark.run()
        stream = io.StringIO()
        benchmark.profiler.print_stats(stream=stream)
        self.assertIn("try_parse", stream.getvalue())

    def test_invalid_config(self):
        with self.assertRaises(ValidationError):
            BenchmarkConfig(seconds=0)
        with self.assertRaises(ValidationError):
            BenchmarkConfig(depth=-1)

    def test_runs_per_second(self):
        self.assertEqual(BenchmarkResult(runs=10, duration=2.0, value=0).runs_per_second, 5.0)


class TestDriver(unittest.TestCase):
    def setUp(self):
        self._driver = Driver(ExpressionGrammar())

    def test_evaluate(self):
        self.assertEqual(self._driver.evaluate("1+2*3"), 7)

    def test_evaluate_failure(self):
        with self.assertRaises(ParseSyntaxError) as context:
            self._driver.evaluate("1+")
        self.assertEqual(context.exception.text, "1+")

    def test_report(self):
        stream = io.StringIO()
        self.assertTrue(self._driver.report("(1+2)*3", stream))
        self.assertFalse(self._driver.report("1+", stream))
        lines = stream.getvalue().splitlines()
        self.assertIn("9", lines[0])
        self.assertIn("does not match", lines[1])


class TestPrinter(unittest.TestCase):
    def test_graph_json(self):
        graph = graph_json(DigitsGrammar().root)
        kinds = [node["kind"] for node in graph["nodes"]]
        self.assertEqual(graph["root"], 0)
        self.assertEqual(kinds[0], "Map")
        self.assertNotIn("Forward", kinds)
        self.assertIn({"id": kinds.index("Literal"), "kind": "Literal", "range": ["0", "9"], "children": []},
                      graph["nodes"])

    def test_format_json(self):
        self.assertEqual(format_json({"a": None, "b": True}), '{"a": null, "b": true}')
        text = {"transform": "None if False else True", "range": ["'", "\""]}
        self.assertEqual(json.loads(format_json(text)), text)

    def test_format_json_escapes_values(self):
        def none_true(result):
            return result

        grammar = Grammar()
        start = grammar.forward("start")
        start.bind(char("'").then(char_range('"', '"')).map(none_true).then(eoi()))
        graph = graph_json(grammar.compile(start))
        nodes = json.loads(format_json(graph))["nodes"]
        self.assertEqual(json.loads(format_json(graph)), graph)
        self.assertIn(["'", "'"], [node.get("range") for node in nodes])
        self.assertIn(['"', '"'], [node.get("range") for node in nodes])
        self.assertTrue(any("none_true" in node.get("transform", "") for node in nodes))


class TestCommandLine(unittest.TestCase):
    def _run(self, *argv: str) -> tuple[int, str]:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(io.StringIO()):
            code = main(list(argv))
        return code, stdout.getvalue()

    def test_eval(self):
        code, output = self._run("eval", "1+2*3", "(1+2)*3")
        self.assertEqual(code, 0)
        self.assertIn("7", output)
        self.assertIn("9", output)

    def test_eval_failure(self):
        code, output = self._run("eval", "1+")
        self.assertEqual(code, 1)
        self.assertIn("does not match", output)

    def test_eval_digits(self):
        code, output = self._run("eval", "--grammar", "digits", "007")
        self.assertEqual(code, 0)
        self.assertIn("7", output)

    def test_bench(self):
        code, output = self._run("bench", "--depth", "3", "--seconds", "0.001", "--warmup", "0", "--no-check")
        self.assertEqual(code, 0)
        self.assertIn("runs/sec", output)

    def test_bench_invalid(self):
        code, _ = self._run("bench", "--seconds", "0")
        self.assertEqual(code, 2)

    def test_graph(self):
        code, output = self._run("graph")
        self.assertEqual(code, 0)
        self.assertIn('"kind": "Literal"', output)
        self.assertNotIn('"Forward"', output)

    def test_graph_to_file(self):
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "graph.json")
            code, output = self._run("graph", "--grammar", "digits", "-o", path)
            self.assertEqual(code, 0)
            self.assertEqual(output, "")
            with open(path) as file:
                self.assertIn('"range": ["0", "9"]', file.read())

    def test_no_command(self):
        code, _ = self._run()
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
