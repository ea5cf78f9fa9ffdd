class ParserError(RuntimeError):
    """
    A defect in how a grammar was assembled (double binding, parsing through a placeholder, an unbound placeholder at
    compaction time...). These are never converted into parse failures, so that a broken grammar cannot be mistaken for
    input that simply didn't match.
    """


class ParseSyntaxError(Exception):
    def __init__(self, text: str):
        Exception.__init__(self, f"Input did not match the grammar: {text!r}")
        self.text = text


class BenchmarkCheckError(Exception):
    def __init__(self, what: str, expected: int, got: int):
        Exception.__init__(self, f"Generated expression has the wrong {what}: expected {expected}, got {got}")
        self.what = what
        self.expected = expected
        self.got = got
