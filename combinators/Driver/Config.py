"""Benchmark configuration.

The defaults reproduce the reference run: a depth-20 expression generated from seed 0xCAFE, which is 41137 characters
long and evaluates to 31615.
"""

from pydantic import BaseModel, Field

DEFAULT_DEPTH = 20
DEFAULT_SEED = 0xCAFE
EXPECTED_LENGTH = 41137
EXPECTED_VALUE = 31615


class BenchmarkConfig(BaseModel):
    """Options for one benchmark run.

    Attributes:
        depth: Nesting depth of the generated expression.
        seconds: Minimum time to keep re-parsing for.
        warmup: Number of untimed parses before measuring.
        seed: Seed for the expression generator.
        check: Verify the generated expression's length and value before timing.
        profile: Line-profile the parser while timing.
    """

    depth: int = Field(default=DEFAULT_DEPTH, ge=0)
    seconds: float = Field(default=10.0, gt=0)
    warmup: int = Field(default=3, ge=0)
    seed: int = DEFAULT_SEED
    check: bool = True
    profile: bool = False

    model_config = {"frozen": True}

    @property
    def is_reference_run(self) -> bool:
        # The expected length and value are only known for the reference expression.
        return self.depth == DEFAULT_DEPTH and self.seed == DEFAULT_SEED
