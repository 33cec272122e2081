import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .frequency_table import FrequencyTable
from .symbols import catalan, generate_n


logger = logging.getLogger(__name__)


class ConvergenceError(RuntimeError):
    """
    The frequency distribution was not shown to be uniform within the
    iteration budget.
    """

    def __init__(self, iterations: int, stddev: float, total: int):
        super().__init__(f"distribution did not converge after {iterations} iterations")
        self.iterations = iterations
        self.stddev = stddev
        self.total = total


# ------------------------------------------------------------
# Statistics
# ------------------------------------------------------------

def variance(values: Sequence[float]) -> float:
    """
    Sample variance (divides by len - 1), two-pass.
    """
    n = len(values)
    if n < 2:
        raise ValueError("sample variance needs at least 2 values")

    total = 0.0
    for v in values:
        total += v
    mean = total / n

    acc = 0.0
    for v in values:
        d = v - mean
        acc += d * d
    return acc / (n - 1)


def stddev(values: Sequence[float]) -> float:
    """Sample standard deviation; accepts ints or floats, always returns float."""
    return math.sqrt(variance(values))


def _table_stddev(table: FrequencyTable, n: int) -> float:
    if table.size() < 2:
        # One outcome is only uniform when it is the whole support (n <= 1).
        # Otherwise we simply have not seen enough yet.
        if table.size() == 1 and catalan(n) == 1:
            return 0.0
        return math.inf
    return stddev(table.proportions())


# ------------------------------------------------------------
# Sampling loop
# ------------------------------------------------------------

def run_iteration(
    table: FrequencyTable,
    n: int,
    nsyms: int,
    rng: random.Random,
    biased: bool = False,
) -> Tuple[float, int]:
    """
    Run one batch and fold it into `table`.

    Generates `nsyms` lists of 2n+1 symbols, scrambles and balances each one
    exactly once, and counts the balanced results.

    Returns (stddev of the per-outcome proportions, total samples so far).
    The stddev is math.inf while fewer than two distinct outcomes exist,
    unless a single outcome is all there can be.
    """
    for sym in generate_n(n, nsyms):
        sym.scramble(rng, biased=biased)
        table.insert_or_increment(sym.cut_and_splice().freeze())

    return _table_stddev(table, n), table.total_count()


@dataclass(frozen=True)
class IterationStats:
    iteration: int
    stddev: float
    threshold: float
    unique: int
    total: int


@dataclass
class ConvergenceResult:
    """
    Outcome of one convergence attempt.

    Not converging is an expected result of a probabilistic test, so it is
    reported here rather than raised. unwrap() gives the strict behaviour.
    """
    converged: bool
    stddev: float
    total: int
    iterations: int
    history: List[IterationStats] = field(default_factory=list)

    @property
    def thresholds(self) -> List[float]:
        return [h.threshold for h in self.history]

    def unwrap(self) -> Tuple[float, int]:
        if not self.converged:
            raise ConvergenceError(self.iterations, self.stddev, self.total)
        return self.stddev, self.total


def converge(
    table: FrequencyTable,
    n: int,
    nsyms: int,
    eps: float,
    max_iters: int,
    rng: random.Random,
    biased: bool = False,
) -> ConvergenceResult:
    """
    Call run_iteration() until the distribution looks uniform.

    Uniform means stddev(proportions) <= eps / unique_count, after at least
    2n iterations. The bound shrinks as more distinct outcomes show up, so a
    bigger support needs a tighter fit per outcome. At most `max_iters`
    batches are run.

    NOTE: n > 10 takes extremely long and will likely not finish.
    """
    if nsyms <= 0:
        raise ValueError("nsyms must be > 0")
    if max_iters <= 0:
        raise ValueError("max_iters must be > 0")
    if eps <= 0:
        raise ValueError("eps must be > 0")

    history: List[IterationStats] = []
    iters = 0
    while True:
        sdev, total = run_iteration(table, n, nsyms, rng, biased=biased)
        iters += 1
        threshold = eps / table.size()
        history.append(
            IterationStats(
                iteration=iters,
                stddev=sdev,
                threshold=threshold,
                unique=table.size(),
                total=total,
            )
        )
        logger.debug("iteration %d: stddev=%g threshold=%g unique=%d", iters, sdev, threshold, table.size())

        if sdev <= threshold and iters >= 2 * n:
            logger.info("converged after %d iterations (%d samples)", iters, total)
            return ConvergenceResult(True, sdev, total, iters, history)
        if iters >= max_iters:
            logger.info("no convergence after %d iterations", iters)
            return ConvergenceResult(False, sdev, total, iters, history)


def run_to_convergence(
    table: FrequencyTable,
    n: int,
    nsyms: int,
    eps: float,
    max_iters: int,
    rng: random.Random,
    biased: bool = False,
) -> Tuple[float, int]:
    """
    Strict form of converge(): returns (stddev, total samples) or raises
    ConvergenceError once `max_iters` is used up.
    """
    return converge(table, n, nsyms, eps, max_iters, rng, biased=biased).unwrap()


def run_until_stable(
    table: FrequencyTable,
    n: int,
    nsyms: int,
    rng: random.Random,
    max_iters: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Run batches until the number of distinct outcomes stops changing between
    two consecutive batches. Used where full convergence is impractical.

    Returns (total samples, iterations run). With `max_iters` set, raises
    ConvergenceError if the unique count is still moving after that many
    batches.
    """
    if nsyms <= 0:
        raise ValueError("nsyms must be > 0")

    sdev, total = run_iteration(table, n, nsyms, rng)
    unique = table.size()
    sdev, total = run_iteration(table, n, nsyms, rng)
    iters = 2
    while table.size() != unique:
        if max_iters is not None and iters >= max_iters:
            raise ConvergenceError(iters, sdev, total)
        unique = table.size()
        sdev, total = run_iteration(table, n, nsyms, rng)
        iters += 1
        logger.debug("iteration %d: unique=%d", iters, table.size())
    return total, iters
