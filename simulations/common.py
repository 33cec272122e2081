# simulations/common.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import math
import time

from cycle_lemma.symbols import check_n


@dataclass(frozen=True)
class ExperimentSpec:
    """
    Common experiment parameters shared across all sampling methods.
    """
    n: int            # lists hold n (+1)s and n+1 (-1)s before balancing
    nsyms: int        # lists per batch
    iterations: int = 1

    def __post_init__(self) -> None:
        check_n(self.n)
        if self.nsyms <= 0:
            raise ValueError("nsyms must be > 0")
        if self.iterations <= 0:
            raise ValueError("iterations must be > 0")

    @property
    def samples(self) -> int:
        return self.nsyms * self.iterations


@dataclass(frozen=True)
class SummaryStats:
    """
    Spread of per-outcome counts and of the matching proportions.

    A uniform sampler keeps min_share and max_share close to 1 / unique.
    """
    min: int
    max: int
    mean: float
    std: float  # population stddev of counts
    unique: int
    min_share: float
    max_share: float

    @property
    def uniform_share(self) -> float:
        return 1.0 / self.unique

    @property
    def share_spread(self) -> float:
        """max_share / min_share; 1.0 means perfectly even."""
        return self.max_share / self.min_share


def summarize_counts(counts: List[int]) -> SummaryStats:
    """
    Summarize how evenly samples fell over the distinct balanced lists.
    Counts must all be positive, as they are in a FrequencyTable.
    """
    if not counts:
        raise ValueError("counts must be non-empty")
    if min(counts) <= 0:
        raise ValueError("counts must be positive")

    total = sum(counts)
    unique = len(counts)
    mean = total / unique
    spread = math.sqrt(sum((c - mean) ** 2 for c in counts) / unique)

    return SummaryStats(
        min=min(counts),
        max=max(counts),
        mean=mean,
        std=spread,
        unique=unique,
        min_share=min(counts) / total,
        max_share=max(counts) / total,
    )


@dataclass
class ExperimentResult:
    """
    Common return type for all sampling methods.
    """
    method: str
    spec: ExperimentSpec
    counts: List[int]
    sample_stddev: float  # stddev of proportions, as used for convergence

    stats: SummaryStats = field(init=False)
    runtime_s: Optional[float] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.stats = summarize_counts(self.counts)

        # Sanity: counts should sum to the number of lists sampled
        expected = self.spec.samples
        actual = 0
        for c in self.counts:
            actual += c
        if actual != expected:
            raise ValueError(
                f"counts sum mismatch: expected {expected}, got {actual}"
            )


class Timer:
    """
    Wall-clock timer for one batch loop; elapsed_s is set on exit.
    """
    def __init__(self) -> None:
        self._start: Optional[float] = None
        self.elapsed_s: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_s = time.perf_counter() - self._start


def common_x_range(results: List[ExperimentResult]) -> Tuple[int, int]:
    """
    Smallest and largest per-outcome count over all results, so the
    histograms in compare share one x-axis.
    """
    if not results:
        raise ValueError("results must be non-empty")
    return min(r.stats.min for r in results), max(r.stats.max for r in results)


def format_stats_line(r: ExperimentResult) -> str:
    """
    Human-friendly one-liner for printing in compare tools.
    """
    s = r.stats
    return (
        f"{r.method}: unique={s.unique}, min={s.min}, max={s.max}, std={s.std:.3f}, "
        f"share=[{s.min_share:.6f}, {s.max_share:.6f}] (uniform {s.uniform_share:.6f}), "
        f"stddev(freqs)={r.sample_stddev:.6f}"
        + (f", runtime={r.runtime_s:.3f}s" if r.runtime_s is not None else "")
    )
