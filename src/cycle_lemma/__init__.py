from .convergence import (
    ConvergenceError,
    ConvergenceResult,
    IterationStats,
    converge,
    run_iteration,
    run_to_convergence,
    run_until_stable,
    stddev,
    variance,
)
from .frequency_table import FrequencyTable
from .prefix import non_neg_prefix_sum, non_pos_prefix_sum
from .symbols import MAX_N, SymbolKey, Symbols, catalan, check_n, generate_n, hilo, make_rng

__all__ = [
    "ConvergenceError",
    "ConvergenceResult",
    "FrequencyTable",
    "IterationStats",
    "MAX_N",
    "SymbolKey",
    "Symbols",
    "catalan",
    "check_n",
    "converge",
    "generate_n",
    "hilo",
    "make_rng",
    "non_neg_prefix_sum",
    "non_pos_prefix_sum",
    "run_iteration",
    "run_to_convergence",
    "run_until_stable",
    "stddev",
    "variance",
]
