# simulations/run.py

from __future__ import annotations

from typing import Tuple

from .common import ExperimentSpec, ExperimentResult
from .methods import get_method


def run_experiment(
    method: str,
    n: int,
    nsyms: int,
    iterations: int = 1,
    seed: int = 42,
) -> ExperimentResult:
    """
    Run a single simulation and return an ExperimentResult.

    Parameters
    ----------
    method:
        Name of the sampling method ('uniform' or 'biased').
    n:
        Lists hold n (+1)s and n+1 (-1)s before balancing.
    nsyms:
        Number of lists per batch.
    iterations:
        Number of batches folded into the same frequency table.
    seed:
        RNG seed.

    Returns
    -------
    ExperimentResult
    """
    spec = ExperimentSpec(n=n, nsyms=nsyms, iterations=iterations)
    fn = get_method(method)
    return fn(spec, seed)


def run_pair(
    method_a: str,
    method_b: str,
    n: int,
    nsyms: int,
    iterations: int = 1,
    seed: int = 42,
) -> Tuple[ExperimentResult, ExperimentResult]:
    """
    Convenience helper: run two methods under the same spec and seed.

    Returns (result_a, result_b).
    """
    ra = run_experiment(method_a, n=n, nsyms=nsyms, iterations=iterations, seed=seed)
    rb = run_experiment(method_b, n=n, nsyms=nsyms, iterations=iterations, seed=seed)
    return ra, rb
