# simulations/methods.py

from __future__ import annotations

from typing import Callable, Dict

from cycle_lemma.convergence import run_iteration
from cycle_lemma.frequency_table import FrequencyTable
from cycle_lemma.symbols import make_rng

from .common import ExperimentSpec, ExperimentResult, Timer


SimFn = Callable[[ExperimentSpec, int], ExperimentResult]


def _simulate(method: str, spec: ExperimentSpec, seed: int, biased: bool) -> ExperimentResult:
    rng = make_rng(seed)
    table = FrequencyTable()
    sdev = float("inf")

    with Timer() as t:
        for _ in range(spec.iterations):
            sdev, _ = run_iteration(table, spec.n, spec.nsyms, rng, biased=biased)

    return ExperimentResult(
        method=method,
        spec=spec,
        counts=table.snapshot_counts(),
        sample_stddev=sdev,
        runtime_s=t.elapsed_s,
        meta={"biased": biased, "seed": seed},
    )


def simulate_uniform(spec: ExperimentSpec, seed: int) -> ExperimentResult:
    """
    Fisher-Yates with uniform draws, then cut-and-splice.

    By the cycle lemma every balanced list of length 2n is hit by exactly
    2n+1 of the (2n+1)! orderings, so counts should come out flat.
    """
    return _simulate("uniform", spec, seed, biased=False)


def simulate_biased(spec: ExperimentSpec, seed: int) -> ExperimentResult:
    """
    Fisher-Yates with Binomial(i, 0.5) draws instead of uniform ones.

    The permutation is no longer uniform, so neither are the balanced
    outcomes. Useful as a negative control.
    """
    return _simulate("biased", spec, seed, biased=True)


# --- Registry / dispatch -----------------------------------------------------

def get_method(name: str) -> SimFn:
    name = name.strip().lower()
    if name not in METHODS:
        raise ValueError(f"unknown method '{name}'. Available: {sorted(METHODS.keys())}")
    return METHODS[name]


# METHODS maps method name -> function.
METHODS: Dict[str, SimFn] = {
    "uniform": simulate_uniform,
    "biased": simulate_biased,
}
