from __future__ import annotations

import math

import pytest

from cycle_lemma.convergence import (
    ConvergenceError,
    converge,
    run_iteration,
    run_to_convergence,
    run_until_stable,
    stddev,
    variance,
)
from cycle_lemma.frequency_table import FrequencyTable
from cycle_lemma.symbols import Symbols, make_rng


# ------------------------------------------------------------
# stddev
# ------------------------------------------------------------

def test_stddev_reference_values() -> None:
    data = [float(x) for x in range(1, 10)]
    assert stddev(data) == pytest.approx(2.7386, abs=1e-4)
    assert stddev(list(reversed(data))) == pytest.approx(2.7386, abs=1e-4)
    assert stddev([float(x) for x in range(1, 101)]) == pytest.approx(29.0115, abs=1e-4)


def test_stddev_accepts_ints() -> None:
    assert stddev(list(range(1, 10))) == pytest.approx(2.7386, abs=1e-4)
    assert stddev(list(range(100, 0, -1))) == pytest.approx(29.0115, abs=1e-4)


def test_variance_needs_two_points() -> None:
    assert variance([2, 4]) == pytest.approx(2.0)
    with pytest.raises(ValueError):
        variance([1.0])
    with pytest.raises(ValueError):
        stddev([])


# ------------------------------------------------------------
# run_iteration
# ------------------------------------------------------------

def test_run_iteration_accumulates() -> None:
    table = FrequencyTable()
    rng = make_rng(1)

    sdev, total = run_iteration(table, 3, 2000, rng)
    assert total == 2000
    assert table.size() == 5
    assert math.isfinite(sdev)

    _, total = run_iteration(table, 3, 2000, rng)
    assert total == 4000
    assert table.total_count() == 4000
    for key in table:
        assert len(key) == 6
        assert key.is_balanced()


def test_run_iteration_transforms_each_list_once(monkeypatch) -> None:
    calls = []
    original = Symbols.cut_and_splice

    def counting(self):
        calls.append(self)
        return original(self)

    monkeypatch.setattr(Symbols, "cut_and_splice", counting)
    run_iteration(FrequencyTable(), 2, 50, make_rng(0))
    assert len(calls) == 50
    assert len({id(s) for s in calls}) == 50


def test_single_outcome_is_not_converged() -> None:
    table = FrequencyTable()
    sdev, total = run_iteration(table, 2, 1, make_rng(0))
    assert table.size() == 1
    assert total == 1
    assert sdev == math.inf


@pytest.mark.parametrize("n", [0, 1])
def test_single_outcome_is_uniform_when_it_is_the_only_one(n: int) -> None:
    table = FrequencyTable()
    sdev, _ = run_iteration(table, n, 10, make_rng(0))
    assert table.size() == 1
    assert sdev == 0.0


# ------------------------------------------------------------
# converge / run_to_convergence
# ------------------------------------------------------------

def test_converges_for_uniform_sampler() -> None:
    table = FrequencyTable()
    result = converge(table, 3, 4096, 0.1, 50, make_rng(42))

    assert result.converged
    assert result.iterations >= 6
    assert result.stddev <= 0.1 / table.size()
    assert result.total == 4096 * result.iterations
    assert len(result.history) == result.iterations
    assert result.unwrap() == (result.stddev, result.total)


def test_thresholds_never_grow() -> None:
    table = FrequencyTable()
    # small batches so new outcomes keep showing up early on
    result = converge(table, 4, 8, 0.1, 30, make_rng(7))

    thresholds = result.thresholds
    assert len(thresholds) == result.iterations
    for prev, cur in zip(thresholds, thresholds[1:]):
        assert cur <= prev
    assert thresholds[-1] == pytest.approx(0.1 / table.size())


@pytest.mark.parametrize("n, iterations", [(0, 1), (1, 2)])
def test_trivial_support_converges_at_iteration_floor(n: int, iterations: int) -> None:
    result = converge(FrequencyTable(), n, 16, 0.1, 10, make_rng(0))
    assert result.converged
    assert result.iterations == iterations
    assert result.stddev == 0.0


def test_iteration_floor_beyond_budget_reports_failure() -> None:
    result = converge(FrequencyTable(), 3, 1024, 0.1, 2, make_rng(0))
    assert not result.converged
    assert result.iterations == 2
    with pytest.raises(ConvergenceError) as exc_info:
        result.unwrap()
    assert exc_info.value.iterations == 2
    assert exc_info.value.total == 2048


@pytest.mark.parametrize(
    "nsyms, eps, max_iters",
    [(0, 0.1, 10), (10, 0.0, 10), (10, 0.1, 0)],
)
def test_converge_rejects_bad_parameters(nsyms: int, eps: float, max_iters: int) -> None:
    with pytest.raises(ValueError):
        converge(FrequencyTable(), 3, nsyms, eps, max_iters, make_rng(0))


@pytest.mark.slow
def test_n4_uniform_converges() -> None:
    sdev, total = run_to_convergence(FrequencyTable(), 4, 4096, 0.1, 50, make_rng(2024))
    assert sdev <= 0.1 / 14
    assert total % 4096 == 0


@pytest.mark.slow
def test_n4_biased_does_not_converge() -> None:
    with pytest.raises(ConvergenceError) as exc_info:
        run_to_convergence(FrequencyTable(), 4, 4096, 0.1, 50, make_rng(2024), biased=True)
    assert exc_info.value.iterations == 50
    assert exc_info.value.total == 50 * 4096


# ------------------------------------------------------------
# run_until_stable
# ------------------------------------------------------------

def test_run_until_stable_finds_full_support() -> None:
    table = FrequencyTable()
    total, iters = run_until_stable(table, 3, 1000, make_rng(3))
    assert iters >= 2
    assert total == 1000 * iters
    assert table.size() == 5


def test_run_until_stable_gives_up_after_budget() -> None:
    # 208012 balanced lists for n=12, so every small batch finds new ones
    with pytest.raises(ConvergenceError) as exc_info:
        run_until_stable(FrequencyTable(), 12, 10, make_rng(0), max_iters=3)
    assert exc_info.value.iterations == 3
