# simulations/balance.py

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Optional

from cycle_lemma.convergence import converge, run_until_stable
from cycle_lemma.frequency_table import FrequencyTable
from cycle_lemma.symbols import catalan, check_n, make_rng

from .graph import format_selection


DEFAULT_N = 4
DEFAULT_NSYMS = 1 << 16
DEFAULT_MAXITERS = 1 << 10
DEFAULT_EPS = 0.1

# Above this, run_to_convergence would take far too long; only count
# distinct outcomes instead.
CONVERGENCE_LIMIT_N = 10

# How many balanced lists to draw at the end.
MAX_PRINTED = 20

USAGE = "balance [n=4] [nsyms=65536] [maxiters=1024] [eps=0.1]"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceConfig:
    n: int = DEFAULT_N
    nsyms: int = DEFAULT_NSYMS
    max_iters: int = DEFAULT_MAXITERS
    eps: float = DEFAULT_EPS
    seed: Optional[int] = None  # None seeds from OS entropy

    def __post_init__(self) -> None:
        check_n(self.n)
        if self.nsyms <= 0:
            raise ValueError("nsyms must be > 0")
        if self.max_iters <= 0:
            raise ValueError("maxiters must be > 0")
        if self.eps <= 0:
            raise ValueError("eps must be > 0")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="balance",
        usage=USAGE,
        description=(
            "Scramble lists of n (+1)s and n+1 (-1)s, balance them by cut-and-splice "
            "and test whether the balanced lists come out uniformly distributed."
        ),
    )
    parser.add_argument("n", nargs="?", type=int, default=DEFAULT_N)
    parser.add_argument("nsyms", nargs="?", type=int, default=DEFAULT_NSYMS, help="lists per iteration")
    parser.add_argument("maxiters", nargs="?", type=int, default=DEFAULT_MAXITERS)
    parser.add_argument("eps", nargs="?", type=float, default=DEFAULT_EPS)
    parser.add_argument("--seed", type=int, default=None, help="fixed RNG seed for reproducible runs")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every iteration")
    return parser


def parse_config(argv: list[str]) -> BalanceConfig:
    """
    Parse CLI arguments. Exits with status 2 and the usage line on bad input.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = BalanceConfig(
            n=args.n,
            nsyms=args.nsyms,
            max_iters=args.maxiters,
            eps=args.eps,
            seed=args.seed,
        )
    except ValueError as e:
        parser.error(str(e))
    if args.verbose and not logging.getLogger().handlers:
        logging.basicConfig(level=logging.DEBUG)
    return config


def run(config: BalanceConfig) -> int:
    rng = make_rng(config.seed)
    table = FrequencyTable()
    n = config.n

    if n <= CONVERGENCE_LIMIT_N:
        result = converge(table, n, config.nsyms, config.eps, config.max_iters, rng)
        if not result.converged:
            print(f"distribution did not converge after {config.max_iters} iterations")
            return 0
        total = result.total
        print(f"convergence for (n={n}, nsyms={config.nsyms}, eps={config.eps:f}):")
        print(f"unique lists\t= {table.size()}")
        print(f"total samples\t= {total}")
        print(f"uniform freq.\t= {1.0 / table.size():f}")
        print(f"stddev(freqs)\t= {result.stddev:f}")
    else:
        logger.info("n=%d is too large for convergence, counting unique lists only", n)
        total, _ = run_until_stable(table, n, config.nsyms, rng)

    print(f"result for (n={n}, nsyms={config.nsyms}):")
    print(f"unique lists\t= {table.size()}")
    print(f"expected lists\t= {catalan(n)}")
    print(f"total samples\t= {total}")

    nprint = min(table.size(), MAX_PRINTED)
    print(f"\n({nprint}/{table.size()}) unique lists:\n")
    print(format_selection(table, nprint, rng))
    return 0


def main(argv: list[str]) -> int:
    return run(parse_config(argv))


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
