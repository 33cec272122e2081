# simulations/compare.py

from __future__ import annotations

import argparse
import sys

import matplotlib.pyplot as plt

from .common import common_x_range, format_stats_line
from .run import run_pair


# Keep the tool intentionally opinionated:
# - the seed is fixed unless you edit the file
# - the two methods are always uniform vs. biased
DEFAULT_SEED = 42
DEFAULT_NSYMS = 1 << 14
DEFAULT_ITERATIONS = 4


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description="Compare uniform vs. biased scrambling via Monte Carlo (same x-axis plots)."
    )
    parser.add_argument("--n", type=int, default=4, help="lists hold n (+1)s and n+1 (-1)s")
    parser.add_argument("--nsyms", type=int, default=DEFAULT_NSYMS, help="lists per batch")
    parser.add_argument("--iterations", type=int, default=DEFAULT_ITERATIONS, help="number of batches")
    parser.add_argument("--no-plot", action="store_true", help="print stats only")

    args = parser.parse_args(argv)

    try:
        ra, rb = run_pair(
            "uniform",
            "biased",
            n=args.n,
            nsyms=args.nsyms,
            iterations=args.iterations,
            seed=DEFAULT_SEED,
        )
    except ValueError as e:
        parser.error(str(e))

    print(format_stats_line(ra))
    print(format_stats_line(rb))

    if args.no_plot:
        return 0

    # Plot with same x-axis
    xmin, xmax = common_x_range([ra, rb])
    if xmin == xmax:
        xmax = xmin + 1

    plt.figure(figsize=(12, 4))

    plt.subplot(1, 2, 1)
    plt.hist(ra.counts, bins=60, range=(xmin, xmax))
    plt.title(ra.method)
    plt.xlabel("Occurrences per balanced list")
    plt.ylabel("Number of balanced lists")
    plt.xlim(xmin, xmax)

    plt.subplot(1, 2, 2)
    plt.hist(rb.counts, bins=60, range=(xmin, xmax))
    plt.title(rb.method)
    plt.xlabel("Occurrences per balanced list")
    plt.xlim(xmin, xmax)

    plt.suptitle(
        f"Compare: {ra.method} vs {rb.method}  "
        f"(n={args.n}, nsyms={args.nsyms}, iterations={args.iterations})"
    )
    plt.tight_layout(rect=[0, 0.02, 1, 0.92])
    plt.show()

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
