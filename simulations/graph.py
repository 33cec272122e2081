# simulations/graph.py

from __future__ import annotations

import random
from typing import List, Sequence, Tuple

from cycle_lemma.frequency_table import FrequencyTable
from cycle_lemma.symbols import SymbolKey, hilo


# 80 columns is pretty standard
MAX_WIDTH = 80
# blank columns around every graph; also the width of the y=0 marker
PADDING = 4


def graph(symbols: Sequence[int]) -> str:
    """
    ASCII mountain diagram of a symbol list: '/' for +1, '\\' for -1.

    The row at y=0 has its blanks filled with '_'. Rows are returned top
    first, each terminated by a newline.
    """
    high, low = hilo(symbols)
    width = len(symbols) + PADDING

    lines: List[List[str]] = [[" "] * width for _ in range(high - low)]

    row = -low
    col = PADDING // 2
    for s in symbols:
        if s == 1:
            lines[row][col] = "/"
            row += 1
        else:
            row -= 1
            lines[row][col] = "\\"
        col += 1

    if -low == len(lines):
        lines.append(["_"] * width)
    else:
        lines[-low] = ["_" if c == " " else c for c in lines[-low]]

    return "".join("".join(line) + "\n" for line in reversed(lines))


def _split(text: str) -> List[str]:
    return [line for line in text.split("\n") if line]


def merge2(lhs: str, rhs: str) -> str:
    """
    Put two graphs side by side, separated by '|'.

    The shorter graph is padded with blank rows on top so both share the
    same bottom line.
    """
    left = _split(lhs)
    right = _split(rhs)

    if len(left) > len(right):
        right = [" " * len(right[0])] * (len(left) - len(right)) + right
    elif len(right) > len(left):
        left = [" " * len(left[0])] * (len(right) - len(left)) + left

    return "".join(f"{l}|{r}\n" for l, r in zip(left, right))


def paste_graphs(items: Sequence[Tuple[SymbolKey, int]], cols: int) -> str:
    """
    Lay out graphs for the given (symbols, count) pairs in rows of `cols`.
    """
    if cols <= 0:
        raise ValueError("cols must be > 0")

    rows: List[str] = []
    for start in range(0, len(items), cols):
        chunk = items[start:start + cols]
        line = graph(chunk[0][0])
        for sym, _ in chunk[1:]:
            line = merge2(line, graph(sym))
        rows.append(line)
    return "\n".join(rows)


def format_selection(table: FrequencyTable, k: int, rng: random.Random) -> str:
    """
    Render up to `k` randomly chosen entries of `table`.
    """
    if not len(table):
        return ""
    k = min(k, len(table))
    picked = rng.sample(list(table.items()), k)
    wide = len(picked[0][0]) + PADDING
    return paste_graphs(picked, max(MAX_WIDTH // wide, 1))

