from typing import Iterable


def non_neg_prefix_sum(values: Iterable[int]) -> bool:
    """
    True if every prefix sum of `values` is >= 0.

    Stops at the first negative running sum. An empty input is vacuously
    balanced.
    """
    total = 0
    for v in values:
        total += v
        if total < 0:
            return False
    return True


def non_pos_prefix_sum(values: Iterable[int]) -> bool:
    """
    True if every prefix sum of `values` is <= 0.
    """
    total = 0
    for v in values:
        total += v
        if total > 0:
            return False
    return True
