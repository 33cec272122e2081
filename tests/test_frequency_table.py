from __future__ import annotations

import pytest

from cycle_lemma.frequency_table import FrequencyTable
from cycle_lemma.symbols import SymbolKey, Symbols


def test_empty_table() -> None:
    table = FrequencyTable()
    assert table.size() == 0
    assert len(table) == 0
    assert table.total_count() == 0
    assert table.proportions() == []


def test_insert_or_increment_counts_by_value() -> None:
    table = FrequencyTable()
    a = SymbolKey([1, -1, 1, -1])
    b = SymbolKey([1, 1, -1, -1])

    table.insert_or_increment(a)
    table.insert_or_increment(b)
    table.insert_or_increment(Symbols.from_symbols([1, -1, 1, -1]).freeze())

    assert table.size() == 2
    assert table[a] == 2
    assert table[b] == 1
    assert a in table
    assert table.total_count() == 3
    assert sorted(table.snapshot_counts()) == [1, 2]


def test_proportions() -> None:
    table = FrequencyTable()
    for values, count in (([1, -1], 3), ([-1, 1], 1)):
        for _ in range(count):
            table.insert_or_increment(SymbolKey(values))

    props = table.proportions()
    assert sorted(props) == pytest.approx([0.25, 0.75])
    assert sum(props) == pytest.approx(1.0)


def test_snapshot_is_a_copy() -> None:
    table = FrequencyTable()
    table.insert_or_increment(SymbolKey([1, -1]))
    snap = table.snapshot_counts()
    snap[0] = 100
    assert table.snapshot_counts() == [1]
    assert dict(table.items()) == {SymbolKey([1, -1]): 1}
    assert list(table) == [SymbolKey([1, -1])]
