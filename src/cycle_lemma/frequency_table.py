from typing import Dict, ItemsView, Iterator, List

from .symbols import SymbolKey


class FrequencyTable:
    """
    Occurrence counts of distinct balanced sequences, keyed by value.

    Entries are created on first observation and only ever incremented,
    so the table grows monotonically over a run.
    """

    def __init__(self) -> None:
        self.counts: Dict[SymbolKey, int] = {}

    def insert_or_increment(self, key: SymbolKey) -> None:
        self.counts[key] = self.counts.get(key, 0) + 1

    def total_count(self) -> int:
        total = 0
        for c in self.counts.values():
            total += c
        return total

    def proportions(self) -> List[float]:
        """
        count / total for every entry. Order is not meaningful.
        """
        total = self.total_count()
        if total == 0:
            return []
        return [c / total for c in self.counts.values()]

    def size(self) -> int:
        return len(self.counts)

    # ------------------------------------------------------------
    # Introspection (read-only)
    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, key: object) -> bool:
        return key in self.counts

    def __getitem__(self, key: SymbolKey) -> int:
        return self.counts[key]

    def __iter__(self) -> Iterator[SymbolKey]:
        return iter(self.counts)

    def items(self) -> ItemsView[SymbolKey, int]:
        return self.counts.items()

    def snapshot_counts(self) -> List[int]:
        """
        Return a copy of the counts for inspection/debugging.
        """
        return list(self.counts.values())
