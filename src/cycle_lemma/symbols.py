import math
import random
from itertools import accumulate
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .prefix import non_neg_prefix_sum


# Beyond this the lists no longer fit comfortably in memory. Anything above
# n ~ 10 is already impractical for the convergence loop.
MAX_N = 1 << 24

# Keys up to this length hash a packed integer instead of a string.
_PACKED_HASH_BITS = 64


def make_rng(seed: Optional[int] = None) -> random.Random:
    """
    Build the random source shared by every scramble in a run.

    A fixed seed gives reproducible runs; None seeds from OS entropy.
    """
    return random.Random(seed)


def catalan(n: int) -> int:
    """Number of balanced sequences of length 2n: C_n = binom(2n, n) / (n + 1)."""
    if n < 0:
        raise ValueError("n must be >= 0")
    return math.comb(2 * n, n) // (n + 1)


def partial_sums(values: Iterable[int]) -> List[int]:
    return list(accumulate(values))


def hilo(values: Iterable[int]) -> Tuple[int, int]:
    """
    Highest and lowest partial sums, clamped so that high >= 0 >= low.
    """
    sums = partial_sums(values)
    if not sums:
        return 0, 0
    return max(max(sums), 0), min(min(sums), 0)


def check_n(n: int) -> None:
    """Raise ValueError unless n is an int in [0, MAX_N]."""
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"n must be an integer, got {n!r}")
    if n < 0:
        raise ValueError("n must be >= 0")
    if n > MAX_N:
        raise ValueError(f"n must be <= {MAX_N}")


def _format(values: Sequence[int]) -> str:
    return "{" + ", ".join(str(v) for v in values) + "}"


class SymbolKey:
    """
    Immutable, hashable snapshot of a symbol sequence.

    This is what a FrequencyTable stores. Two keys are equal iff their
    symbols are equal element-wise. Short keys (up to 64 symbols) hash a
    packed integer with one bit per symbol (1 for +1, 0 for -1); longer keys
    hash a '1'/'0' string of the same layout.
    """

    __slots__ = ("_symbols", "_hash")

    def __init__(self, values: Iterable[int]):
        self._symbols: Tuple[int, ...] = tuple(values)
        self._hash: Optional[int] = None

    def _to_bits(self) -> int:
        bits = 0
        for s in self._symbols:
            bits = (bits << 1) | (1 if s == 1 else 0)
        return bits

    def _to_string(self) -> str:
        return "".join("1" if s == 1 else "0" for s in self._symbols)

    def __hash__(self) -> int:
        if self._hash is None:
            if len(self._symbols) > _PACKED_HASH_BITS:
                self._hash = hash(self._to_string())
            else:
                self._hash = hash(self._to_bits())
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymbolKey):
            return self._symbols == other._symbols
        if isinstance(other, Symbols):
            return self._symbols == tuple(other)
        return NotImplemented

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[int]:
        return iter(self._symbols)

    def __getitem__(self, index: int) -> int:
        return self._symbols[index]

    def __repr__(self) -> str:
        return f"SymbolKey({_format(self._symbols)})"

    def __str__(self) -> str:
        return _format(self._symbols)

    def is_balanced(self) -> bool:
        return non_neg_prefix_sum(self._symbols)


class Symbols:
    """
    A list of +1/-1 symbols used by the cycle-lemma construction.

    Symbols(n) starts out as n copies of +1 followed by n+1 copies of -1.
    A run then moves each instance through three states:

        constructed --scramble()--> scrambled --cut_and_splice()--> balanced

    scramble() permutes in place; cut_and_splice() returns a new, shorter
    instance. The underlying list is private so the only way to change the
    contents is through these operations. Use freeze() to get a hashable
    SymbolKey for counting.
    """

    __slots__ = ("_symbols",)

    # Instances are mutable; hash a frozen SymbolKey instead.
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, n: int):
        check_n(n)
        self._symbols: List[int] = [1] * n + [-1] * (n + 1)

    @classmethod
    def from_symbols(cls, values: Iterable[int]) -> "Symbols":
        """
        Build an instance from an explicit sequence of +1/-1 values.
        """
        symbols = list(values)
        for v in symbols:
            if v not in (1, -1):
                raise ValueError(f"symbols must be +1 or -1, got {v!r}")
        obj = cls.__new__(cls)
        obj._symbols = symbols
        return obj

    # ------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------

    def scramble(self, rng: random.Random, biased: bool = False) -> None:
        """
        In-place Fisher-Yates shuffle.

        For i from the last index down to 1, draw j in [0, i] and swap
        positions i and j. The draw is uniform unless `biased` is set, in
        which case j ~ Binomial(i, 0.5). The biased variant exists only to
        show that the convergence check rejects a skewed sampler.
        """
        s = self._symbols
        for i in range(len(s) - 1, 0, -1):
            if biased:
                j = bin(rng.getrandbits(i)).count("1")
            else:
                j = rng.randint(0, i)
            s[i], s[j] = s[j], s[i]

    def lowest_valley(self) -> int:
        """
        Index of the global minimum of the partial sums.

        Ties resolve to the first minimum from the left.
        """
        if not self._symbols:
            raise ValueError("empty symbol list has no valley")
        sums = partial_sums(self._symbols)
        return min(range(len(sums)), key=sums.__getitem__)

    def cut_and_splice(self) -> "Symbols":
        """
        Rotate to start just after the lowest valley, dropping the valley.

        With i = lowest_valley() the result is self[i+1:] + self[:i]. The
        symbol at i is the -1 step that reaches the minimum; leaving it out
        turns 2n+1 symbols into 2n whose prefix sums never go negative.
        """
        i = self.lowest_valley()
        s = self._symbols
        return Symbols.from_symbols(s[i + 1:] + s[:i])

    def is_balanced(self) -> bool:
        # only non-negative prefix sums count as balanced
        return non_neg_prefix_sum(self._symbols)

    def hilo(self) -> Tuple[int, int]:
        return hilo(self._symbols)

    def freeze(self) -> SymbolKey:
        return SymbolKey(self._symbols)

    # ------------------------------------------------------------
    # Read-only sequence access
    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[int]:
        return iter(self._symbols)

    def __getitem__(self, index: int) -> int:
        return self._symbols[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Symbols):
            return self._symbols == other._symbols
        if isinstance(other, SymbolKey):
            return other == self
        return NotImplemented

    def __repr__(self) -> str:
        return f"Symbols({_format(self._symbols)})"

    def __str__(self) -> str:
        return _format(self._symbols)


def generate_n(n: int, nsyms: int) -> List[Symbols]:
    """
    Generate `nsyms` independent canonical Symbols(n) instances.
    """
    if nsyms < 0:
        raise ValueError("nsyms must be >= 0")
    return [Symbols(n) for _ in range(nsyms)]
