"""Electronic configurations stored as bit strings."""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Iterator

import numpy as np


class Bitset:
    """Occupation bit string of a Slater determinant.

    Bits are stored most significant first, so ``bits[0]`` is the leftmost
    character of ``str(bitset)``.  Orbital indices used by :meth:`flip`,
    :meth:`count`, :meth:`occ` and :meth:`excitation` count from the right,
    with orbital 0 being the least significant bit.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Iterable[int] = ()) -> None:
        self._bits = [1 if b else 0 for b in bits]

    @classmethod
    def from_int(cls, n: int, size: int) -> Bitset:
        """Build the ``size``-bit binary representation of ``n``."""
        if n < 0:
            raise ValueError("bitset: integer value must be non-negative")
        if n.bit_length() - 1 > size:
            raise ValueError("bitset: integer value exceeds bitset size")
        return cls((n >> (size - 1 - k)) & 1 for k in range(size))

    @property
    def bits(self) -> tuple[int, ...]:
        return tuple(self._bits)

    def copy(self) -> Bitset:
        return Bitset(self._bits)

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self._bits)

    def __str__(self) -> str:
        return "".join(str(b) for b in self._bits)

    def __repr__(self) -> str:
        return f"Bitset('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitset):
            return NotImplemented
        return self._bits == other._bits

    __hash__ = None  # type: ignore[assignment]

    def __int__(self) -> int:
        value = 0
        for b in self._bits:
            value = (value << 1) | b
        return value

    def _combine(self, other: Bitset, op: Callable[[int, int], int]) -> Bitset:
        if len(other) != len(self):
            raise ValueError("bitset: operands have different sizes")
        return Bitset(op(a, b) for a, b in zip(self._bits, other._bits))

    def __and__(self, other: Bitset) -> Bitset:
        return self._combine(other, operator.and_)

    def __or__(self, other: Bitset) -> Bitset:
        return self._combine(other, operator.or_)

    def __xor__(self, other: Bitset) -> Bitset:
        return self._combine(other, operator.xor)

    def flip(self, i: int) -> None:
        """Toggle orbital ``i`` (0 is the rightmost bit)."""
        size = len(self._bits)
        if not 0 <= i < size:
            raise IndexError(f"bitset: index {i} out of range for size {size}")
        pos = size - 1 - i
        self._bits[pos] ^= 1

    def count(self, lo: int = 0, hi: int = 0) -> int:
        """Count set bits, either all of them or those of orbitals ``lo <= i < hi``."""
        if lo == 0 and hi == 0:
            return sum(self._bits)
        return sum(self._bits[::-1][lo:hi])

    def excitation(self, other: Bitset) -> tuple[np.ndarray, int]:
        """Hole-particle indices and parity of the excitation from this bitset to ``other``.

        Returns an ``(n, 2)`` integer array whose rows are ``(hole, particle)``
        pairs, together with the sign of the excitation.
        """
        if len(other) != len(self):
            raise ValueError("bitset: operands have different sizes")
        diff = [o - s for s, o in zip(reversed(self._bits), reversed(other._bits))]
        holes = [p for p, d in enumerate(diff) if d == -1]
        particles = [p for p, d in enumerate(diff) if d == 1][::-1]
        if len(holes) != len(particles):
            raise ValueError("bitset: configurations have different particle numbers")
        hp = np.array(list(zip(holes, particles)), dtype=np.intp).reshape(-1, 2)

        par = 1
        tmp = self.copy()
        for h, p in zip(holes, particles):
            tmp.flip(h)
            tmp.flip(p)
            if (self & tmp).count(h, p) % 2:
                par = -par
        return hp, par

    def parity(self, other: Bitset) -> int:
        """Sign of the excitation from this bitset to ``other``."""
        return self.excitation(other)[1]

    def occ(self) -> np.ndarray:
        """Indices of occupied orbitals in ascending order."""
        return np.array(
            [i for i, b in enumerate(reversed(self._bits)) if b], dtype=np.intp
        )

    def next_fci(self) -> bool:
        """Step to the next configuration in lexicographic order.

        Returns False, after resetting to the first configuration, when this
        was the last one.
        """
        b = self._bits
        i = len(b) - 2
        while i >= 0 and b[i] >= b[i + 1]:
            i -= 1
        if i < 0:
            b.reverse()
            return False
        j = len(b) - 1
        while b[j] <= b[i]:
            j -= 1
        b[i], b[j] = b[j], b[i]
        b[i + 1 :] = b[:i:-1]
        return True


def fci_bitset_list(nelec: int, norb: int) -> list[Bitset]:
    """All configurations of ``nelec`` electrons in ``norb`` orbitals."""
    b = Bitset.from_int(2**nelec - 1, norb)
    configs = [b.copy()]
    while b.next_fci():
        configs.append(b.copy())
    return configs