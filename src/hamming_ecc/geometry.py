# file: src/hamming_ecc/geometry.py

"""
Code geometry resolution.

Derives the parity-bit count and code length of a Hamming code from the
number of information bits, and splits codeword positions into parity
and data positions.
"""

import numbers
from dataclasses import dataclass
from typing import Tuple

from .bitvector import Position
from .errors import InvalidLengthError


@dataclass(frozen=True)
class CodeGeometry:
    """
    Dimensions of a Hamming code.

    Attributes:
        k: Number of information bits
        p: Number of parity bits (minimal, 2**p - p - 1 >= k)
        n: Code length 2**p - 1
        n_ext: Code length with the overall parity bit (SEC-DED)
    """
    k: int
    p: int
    n: int
    n_ext: int

    @property
    def max_k(self) -> int:
        """Information bits a full-length code with p parity bits carries."""
        return self.n - self.p

    @property
    def systematic_length(self) -> int:
        """Length of the shortened systematic code [I_k | P]."""
        return self.k + self.p


@dataclass(frozen=True)
class PositionSets:
    """
    Partition of codeword positions into parity and data positions.

    parity_positions[i] is the check bit governed by row i of the
    parity-check matrix. The order of data_positions is the order in which
    information bits are placed into (and read back from) the codeword.
    """
    parity_positions: Tuple[Position, ...]
    data_positions: Tuple[Position, ...]

    @property
    def length(self) -> int:
        return len(self.parity_positions) + len(self.data_positions)


def resolve_geometry(k: int) -> CodeGeometry:
    """
    Compute the minimal Hamming code for k information bits.

    Starting at p = 2, p is incremented until 2**p - p - 1 >= k.

    Args:
        k: Number of information bits

    Returns:
        CodeGeometry with minimal p

    Raises:
        InvalidLengthError: If k is not a positive integer

    Example:
        >>> resolve_geometry(4)
        CodeGeometry(k=4, p=3, n=7, n_ext=8)
    """
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise InvalidLengthError(f"k must be an integer, got {type(k).__name__}")
    if k <= 0:
        raise InvalidLengthError(f"k must be > 0, got {k}")

    k = int(k)
    p = 2
    while (1 << p) - p - 1 < k:
        p += 1

    n = (1 << p) - 1
    return CodeGeometry(k=k, p=p, n=n, n_ext=n + 1)


def derive_positions(geometry: CodeGeometry) -> PositionSets:
    """
    Canonical layout: powers of two are parity positions.

    Data positions are the remaining positions 1..n in ascending order.
    """
    parity = []
    position = 1
    while position <= geometry.n:
        parity.append(Position(position))
        position <<= 1

    taken = set(parity)
    data = tuple(
        Position(i) for i in range(1, geometry.n + 1) if i not in taken
    )
    return PositionSets(parity_positions=tuple(parity), data_positions=data)


def systematic_positions(geometry: CodeGeometry) -> PositionSets:
    """Systematic layout: information bits first, then the p check bits."""
    k = geometry.k
    return PositionSets(
        parity_positions=tuple(
            Position(i) for i in range(k + 1, geometry.systematic_length + 1)
        ),
        data_positions=tuple(Position(i) for i in range(1, k + 1)),
    )
