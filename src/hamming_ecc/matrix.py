# file: src/hamming_ecc/matrix.py

"""
Parity-check matrix construction.

Two interchangeable strategies build the p x length matrix H:

    canonical   Column j is the binary representation of j; the syndrome of
                a single-bit error, read as an integer, is its position.
    systematic  H = [P^T | I_p] derived from a generator G = [I_k | P].

Both strategies check that no column is zero and no two columns repeat,
which is what makes every single-bit error distinguishable.
"""

import logging
import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .bitvector import Position, as_bits, int_to_bits, xor_reduce
from .errors import DegenerateMatrixError, HammingConfigurationError
from .geometry import (
    CodeGeometry,
    PositionSets,
    derive_positions,
    systematic_positions,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ParityCheckMatrix:
    """
    Binary parity-check matrix H.

    Row i lists the codeword positions taking part in the i-th parity
    equation; column j-1 is the pattern a single error at position j
    leaves in the syndrome.
    """
    matrix: np.ndarray
    strategy: str

    @property
    def rows(self) -> int:
        return self.matrix.shape[0]

    @property
    def length(self) -> int:
        """Number of codeword positions covered (columns)."""
        return self.matrix.shape[1]

    def column(self, position: int) -> np.ndarray:
        """Column of H for a 1-based codeword position."""
        return self.matrix[:, Position(position).index].copy()

    def syndrome(self, word: Sequence[int]) -> np.ndarray:
        """H . word (mod 2) for a word of exactly `length` bits."""
        word = as_bits(word, length=self.length, name="word")
        return (self.matrix.astype(np.int64) @ word.astype(np.int64) % 2).astype(np.uint8)

    def locate(self, syndrome: Sequence[int]) -> Optional[Position]:
        """
        Find the position whose column equals the syndrome.

        Returns None for the zero syndrome or a pattern that matches no
        column (possible only for shortened codes).
        """
        syndrome = as_bits(syndrome, length=self.rows, name="syndrome")
        if not syndrome.any():
            return None
        matches = np.flatnonzero((self.matrix.T == syndrome).all(axis=1))
        if matches.size == 0:
            return None
        return Position.from_index(int(matches[0]))

    def format(self, max_columns: int = 15) -> str:
        """
        Render H as text, one line per parity equation.

        Columns beyond max_columns are elided with '...'.
        """
        shown = min(self.length, max_columns)
        header = "pos  " + " ".join(f"{j:2d}" for j in range(1, shown + 1))
        lines = [header, "     " + "-" * (3 * shown - 1)]
        for i in range(self.rows):
            cells = " ".join(f"{int(b):2d}" for b in self.matrix[i, :shown])
            tail = " ..." if self.length > shown else ""
            lines.append(f"r{i:<3d} {cells}{tail}")
        return "\n".join(lines)


def validate_columns(matrix: np.ndarray) -> None:
    """
    Check that H has no zero and no duplicated column.

    Raises:
        DegenerateMatrixError: If either invariant is violated
    """
    zero_columns = np.flatnonzero(~matrix.any(axis=0))
    if zero_columns.size:
        positions = tuple(int(c) + 1 for c in zero_columns)
        raise DegenerateMatrixError(
            f"Parity-check matrix has all-zero column(s) at positions {positions}",
            columns=positions
        )

    seen: Dict[bytes, int] = {}
    for index in range(matrix.shape[1]):
        key = matrix[:, index].tobytes()
        if key in seen:
            positions = (seen[key] + 1, index + 1)
            raise DegenerateMatrixError(
                f"Parity-check matrix columns at positions {positions} are identical",
                columns=positions
            )
        seen[key] = index


class MatrixStrategy(ABC):
    """Builds the parity-check matrix and the matching position layout."""

    name = ""

    @abstractmethod
    def build(self, geometry: CodeGeometry) -> ParityCheckMatrix:
        """Construct H for the given geometry."""

    @abstractmethod
    def positions(self, geometry: CodeGeometry) -> PositionSets:
        """Parity/data positions consistent with build()."""

    @abstractmethod
    def encode_word(
        self,
        geometry: CodeGeometry,
        positions: PositionSets,
        info: np.ndarray,
        matrix: ParityCheckMatrix
    ) -> np.ndarray:
        """Place k validated information bits and fill in the check bits."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CanonicalStrategy(MatrixStrategy):
    """H[row][col - 1] = (col >> row) & 1 for col in 1..n."""

    name = "canonical"

    def build(self, geometry: CodeGeometry) -> ParityCheckMatrix:
        columns = np.arange(1, geometry.n + 1)
        rows = np.arange(geometry.p)
        matrix = ((columns[np.newaxis, :] >> rows[:, np.newaxis]) & 1).astype(np.uint8)

        validate_columns(matrix)
        logger.debug("Built canonical H (%d x %d)", geometry.p, geometry.n)
        if geometry.k < geometry.max_k:
            logger.debug(
                "Shortened canonical code: %d of %d data slots unused",
                geometry.max_k - geometry.k, geometry.max_k
            )
        return ParityCheckMatrix(matrix=matrix, strategy=self.name)

    def positions(self, geometry: CodeGeometry) -> PositionSets:
        return derive_positions(geometry)

    def encode_word(self, geometry, positions, info, matrix):
        word = np.zeros(matrix.length, dtype=np.uint8)

        # Unused data slots of a shortened code stay zero
        for bit, position in zip(info, positions.data_positions):
            word[position.index] = bit

        # Parity bit 2**j: XOR of every position with bit j set (itself still 0)
        all_positions = np.arange(1, matrix.length + 1)
        for j, parity_position in enumerate(positions.parity_positions):
            covered = ((all_positions >> j) & 1).astype(bool)
            word[parity_position.index] = xor_reduce(word[covered])

        return word


def parity_patterns(k: int, p: int) -> List[int]:
    """
    Parity-block row patterns for the systematic generator matrix.

    Rows 0..k-2 take increasing integers starting at 3, skipping powers of
    two (weight-1 patterns belong to the identity block of H). The last
    row is forced to all ones.
    """
    patterns = []
    value = 3
    for _ in range(k - 1):
        while value & (value - 1) == 0:
            value += 1
        patterns.append(value)
        value += 1
    patterns.append((1 << p) - 1)
    return patterns


def build_generator_matrix(geometry: CodeGeometry) -> np.ndarray:
    """
    Generator matrix G = [I_k | P] of shape k x (k + p).

    Args:
        geometry: Resolved code geometry

    Returns:
        G: uint8 array; row i encodes information bit i
    """
    k, p = geometry.k, geometry.p
    G = np.zeros((k, k + p), dtype=np.uint8)
    G[:, :k] = np.eye(k, dtype=np.uint8)

    for i, pattern in enumerate(parity_patterns(k, p)):
        G[i, k:] = int_to_bits(pattern, p)

    return G


class SystematicStrategy(MatrixStrategy):
    """H = [P^T | I_p] from G = [I_k | P]; code length k + p."""

    name = "systematic"

    def build(self, geometry: CodeGeometry) -> ParityCheckMatrix:
        k, p = geometry.k, geometry.p
        G = build_generator_matrix(geometry)

        # Transpose the parity block, then append the identity block
        matrix = np.hstack([G[:, k:].T, np.eye(p, dtype=np.uint8)]).astype(np.uint8)

        validate_columns(matrix)
        logger.debug("Built systematic H (%d x %d)", p, geometry.systematic_length)
        return ParityCheckMatrix(matrix=matrix, strategy=self.name)

    def positions(self, geometry: CodeGeometry) -> PositionSets:
        return systematic_positions(geometry)

    def encode_word(self, geometry, positions, info, matrix):
        k = geometry.k
        word = np.zeros(geometry.systematic_length, dtype=np.uint8)
        word[:k] = info

        for i in range(matrix.rows):
            selected = matrix.matrix[i, :k].astype(bool)
            word[k + i] = xor_reduce(info[selected])

        return word


STRATEGIES = {
    CanonicalStrategy.name: CanonicalStrategy,
    SystematicStrategy.name: SystematicStrategy,
}


def get_strategy(name: str) -> MatrixStrategy:
    """
    Resolve a matrix strategy by name.

    Raises:
        HammingConfigurationError: If the name is unknown
    """
    try:
        return STRATEGIES[name]()
    except (KeyError, TypeError) as e:
        raise HammingConfigurationError(
            f"Unknown matrix strategy: {name!r} (expected one of {sorted(STRATEGIES)})"
        ) from e
