# file: src/hamming_ecc/channel.py

"""
Channel simulator: bit-flip error injection.

Used by tests and the experiment driver. The decoder never depends on a
random source; callers either pass explicit positions to flip_positions()
or draw them reproducibly with inject_errors(seed=...).
"""

import numbers
import random
import numpy as np
from typing import Iterable, Optional, Sequence, Tuple

from .bitvector import Position, as_bits
from .errors import InvalidPositionError

MAX_MULTIPLICITY = 2


def flip_positions(codeword: Sequence[int], positions: Iterable[int]) -> np.ndarray:
    """
    Flip explicit 1-based positions of a codeword.

    Args:
        codeword: Word of length L
        positions: Distinct positions in [1, L]

    Returns:
        corrupted: Copy of codeword with the given bits flipped

    Raises:
        InvalidPositionError: If a position is not an integer, out of range
            or repeated

    Example:
        >>> flip_positions([0, 1, 1, 0, 0, 1, 1], [5])
        array([0, 1, 1, 0, 1, 1, 1], dtype=uint8)
    """
    corrupted = as_bits(codeword, name="codeword")
    length = corrupted.size
    seen = set()

    for value in positions:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidPositionError(
                f"Error position must be an integer, got {value!r}"
            )
        if not 1 <= value <= length:
            raise InvalidPositionError(
                f"Error position {value} outside codeword range [1, {length}]"
            )
        if value in seen:
            raise InvalidPositionError(f"Error position {value} given twice")
        seen.add(value)
        corrupted[Position(value).index] ^= 1

    return corrupted


def inject_errors(
    codeword: Sequence[int],
    multiplicity: int,
    seed: Optional[int] = None
) -> Tuple[np.ndarray, Tuple[Position, ...]]:
    """
    Flip `multiplicity` distinct, uniformly chosen positions.

    Args:
        codeword: Original codeword
        multiplicity: Number of bits to flip, 0, 1 or 2
        seed: Random seed for reproducibility (optional)

    Returns:
        corrupted: Codeword with injected errors
        positions: Flipped positions, sorted ascending

    Example:
        >>> corrupted, where = inject_errors(codeword, 2, seed=42)
        >>> result = decode(geometry, H, positions, corrupted)
        >>> assert result.verdict is Verdict.DOUBLE_ERROR_DETECTED
    """
    if not 0 <= multiplicity <= MAX_MULTIPLICITY:
        raise ValueError(
            f"multiplicity must be in [0, {MAX_MULTIPLICITY}], got {multiplicity}"
        )

    word = as_bits(codeword, name="codeword")
    if multiplicity > word.size:
        raise ValueError(
            f"Cannot flip {multiplicity} bits of a {word.size}-bit codeword"
        )

    rng = random.Random(seed)
    chosen = sorted(rng.sample(range(1, word.size + 1), multiplicity))
    positions = tuple(Position(p) for p in chosen)

    return flip_positions(word, positions), positions
