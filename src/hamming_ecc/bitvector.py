# file: src/hamming_ecc/bitvector.py

"""
Bit-vector helpers shared by the geometry, matrix, encoder and decoder.

Bit vectors are 1-D numpy arrays of dtype uint8 holding only 0 and 1.
Codeword positions are 1-based in the domain model (position 1..n) and
0-based in storage; Position keeps the two apart.
"""

import numpy as np
from typing import Iterable, Optional, Sequence

from .errors import InvalidBitError, LengthMismatchError


class Position(int):
    """
    1-based bit position inside a codeword.

    Behaves as a plain int (so it can be compared, hashed and printed as the
    position number) while exposing the 0-based storage offset via index.
    """

    def __new__(cls, value: int):
        value = int(value)
        if value < 1:
            raise ValueError(f"Position must be >= 1, got {value}")
        return super().__new__(cls, value)

    @classmethod
    def from_index(cls, index: int) -> "Position":
        """Build a Position from a 0-based storage index."""
        return cls(index + 1)

    @property
    def index(self) -> int:
        return int(self) - 1

    def __repr__(self) -> str:
        return f"Position({int(self)})"


def as_bits(
    values: Iterable[int],
    length: Optional[int] = None,
    name: str = "bits"
) -> np.ndarray:
    """
    Validate and normalise a sequence of bits.

    Args:
        values: Any 1-D sequence of 0/1 integers (list, tuple, ndarray)
        length: Expected length, or None to accept any length
        name: Label used in error messages

    Returns:
        bits: Fresh uint8 array (N,) with values 0 or 1

    Raises:
        InvalidBitError: If the input is not 1-D or holds non-binary values
        LengthMismatchError: If length is given and does not match
    """
    try:
        array = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise InvalidBitError(f"{name} must be a sequence of 0/1 integers") from e

    if array.size and array.dtype.kind not in "biuf":
        raise InvalidBitError(f"{name} must be a sequence of 0/1 integers")

    if array.ndim != 1:
        raise InvalidBitError(f"{name} must be 1-D, got shape {array.shape}")

    if array.size and not np.isin(array, (0, 1)).all():
        raise InvalidBitError(f"{name} must contain only 0 and 1")

    if length is not None and array.size != length:
        raise LengthMismatchError(
            f"{name} has length {array.size}, expected {length}",
            expected=length,
            actual=int(array.size)
        )

    return array.astype(np.uint8)


def xor_reduce(bits: Sequence[int]) -> int:
    """XOR of all bits (overall parity)."""
    bits = np.asarray(bits, dtype=np.uint8)
    return int(np.bitwise_xor.reduce(bits, initial=0)) & 1


def bits_to_int(bits: Sequence[int]) -> int:
    """Interpret bits as an unsigned integer, bit i contributing 2**i."""
    value = 0
    for i, bit in enumerate(bits):
        if bit:
            value |= 1 << i
    return value


def int_to_bits(value: int, width: int) -> np.ndarray:
    """Integer -> width bits, most significant bit first."""
    return np.array(
        [(value >> (width - 1 - i)) & 1 for i in range(width)],
        dtype=np.uint8
    )


def bits_to_string(bits: Sequence[int], sep: str = "") -> str:
    """Render bits as text, e.g. '1011' or '1 0 1 1'."""
    return sep.join(str(int(b)) for b in bits)
