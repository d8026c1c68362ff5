# file: src/hamming_ecc/encoder.py

"""
Hamming encoding.

encode() maps k information bits to a codeword satisfying every parity
equation of H.
"""

import numpy as np
from typing import Sequence

from .bitvector import as_bits, xor_reduce
from .geometry import CodeGeometry, PositionSets
from .matrix import ParityCheckMatrix, get_strategy


def encode(
    geometry: CodeGeometry,
    positions: PositionSets,
    info_bits: Sequence[int],
    matrix: ParityCheckMatrix,
    secded: bool = True
) -> np.ndarray:
    """
    Encode information bits into a Hamming codeword.

    Args:
        geometry: Resolved code geometry
        positions: Parity/data layout matching the matrix strategy
        info_bits: k information bits
        matrix: Parity-check matrix built for this geometry
        secded: Append the overall parity bit (SEC-DED)

    Returns:
        codeword: uint8 array of length matrix.length (+1 when secded)

    Raises:
        LengthMismatchError: If len(info_bits) != k
        InvalidBitError: If info_bits holds values other than 0/1
        HammingConfigurationError: If matrix.strategy names no known strategy

    Example:
        >>> geometry = resolve_geometry(4)
        >>> strategy = CanonicalStrategy()
        >>> H = strategy.build(geometry)
        >>> encode(geometry, strategy.positions(geometry), [1, 0, 1, 1], H, secded=False)
        array([0, 1, 1, 0, 0, 1, 1], dtype=uint8)
    """
    info = as_bits(info_bits, length=geometry.k, name="info_bits")

    word = get_strategy(matrix.strategy).encode_word(geometry, positions, info, matrix)

    if secded:
        word = add_overall_parity(word)
    return word


def add_overall_parity(word: Sequence[int]) -> np.ndarray:
    """
    Append the XOR of all bits (SEC -> SEC-DED).

    Returns:
        extended: uint8 array one bit longer than word
    """
    word = as_bits(word, name="word")
    return np.append(word, np.uint8(xor_reduce(word))).astype(np.uint8)
