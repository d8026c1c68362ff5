# file: src/hamming_ecc/metrics.py

"""
Codec performance metrics.

Bit Error Rate over bit vectors, recovery checks, redundancy overhead and
verdict tallies for evaluating the codec over many trials.
"""

import numpy as np
from collections import Counter
from typing import Dict, Iterable, Sequence

from .decoder import DecodeResult, Verdict


def compute_ber(original: Sequence[int], received: Sequence[int]) -> float:
    """
    Compute Bit Error Rate (BER) between two bit vectors.

    BER = (number of differing bits) / (total number of bits)

    Args:
        original: Transmitted bits
        received: Received (possibly corrupted) bits

    Returns:
        BER as a float in [0.0, 1.0]

    Raises:
        ValueError: If inputs have different lengths

    Example:
        >>> compute_ber([0, 0, 0, 0], [0, 1, 0, 0])
        0.25
    """
    original = np.asarray(original, dtype=np.uint8)
    received = np.asarray(received, dtype=np.uint8)

    if original.size != received.size:
        raise ValueError(
            f"Length mismatch: original={original.size}, received={received.size}"
        )

    if original.size == 0:
        return 0.0

    bit_errors = int(np.count_nonzero(original ^ received))
    return bit_errors / original.size


def bits_equal(original: Sequence[int], recovered: Sequence[int]) -> bool:
    """True when the recovered bits equal the original bits exactly."""
    return np.array_equal(
        np.asarray(original, dtype=np.uint8),
        np.asarray(recovered, dtype=np.uint8)
    )


def compute_redundancy_overhead(k: int, codeword_length: int) -> float:
    """
    Compute redundancy overhead as a percentage.

    Overhead = ((codeword_length - k) / k) * 100

    Example:
        >>> compute_redundancy_overhead(4, 8)  # extended Hamming(8, 4)
        100.0
    """
    if k <= 0:
        raise ValueError(f"k must be > 0, got {k}")

    if codeword_length < k:
        raise ValueError(f"codeword_length {codeword_length} < k {k}")

    return ((codeword_length - k) / k) * 100.0


def summarize_verdicts(results: Iterable[DecodeResult]) -> Dict[Verdict, int]:
    """
    Count decode results per verdict.

    Every Verdict appears in the returned mapping, with 0 when absent.
    """
    counts = Counter(result.verdict for result in results)
    return {verdict: counts.get(verdict, 0) for verdict in Verdict}
