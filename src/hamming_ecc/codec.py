# file: src/hamming_ecc/codec.py

"""
Hamming codec facade and configuration-driven entry points.

HammingCodec resolves geometry, position layout and parity-check matrix
once for a given k, then encodes and decodes individual words.
"""

import logging
import numpy as np
from typing import Any, Dict, Sequence

from .config import CodecParameters, parse_codec_config
from .decoder import DecodeResult, Verdict, decode
from .encoder import encode
from .geometry import resolve_geometry
from .matrix import get_strategy

logger = logging.getLogger(__name__)


class HammingCodec:
    """
    Hamming SEC / SEC-DED codec for k information bits.

    Parameters:
        k (int): Information bits per codeword
        strategy (str): 'canonical' or 'systematic' matrix layout
        secded (bool): Append the overall parity bit

    Invariants:
        - p is minimal with 2**p - p - 1 >= k
        - Corrects any single-bit error
        - With secded, detects (without correcting) any double-bit error

    Immutable after construction; safe to share between threads.
    """

    def __init__(self, k: int, strategy: str = "canonical", secded: bool = True):
        self.geometry = resolve_geometry(k)
        self.strategy = get_strategy(strategy)
        self.secded = secded

        self.positions = self.strategy.positions(self.geometry)
        self.matrix = self.strategy.build(self.geometry)

        logger.debug(
            "HammingCodec k=%d p=%d length=%d strategy=%s mode=%s",
            self.geometry.k,
            self.geometry.p,
            self.codeword_length,
            self.strategy.name,
            "secded" if secded else "sec",
        )

    @classmethod
    def from_parameters(cls, params: CodecParameters) -> "HammingCodec":
        return cls(params.k, strategy=params.strategy, secded=params.secded)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "HammingCodec":
        """Build a codec from a configuration dictionary ('ecc' section)."""
        return cls.from_parameters(parse_codec_config(config))

    @property
    def k(self) -> int:
        return self.geometry.k

    @property
    def codeword_length(self) -> int:
        """Bits per transmitted codeword, overall parity included."""
        return self.matrix.length + (1 if self.secded else 0)

    def encode(self, bits: Sequence[int]) -> np.ndarray:
        """
        Encode k information bits.

        Raises:
            LengthMismatchError: If len(bits) != k
            InvalidBitError: If bits holds values other than 0/1
        """
        return encode(self.geometry, self.positions, bits, self.matrix, secded=self.secded)

    def decode(self, received: Sequence[int]) -> DecodeResult:
        """
        Decode one received codeword.

        A detected double error is reported in the result, not raised;
        call result.require_data() to turn it into UncorrectableError.

        Raises:
            LengthMismatchError: If len(received) != codeword_length
        """
        result = decode(self.geometry, self.matrix, self.positions, received, secded=self.secded)

        if result.verdict is Verdict.DOUBLE_ERROR_DETECTED:
            logger.warning(
                "Uncorrectable word: double error detected (syndrome %d)",
                result.syndrome_index,
            )
        elif result.verdict is not Verdict.NO_ERROR:
            logger.debug(
                "Corrected %s at position %s",
                result.verdict.name,
                result.error_position,
            )

        return result

    def get_redundancy_overhead(self) -> float:
        """
        Calculate redundancy overhead as a fraction.

        Returns:
            Overhead ratio: (codeword_length - k) / k
        """
        return (self.codeword_length - self.k) / self.k

    def get_code_rate(self) -> float:
        """
        Calculate code rate.

        Returns:
            Code rate: k / codeword_length
        """
        return self.k / self.codeword_length

    def __repr__(self) -> str:
        return (
            f"HammingCodec(k={self.k}, strategy={self.strategy.name!r}, "
            f"secded={self.secded})"
        )


def ecc_encode(bits: Sequence[int], config: Dict[str, Any]) -> np.ndarray:
    """
    Encode information bits with the codec described by config.

    Args:
        bits: k information bits
        config: Configuration dictionary with 'ecc' section

    Returns:
        Codeword as a uint8 array

    Raises:
        HammingConfigurationError: If configuration is invalid
        LengthMismatchError: If len(bits) != configured k

    Example:
        >>> config = {'ecc': {'type': 'hamming', 'hamming': {'k': 4}}}
        >>> ecc_encode([1, 0, 1, 1], config)
        array([0, 1, 1, 0, 0, 1, 1, 0], dtype=uint8)
    """
    return HammingCodec.from_config(config).encode(bits)


def ecc_decode(bits: Sequence[int], config: Dict[str, Any]) -> DecodeResult:
    """
    Decode a received codeword with the codec described by config.

    Args:
        bits: Received codeword
        config: Configuration dictionary with 'ecc' section

    Returns:
        DecodeResult (verdict, syndrome, corrected word, data)

    Raises:
        HammingConfigurationError: If configuration is invalid
        LengthMismatchError: If len(bits) != configured codeword length

    Error Handling:
        - Single errors are corrected and reported in the verdict
        - Double errors (secded) are reported as DOUBLE_ERROR_DETECTED;
          result.require_data() raises UncorrectableError for them
    """
    return HammingCodec.from_config(config).decode(bits)
