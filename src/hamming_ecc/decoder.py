# file: src/hamming_ecc/decoder.py

"""
Hamming decoding: syndrome computation, error classification, correction.

The decoder is a one-step state machine: the verdict is a pure function of
(syndrome, overall parity) and nothing carries over between calls.
"""

import enum
import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence

from .bitvector import Position, as_bits, bits_to_int, xor_reduce
from .errors import UncorrectableError
from .geometry import CodeGeometry, PositionSets
from .matrix import ParityCheckMatrix


class Verdict(enum.Enum):
    """
    Classification of a received word.

        NO_ERROR                    Word satisfies every parity equation.

        SINGLE_ERROR                One bit was flipped and has been
                                    corrected (position in error_position).

        OVERALL_PARITY_ONLY_ERROR   Only the appended overall-parity bit
                                    was flipped; it has been restored.

        DOUBLE_ERROR_DETECTED       Two bits were flipped. The word cannot
                                    be corrected and is returned untouched.
    """
    NO_ERROR = 0
    SINGLE_ERROR = 1
    OVERALL_PARITY_ONLY_ERROR = 2
    DOUBLE_ERROR_DETECTED = 3


@dataclass
class DecodeResult:
    """Outcome of decoding one received word."""
    verdict: Verdict
    error_position: Optional[Position]
    syndrome: np.ndarray
    syndrome_index: int
    overall_parity: Optional[int]  # None in SEC mode
    received: np.ndarray
    corrected: np.ndarray
    data: np.ndarray

    @property
    def trustworthy(self) -> bool:
        """False when the recovered data must be discarded."""
        return self.verdict is not Verdict.DOUBLE_ERROR_DETECTED

    def require_data(self) -> np.ndarray:
        """
        Recovered information bits, refusing uncorrectable words.

        Raises:
            UncorrectableError: If a double error was detected
        """
        if not self.trustworthy:
            raise UncorrectableError(
                f"Double error detected (syndrome {self.syndrome_index}), "
                f"data cannot be recovered",
                syndrome_index=self.syndrome_index
            )
        return self.data


def compute_syndrome(matrix: ParityCheckMatrix, word: Sequence[int]) -> np.ndarray:
    """Syndrome H . word (mod 2) of a SEC-length word."""
    return matrix.syndrome(word)


def syndrome_index(syndrome: Sequence[int]) -> int:
    """Syndrome as an unsigned integer; bit i contributes 2**i."""
    return bits_to_int(syndrome)


def classify(syndrome_value: int, overall_parity: Optional[int]) -> Verdict:
    """
    Map (syndrome, overall parity) to a verdict.

    With overall_parity None (SEC mode) a non-zero syndrome is always taken
    as a single error; double errors cannot be told apart.
    """
    if overall_parity is None:
        return Verdict.SINGLE_ERROR if syndrome_value else Verdict.NO_ERROR

    if syndrome_value == 0 and overall_parity == 0:
        return Verdict.NO_ERROR
    if syndrome_value != 0 and overall_parity == 1:
        return Verdict.SINGLE_ERROR
    if syndrome_value == 0 and overall_parity == 1:
        return Verdict.OVERALL_PARITY_ONLY_ERROR
    return Verdict.DOUBLE_ERROR_DETECTED


def extract_data(
    geometry: CodeGeometry,
    positions: PositionSets,
    word: Sequence[int]
) -> np.ndarray:
    """Read the k information bits from data_positions, in encode order."""
    word = np.asarray(word, dtype=np.uint8)
    indices = [position.index for position in positions.data_positions[:geometry.k]]
    return word[indices].copy()


def decode(
    geometry: CodeGeometry,
    matrix: ParityCheckMatrix,
    positions: PositionSets,
    received: Sequence[int],
    secded: bool = True
) -> DecodeResult:
    """
    Decode a received word.

    Args:
        geometry: Resolved code geometry
        matrix: Parity-check matrix used at encode time
        positions: Parity/data layout used at encode time
        received: Received word, matrix.length bits (+1 when secded)
        secded: Whether the word carries the overall parity bit

    Returns:
        DecodeResult with verdict, syndrome, corrected word and data

    Raises:
        LengthMismatchError: If received has the wrong length
        InvalidBitError: If received holds values other than 0/1

    Classification (SEC-DED), in priority order:
        syndrome == 0, parity == 0  -> NO_ERROR
        syndrome != 0, parity == 1  -> SINGLE_ERROR, flip located bit
        syndrome == 0, parity == 1  -> OVERALL_PARITY_ONLY_ERROR, flip parity bit
        syndrome != 0, parity == 0  -> DOUBLE_ERROR_DETECTED, no correction

    Notes:
        - A non-zero syndrome that matches no column of H (shortened
          systematic code, two or more errors) is reported as
          DOUBLE_ERROR_DETECTED and nothing is flipped.
        - For the canonical matrix the located position equals the
          syndrome read as an integer.
    """
    length = matrix.length
    expected = length + 1 if secded else length
    received = as_bits(received, length=expected, name="received")

    # 1. Split off the overall parity bit
    r_sec = received[:length]

    # 2. Syndrome over the SEC part
    syndrome = compute_syndrome(matrix, r_sec)
    index = syndrome_index(syndrome)

    # 3. Overall parity over the whole received word
    overall = xor_reduce(received) if secded else None

    # 4-5. Classify and correct
    verdict = classify(index, overall)
    corrected = received.copy()
    error_position = None

    if verdict is Verdict.SINGLE_ERROR:
        error_position = matrix.locate(syndrome)
        if error_position is None:
            verdict = Verdict.DOUBLE_ERROR_DETECTED
        else:
            corrected[error_position.index] ^= 1
    elif verdict is Verdict.OVERALL_PARITY_ONLY_ERROR:
        error_position = Position(expected)
        corrected[error_position.index] ^= 1

    # 6. Read back the information bits
    data = extract_data(geometry, positions, corrected[:length])

    return DecodeResult(
        verdict=verdict,
        error_position=error_position,
        syndrome=syndrome,
        syndrome_index=index,
        overall_parity=overall,
        received=received,
        corrected=corrected,
        data=data,
    )
