# file: src/hamming_ecc/errors.py

"""
Hamming codec exception hierarchy.

All exceptions inherit from HammingError for unified handling.
"""


class HammingError(Exception):
    """Base exception for all Hamming codec errors."""
    pass


class InvalidLengthError(HammingError):
    """Raised when the information-bit count is not a positive integer."""
    pass


class LengthMismatchError(HammingError):
    """Raised when a bit vector does not have the expected length."""

    def __init__(self, message: str, expected: int = None, actual: int = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InvalidBitError(HammingError):
    """Raised when a bit vector holds values other than 0 and 1."""
    pass


class InvalidPositionError(HammingError):
    """Raised when an error position lies outside the codeword or repeats."""
    pass


class DegenerateMatrixError(HammingError):
    """
    Raised when a parity-check matrix has a zero or duplicated column.

    This is an internal invariant violation, never a recoverable input error.
    """

    def __init__(self, message: str, columns: tuple = ()):
        super().__init__(message)
        self.columns = columns


class UncorrectableError(HammingError):
    """Raised when data is requested from a word with a detected double error."""

    def __init__(self, message: str, syndrome_index: int = None):
        super().__init__(message)
        self.syndrome_index = syndrome_index


class HammingConfigurationError(HammingError):
    """Raised when codec configuration is invalid."""
    pass
