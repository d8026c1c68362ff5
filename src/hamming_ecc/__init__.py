# file: src/hamming_ecc/__init__.py

"""
Hamming SEC / SEC-DED error-correcting codec.

Encodes k information bits into a Hamming codeword, optionally extended
with an overall parity bit, and decodes received words into a verdict,
a corrected codeword and the recovered information bits.

Public API:
    - resolve_geometry(k) -> CodeGeometry
    - derive_positions(geometry) -> PositionSets
    - CanonicalStrategy / SystematicStrategy .build(geometry) -> ParityCheckMatrix
    - encode(geometry, positions, info_bits, matrix, secded) -> np.ndarray
    - decode(geometry, matrix, positions, received, secded) -> DecodeResult
    - HammingCodec(k, strategy, secded)
    - ecc_encode(bits, config) / ecc_decode(bits, config)
"""

from .bitvector import Position, as_bits, bits_to_int, bits_to_string
from .geometry import (
    CodeGeometry,
    PositionSets,
    resolve_geometry,
    derive_positions,
    systematic_positions,
)
from .matrix import (
    ParityCheckMatrix,
    MatrixStrategy,
    CanonicalStrategy,
    SystematicStrategy,
    build_generator_matrix,
    get_strategy,
    validate_columns,
)
from .encoder import encode, add_overall_parity
from .decoder import (
    Verdict,
    DecodeResult,
    decode,
    classify,
    compute_syndrome,
    syndrome_index,
    extract_data,
)
from .channel import flip_positions, inject_errors
from .codec import HammingCodec, ecc_encode, ecc_decode
from .config import CodecParameters, load_config, parse_codec_config
from .metrics import (
    compute_ber,
    bits_equal,
    compute_redundancy_overhead,
    summarize_verdicts,
)
from .errors import (
    HammingError,
    InvalidLengthError,
    LengthMismatchError,
    InvalidBitError,
    InvalidPositionError,
    DegenerateMatrixError,
    UncorrectableError,
    HammingConfigurationError,
)

__version__ = "1.0.0"

__all__ = [
    "Position",
    "as_bits",
    "bits_to_int",
    "bits_to_string",
    "CodeGeometry",
    "PositionSets",
    "resolve_geometry",
    "derive_positions",
    "systematic_positions",
    "ParityCheckMatrix",
    "MatrixStrategy",
    "CanonicalStrategy",
    "SystematicStrategy",
    "build_generator_matrix",
    "get_strategy",
    "validate_columns",
    "encode",
    "add_overall_parity",
    "Verdict",
    "DecodeResult",
    "decode",
    "classify",
    "compute_syndrome",
    "syndrome_index",
    "extract_data",
    "flip_positions",
    "inject_errors",
    "HammingCodec",
    "ecc_encode",
    "ecc_decode",
    "CodecParameters",
    "load_config",
    "parse_codec_config",
    "compute_ber",
    "bits_equal",
    "compute_redundancy_overhead",
    "summarize_verdicts",
    "HammingError",
    "InvalidLengthError",
    "LengthMismatchError",
    "InvalidBitError",
    "InvalidPositionError",
    "DegenerateMatrixError",
    "UncorrectableError",
    "HammingConfigurationError",
]
