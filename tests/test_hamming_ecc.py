# file: tests/test_hamming_ecc.py

"""
Tests for the codec facade, configuration, channel simulator and metrics.

Test coverage:
    - HammingCodec construction, encode/decode, rate and overhead
    - ecc_encode / ecc_decode configuration dispatch
    - YAML configuration loading and validation
    - Error injection (explicit and seeded random)
    - Metrics computation
    - Experiment driver
"""

import numpy as np
import pytest

from hamming_ecc import (
    HammingCodec,
    Verdict,
    ecc_encode,
    ecc_decode,
    load_config,
    parse_codec_config,
    flip_positions,
    inject_errors,
    compute_ber,
    bits_equal,
    compute_redundancy_overhead,
    summarize_verdicts,
    HammingError,
    HammingConfigurationError,
    InvalidBitError,
    InvalidLengthError,
    InvalidPositionError,
    LengthMismatchError,
    UncorrectableError,
)
from hamming_ecc.config import CodecParameters, DEFAULT_CONFIG


# Default test configuration
DEFAULT_TEST_CONFIG = {
    'ecc': {
        'type': 'hamming',
        'hamming': {
            'k': 4,
            'strategy': 'canonical',
            'mode': 'secded',
        }
    }
}


class TestHammingCodec:
    """Test the HammingCodec facade."""

    def test_initialization_defaults(self):
        """Default codec is canonical SEC-DED."""
        codec = HammingCodec(4)
        assert codec.k == 4
        assert codec.secded is True
        assert codec.strategy.name == "canonical"
        assert codec.codeword_length == 8

    def test_initialization_systematic(self):
        """Systematic codec uses the shortened length k + p."""
        codec = HammingCodec(53, strategy="systematic")
        assert codec.codeword_length == 53 + 6 + 1

    def test_initialization_invalid_k(self):
        """k <= 0 raises InvalidLengthError."""
        with pytest.raises(InvalidLengthError):
            HammingCodec(0)

    def test_initialization_unknown_strategy(self):
        """Unknown strategies raise HammingConfigurationError."""
        with pytest.raises(HammingConfigurationError, match="Unknown matrix strategy"):
            HammingCodec(4, strategy="reed_solomon")

    def test_encode_decode_roundtrip(self):
        """Encode then decode returns the data with NO_ERROR."""
        codec = HammingCodec(11)
        original = [1, 0, 1, 1, 0, 0, 1, 0, 1, 1, 1]

        result = codec.decode(codec.encode(original))

        assert result.verdict is Verdict.NO_ERROR
        assert bits_equal(original, result.require_data())

    def test_error_correction_within_capability(self):
        """One flipped bit is corrected."""
        codec = HammingCodec(26, strategy="systematic")
        original = [1, 0] * 13

        corrupted = flip_positions(codec.encode(original), [17])
        result = codec.decode(corrupted)

        assert result.verdict is Verdict.SINGLE_ERROR
        assert result.error_position == 17
        assert bits_equal(original, result.data)

    def test_error_detection_beyond_correction(self):
        """Two flipped bits are detected and refused."""
        codec = HammingCodec(26)
        corrupted = flip_positions(codec.encode([1] * 26), [3, 30])

        result = codec.decode(corrupted)

        assert result.verdict is Verdict.DOUBLE_ERROR_DETECTED
        with pytest.raises(UncorrectableError):
            result.require_data()

    def test_double_error_logs_warning(self, caplog):
        """Uncorrectable words are logged at WARNING level."""
        codec = HammingCodec(4)
        corrupted = flip_positions(codec.encode([0, 0, 0, 0]), [1, 2])

        with caplog.at_level("WARNING", logger="hamming_ecc.codec"):
            codec.decode(corrupted)

        assert "double error detected" in caplog.text

    def test_sec_mode(self):
        """SEC codec has no overall parity bit."""
        codec = HammingCodec(4, secded=False)
        assert codec.codeword_length == 7
        result = codec.decode(flip_positions(codec.encode([1, 0, 1, 1]), [7]))
        assert result.verdict is Verdict.SINGLE_ERROR
        assert result.data.tolist() == [1, 0, 1, 1]

    def test_decode_wrong_length(self):
        """Received words of the wrong length are rejected."""
        codec = HammingCodec(4)
        with pytest.raises(LengthMismatchError):
            codec.decode([0] * 7)

    def test_encode_rejects_fractional_bits(self):
        """Fractional information bits are not truncated into a codeword."""
        codec = HammingCodec(4)
        with pytest.raises(InvalidBitError):
            codec.encode([0.5, 1, 1.9, 0])

    def test_decode_rejects_fractional_bits(self):
        """Fractional received bits are not truncated before decoding."""
        codec = HammingCodec(4)
        with pytest.raises(InvalidBitError):
            codec.decode([0, 1, 1, 0, 0, 1, 1, 0.7])

    def test_get_code_rate(self):
        """Extended Hamming(8, 4) has rate 1/2."""
        assert HammingCodec(4).get_code_rate() == pytest.approx(0.5)
        assert HammingCodec(11, secded=False).get_code_rate() == pytest.approx(11 / 15)

    def test_get_redundancy_overhead(self):
        """Overhead is (length - k) / k."""
        assert HammingCodec(4).get_redundancy_overhead() == pytest.approx(1.0)
        assert HammingCodec(57).get_redundancy_overhead() == pytest.approx(7 / 57)

    def test_repr(self):
        """repr names the settings."""
        assert repr(HammingCodec(4, secded=False)) == (
            "HammingCodec(k=4, strategy='canonical', secded=False)"
        )


class TestECCEncodeDecode:
    """Test public ecc_encode/ecc_decode interface."""

    def test_encode_decode_roundtrip(self):
        """Full encode/decode cycle."""
        encoded = ecc_encode([1, 0, 1, 1], DEFAULT_TEST_CONFIG)
        assert encoded.tolist() == [0, 1, 1, 0, 0, 1, 1, 0]

        result = ecc_decode(encoded, DEFAULT_TEST_CONFIG)
        assert result.verdict is Verdict.NO_ERROR
        assert result.data.tolist() == [1, 0, 1, 1]

    def test_encode_with_different_config(self):
        """Systematic SEC from configuration."""
        config = {
            'ecc': {
                'type': 'hamming',
                'hamming': {
                    'k': 4,
                    'strategy': 'systematic',
                    'mode': 'sec',
                }
            }
        }

        encoded = ecc_encode([1, 0, 1, 1], config)
        assert encoded.tolist() == [1, 0, 1, 1, 0, 1, 0]

        result = ecc_decode(flip_positions(encoded, [2]), config)
        assert result.verdict is Verdict.SINGLE_ERROR
        assert result.data.tolist() == [1, 0, 1, 1]

    def test_defaults_for_optional_keys(self):
        """strategy and mode default to canonical / secded."""
        config = {'ecc': {'type': 'hamming', 'hamming': {'k': 4}}}
        assert ecc_encode([1, 0, 1, 1], config).size == 8

    def test_encode_missing_config(self):
        """Missing config raises error."""
        with pytest.raises(HammingConfigurationError, match="Missing required"):
            ecc_encode([1, 0, 1, 1], {})

    def test_encode_missing_k(self):
        """Missing k raises error."""
        config = {'ecc': {'type': 'hamming', 'hamming': {}}}
        with pytest.raises(HammingConfigurationError, match="Missing required"):
            ecc_encode([1, 0, 1, 1], config)

    def test_encode_unknown_ecc_type(self):
        """Unknown ECC type raises error."""
        config = {'ecc': {'type': 'reed_solomon'}}
        with pytest.raises(HammingConfigurationError, match="Unknown ECC type"):
            ecc_encode([1, 0, 1, 1], config)

    def test_unknown_mode(self):
        """Unknown mode raises error."""
        config = {'ecc': {'type': 'hamming', 'hamming': {'k': 4, 'mode': 'tec'}}}
        with pytest.raises(HammingConfigurationError, match="Unknown mode"):
            ecc_decode([0] * 8, config)

    def test_errors_share_base_class(self):
        """Every codec error is a HammingError."""
        with pytest.raises(HammingError):
            ecc_encode([1, 0, 1], DEFAULT_TEST_CONFIG)


class TestConfigLoading:
    """Test YAML configuration loading."""

    def test_packaged_default(self):
        """The packaged default_config.yaml matches DEFAULT_CONFIG."""
        assert load_config() == DEFAULT_CONFIG

    def test_load_from_file(self, tmp_path):
        """Settings are read from a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "ecc:\n"
            "  type: hamming\n"
            "  hamming:\n"
            "    k: 53\n"
            "    strategy: systematic\n"
            "    mode: sec\n"
        )

        params = parse_codec_config(load_config(str(path)))

        assert params == CodecParameters(k=53, strategy='systematic', secded=False)
        assert params.mode == 'sec'

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        """A missing file falls back to defaults with a warning."""
        with caplog.at_level("WARNING", logger="hamming_ecc.config"):
            config = load_config(str(tmp_path / "absent.yaml"))

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG
        assert "Config file not found" in caplog.text

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML raises HammingConfigurationError."""
        path = tmp_path / "broken.yaml"
        path.write_text("ecc: [unclosed\n")
        with pytest.raises(HammingConfigurationError, match="Invalid YAML"):
            load_config(str(path))

    def test_non_mapping_yaml(self, tmp_path):
        """A YAML list is not a configuration."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(HammingConfigurationError, match="must contain a mapping"):
            load_config(str(path))

    def test_codec_from_config(self):
        """HammingCodec.from_config uses the validated parameters."""
        codec = HammingCodec.from_config(load_config())
        assert (codec.k, codec.strategy.name, codec.secded) == (4, 'canonical', True)


class TestErrorInjection:
    """Test the channel simulator."""

    def test_flip_positions(self):
        """Explicit 1-based positions are flipped on a copy."""
        codeword = np.array([0, 1, 1, 0, 0, 1, 1], dtype=np.uint8)
        corrupted = flip_positions(codeword, [1, 7])

        assert corrupted.tolist() == [1, 1, 1, 0, 0, 1, 0]
        assert codeword.tolist() == [0, 1, 1, 0, 0, 1, 1]

    @pytest.mark.parametrize("positions", [[0], [8], [-1]])
    def test_flip_out_of_range(self, positions):
        """Positions outside [1, L] are rejected."""
        with pytest.raises(InvalidPositionError, match="outside codeword range"):
            flip_positions([0] * 7, positions)

    def test_flip_duplicate(self):
        """Repeated positions are rejected."""
        with pytest.raises(InvalidPositionError, match="given twice"):
            flip_positions([0] * 7, [3, 3])

    @pytest.mark.parametrize("positions", [[2.5], [3.0], [True], ["3"]])
    def test_flip_non_integer(self, positions):
        """Fractional, boolean and string positions are rejected."""
        codeword = [0, 1, 1, 0, 0, 1, 1]
        with pytest.raises(InvalidPositionError, match="must be an integer"):
            flip_positions(codeword, positions)

    def test_flip_numpy_integer(self):
        """numpy integer positions are accepted."""
        corrupted = flip_positions([0] * 7, [np.int64(4)])
        assert corrupted.tolist() == [0, 0, 0, 1, 0, 0, 0]

    @pytest.mark.parametrize("multiplicity", [0, 1, 2])
    def test_inject_errors_multiplicity(self, multiplicity):
        """Exactly `multiplicity` distinct bits are flipped."""
        codeword = np.zeros(16, dtype=np.uint8)
        corrupted, positions = inject_errors(codeword, multiplicity, seed=7)

        assert len(positions) == multiplicity
        assert list(positions) == sorted(set(positions))
        assert int(corrupted.sum()) == multiplicity
        assert all(corrupted[p.index] == 1 for p in positions)

    def test_inject_errors_deterministic(self):
        """Same seed, same errors."""
        codeword = np.zeros(32, dtype=np.uint8)
        first = inject_errors(codeword, 2, seed=42)
        second = inject_errors(codeword, 2, seed=42)

        assert first[1] == second[1]
        np.testing.assert_array_equal(first[0], second[0])

    def test_inject_errors_invalid_multiplicity(self):
        """Multiplicity outside {0, 1, 2} is rejected."""
        with pytest.raises(ValueError, match="multiplicity"):
            inject_errors([0] * 8, 3)

    def test_inject_then_decode(self):
        """Seeded channel output decodes to the expected verdicts."""
        codec = HammingCodec(11)
        original = [1, 1, 0, 0, 1, 0, 1, 0, 0, 1, 1]
        codeword = codec.encode(original)

        expected = {
            0: {Verdict.NO_ERROR},
            1: {Verdict.SINGLE_ERROR, Verdict.OVERALL_PARITY_ONLY_ERROR},
            2: {Verdict.DOUBLE_ERROR_DETECTED},
        }
        for seed in range(20):
            for multiplicity, verdicts in expected.items():
                corrupted, _ = inject_errors(codeword, multiplicity, seed=seed)
                result = codec.decode(corrupted)
                assert result.verdict in verdicts
                if multiplicity < 2:
                    assert bits_equal(original, result.data)


class TestMetrics:
    """Test metrics computation functions."""

    def test_compute_ber_no_errors(self):
        """BER with identical data."""
        assert compute_ber([1, 0, 1, 1], [1, 0, 1, 1]) == 0.0

    def test_compute_ber_single_bit(self):
        """BER with a single bit error."""
        assert compute_ber([0] * 8, [0, 0, 0, 1, 0, 0, 0, 0]) == 1.0 / 8

    def test_compute_ber_empty(self):
        """Empty vectors have zero BER."""
        assert compute_ber([], []) == 0.0

    def test_compute_ber_length_mismatch(self):
        """Length mismatch raises error."""
        with pytest.raises(ValueError, match="Length mismatch"):
            compute_ber([0, 1], [0, 1, 1])

    def test_bits_equal(self):
        """Recovered-data check."""
        assert bits_equal([1, 0, 1], np.array([1, 0, 1], dtype=np.uint8))
        assert not bits_equal([1, 0, 1], [1, 1, 1])
        assert not bits_equal([1, 0], [1, 0, 0])

    def test_compute_redundancy_overhead(self):
        """Redundancy overhead in percent."""
        assert compute_redundancy_overhead(4, 8) == pytest.approx(100.0)
        assert compute_redundancy_overhead(11, 16) == pytest.approx(500 / 11)

    def test_compute_redundancy_overhead_invalid(self):
        """Invalid inputs raise errors."""
        with pytest.raises(ValueError):
            compute_redundancy_overhead(0, 8)

        with pytest.raises(ValueError):
            compute_redundancy_overhead(8, 4)

    def test_summarize_verdicts(self):
        """Every verdict is counted, absent ones as zero."""
        codec = HammingCodec(4)
        codeword = codec.encode([1, 1, 0, 1])
        results = [
            codec.decode(codeword),
            codec.decode(flip_positions(codeword, [2])),
            codec.decode(flip_positions(codeword, [3])),
        ]

        summary = summarize_verdicts(results)

        assert summary == {
            Verdict.NO_ERROR: 1,
            Verdict.SINGLE_ERROR: 2,
            Verdict.OVERALL_PARITY_ONLY_ERROR: 0,
            Verdict.DOUBLE_ERROR_DETECTED: 0,
        }


class TestExperimentDriver:
    """Test the randomized trial runner."""

    def test_run_trials_secded(self):
        """Every trial is either recovered or flagged as a double error."""
        from experiments.run_trials import run_trials

        codec = HammingCodec(11)
        stats = run_trials(codec, trials=60, seed=3)

        verdicts = stats['verdicts']
        assert sum(verdicts.values()) == 60
        assert stats['recovered'] + verdicts[Verdict.DOUBLE_ERROR_DETECTED] == 60
        assert stats['missed_double'] == 0

    def test_main(self, capsys):
        """CLI prints a summary and exits 0."""
        from experiments.run_trials import main

        assert main(['--k', '4', '--trials', '5', '--show-matrix']) == 0

        out = capsys.readouterr().out
        assert "Parity-check matrix H (3 x 7)" in out
        assert "DOUBLE_ERROR_DETECTED" in out

    def test_main_invalid_k(self):
        """Invalid settings exit 1."""
        from experiments.run_trials import main

        assert main(['--k', '0']) == 1
