"""
Hamming codec trial runner.

Encodes random information words, injects 0, 1 or 2 bit errors, decodes,
and reports how every trial was classified and whether the data came back.

Usage:
    python experiments/run_trials.py --k 4 --trials 1000 --seed 42
    python experiments/run_trials.py --config config.yaml --show-matrix
"""

import argparse
import logging
import random
import sys
from typing import Dict, List

from tqdm import tqdm

from hamming_ecc import (
    HammingCodec,
    Verdict,
    bits_equal,
    bits_to_string,
    inject_errors,
    load_config,
    parse_codec_config,
    summarize_verdicts,
)
from hamming_ecc.config import CodecParameters
from hamming_ecc.errors import HammingError


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(verbose: bool = True):
    """Configure logging for the trial runner."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


# =============================================================================
# TRIALS
# =============================================================================

def run_trials(codec: HammingCodec, trials: int, seed: int) -> Dict:
    """
    Run randomized encode / corrupt / decode trials.

    Multiplicity is drawn from {0, 1, 2} in SEC-DED mode and {0, 1} in SEC
    mode, since SEC cannot handle double errors.

    Returns:
        stats: Dictionary with per-verdict counts, recovered count, and the
               number of double errors that slipped through undetected
    """
    rng = random.Random(seed)
    max_multiplicity = 2 if codec.secded else 1

    results = []
    recovered = 0
    missed_double = 0

    for trial in tqdm(range(trials), desc="Trials"):
        info = [rng.randint(0, 1) for _ in range(codec.k)]
        codeword = codec.encode(info)

        multiplicity = rng.randint(0, max_multiplicity)
        corrupted, where = inject_errors(codeword, multiplicity, seed=rng.randrange(2 ** 32))
        result = codec.decode(corrupted)
        results.append(result)

        if result.trustworthy and bits_equal(info, result.data):
            recovered += 1
        if multiplicity == 2 and result.trustworthy:
            missed_double += 1

        logging.debug(
            "Trial %d: data=%s errors=%s syndrome=%d verdict=%s",
            trial,
            bits_to_string(info),
            [int(p) for p in where] or "-",
            result.syndrome_index,
            result.verdict.name,
        )

    return {
        'verdicts': summarize_verdicts(results),
        'recovered': recovered,
        'missed_double': missed_double,
        'trials': trials,
    }


def print_summary(codec: HammingCodec, stats: Dict):
    """Print a verdict summary table."""
    geometry = codec.geometry
    print()
    print(f"k = {geometry.k}, p = {geometry.p}, codeword length = {codec.codeword_length}")
    print(f"strategy = {codec.strategy.name}, mode = {'secded' if codec.secded else 'sec'}")
    print(f"code rate = {codec.get_code_rate():.4f}")
    print()
    print(f"| {'Verdict':<28} | {'Count':>8} |")
    print(f"|{'-' * 30}|{'-' * 10}|")
    for verdict in Verdict:
        print(f"| {verdict.name:<28} | {stats['verdicts'][verdict]:>8} |")
    print()
    print(f"Data recovered correctly: {stats['recovered']} / {stats['trials']}")
    if codec.secded:
        print(f"Double errors not detected: {stats['missed_double']}")


# =============================================================================
# COMMAND-LINE INTERFACE
# =============================================================================

def parse_arguments(argv: List[str] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Run randomized Hamming SEC / SEC-DED trials",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extended Hamming(8, 4), 1000 trials
  python run_trials.py --k 4 --trials 1000

  # Systematic layout, single-error correction only
  python run_trials.py --k 53 --strategy systematic --mode sec

  # Settings from a YAML file
  python run_trials.py --config config.yaml --show-matrix
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration YAML file (default: packaged defaults)'
    )

    parser.add_argument(
        '--k',
        type=int,
        default=None,
        help='Information bits per codeword (overrides config)'
    )

    parser.add_argument(
        '--strategy',
        choices=['canonical', 'systematic'],
        default=None,
        help='Parity-check matrix layout (overrides config)'
    )

    parser.add_argument(
        '--mode',
        choices=['sec', 'secded'],
        default=None,
        help='Correction mode (overrides config)'
    )

    parser.add_argument(
        '--trials',
        type=int,
        default=10,
        help='Number of trials (default: 10)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=42,
        help='Random seed (default: 42)'
    )

    parser.add_argument(
        '--show-matrix',
        action='store_true',
        help='Print the parity-check matrix'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log every trial'
    )

    return parser.parse_args(argv)


def main(argv: List[str] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config)
        params = parse_codec_config(config)
        params = CodecParameters(
            k=args.k if args.k is not None else params.k,
            strategy=args.strategy or params.strategy,
            secded=(args.mode or params.mode) == 'secded',
        )
        codec = HammingCodec.from_parameters(params)
    except HammingError as e:
        logging.error(f"Invalid configuration: {e}")
        return 1

    logging.info(f"Running {args.trials} trials with {codec!r}")

    if args.show_matrix:
        print(f"\nParity-check matrix H ({codec.matrix.rows} x {codec.matrix.length}):")
        print(codec.matrix.format())

    stats = run_trials(codec, args.trials, args.seed)
    print_summary(codec, stats)
    return 0


if __name__ == '__main__':
    sys.exit(main())
