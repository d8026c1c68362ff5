# file: src/hamming_ecc/config.py

"""
Codec configuration.

Configuration is a plain dictionary with an 'ecc' section, usually read
from YAML. load_config() reads a file (or the packaged default) and
parse_codec_config() validates the 'ecc' section.
"""

import copy
import logging
import os
import yaml
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import HammingConfigurationError
from .matrix import STRATEGIES

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.yaml")

MODES = ("sec", "secded")

DEFAULT_CONFIG = {
    'ecc': {
        'type': 'hamming',
        'hamming': {
            'k': 4,
            'strategy': 'canonical',
            'mode': 'secded',
        }
    }
}


@dataclass(frozen=True)
class CodecParameters:
    """Validated codec settings."""
    k: int
    strategy: str = 'canonical'
    secded: bool = True

    @property
    def mode(self) -> str:
        return 'secded' if self.secded else 'sec'


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to YAML config file. If None, the packaged
                     default_config.yaml is used.

    Returns:
        config: Configuration dictionary. A missing file falls back to the
                hardcoded defaults.

    Raises:
        HammingConfigurationError: If the file is not valid YAML or does not
                                   hold a mapping
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise HammingConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise HammingConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}"
        )

    logger.info("Loaded configuration from %s", config_path)
    return config


def parse_codec_config(config: Dict[str, Any]) -> CodecParameters:
    """
    Validate the 'ecc' section of a configuration dictionary.

    Configuration Schema:
        config['ecc']['type']: 'hamming' (required)
        config['ecc']['hamming']['k']: Information bits (required)
        config['ecc']['hamming']['strategy']: 'canonical' | 'systematic'
                                              (default: 'canonical')
        config['ecc']['hamming']['mode']: 'sec' | 'secded' (default: 'secded')

    Raises:
        HammingConfigurationError: On missing keys or unknown values
    """
    try:
        ecc_config = config['ecc']
        ecc_type = ecc_config['type']
    except (KeyError, TypeError) as e:
        raise HammingConfigurationError(f"Missing required config key: {e}") from e

    if ecc_type != 'hamming':
        raise HammingConfigurationError(f"Unknown ECC type: {ecc_type}")

    try:
        hamming_config = ecc_config['hamming']
        k = hamming_config['k']
    except (KeyError, TypeError) as e:
        raise HammingConfigurationError(f"Missing required config key: {e}") from e

    strategy = hamming_config.get('strategy', 'canonical')
    if strategy not in STRATEGIES:
        raise HammingConfigurationError(
            f"Unknown matrix strategy: {strategy!r} (expected one of {sorted(STRATEGIES)})"
        )

    mode = hamming_config.get('mode', 'secded')
    if mode not in MODES:
        raise HammingConfigurationError(
            f"Unknown mode: {mode!r} (expected one of {list(MODES)})"
        )

    return CodecParameters(k=k, strategy=strategy, secded=(mode == 'secded'))
