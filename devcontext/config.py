"""Configuration loading.

Analyzer settings live in one YAML file with a section per analyzer; any
section or key left out falls back to the analyzer's defaults.
"""

import copy
import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

ANALYZER_SECTIONS = (
    'technical_depth',
    'content',
    'author',
    'discussion',
    'comment_tree',
)


def merge_config(defaults: Dict, overrides: Optional[Dict]) -> Dict:
    """Recursively overlay ``overrides`` on a copy of ``defaults``.

    Nested dictionaries are merged key by key; any other value (lists of
    terms or patterns included) replaces the default outright.
    """
    merged = copy.deepcopy(defaults)
    if not overrides:
        return merged

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: str) -> Dict:
    """Load pipeline configuration from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Configuration dictionary (empty if the file is missing or empty)
    """
    path = Path(config_path)
    if not path.exists():
        logger.warning(f"Config file {config_path} not found, using defaults")
        return {}

    with open(path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise InvalidInputError(f"Config file {config_path} must contain a mapping")

    unknown = set(config) - set(ANALYZER_SECTIONS) - {'provider', 'output'}
    if unknown:
        logger.warning(f"Ignoring unknown config sections: {', '.join(sorted(unknown))}")

    return config
