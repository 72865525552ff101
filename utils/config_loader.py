"""Configuration and logging setup for the scoring engine."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'configs' / 'engine.yaml'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def load_config(config_path=None) -> Dict[str, Any]:
    """
    Load engine configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file (str or Path).
            Defaults to configs/engine.yaml next to the packages.

    Returns:
        Dictionary containing configuration (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
    """
    config_path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    logger.debug(f"Loaded config keys: {list(config.keys())}")

    return config


def get_nested_config(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Read a section value by dotted path, e.g. 'history.max_entries'.

    A missing key, or a non-mapping section on the way, gives ``default``.
    Explicit nulls in the file are returned as None.
    """
    section: Any = config
    for part in key_path.split('.'):
        if not isinstance(section, dict) or part not in section:
            return default
        section = section[part]
    return section


def configure_logging(config: Optional[Dict[str, Any]] = None, handlers=None) -> None:
    """
    Configure root logging from the ``logging`` config section.

    Recognised keys: ``level`` (name such as INFO or DEBUG) and ``file``
    (optional log file written alongside the console stream).
    """
    log_config = (config or {}).get('logging', {}) or {}
    level_name = str(log_config.get('level', 'INFO')).upper()
    level = getattr(logging, level_name, logging.INFO)

    if handlers is None:
        handlers = [logging.StreamHandler()]
        log_file = log_config.get('file')
        if log_file:
            handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    logger.debug(f"Logging configured at {level_name}")
