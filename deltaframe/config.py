"""
Run configuration.

Settings come from three places, later ones winning:
built-in defaults, an optional YAML file, and the command line.

Example config.yml:

    workers: 8
    png_compression: 6
    loglevel: WARNING
"""

import logging

import yaml

from .constants import C

logger = logging.getLogger(__name__)

DEFAULTS = {'workers': C.DEFAULT_WORKERS,
            'png_compression': C.DEFAULT_PNG_COMPRESSION,
            'loglevel': C.DEFAULT_LOGLEVEL}

LOGLEVELS = ['DEBUG','INFO','WARNING','ERROR','CRITICAL']

def is_int(v):
    """YAML reads true/false as bool, which is also an int."""
    return isinstance(v, int) and not isinstance(v, bool)

def validate(config):
    unknown = set(config) - set(DEFAULTS)
    if unknown:
        raise ValueError(f"unknown configuration keys: {', '.join(sorted(unknown))}")
    if not is_int(config['workers']) or config['workers'] < 1:
        raise ValueError(f"workers must be a positive integer, got {config['workers']!r}")
    if not is_int(config['png_compression']) or not 0 <= config['png_compression'] <= 9:
        raise ValueError(f"png_compression must be 0-9, got {config['png_compression']!r}")
    if str(config['loglevel']).upper() not in LOGLEVELS:
        raise ValueError(f"loglevel must be one of {LOGLEVELS}, got {config['loglevel']!r}")
    config['loglevel'] = str(config['loglevel']).upper()
    return config

def load_config(path=None, **overrides):
    """Return the configuration dictionary.
    :param path: YAML file to read, or None for defaults only.
    :param overrides: values from the command line; None means not given.
    """
    config = dict(DEFAULTS)
    if path is not None:
        with open(path) as f:
            try:
                from_file = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"{path}: {e}") from e
        if not isinstance(from_file, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        logger.debug("config from %s: %s", path, from_file)
        config.update(from_file)
    config.update({k:v for (k,v) in overrides.items() if v is not None})
    return validate(config)
