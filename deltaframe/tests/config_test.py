"""
Tests for the configuration
"""

import sys
from os.path import dirname, join

import pytest

sys.path.append(join(dirname(dirname(dirname(__file__)))))

from deltaframe.config import load_config, DEFAULTS
from deltaframe.constants import C

def test_defaults():
    config = load_config()
    assert config == DEFAULTS
    assert config['workers'] == C.DEFAULT_WORKERS

def test_file_and_overrides(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("workers: 3\npng_compression: 9\nloglevel: warning\n")
    config = load_config(str(path))
    assert config == {'workers': 3, 'png_compression': 9, 'loglevel': 'WARNING'}

    config = load_config(str(path), workers=5, loglevel=None)
    assert config['workers'] == 5
    assert config['loglevel'] == 'WARNING'

def test_empty_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("")
    assert load_config(str(path)) == DEFAULTS

@pytest.mark.parametrize("text", ["colour: red\n",
                                  "workers: 0\n",
                                  "workers: true\n",
                                  "png_compression: false\n",
                                  "workers: many\n",
                                  "png_compression: 10\n",
                                  "loglevel: LOUD\n",
                                  "- a list\n"])
def test_bad_config(tmp_path, text):
    path = tmp_path / "config.yml"
    path.write_text(text)
    with pytest.raises(ValueError):
        load_config(str(path))

def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_config(str(tmp_path / "nope.yml"))

def test_malformed_yaml(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("workers: [1, 2\n")
    with pytest.raises(ValueError):
        load_config(str(path))
