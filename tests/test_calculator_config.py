# tests/test_calculator_config.py
import json

import pytest

from calculator_config import CalculatorConfig, ConfigError, load_config


def write(tmp_path, data):
    path = tmp_path / "calc.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf8")
    return path


def test_defaults():
    config = CalculatorConfig()
    assert config.prompt == "> "
    assert config.max_output_bytes is None
    assert config.output_format == "text"
    assert config.no_solution_message is None
    assert not config.verbose


def test_load_config(tmp_path):
    path = write(tmp_path, {"prompt": "cage> ", "max_output_bytes": 4096, "output_format": "json"})
    config = load_config(path)
    assert config.prompt == "cage> "
    assert config.max_output_bytes == 4096
    assert config.output_format == "json"


@pytest.mark.parametrize("data", [
    {"colour": "blue"},
    {"verbose": "yes"},
    {"max_output_bytes": True},
    {"max_output_bytes": 0},
    {"output_format": "xml"},
    [1, 2, 3],
    "not json",
])
def test_load_config_rejects_bad_files(tmp_path, data):
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, data))


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")


def test_merged_skips_none():
    config = CalculatorConfig(prompt="$ ").merged(prompt=None, output_format="json")
    assert config.prompt == "$ "
    assert config.output_format == "json"


def test_merged_validates():
    with pytest.raises(ConfigError):
        CalculatorConfig().merged(max_output_bytes=-5)
    with pytest.raises(ConfigError):
        CalculatorConfig().merged(colour="blue")
