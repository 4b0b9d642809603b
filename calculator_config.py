"""Settings for the cage calculator, optionally read from a JSON file."""

import json
from dataclasses import dataclass, fields, replace

OUTPUT_FORMATS = ("text", "json")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class CalculatorConfig:
    prompt: str = "> "
    max_output_bytes: int | None = None
    output_format: str = "text"
    no_solution_message: str | None = None
    log_file: str | None = None
    verbose: bool = False

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(f"output_format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}")
        if self.max_output_bytes is not None:
            if isinstance(self.max_output_bytes, bool) or not isinstance(self.max_output_bytes, int):
                raise ConfigError(f"max_output_bytes must be an integer, got {self.max_output_bytes!r}")
            if self.max_output_bytes <= 0:
                raise ConfigError("max_output_bytes must be positive")

    def merged(self, **overrides):
        """Copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ConfigError(f"unknown setting(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)


_TYPES = {
    "prompt": (str,),
    "max_output_bytes": (int, type(None)),
    "output_format": (str,),
    "no_solution_message": (str, type(None)),
    "log_file": (str, type(None)),
    "verbose": (bool,),
}


def read_json(file):
    with open(file, "r", encoding="utf8") as f:
        data = json.load(f)
    return data


def load_config(path):
    try:
        data = read_json(path)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"config file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must hold a JSON object")

    for key, value in data.items():
        if key not in _TYPES:
            raise ConfigError(f"unknown setting {key!r} in {path}")
        if not isinstance(value, _TYPES[key]) or (isinstance(value, bool) and bool not in _TYPES[key]):
            raise ConfigError(f"setting {key!r} in {path} has the wrong type")

    return CalculatorConfig(**data)
