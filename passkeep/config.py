from pathlib import Path
from dataclasses import dataclass
import jsonschema
import toml

from .generate import PasswordGenerator, CharacterClass

@dataclass(frozen=True)
class Config:
    length: int
    lowercase: bool
    uppercase: bool
    symbols: bool
    numbers: bool

    json_schema = {
        "$schema": "http://json-schema.org/draft-07/schema",
        "title": "passkeep configuration schema",
        "type": "object",
        "properties": {
            "length": {
                "description": "Default password length",
                "type": "integer",
                "minimum": 1
            },
            "lowercase": {"type": "boolean"},
            "uppercase": {"type": "boolean"},
            "symbols": {"type": "boolean"},
            "numbers": {"type": "boolean"},
        },
        "additionalProperties": False
    }

    defaults = {
        "length": 20,
        "lowercase": True,
        "uppercase": True,
        "symbols": True,
        "numbers": True,
    }

    @classmethod
    def default(cls):
        return cls({})

    def __init__(self, dict_data):
        jsonschema.validate(instance=dict_data, schema=self.json_schema)
        for key, default_value in self.defaults.items():
            object.__setattr__(self, key, dict_data.get(key, default_value))

    def dict(self):
        return {key: getattr(self, key) for key in self.defaults}

    def classes(self) -> list[CharacterClass]:
        return [c for c in CharacterClass if getattr(self, c.name.lower())]

    def generator(self, rng=None) -> PasswordGenerator:
        return PasswordGenerator(rng=rng).enable(*self.classes()).set_length(self.length)


def default_config_fn():
    fn = Path.home() / ".config/passkeep/config.toml"
    return str(fn)

def init_config_if_missing(toml_fn) -> bool:
    """Returns True if a new config file was written."""
    Path(toml_fn).parent.mkdir(parents=True, exist_ok=True)

    init_config = Config.default().dict()
    try:
        with open(toml_fn, "x") as f:
            toml.dump(init_config, f)
    except FileExistsError:
        return False
    return True

def load_config(toml_fn):
    try:
        with open(toml_fn, "r") as f:
            config_dict = toml.load(f)
    except FileNotFoundError:
        return Config.default()

    return Config(config_dict)
