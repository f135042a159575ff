import os
from pathlib import Path

import yaml

from sdl_parser.utils import resolve_project_path

CONFIG_PATH = resolve_project_path("config/sdl_parser.yml")
CONFIG_ENV_VAR = "SDL_PARSER_CONFIG"

DEFAULTS = {
    "debug": False,
    "logging": {
        "level": "WARNING",
        "dir": "logs",
        "file": "sdl_parser.log",
        "to_file": False,
        "per_module": False,
        "rotate": False,
    },
    "writer": {
        "indent": "    ",
        "newline": "\n",
    },
    "parser": {
        "encoding": "utf-8",
    },
}


class SPConfig:
    def __init__(self, data):
        self.logging = {**DEFAULTS["logging"], **(data.get("logging") or {})}
        self.writer = {**DEFAULTS["writer"], **(data.get("writer") or {})}
        self.parser = {**DEFAULTS["parser"], **(data.get("parser") or {})}
        self.debug = bool(data.get("debug", DEFAULTS["debug"]))

    @property
    def indent(self) -> str:
        indent = self.writer.get("indent", "    ")
        # allow "indent: 2" in YAML as shorthand for two spaces
        if isinstance(indent, int):
            return " " * indent
        return str(indent)

    @property
    def newline(self) -> str:
        return str(self.writer.get("newline", "\n"))

    @property
    def encoding(self) -> str:
        return str(self.parser.get("encoding", "utf-8"))


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Path | None = None) -> 'SPConfig':
    path = path or config_path()
    if not path.exists():
        if path != CONFIG_PATH:
            raise FileNotFoundError(f"Config file not found: {path}")
        return SPConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return SPConfig(data)

_config_cache = None

def get_config() -> 'SPConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config(path: Path | None = None) -> 'SPConfig':
    """Drop the cached configuration and load it again (optionally from ``path``)."""
    global _config_cache
    _config_cache = load_config(path)
    return _config_cache
