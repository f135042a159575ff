# src/sdl_parser/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

# src/sdl_parser/utils/ -> checkout root
_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """Checkout root: holds src/, tests/ and config/sdl_parser.yml."""
    return _ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    return _ROOT / Path(relative)


def tests_data_path(*parts: Union[str, Path]) -> Path:
    """Location of an SDL fixture, e.g. ``tests_data_path("structures.sdl")``."""
    return resolve_project_path(Path("tests", "data", *parts))
