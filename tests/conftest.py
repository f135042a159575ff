import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from sdl_parser.tag import Tag  # noqa: E402
from sdl_parser.utils import tests_data_path  # noqa: E402


@pytest.fixture(scope="session")
def basic_types() -> Tag:
    return Tag("root").read_file(tests_data_path("basic_types.sdl"))


@pytest.fixture(scope="session")
def structures() -> Tag:
    return Tag("root").read_file(tests_data_path("structures.sdl"))
