"""
Logging package for ``sdl_parser``.

Use ``get_logger(__name__)`` in modules to inherit the shared handlers.
"""

from .logger import LogSettings, configure_logging, get_logger, set_level

__all__ = [
    "LogSettings",
    "configure_logging",
    "get_logger",
    "set_level",
]
