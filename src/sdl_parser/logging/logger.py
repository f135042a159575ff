"""
Logging setup for sdl_parser.

Every module asks ``get_logger`` for a logger; all of them hang off the
``sdl_parser`` base logger, which owns the handlers:

* a console handler, always;
* a master log file (``logs/sdl_parser.log``) when ``logging.to_file`` is set;
* one extra file per module when ``logging.per_module`` is also set.

The ``logging`` section of ``config/sdl_parser.yml`` drives all of it.
``configure_logging`` re-reads that section, which the CLI does after
loading a ``--config`` file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from sdl_parser.config import SPConfig, get_config
from sdl_parser.utils import project_root

BASE_LOGGER_NAME = "sdl_parser"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROTATE_MAX_BYTES = 5 * 1024 * 1024
ROTATE_BACKUPS = 5


@dataclass(frozen=True)
class LogSettings:
    level: int
    log_dir: Path
    master_file: str
    to_file: bool
    per_module: bool
    rotate: bool

    @classmethod
    def from_config(cls, cfg: SPConfig) -> "LogSettings":
        section = cfg.logging
        level_name = str(section.get("level", "WARNING")).upper()
        level = getattr(logging, level_name, logging.WARNING)
        if cfg.debug:
            level = logging.DEBUG

        log_dir = Path(section.get("dir") or "logs")
        if not log_dir.is_absolute():
            log_dir = project_root() / log_dir

        to_file = bool(section.get("to_file", False))
        return cls(
            level=level,
            log_dir=log_dir,
            master_file=str(section.get("file") or "sdl_parser.log"),
            to_file=to_file,
            per_module=to_file and bool(section.get("per_module", False)),
            rotate=bool(section.get("rotate", False)),
        )


_settings: Optional[LogSettings] = None
_loggers: Dict[str, Logger] = {}


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------

def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def _file_handler(settings: LogSettings, filename: str) -> logging.Handler:
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    path = settings.log_dir / filename

    if settings.rotate:
        handler: logging.Handler = RotatingFileHandler(
            path,
            maxBytes=ROTATE_MAX_BYTES,
            backupCount=ROTATE_BACKUPS,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8")

    handler.setLevel(settings.level)
    handler.setFormatter(_formatter())
    return handler


def _drop_handlers(logger: Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _attach_module_file(logger: Logger, settings: LogSettings) -> None:
    if settings.per_module and logger.name != BASE_LOGGER_NAME:
        logger.addHandler(_file_handler(settings, logger.name.replace(".", "_") + ".log"))


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def configure_logging(cfg: Optional[SPConfig] = None) -> LogSettings:
    """
    (Re)build the handlers from ``cfg`` (the active configuration by default).

    Loggers already handed out keep working; their levels and per-module
    files follow the new settings.
    """
    global _settings
    settings = LogSettings.from_config(cfg if cfg is not None else get_config())

    base = logging.getLogger(BASE_LOGGER_NAME)
    _drop_handlers(base)
    base.setLevel(settings.level)
    base.propagate = False

    console = StreamHandler()
    console.setLevel(settings.level)
    console.setFormatter(_formatter())
    base.addHandler(console)

    if settings.to_file:
        base.addHandler(_file_handler(settings, settings.master_file))

    for logger in _loggers.values():
        _drop_handlers(logger)
        logger.setLevel(settings.level)
        _attach_module_file(logger, settings)

    _settings = settings
    return settings


def get_logger(name: str | None = None) -> Logger:
    """
    Return a logger below ``sdl_parser``.

    Short names are nested under the base logger, so ``get_logger("cli")``
    and ``get_logger("sdl_parser.cli")`` are the same logger.
    """
    if _settings is None:
        configure_logging()

    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    if logger_name == BASE_LOGGER_NAME:
        return logging.getLogger(BASE_LOGGER_NAME)

    logger = _loggers.get(logger_name)
    if logger is None:
        logger = logging.getLogger(logger_name)
        logger.setLevel(_settings.level)
        logger.propagate = True
        _attach_module_file(logger, _settings)
        _loggers[logger_name] = logger
    return logger


def set_level(level: int) -> None:
    """Change the level of the base logger, its handlers and every module logger."""
    base = get_logger()
    base.setLevel(level)
    for handler in base.handlers:
        handler.setLevel(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
