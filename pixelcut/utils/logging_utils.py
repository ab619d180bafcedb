from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union
from colorlog import ColoredFormatter

ROOT_LOGGER = "pixelcut"
LOG_FILE = "run.log"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "white",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _root() -> logging.Logger:
    # Handlers live on the package logger; module loggers propagate to it.
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        root.propagate = False
        root.setLevel(logging.INFO)
        ch = logging.StreamHandler()
        ch.setFormatter(ColoredFormatter(
            "%(log_color)s%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
            log_colors=LOG_COLORS,
        ))
        root.addHandler(ch)
    return root


def get_logger(name: str,
               log_dir: Optional[Path] = None,
               level: Union[int, str, None] = None) -> logging.Logger:
    """
    Return `pixelcut.<name>`. `level` accepts a number or a level name such as
    "DEBUG" and applies to every pixelcut logger. With `log_dir`, records are
    also appended to `<log_dir>/run.log`, one file handler per directory.
    """
    root = _root()
    if level is not None:
        root.setLevel(level.upper() if isinstance(level, str) else level)

    if log_dir is not None:
        log_file = (log_dir / LOG_FILE).resolve()
        has_file = any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file
                       for h in root.handlers)
        if not has_file:
            log_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
            root.addHandler(fh)

    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
