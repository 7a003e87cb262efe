"""File logging for the audio renderer.

``AudioEngine(debug_log=True)`` attaches a file handler to the
``morseflow.audio`` logger so that synthesis, WAV writes and playback
can be followed without touching the application's logging setup.

The log file is chosen in this order:

1. the ``debug_log_path`` passed to the engine (``audio.debug_log_path``
   in the config),
2. ``audio_debug.log`` in ``$MORSEFLOW_LOG_DIR``,
3. ``audio_debug.log`` in the current working directory.

Several engines writing to the same file share one handler.  Each
engine records its settings with :func:`log_engine_settings` when it
opens the log.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "morseflow.audio"
LOG_FILENAME = "audio_debug.log"
LOG_DIR_ENV_VAR = "MORSEFLOW_LOG_DIR"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_audio_log_path(log_path: Optional[Union[str, os.PathLike]] = None) -> Path:
    """Return the absolute path of the audio debug log."""
    if log_path:
        return Path(os.path.abspath(log_path))
    log_dir = os.environ.get(LOG_DIR_ENV_VAR)
    base = Path(log_dir) if log_dir else Path.cwd()
    return Path(os.path.abspath(base / LOG_FILENAME))


def attach_debug_log(log_path: Optional[Union[str, os.PathLike]] = None) -> logging.FileHandler:
    """Attach a file handler for ``log_path`` to the audio logger.

    :param log_path: Explicit log file; see :func:`get_audio_log_path`.
    :return: The handler writing to that file (an existing one is reused).
    """
    path = str(get_audio_log_path(log_path))
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == path:
            return handler

    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return handler


def log_engine_settings(sample_rate: int, frequency: int, volume: float, log_path: str) -> None:
    """Write the startup line of one engine into the debug log."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.info(
        "=== Audio debug log (pid=%s): sample_rate=%d Hz, frequency=%d Hz, volume=%.2f -> %s ===",
        os.getpid(), sample_rate, frequency, volume, log_path,
    )
    for handler in logger.handlers:
        handler.flush()


__all__ = [
    "attach_debug_log",
    "get_audio_log_path",
    "log_engine_settings",
    "LOGGER_NAME",
    "LOG_DIR_ENV_VAR",
]
