"""
MedTrackr Logging

All onboarding modules log under the ``medtrackr`` logger. Handlers are
attached once, to that root, and every handler runs records through
``mask_secrets`` so passwords and hashes never reach a terminal or log file.
"""

import os
import logging
import sys
from pathlib import Path
from datetime import date
from typing import Optional

from medtrackr.onboarding.ui import mask_secrets

ROOT_LOGGER = "medtrackr"

FORMATS = {
    "plain": "%(message)s",
    "debug": "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    "file": "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s",
}


def debug_enabled() -> bool:
    """True when MEDTRACKR_DEBUG is set to 1, true or yes."""
    return os.environ.get("MEDTRACKR_DEBUG", "").strip().lower() in ("1", "true", "yes")


class SecretMaskingFormatter(logging.Formatter):
    """Formatter that masks passwords and tokens, tracebacks included."""

    def format(self, record: logging.LogRecord) -> str:
        return mask_secrets(super().format(record))


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(SecretMaskingFormatter(FORMATS[fmt]))
    return handler


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """(Re)configure the ``medtrackr`` logger.

    Args:
        level: Console level. Defaults to DEBUG under MEDTRACKR_DEBUG,
            WARNING otherwise.
        log_file: Also write everything from DEBUG up to this file.
        quiet: Attach no console handler.

    Returns:
        The ``medtrackr`` logger
    """
    debug = debug_enabled()
    if level is None:
        level = logging.DEBUG if debug else logging.WARNING

    root = logging.getLogger(ROOT_LOGGER)
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.setLevel(logging.DEBUG if log_file else level)

    if not quiet:
        root.addHandler(_handler(logging.StreamHandler(sys.stderr), level, "debug" if debug else "plain"))

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), logging.DEBUG, "file"))

    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Child of the ``medtrackr`` logger; configures defaults on first use."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    if not logging.getLogger(ROOT_LOGGER).handlers:
        setup_logging()

    return logging.getLogger(name)


def get_log_path(home: Path) -> Path:
    """Today's log file under ``home/logs``."""
    return home / "logs" / f"medtrackr-{date.today().isoformat()}.log"


# Shown by `medtrackr config show`
ENV_VARS = {
    "MEDTRACKR_DEBUG": {
        "description": "Timestamped debug output on the console",
        "values": ["1", "true", "yes"],
        "default": "false"
    },
    "MEDTRACKR_HOME": {
        "description": "Directory holding the local account store, config and logs",
        "default": "~/.medtrackr"
    },
    "MEDTRACKR_CONFIG": {
        "description": "Path to config.yaml",
        "default": "$MEDTRACKR_HOME/config.yaml"
    }
}
