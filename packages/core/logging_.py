from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from packages.shared.paths import log_path, ensure_app_dirs

LEVEL_ENV = "APP_GUARD_LOG_LEVEL"


def _level_from_env(default: int) -> int:
    name = os.environ.get(LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None, console: bool = True) -> None:
    """Console + rotating file logging on the root logger. Safe to call twice."""
    ensure_app_dirs()
    if level is None:
        level = _level_from_env(logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # Other tools (test runners, embedding hosts) may have added their own handlers
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    if console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(fmt)
        root.addHandler(ch)

    fh = RotatingFileHandler(str(log_path()), maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Inspector availability transitions stay visible at quieter root levels
    if level > logging.INFO:
        logging.getLogger("packages.core.monitor.switch_monitor").setLevel(logging.INFO)
