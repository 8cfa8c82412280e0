from __future__ import annotations

import json
import logging
import os
from typing import Any

from pydantic import ValidationError

from packages.shared.config import AppConfig
from packages.shared.paths import config_path, ensure_app_dirs

log = logging.getLogger(__name__)


class ConfigStore:
    """JSON-backed AppConfig. A missing or unreadable file falls back to defaults."""

    def __init__(self) -> None:
        ensure_app_dirs()
        self._path = config_path()

    def load(self) -> AppConfig:
        if not self._path.exists():
            return self._restore_defaults()

        try:
            data: Any = json.loads(self._path.read_text(encoding="utf-8"))
            return AppConfig.model_validate(data)
        except (OSError, ValueError, ValidationError) as e:
            log.warning("Config at %s is unreadable (%s), restoring defaults", self._path, e)
            self._set_aside()
            return self._restore_defaults()

    def save(self, cfg: AppConfig) -> None:
        # Write then swap so a crash mid-write never truncates the config
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(cfg.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp, self._path)

    def path(self) -> str:
        return str(self._path)

    def backup_path(self) -> str:
        return str(self._path.with_suffix(self._path.suffix + ".bad"))

    def _restore_defaults(self) -> AppConfig:
        cfg = AppConfig()
        self.save(cfg)
        return cfg

    def _set_aside(self) -> None:
        try:
            os.replace(self._path, self.backup_path())
        except OSError as e:
            log.warning("Could not keep a copy of the unreadable config: %s", e)
