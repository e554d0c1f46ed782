"""Global assistant configuration (config.json)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from runpod_assistant.logging import get_logger
from runpod_assistant.store.base import read_json, write_json_atomic

log = get_logger("runpod_assistant.store.global_config")


class GlobalConfigStore:
    """Key/value updates to the global config file.

    Unknown keys already in the file are preserved.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, Any]:
        """Return the current config (empty if the file doesn't exist)."""
        return read_json(self.path)

    def update(self, patch: dict[str, Any]) -> None:
        """Merge *patch* into the config and write it back in one step.

        Raises:
            PersistenceError: If the existing file is unreadable or the
                write fails. The file is left untouched in both cases.
        """
        config = self.load()
        config.update(patch)
        write_json_atomic(self.path, config)
        log.info("global_config_updated", path=str(self.path), keys=sorted(patch))
