"""Shared JSON file persistence for the config and auth stores."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any


class PersistenceError(Exception):
    """A store could not be read or written."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


def read_json(path: Path) -> dict[str, Any]:
    """Read a JSON object from disk; a missing file reads as empty.

    Raises:
        PersistenceError: If the file can't be read or isn't a JSON object.
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PersistenceError(path, f"could not read: {e}") from e
    if not isinstance(data, dict):
        raise PersistenceError(path, "expected a JSON object")
    return data


def write_json_atomic(path: Path, data: dict[str, Any], mode: int | None = None) -> None:
    """Write a JSON object with a single rename so readers never see half a file.

    Raises:
        PersistenceError: On any filesystem failure.
    """
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2) + "\n")
        if mode is not None:
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise PersistenceError(path, f"could not write: {e}") from e
    finally:
        if tmp_name is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
