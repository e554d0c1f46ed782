"""Credential store (auth.json), keyed by provider id."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError

from runpod_assistant.logging import get_logger
from runpod_assistant.store.base import PersistenceError, read_json, write_json_atomic

log = get_logger("runpod_assistant.store.auth")

# Owner read/write only
AUTH_FILE_MODE = 0o600


class ApiAuth(BaseModel):
    """An API-key credential."""

    model_config = ConfigDict(frozen=True)

    type: Literal["api"] = "api"
    key: str

    def __repr__(self) -> str:
        return f"ApiAuth(type={self.type!r}, key='**********')"

    __str__ = __repr__


class AuthStore:
    """Stores one credential per provider in a private JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, provider_id: str) -> ApiAuth | None:
        """Return the stored credential for *provider_id*, if any.

        Raises:
            PersistenceError: If the file or the entry is malformed.
        """
        entry = read_json(self.path).get(provider_id)
        if entry is None:
            return None
        try:
            return ApiAuth.model_validate(entry)
        except SchemaError as e:
            raise PersistenceError(self.path, f"invalid entry for '{provider_id}'") from e

    def set(self, provider_id: str, auth: ApiAuth) -> None:
        """Store *auth* under *provider_id*, replacing any previous entry.

        Raises:
            PersistenceError: If the store can't be read or written.
        """
        data = read_json(self.path)
        data[provider_id] = auth.model_dump()
        write_json_atomic(self.path, data, mode=AUTH_FILE_MODE)
        log.info("credential_stored", provider=provider_id)
