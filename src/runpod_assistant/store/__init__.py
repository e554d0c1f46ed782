"""File-backed global config and credential stores."""

from runpod_assistant.store.auth import ApiAuth, AuthStore
from runpod_assistant.store.base import PersistenceError
from runpod_assistant.store.global_config import GlobalConfigStore

__all__ = [
    "ApiAuth",
    "AuthStore",
    "GlobalConfigStore",
    "PersistenceError",
]
