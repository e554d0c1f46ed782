"""Pytest fixtures for Runpod Assistant tests."""

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from runpod_assistant.models.tiers import Cost, TierDescriptor
from runpod_assistant.setup.flow import SelectOption


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point settings at a temporary config dir and drop any real API key."""
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("RUNPOD_API_KEY", raising=False)
    monkeypatch.delenv("LOG_TO_FILE", raising=False)

    from runpod_assistant.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging (the CLI calls it on every invoke)."""
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    for handler in logging.root.handlers:
        if handler not in handlers:
            handler.close()
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


class FakePrompter:
    """Scripted prompter that records everything the flow shows."""

    def __init__(
        self,
        secrets: list[str | None] | None = None,
        selections: list[str | None] | None = None,
    ):
        self.secrets = list(secrets or [])
        self.selections = list(selections or [])
        self.secret_prompts: list[str] = []
        self.select_calls: list[list[SelectOption]] = []
        self.messages: list[tuple[str, str]] = []

    def ask_secret(self, message: str) -> str | None:
        self.secret_prompts.append(message)
        return self.secrets.pop(0)

    def select(self, message: str, options: list[SelectOption]) -> str | None:
        self.select_calls.append(options)
        return self.selections.pop(0)

    def step(self, message: str) -> None:
        self.messages.append(("step", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warn(self, message: str) -> None:
        self.messages.append(("warn", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_kind(self, kind: str) -> list[str]:
        return [text for k, text in self.messages if k == kind]


@pytest.fixture
def make_prompter() -> Callable[..., FakePrompter]:
    return FakePrompter


def _make_tier(key: str, model_id: str | None = None, **overrides: Any) -> TierDescriptor:
    """Build a TierDescriptor with sensible defaults."""
    fields: dict[str, Any] = {
        "key": key,
        "endpoint_id": f"ep-{key}",
        "model_id": model_id or key,
        "display_name": key.upper(),
        "context_limit": 32768,
        "output_limit": 4096,
        "cost": Cost(input=0.2, output=0.4),
    }
    fields.update(overrides)
    return TierDescriptor(**fields)


@pytest.fixture
def make_tier() -> Callable[..., TierDescriptor]:
    return _make_tier


@pytest.fixture
def graphql_client() -> Callable[..., tuple[httpx.AsyncClient, list[httpx.Request]]]:
    """Build an AsyncClient whose requests are answered by a fixed response.

    Returns the client and the list that captures its requests.
    """

    def _make(
        status_code: int = 200, body: Any = None, text: str | None = None
    ) -> tuple[httpx.AsyncClient, list[httpx.Request]]:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, content=json.dumps(body or {}).encode())

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return client, requests

    return _make
