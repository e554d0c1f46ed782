"""Interactive RunPod setup flow."""

from runpod_assistant.setup.flow import (
    Prompter,
    SelectOption,
    SetupCancelled,
    SetupDone,
    SetupFailed,
    SetupFlow,
    SetupResult,
    SetupState,
)
from runpod_assistant.setup.prompts import ClickPrompter

__all__ = [
    "ClickPrompter",
    "Prompter",
    "SelectOption",
    "SetupCancelled",
    "SetupDone",
    "SetupFailed",
    "SetupFlow",
    "SetupResult",
    "SetupState",
]
