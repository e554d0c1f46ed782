"""First-time RunPod setup.

The flow is a linear state machine::

    START -> ENTER_CREDENTIAL -> VALIDATE_CREDENTIAL -> SELECT_TIER
          -> PERSIST_DEFAULT_MODEL -> DONE

Every step returns either the next state or a terminal result. Users can
abort any prompt; that ends the flow with SetupCancelled and nothing from
later steps is written.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from runpod_assistant.logging import get_logger
from runpod_assistant.models.registry import PROVIDER_ID, PROVIDER_NAME
from runpod_assistant.models.tiers import TierDescriptor, list_tiers
from runpod_assistant.models.validation import AccountInfo, ValidationError, validate
from runpod_assistant.store.auth import ApiAuth, AuthStore
from runpod_assistant.store.base import PersistenceError
from runpod_assistant.store.global_config import GlobalConfigStore

log = get_logger("runpod_assistant.setup.flow")


class SetupState(Enum):
    """States of the setup flow."""

    START = "start"
    ENTER_CREDENTIAL = "enter_credential"
    VALIDATE_CREDENTIAL = "validate_credential"
    SELECT_TIER = "select_tier"
    PERSIST_DEFAULT_MODEL = "persist_default_model"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SetupDone:
    """Setup completed. ``warnings`` lists degraded steps, if any."""

    account: AccountInfo
    tier_key: str
    default_model: str
    warnings: tuple[str, ...] = ()

    @property
    def state(self) -> SetupState:
        return SetupState.DONE


@dataclass(frozen=True)
class SetupFailed:
    """Setup stopped at ``failed_at`` with an error to show the user."""

    failed_at: SetupState
    message: str

    @property
    def state(self) -> SetupState:
        return SetupState.FAILED


@dataclass(frozen=True)
class SetupCancelled:
    """The user aborted the prompt shown in ``cancelled_at``."""

    cancelled_at: SetupState

    @property
    def state(self) -> SetupState:
        return SetupState.CANCELLED


SetupResult = SetupDone | SetupFailed | SetupCancelled


@dataclass(frozen=True)
class SelectOption:
    """One choice offered by Prompter.select."""

    value: str
    label: str
    hint: str = ""


class Prompter(Protocol):
    """Interactive surface used by the flow.

    Prompt methods return None when the user aborts.
    """

    def ask_secret(self, message: str) -> str | None: ...

    def select(self, message: str, options: list[SelectOption]) -> str | None: ...

    def step(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass
class _RunContext:
    """Values collected while the flow runs; dropped when run() returns."""

    api_key: str = ""
    account: AccountInfo | None = None
    tier_key: str = ""
    tiers: dict[str, TierDescriptor] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


Transition = SetupState | SetupDone | SetupFailed | SetupCancelled


def format_cost(tier: TierDescriptor) -> str:
    """Human-readable price of a tier."""
    return f"${tier.cost.input}/M input, ${tier.cost.output}/M output"


class SetupFlow:
    """Walks a user through credential entry and default model selection."""

    def __init__(
        self,
        prompter: Prompter,
        auth_store: AuthStore,
        config_store: GlobalConfigStore,
        validator: Callable[[str], Awaitable[AccountInfo]] | None = None,
        tiers: Callable[[], dict[str, TierDescriptor]] = list_tiers,
    ) -> None:
        """Initialize the flow.

        Args:
            prompter: Where prompts and messages go.
            auth_store: Receives the API key once it has been validated.
            config_store: Receives the default model.
            validator: Validates an API key, raising ValidationError.
                Defaults to a one-shot RunPod GraphQL validation.
            tiers: Returns the tier catalog to choose from.
        """
        self._prompter = prompter
        self._auth_store = auth_store
        self._config_store = config_store
        self._validator = validator or validate
        self._tiers = tiers
        self._steps: dict[SetupState, Callable[[_RunContext], Awaitable[Transition]]] = {
            SetupState.START: self._start,
            SetupState.ENTER_CREDENTIAL: self._enter_credential,
            SetupState.VALIDATE_CREDENTIAL: self._validate_credential,
            SetupState.SELECT_TIER: self._select_tier,
            SetupState.PERSIST_DEFAULT_MODEL: self._persist_default_model,
            SetupState.DONE: self._done,
        }

    async def run(self) -> SetupResult:
        """Run the flow to a terminal result."""
        ctx = _RunContext()
        state = SetupState.START
        while True:
            outcome = await self._steps[state](ctx)
            if not isinstance(outcome, SetupState):
                log.info("setup_finished", state=outcome.state.value, last_step=state.value)
                return outcome
            log.debug("setup_transition", from_state=state.value, to_state=outcome.value)
            state = outcome

    async def _start(self, ctx: _RunContext) -> Transition:
        self._prompter.step("Runpod assistant first-time setup")
        self._prompter.info(
            "Configure your global assistant settings. Answer each prompt and "
            "press ENTER to continue."
        )
        return SetupState.ENTER_CREDENTIAL

    async def _enter_credential(self, ctx: _RunContext) -> Transition:
        self._prompter.step("Step 1: API credentials")
        while True:
            api_key = self._prompter.ask_secret("Enter your Runpod API key")
            if api_key is None:
                return SetupCancelled(SetupState.ENTER_CREDENTIAL)
            api_key = api_key.strip()
            if api_key:
                ctx.api_key = api_key
                return SetupState.VALIDATE_CREDENTIAL
            self._prompter.error("Required")

    async def _validate_credential(self, ctx: _RunContext) -> Transition:
        self._prompter.info("Validating API key...")
        try:
            account = await self._validator(ctx.api_key)
        except ValidationError as e:
            self._prompter.error(f"Validation failed: {e.message}")
            return SetupFailed(SetupState.VALIDATE_CREDENTIAL, e.message)

        ctx.account = account
        self._prompter.success(f"Authenticated as {account.email}")
        if account.current_spend_per_hr is not None:
            self._prompter.info(f"Current spend: ${account.current_spend_per_hr:.4f}/hr")

        try:
            self._auth_store.set(PROVIDER_ID, ApiAuth(key=ctx.api_key))
        except PersistenceError as e:
            message = f"Could not save API key: {e.message}"
            self._prompter.error(message)
            return SetupFailed(SetupState.VALIDATE_CREDENTIAL, message)
        self._prompter.success("API key saved")
        return SetupState.SELECT_TIER

    async def _select_tier(self, ctx: _RunContext) -> Transition:
        self._prompter.step("Step 2: Default model")
        ctx.tiers = self._tiers()

        if len(ctx.tiers) == 1:
            key, tier = next(iter(ctx.tiers.items()))
            self._prompter.info(f"Using {tier.display_name} ({tier.model_id})")
            ctx.tier_key = key
            return SetupState.PERSIST_DEFAULT_MODEL

        options = [
            SelectOption(value=key, label=f"{key} - {tier.display_name}", hint=format_cost(tier))
            for key, tier in ctx.tiers.items()
        ]
        while True:
            selected = self._prompter.select("Select a default model", options)
            if selected is None:
                return SetupCancelled(SetupState.SELECT_TIER)
            if selected in ctx.tiers:
                ctx.tier_key = selected
                return SetupState.PERSIST_DEFAULT_MODEL
            self._prompter.error(f"Unknown tier '{selected}'")

    async def _persist_default_model(self, ctx: _RunContext) -> Transition:
        default_model = f"{PROVIDER_ID}/{ctx.tier_key}"
        try:
            self._config_store.update({"model": default_model})
        except PersistenceError as e:
            log.warning("default_model_not_saved", path=str(e.path), error=e.message)
            warning = (
                f'Could not write global config. Set "model": "{default_model}" '
                f"in {self._config_store.path}"
            )
            ctx.warnings.append(warning)
            self._prompter.warn(warning)
        else:
            self._prompter.success(f"Default model set to {default_model}")
        return SetupState.DONE

    async def _done(self, ctx: _RunContext) -> Transition:
        assert ctx.account is not None
        tier = ctx.tiers[ctx.tier_key]
        self._prompter.step("Configuration summary")
        self._prompter.info(
            f"Provider        {PROVIDER_NAME}\n"
            f"Model           {tier.display_name} ({tier.model_id})\n"
            f"Account         {ctx.account.email}"
        )
        self._prompter.success("Settings updated. You're ready to start building!")
        return SetupDone(
            account=ctx.account,
            tier_key=ctx.tier_key,
            default_model=f"{PROVIDER_ID}/{ctx.tier_key}",
            warnings=tuple(ctx.warnings),
        )
