"""CLI for Runpod Assistant."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from runpod_assistant.config import get_settings
from runpod_assistant.logging import setup_logging
from runpod_assistant.models.registry import build_provider_descriptor
from runpod_assistant.models.tiers import list_tiers
from runpod_assistant.models.validation import ValidationError, validate
from runpod_assistant.setup.flow import SetupCancelled, SetupFailed, SetupFlow
from runpod_assistant.setup.prompts import ClickPrompter, purple
from runpod_assistant.store.auth import AuthStore
from runpod_assistant.store.global_config import GlobalConfigStore

# Conventional exit status for SIGINT
EXIT_CANCELLED = 130


@click.group()
def main() -> None:
    """Runpod setup and management."""
    setup_logging()


@main.command()
def setup() -> None:
    """Configure Runpod as your AI provider."""
    settings = get_settings()
    flow = SetupFlow(
        prompter=ClickPrompter(),
        auth_store=AuthStore(settings.auth_path),
        config_store=GlobalConfigStore(settings.global_config_path),
    )
    try:
        result = asyncio.run(flow.run())
    except KeyboardInterrupt:
        click.echo("\nSetup cancelled")
        sys.exit(EXIT_CANCELLED)

    if isinstance(result, SetupCancelled):
        click.echo("Setup cancelled")
        sys.exit(EXIT_CANCELLED)
    if isinstance(result, SetupFailed):
        click.echo("Setup cancelled")
        sys.exit(1)


@main.command()
def tiers() -> None:
    """List available Runpod model tiers."""
    tier_data = list_tiers()
    click.echo(purple("Runpod Model Tiers", bold=True))
    for name, tier in tier_data.items():
        click.echo()
        click.echo(f"{purple(name, bold=True)} - {tier.display_name}")
        click.echo(f"  Model: {tier.model_id}")
        click.echo(f"  Context: {tier.context_limit / 1024:.0f}k tokens")
        click.echo(f"  Cost: ${tier.cost.input}/M input, ${tier.cost.output}/M output")
    click.echo()
    click.echo(f"{len(tier_data)} tiers available")


@main.command()
def provider() -> None:
    """Print the Runpod provider descriptor as JSON."""
    click.echo(json.dumps(build_provider_descriptor().to_registry_dict(), indent=2))


@main.command("validate")
def validate_key() -> None:
    """Validate the API key in RUNPOD_API_KEY."""
    settings = get_settings()
    if settings.runpod_api_key is None:
        click.echo("Error: RUNPOD_API_KEY is not set.")
        sys.exit(1)

    api_key = settings.runpod_api_key.get_secret_value()
    try:
        account = asyncio.run(validate(api_key, settings.runpod_graphql_url))
    except ValidationError as e:
        click.echo(f"Error: {e.message}")
        sys.exit(1)

    click.echo(f"Authenticated as {account.email}")
    if account.current_spend_per_hr is not None:
        click.echo(f"Current spend: ${account.current_spend_per_hr:.4f}/hr")


if __name__ == "__main__":
    main()
