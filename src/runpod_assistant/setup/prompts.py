"""Terminal prompter for the setup flow, built on click."""

from __future__ import annotations

import click

from runpod_assistant.setup.flow import SelectOption

# RunPod brand purple (256-color palette)
PURPLE = 135


def purple(text: str, bold: bool = False) -> str:
    return click.style(text, fg=PURPLE, bold=bold)


class ClickPrompter:
    """Prompts on the terminal. Ctrl-C or EOF at a prompt counts as cancel."""

    def ask_secret(self, message: str) -> str | None:
        try:
            # Empty input is returned as-is so the flow can reject it
            return click.prompt(message, hide_input=True, default="", show_default=False)
        except click.Abort:
            return None

    def select(self, message: str, options: list[SelectOption]) -> str | None:
        for index, option in enumerate(options, start=1):
            hint = click.style(f"  ({option.hint})", dim=True) if option.hint else ""
            click.echo(f"  {index}. {option.label}{hint}")
        try:
            choice = click.prompt(message, type=click.IntRange(1, len(options)))
        except click.Abort:
            return None
        return options[choice - 1].value

    def step(self, message: str) -> None:
        click.echo()
        click.echo(purple(message.upper(), bold=True))

    def info(self, message: str) -> None:
        click.echo(message)

    def success(self, message: str) -> None:
        click.echo(f"{purple('✔')} {message}")

    def warn(self, message: str) -> None:
        click.secho(f"! {message}", fg="yellow")

    def error(self, message: str) -> None:
        click.secho(f"✖ {message}", fg="red")
