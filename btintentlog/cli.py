"""Typer CLI entrypoint."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from pathlib import Path

import typer

from btintentlog.core.capture import load_events
from btintentlog.core.errors import BtIntentLogError
from btintentlog.core.service import IntentLogService
from btintentlog.core.settings import Settings, load_settings, save_settings

app = typer.Typer(help="Decode Android Bluetooth broadcast intents into readable log lines")


def _build_service(settings_provider: Callable[[], Settings] | None = None) -> IntentLogService:
    service = IntentLogService(sink=typer.echo, settings_provider=settings_provider)
    for warning in service.load_warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return service


@app.command("decode")
def decode(
    path: Path = typer.Argument(..., help="JSON Lines file of captured intents"),
    verbose: bool | None = typer.Option(
        None, "--verbose/--compact", help="Override the persisted verbosity setting"
    ),
    device_type: bool | None = typer.Option(
        None, "--device-type/--no-device-type", help="Whether the platform reports device types"
    ),
) -> None:
    """Decode every intent in PATH and print its log lines."""

    def settings_provider() -> Settings:
        settings = load_settings()
        if verbose is not None:
            settings = dataclasses.replace(settings, verbose=verbose)
        if device_type is not None:
            settings = dataclasses.replace(settings, device_type_available=device_type)
        return settings

    try:
        events = load_events(path)
        service = _build_service(settings_provider)
        if not events:
            typer.echo("No intents found", err=True)
            return
        service.receive_all(events)
    except BtIntentLogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("tables")
def show_tables() -> None:
    """Summarize the loaded symbol tables."""
    try:
        tables = _build_service().tables
        typer.echo("Action classes:")
        for rule in tables.class_prefixes:
            typer.echo(f"  {rule.prefix}* -> {rule.label}")
        typer.echo("Extra prefixes:")
        for prefix in tables.extra_prefixes:
            typer.echo(f"  {prefix}*")
        typer.echo(f"Constants: {len(tables.constants)}")
        typer.echo(f"Major device classes: {len(tables.major_classes)}")
        typer.echo(f"Device classes: {len(tables.device_classes)}")
        typer.echo(f"Extra names: {len(tables.extra_names)}")
    except BtIntentLogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("verbosity")
def verbosity(state: str | None = typer.Argument(None, help="on or off")) -> None:
    """Show the persisted verbosity, or set it to STATE.

    If STATE is omitted, prints the current setting.
    """
    try:
        settings = load_settings()
        if state is None:
            typer.echo(f"Verbose logging is {'on' if settings.verbose else 'off'}")
            return
        lowered = state.strip().lower()
        if lowered not in {"on", "off"}:
            typer.echo(f"Error: verbosity must be 'on' or 'off', not '{state}'", err=True)
            raise typer.Exit(code=1)
        path = save_settings(dataclasses.replace(settings, verbose=lowered == "on"))
        typer.echo(f"Verbose logging set to {lowered} ({path})")
    except BtIntentLogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
