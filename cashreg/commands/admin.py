"""Admin commands for creating and inspecting configuration."""

import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from cashreg.config import (
    ENV_OUTPUT_FORMAT,
    ENV_RANDOM_DIVISOR,
    ENV_RANDOM_MODE,
    create_default_config,
    get_config_path,
    load_settings,
)
from cashreg.domain.errors import CashRegisterError

console = Console()


def init_command(force: bool = False) -> None:
    """Create the default configuration file."""
    config_path = get_config_path()

    # Guard: refuse to overwrite without force flag
    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'cashreg init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def config_command() -> None:
    """Show the effective configuration and where each value can be set."""
    try:
        loaded = load_settings(env_file=Path(".env"))
    except CashRegisterError as e:
        console.print(f"[red]Configuration error: {e}[/red]", style="bold")
        sys.exit(1)

    settings = loaded.settings

    table = Table(title="Cash Register Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Environment", style="dim")

    table.add_row("Random mode", "enabled" if settings.enable_random_mode else "disabled", ENV_RANDOM_MODE)
    table.add_row("Random divisor", str(settings.random_divisor), ENV_RANDOM_DIVISOR)
    table.add_row("Output format", settings.output_format.value, ENV_OUTPUT_FORMAT)

    console.print(table)

    if loaded.config_path:
        console.print(f"[dim]Config: {loaded.config_path}[/dim]")
    else:
        console.print(f"[dim]Config: defaults ({get_config_path()} not found)[/dim]")

    for warning in loaded.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")
