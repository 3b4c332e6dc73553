"""CLI entry point for cashreg."""

import typer

from cashreg.commands.admin import config_command, init_command
from cashreg.commands.process import DEFAULT_OUTPUT, process_command

app = typer.Typer(
    name="cashreg",
    help="Cash register change calculator",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Cash register change calculator."""
    pass


@app.command()
def process(
    input_file: str,
    output_file: str = typer.Argument(DEFAULT_OUTPUT, help="Where to write results"),
    no_random: bool = typer.Option(False, "--no-random", help="Always give minimum change"),
    output_format: str = typer.Option(
        None, "--format", "-f", help="Output format: standard, json or verbose (overrides config)"
    ),
    show_config: bool = typer.Option(False, "--show-config", help="Show effective configuration first"),
    table: bool = typer.Option(False, "--table", help="Show a table of processed transactions"),
) -> None:
    """Compute change for each 'amount_owed,amount_paid' line in a file."""
    process_command(input_file, output_file, no_random, output_format, show_config, table)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create the default cashreg configuration file."""
    init_command(force)


@app.command(name="config")
def config() -> None:
    """Show the effective configuration."""
    config_command()


if __name__ == "__main__":
    app()
