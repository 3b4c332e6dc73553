"""Process command for computing change from an input file."""

import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from cashreg.config import get_config_path, load_settings, override_settings
from cashreg.domain.errors import CashRegisterError
from cashreg.domain.formatting import format_result, format_standard
from cashreg.domain.models import OutputFormat
from cashreg.domain.parsing import cents_to_dollars, parse_transaction_lines
from cashreg.domain.register import CashRegister, RegisterSettings, TransactionResult

console = Console()

DEFAULT_OUTPUT = "output.txt"


def read_input_lines(input_path: Path) -> list[str]:
    """Read raw lines from the input file.

    Args:
        input_path: Path to the input file.

    Returns:
        Lines without trailing newlines.

    Raises:
        FileNotFoundError: If the input file doesn't exist.
        UnicodeDecodeError: If the input file isn't valid UTF-8.
    """
    return input_path.read_text(encoding="utf-8").splitlines()


def render_output(results: list[TransactionResult], output_format: OutputFormat) -> str:
    """Render all results as output file contents (one entry per line)."""
    return "\n".join(format_result(result, output_format) for result in results) + "\n"


def write_output(output_path: Path, content: str) -> None:
    """Write rendered results to the output file."""
    output_path.write_text(content, encoding="utf-8")


def show_settings(settings: RegisterSettings, config_path: Path | None) -> None:
    """Print the effective register configuration."""
    console.print("[cyan]Cash Register Configuration:[/cyan]")
    console.print(f"  Random Mode: {'enabled' if settings.enable_random_mode else 'disabled'}")
    console.print(f"  Random Divisor: {settings.random_divisor}")
    console.print(f"  Output Format: {settings.output_format.value}")
    if config_path:
        console.print(f"  [dim]Config: {config_path}[/dim]")
    else:
        console.print(f"  [dim]Config: defaults ({get_config_path()} not found)[/dim]")


def show_results_table(results: list[TransactionResult]) -> None:
    """Print processed transactions as a table."""
    table = Table(title=f"Transactions ({len(results)})")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Owed", justify="right")
    table.add_column("Paid", justify="right")
    table.add_column("Change", justify="right", style="green")
    table.add_column("Strategy", style="magenta")
    table.add_column("Denominations", style="white")

    for result in results:
        txn = result.transaction
        table.add_row(
            str(txn.line_number),
            f"${txn.amount_owed:,.2f}",
            f"${txn.amount_paid:,.2f}",
            f"${cents_to_dollars(txn.change_due):,}",
            result.strategy.value,
            format_standard(result.breakdown),
        )

    console.print(table)


def process_command(
    input_file: str,
    output_file: str = DEFAULT_OUTPUT,
    no_random: bool = False,
    output_format: str | None = None,
    show_config: bool = False,
    table: bool = False,
) -> None:
    """Compute change for every transaction in the input file.

    Aborts on the first bad line; no output file is written in that case.

    Args:
        input_file: Path to "amount_owed,amount_paid" lines.
        output_file: Path for rendered results.
        no_random: Force random mode off regardless of configuration.
        output_format: Override the configured output format.
        show_config: Print the effective configuration first.
        table: Print a table of results after processing.
    """
    input_path = Path(input_file).expanduser()
    output_path = Path(output_file).expanduser()

    if not input_path.exists():
        console.print(f"[red]Input file not found: {input_path}[/red]", style="bold")
        sys.exit(1)

    try:
        loaded = load_settings(env_file=Path(".env"))
        format_override = OutputFormat(output_format.lower()) if output_format else None
    except CashRegisterError as e:
        console.print(f"[red]Configuration error: {e}[/red]", style="bold")
        sys.exit(1)
    except ValueError:
        valid = ", ".join(f.value for f in OutputFormat)
        console.print(f"[red]Invalid output format: {output_format} (expected one of: {valid})[/red]", style="bold")
        sys.exit(1)

    for warning in loaded.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    settings = override_settings(loaded.settings, disable_random=no_random, output_format=format_override)

    if show_config:
        show_settings(settings, loaded.config_path)
        console.print()

    register = CashRegister(settings=settings)

    try:
        transactions = parse_transaction_lines(read_input_lines(input_path))
        results = register.process_all(transactions)
        write_output(output_path, render_output(results, settings.output_format))
    except (CashRegisterError, UnicodeDecodeError) as e:
        console.print(f"[red]Error processing file: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    if table:
        show_results_table(results)

    console.print(f"[green]✓[/green] Processing complete. Output written to: {output_path}")
