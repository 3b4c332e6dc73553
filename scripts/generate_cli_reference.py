#!/usr/bin/env python3
"""Generate the CLI reference markdown from the typer app."""

import inspect
import sys
from pathlib import Path
from typing import Any

# Add parent directory to path to import cashreg
sys.path.insert(0, str(Path(__file__).parent.parent))

from typer.models import ArgumentInfo, OptionInfo

from cashreg.cli import app

DEFAULT_OUTPUT = Path(__file__).parent.parent / "docs" / "cli-commands.md"


def describe_argument(name: str, param: inspect.Parameter) -> str:
    """One bullet for a positional argument."""
    info = param.default
    if isinstance(info, ArgumentInfo):
        text = f"- `{name.upper()}` (default: {info.default})"
        if info.help:
            text += f": {info.help}"
        return text
    return f"- `{name.upper()}` (required)"


def describe_option(name: str, info: OptionInfo) -> str:
    """One bullet for an option, with its flags, help and non-trivial default."""
    flags = info.param_decls or (f"--{name.replace('_', '-')}",)
    text = "- " + ", ".join(f"`{flag}`" for flag in flags)
    if info.help:
        text += f": {info.help}"
    if info.default not in (None, False):
        text += f" (default: {info.default})"
    return text


def command_name(command: Any) -> str:
    return command.name or (command.callback.__name__ if command.callback else "unknown")


def generate_command_doc(command: Any) -> str:
    """Markdown section for one registered command."""
    name = command_name(command)
    doc = (command.callback.__doc__ or "No description available.").strip()

    usage = [f"cashreg {name}"]
    arguments: list[str] = []
    options: list[str] = []
    for param_name, param in inspect.signature(command.callback).parameters.items():
        if isinstance(param.default, OptionInfo):
            options.append(describe_option(param_name, param.default))
        else:
            usage.append(param_name.upper())
            arguments.append(describe_argument(param_name, param))

    lines = [f"### {name}", "", doc, "", "```bash", " ".join(usage), "```", ""]

    if arguments:
        lines += ["**Arguments:**", "", *arguments, ""]
    if options:
        lines += ["**Options:**", "", *options, ""]

    return "\n".join(lines)


def generate_cli_reference() -> str:
    """Markdown reference covering every command."""
    lines = [
        "# cashreg CLI reference",
        "",
        "```bash",
        "cashreg [COMMAND] [OPTIONS]",
        "```",
        "",
        "Every command accepts `--help`.",
        "",
        "## Commands",
        "",
    ]

    for command in sorted(app.registered_commands, key=command_name):
        lines.append(generate_command_doc(command))

    return "\n".join(lines)


def main() -> None:
    """Write the CLI reference (optional first argument: output path)."""
    output_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_OUTPUT
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(generate_cli_reference())
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
