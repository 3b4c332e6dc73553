"""Configuration file and environment management for cashreg.

Settings are resolved once per run, lowest precedence first:
1. Built-in defaults
2. [register] table of the TOML config file
3. .env file
4. Process environment (ENABLE_RANDOM_MODE, RANDOM_DIVISOR, OUTPUT_FORMAT)
5. CLI flags (applied with override_settings)
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import tomli_w
from dotenv import dotenv_values

from cashreg.domain.errors import ConfigError
from cashreg.domain.models import OutputFormat
from cashreg.domain.register import RegisterSettings

ENV_RANDOM_MODE = "ENABLE_RANDOM_MODE"
ENV_RANDOM_DIVISOR = "RANDOM_DIVISOR"
ENV_OUTPUT_FORMAT = "OUTPUT_FORMAT"

LARGE_DIVISOR_THRESHOLD = 100

TRUE_VALUES = {"true", "1", "yes"}
FALSE_VALUES = {"false", "0", "no"}


@dataclass(frozen=True)
class LoadedConfig:
    """Resolved settings plus any warnings raised while resolving them."""

    settings: RegisterSettings
    warnings: tuple[str, ...] = ()
    config_path: Path | None = None


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "cashreg" / "config.toml"


def default_config() -> dict[str, Any]:
    """Config file contents matching the built-in defaults."""
    defaults = RegisterSettings()
    return {
        "register": {
            "enable_random_mode": defaults.enable_random_mode,
            "random_divisor": defaults.random_divisor,
            "output_format": defaults.output_format.value,
        },
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def parse_bool(key: str, value: Any, default: bool) -> tuple[bool, str | None]:
    """Parse a boolean setting.

    Args:
        key: Setting name used in the warning.
        value: Raw value (bool from TOML, string from the environment).
        default: Value to keep when the raw value is invalid.

    Returns:
        Tuple of (value, warning or None).
    """
    if isinstance(value, bool):
        return value, None

    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True, None
    if text in FALSE_VALUES:
        return False, None

    return default, f"Invalid boolean value for {key}: {value}. Using default: {str(default).lower()}"


def parse_int(key: str, value: Any, default: int) -> tuple[int, str | None]:
    """Parse an integer setting.

    Returns:
        Tuple of (value, warning or None).
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value, None

    try:
        return int(str(value).strip()), None
    except ValueError:
        return default, f"Invalid number value for {key}: {value}. Using default: {default}"


def parse_output_format(key: str, value: Any, default: OutputFormat) -> tuple[OutputFormat, str | None]:
    """Parse an output format setting (case-insensitive).

    Returns:
        Tuple of (format, warning or None).
    """
    try:
        return OutputFormat(str(value).strip().lower()), None
    except ValueError:
        return default, f"Invalid output format for {key}: {value}. Using default: {default.value}"


def validate_settings(settings: RegisterSettings) -> list[str]:
    """Validate resolved settings.

    Args:
        settings: Settings to check.

    Returns:
        Warnings for valid but suspicious values.

    Raises:
        ConfigError: If the divisor is not a positive integer.
    """
    if settings.random_divisor <= 0:
        raise ConfigError(f"Invalid {ENV_RANDOM_DIVISOR}: {settings.random_divisor}. Must be a positive integer.")

    if settings.random_divisor > LARGE_DIVISOR_THRESHOLD:
        return [f"Large {ENV_RANDOM_DIVISOR} value ({settings.random_divisor}) may rarely trigger random mode."]

    return []


def apply_values(
    settings: RegisterSettings,
    values: Mapping[str, Any],
    keys: tuple[str, str, str],
) -> tuple[RegisterSettings, list[str]]:
    """Layer raw values over settings.

    Args:
        settings: Current settings.
        values: Raw values from a config table or environment.
        keys: Names of the (random mode, divisor, output format) entries.

    Returns:
        Tuple of (new settings, warnings).
    """
    random_key, divisor_key, format_key = keys
    warnings: list[str] = []
    enable_random_mode = settings.enable_random_mode
    random_divisor = settings.random_divisor
    output_format = settings.output_format

    if values.get(random_key) not in (None, ""):
        enable_random_mode, warning = parse_bool(random_key, values[random_key], enable_random_mode)
        if warning:
            warnings.append(warning)

    if values.get(divisor_key) not in (None, ""):
        random_divisor, warning = parse_int(divisor_key, values[divisor_key], random_divisor)
        if warning:
            warnings.append(warning)

    if values.get(format_key) not in (None, ""):
        output_format, warning = parse_output_format(format_key, values[format_key], output_format)
        if warning:
            warnings.append(warning)

    new_settings = RegisterSettings(
        enable_random_mode=enable_random_mode,
        random_divisor=random_divisor,
        output_format=output_format,
    )
    return new_settings, warnings


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    env_file: Path | None = None,
) -> LoadedConfig:
    """Resolve register settings from file, .env and environment.

    A missing config file is not an error; defaults apply.

    Args:
        config_path: Path to config file. If None, uses default location.
        environ: Environment mapping. If None, uses os.environ.
        env_file: Optional .env file; process environment takes precedence.

    Returns:
        LoadedConfig with settings and warnings.

    Raises:
        ConfigError: If the config file is invalid TOML or the divisor is
            not a positive integer.
    """
    if config_path is None:
        config_path = get_config_path()
    if environ is None:
        environ = os.environ

    settings = RegisterSettings()
    warnings: list[str] = []
    used_path: Path | None = None

    if config_path.exists():
        register_table = load_config(config_path).get("register", {})
        if not isinstance(register_table, dict):
            raise ConfigError(f"Invalid config file {config_path}: [register] must be a table")
        settings, file_warnings = apply_values(
            settings, register_table, ("enable_random_mode", "random_divisor", "output_format")
        )
        warnings.extend(file_warnings)
        used_path = config_path

    env: dict[str, Any] = {}
    if env_file is not None and env_file.exists():
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(environ)

    settings, env_warnings = apply_values(settings, env, (ENV_RANDOM_MODE, ENV_RANDOM_DIVISOR, ENV_OUTPUT_FORMAT))
    warnings.extend(env_warnings)

    warnings.extend(validate_settings(settings))

    return LoadedConfig(settings=settings, warnings=tuple(warnings), config_path=used_path)


def override_settings(
    settings: RegisterSettings,
    disable_random: bool = False,
    output_format: OutputFormat | None = None,
) -> RegisterSettings:
    """Apply CLI flag overrides to resolved settings.

    Args:
        settings: Resolved settings.
        disable_random: Force random mode off.
        output_format: Output format to use instead of the configured one.

    Returns:
        New settings with overrides applied.
    """
    if disable_random:
        settings = replace(settings, enable_random_mode=False)
    if output_format is not None:
        settings = replace(settings, output_format=output_format)
    return settings
