"""Tests for cashreg.config."""

from pathlib import Path

import pytest
import tomli_w

from cashreg.config import (
    create_default_config,
    get_config_path,
    load_config,
    load_settings,
    override_settings,
    parse_bool,
    parse_int,
    parse_output_format,
)
from cashreg.domain.errors import ConfigError
from cashreg.domain.models import OutputFormat
from cashreg.domain.register import RegisterSettings


def write_config(path: Path, register: dict) -> Path:
    with open(path, "wb") as f:
        tomli_w.dump({"register": register}, f)
    return path


class TestConfigPath:
    """Tests for get_config_path."""

    def test_uses_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should place the config under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "cashreg" / "config.toml"

    def test_falls_back_to_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to ~/.config."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_config_path() == Path.home() / ".config" / "cashreg" / "config.toml"


class TestCreateDefaultConfig:
    """Tests for create_default_config and load_config."""

    def test_writes_defaults(self, tmp_path: Path) -> None:
        """Should write the default register table."""
        config_path = tmp_path / "nested" / "config.toml"

        create_default_config(config_path)

        assert load_config(config_path) == {
            "register": {"enable_random_mode": True, "random_divisor": 3, "output_format": "standard"}
        }

    def test_secure_permissions(self, tmp_path: Path) -> None:
        """Should make the config readable by the owner only."""
        config_path = tmp_path / "config.toml"

        create_default_config(config_path)

        assert config_path.stat().st_mode & 0o777 == 0o600

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Should raise ConfigError for broken TOML."""
        config_path = tmp_path / "config.toml"
        config_path.write_text("[register\nrandom_divisor = ")

        with pytest.raises(ConfigError):
            load_config(config_path)


class TestParsers:
    """Tests for parse_bool, parse_int and parse_output_format."""

    @pytest.mark.parametrize("raw", ["true", "TRUE", "1", "yes"])
    def test_truthy(self, raw: str) -> None:
        """Should accept true, 1 and yes."""
        assert parse_bool("KEY", raw, False) == (True, None)

    @pytest.mark.parametrize("raw", ["false", "0", "No"])
    def test_falsy(self, raw: str) -> None:
        """Should accept false, 0 and no."""
        assert parse_bool("KEY", raw, True) == (False, None)

    def test_invalid_bool_keeps_default(self) -> None:
        """Should warn and keep the default for other values."""
        value, warning = parse_bool("ENABLE_RANDOM_MODE", "maybe", True)

        assert value is True
        assert warning == "Invalid boolean value for ENABLE_RANDOM_MODE: maybe. Using default: true"

    def test_invalid_int_keeps_default(self) -> None:
        """Should warn and keep the default for non-integers."""
        value, warning = parse_int("RANDOM_DIVISOR", "three", 3)

        assert value == 3
        assert warning is not None

    def test_int_from_toml(self) -> None:
        """Should accept integers as they come from TOML."""
        assert parse_int("random_divisor", 7, 3) == (7, None)

    def test_output_format_case_insensitive(self) -> None:
        """Should accept any case."""
        assert parse_output_format("OUTPUT_FORMAT", "Verbose", OutputFormat.STANDARD) == (OutputFormat.VERBOSE, None)

    def test_invalid_output_format(self) -> None:
        """Should warn and keep the default for unknown formats."""
        value, warning = parse_output_format("OUTPUT_FORMAT", "xml", OutputFormat.STANDARD)

        assert value == OutputFormat.STANDARD
        assert warning is not None


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file_or_env(self, tmp_path: Path) -> None:
        """Should use defaults when nothing is configured."""
        loaded = load_settings(config_path=tmp_path / "missing.toml", environ={})

        assert loaded.settings == RegisterSettings()
        assert loaded.warnings == ()
        assert loaded.config_path is None

    def test_reads_config_file(self, tmp_path: Path) -> None:
        """Should apply the [register] table."""
        config_path = write_config(
            tmp_path / "config.toml",
            {"enable_random_mode": False, "random_divisor": 5, "output_format": "json"},
        )

        loaded = load_settings(config_path=config_path, environ={})

        assert loaded.settings == RegisterSettings(
            enable_random_mode=False, random_divisor=5, output_format=OutputFormat.JSON
        )
        assert loaded.config_path == config_path

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        """Should let environment variables win over the config file."""
        config_path = write_config(tmp_path / "config.toml", {"random_divisor": 5, "output_format": "json"})

        loaded = load_settings(
            config_path=config_path,
            environ={"RANDOM_DIVISOR": "7", "ENABLE_RANDOM_MODE": "no"},
        )

        assert loaded.settings.random_divisor == 7
        assert loaded.settings.enable_random_mode is False
        assert loaded.settings.output_format == OutputFormat.JSON

    def test_env_file_below_environment(self, tmp_path: Path) -> None:
        """Should read .env values but let the real environment win."""
        env_file = tmp_path / ".env"
        env_file.write_text("RANDOM_DIVISOR=5\nOUTPUT_FORMAT=verbose\n")

        loaded = load_settings(
            config_path=tmp_path / "missing.toml",
            environ={"RANDOM_DIVISOR": "9"},
            env_file=env_file,
        )

        assert loaded.settings.random_divisor == 9
        assert loaded.settings.output_format == OutputFormat.VERBOSE

    def test_missing_env_file_ignored(self, tmp_path: Path) -> None:
        """Should ignore a .env path that doesn't exist."""
        loaded = load_settings(config_path=tmp_path / "missing.toml", environ={}, env_file=tmp_path / ".env")
        assert loaded.settings == RegisterSettings()

    def test_empty_env_values_ignored(self, tmp_path: Path) -> None:
        """Should treat empty variables as unset."""
        loaded = load_settings(config_path=tmp_path / "missing.toml", environ={"RANDOM_DIVISOR": ""})

        assert loaded.settings.random_divisor == 3
        assert loaded.warnings == ()

    @pytest.mark.parametrize("divisor", ["0", "-3"])
    def test_non_positive_divisor_is_fatal(self, tmp_path: Path, divisor: str) -> None:
        """Should raise ConfigError for a divisor that is not positive."""
        with pytest.raises(ConfigError, match="Must be a positive integer"):
            load_settings(config_path=tmp_path / "missing.toml", environ={"RANDOM_DIVISOR": divisor})

    def test_invalid_values_warn(self, tmp_path: Path) -> None:
        """Should collect a warning for each invalid value."""
        loaded = load_settings(
            config_path=tmp_path / "missing.toml",
            environ={"ENABLE_RANDOM_MODE": "sometimes", "RANDOM_DIVISOR": "x", "OUTPUT_FORMAT": "xml"},
        )

        assert loaded.settings == RegisterSettings()
        assert len(loaded.warnings) == 3

    def test_large_divisor_warns(self, tmp_path: Path) -> None:
        """Should warn that a large divisor rarely triggers random mode."""
        loaded = load_settings(config_path=tmp_path / "missing.toml", environ={"RANDOM_DIVISOR": "150"})

        assert loaded.settings.random_divisor == 150
        assert loaded.warnings == ("Large RANDOM_DIVISOR value (150) may rarely trigger random mode.",)

    def test_register_must_be_table(self, tmp_path: Path) -> None:
        """Should reject a [register] entry that is not a table."""
        config_path = tmp_path / "config.toml"
        config_path.write_text('register = "on"\n')

        with pytest.raises(ConfigError):
            load_settings(config_path=config_path, environ={})


class TestOverrideSettings:
    """Tests for override_settings."""

    def test_no_overrides(self) -> None:
        """Should return equal settings without overrides."""
        assert override_settings(RegisterSettings()) == RegisterSettings()

    def test_disable_random(self) -> None:
        """Should force random mode off."""
        assert override_settings(RegisterSettings(), disable_random=True).enable_random_mode is False

    def test_output_format(self) -> None:
        """Should replace the output format."""
        settings = override_settings(RegisterSettings(random_divisor=4), output_format=OutputFormat.JSON)

        assert settings.output_format == OutputFormat.JSON
        assert settings.random_divisor == 4
