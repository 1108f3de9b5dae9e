"""Tests for the `localci config` command group."""

from pathlib import Path

from click.testing import CliRunner

from localci.cli.cli import cli
from localci.cli.config import load_config
from localci.core.context import LocalciContext


def test_list_shows_defaults() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["config", "list"], obj=LocalciContext.for_test(), catch_exceptions=False
    )

    assert result.exit_code == 0, result.output
    assert "signoff.check_name=signoff" in result.output
    assert "glow.width=80" in result.output


def test_get_prints_value() -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["config", "get", "signoff.check_name"],
        obj=LocalciContext.for_test(),
        catch_exceptions=False,
    )

    assert result.output == "signoff\n"


def test_set_writes_config_file(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["config", "set", "signoff.check_name", "local-ci"],
        obj=LocalciContext.for_test(cwd=tmp_path),
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert load_config(tmp_path / ".localci").check_name == "local-ci"


def test_set_rejects_invalid_value(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["config", "set", "glow.width", "wide"],
        obj=LocalciContext.for_test(cwd=tmp_path),
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "Invalid value for glow.width" in result.output
    assert not (tmp_path / ".localci" / "config.toml").exists()


def test_set_rejects_unknown_key(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["config", "set", "signoff.colour", "red"],
        obj=LocalciContext.for_test(cwd=tmp_path),
    )

    assert result.exit_code == 2


def test_set_rejects_width_below_minimum(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["config", "set", "glow.width", "0"],
        obj=LocalciContext.for_test(cwd=tmp_path),
        catch_exceptions=False,
    )

    assert result.exit_code == 1
    assert "Invalid value for glow.width: '0'" in result.output
    assert "Set glow.width" not in result.output


def test_invalid_config_file_is_reported() -> None:
    runner = CliRunner()

    with runner.isolated_filesystem():
        Path(".localci").mkdir()
        Path(".localci/config.toml").write_text("[glow]\nwidth = 0\n", encoding="utf-8")

        result = runner.invoke(cli, ["glow", "render", "text"], catch_exceptions=False)

    assert result.exit_code == 1
    assert "Error: Invalid .localci/config.toml: glow.width must be at least 20" in result.output
