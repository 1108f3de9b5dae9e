import click

from localci.cli.config import CONFIG_KEYS, LoadedConfig, set_config_value
from localci.cli.ensure import UserFacingCliError
from localci.core.context import LocalciContext
from localci_shared.output.output import machine_output, user_output


def _effective_values(cfg: LoadedConfig) -> dict[str, object]:
    return {
        "signoff.check_name": cfg.check_name,
        "signoff.image": cfg.image,
        "glow.width": cfg.markdown_width,
    }


@click.group("config")
def config_group() -> None:
    """Manage localci configuration (.localci/config.toml)."""


@config_group.command("list")
@click.pass_obj
def config_list(ctx: LocalciContext) -> None:
    """Print configuration keys with their effective values."""
    user_output(click.style("Configuration:", bold=True))
    for key, value in _effective_values(ctx.config).items():
        user_output(f"  {key}={value}")


@config_group.command("get")
@click.argument("key", metavar="KEY", type=click.Choice(sorted(CONFIG_KEYS)))
@click.pass_obj
def config_get(ctx: LocalciContext, key: str) -> None:
    """Print the effective value of a configuration key."""
    machine_output(_effective_values(ctx.config)[key])


@config_group.command("set")
@click.argument("key", metavar="KEY", type=click.Choice(sorted(CONFIG_KEYS)))
@click.argument("value", metavar="VALUE")
@click.pass_obj
def config_set(ctx: LocalciContext, key: str, value: str) -> None:
    """Set a configuration key in .localci/config.toml."""
    try:
        set_config_value(ctx.config_dir, key, value)
    except ValueError as e:
        raise UserFacingCliError(f"Invalid value for {key}: {value!r}") from e
    user_output(click.style("✓", fg="green") + f" Set {key}={value}")
