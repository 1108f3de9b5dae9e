import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomlkit

from localci.core.markdown import DEFAULT_WIDTH, MIN_WIDTH
from localci.core.services.signoff_service import DEFAULT_CHECK_NAME
from localci_shared.gateway.sandbox.real import DEFAULT_TOOLS_IMAGE

CONFIG_DIR_NAME = ".localci"
CONFIG_FILE_NAME = "config.toml"

# Settable keys: dotted name -> (table, key, type)
CONFIG_KEYS: dict[str, tuple[str, str, type]] = {
    "signoff.check_name": ("signoff", "check_name", str),
    "signoff.image": ("signoff", "image", str),
    "glow.width": ("glow", "width", int),
}


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of `.localci/config.toml` merged with defaults.

    Example config.toml:
      [signoff]
      # Status context posted on sign-off and required by branch protection
      check_name = "signoff"
      # Image providing git and gh
      image = "localci-signoff:latest"

      [glow]
      width = 80
    """

    check_name: str
    image: str
    markdown_width: int

    @staticmethod
    def defaults() -> "LoadedConfig":
        return LoadedConfig(
            check_name=DEFAULT_CHECK_NAME,
            image=DEFAULT_TOOLS_IMAGE,
            markdown_width=DEFAULT_WIDTH,
        )


def _check_width(width: int) -> int:
    if width < MIN_WIDTH:
        raise ValueError(f"glow.width must be at least {MIN_WIDTH}, got {width}")
    return width


def config_path(cwd: Path) -> Path:
    return cwd / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(config_dir: Path) -> LoadedConfig:
    """Load config.toml from the given directory if present; otherwise return defaults.

    Missing keys fall back to the built-in defaults individually.

    Raises:
        ValueError: If the file is not valid TOML or glow.width is below MIN_WIDTH
    """
    defaults = LoadedConfig.defaults()
    cfg_path = config_dir / CONFIG_FILE_NAME
    if not cfg_path.exists():
        return defaults

    data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    signoff = data.get("signoff", {})
    glow = data.get("glow", {})

    check_name = str(signoff.get("check_name", defaults.check_name))
    image = str(signoff.get("image", defaults.image))
    width = _check_width(int(glow.get("width", defaults.markdown_width)))
    return LoadedConfig(check_name=check_name, image=image, markdown_width=width)


def set_config_value(config_dir: Path, key: str, value: str) -> None:
    """Set a single key in config.toml, preserving existing formatting and comments.

    Args:
        config_dir: Directory holding config.toml (created if missing)
        key: Dotted key, one of CONFIG_KEYS
        value: Raw value from the command line

    Raises:
        KeyError: If the key is not a known setting
        ValueError: If the value does not convert to the setting's type, or
            glow.width is below MIN_WIDTH
    """
    table_name, field, value_type = CONFIG_KEYS[key]
    converted = value_type(value)
    if key == "glow.width":
        _check_width(converted)

    cfg_path = config_dir / CONFIG_FILE_NAME
    if cfg_path.exists():
        doc = tomlkit.parse(cfg_path.read_text(encoding="utf-8"))
    else:
        doc = tomlkit.document()

    if table_name not in doc:
        doc[table_name] = tomlkit.table()
    doc[table_name][field] = converted  # type: ignore[index]

    config_dir.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
