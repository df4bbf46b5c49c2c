"""
Central configuration for aps executable locations.

Resolution order (later sources win):
    1. Built-in defaults (/usr/bin/apt, /usr/bin/apt-mark, sudo)
    2. System file:  /etc/aps/config.yaml
    3. User file:    $XDG_CONFIG_HOME/aps/config.yaml (~/.config/aps/config.yaml)
    4. Environment:  APS_APT, APS_APT_MARK, APS_ELEVATE

If APS_CONFIG is set, it names the only config file read (steps 2 and 3
are skipped).

config.yaml format (every key optional):
    apt: /usr/bin/apt
    apt_mark: /usr/bin/apt-mark
    elevate: sudo            # or a list: [doas], or "" to disable
"""

import logging
import os
import shlex
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

# Default executable locations
DEFAULT_APT = "/usr/bin/apt"
DEFAULT_APT_MARK = "/usr/bin/apt-mark"
DEFAULT_ELEVATE = ("sudo",)

# Config file locations
SYSTEM_CONFIG_FILE = Path("/etc/aps/config.yaml")
USER_CONFIG_NAME = Path("aps") / "config.yaml"

# Environment overrides
ENV_CONFIG = "APS_CONFIG"
ENV_OVERRIDES = {
    'APS_APT': 'apt',
    'APS_APT_MARK': 'apt_mark',
    'APS_ELEVATE': 'elevate',
}

KNOWN_KEYS = ('apt', 'apt_mark', 'elevate')


class ConfigError(Exception):
    """Raised when a configuration source is unusable."""
    pass


@dataclass(frozen=True)
class Config:
    """Executable locations used by the dispatcher.

    Built once at startup and passed to the dispatcher and runner,
    so tests can substitute fake executables.
    """
    apt: str = DEFAULT_APT
    apt_mark: str = DEFAULT_APT_MARK
    elevate: Tuple[str, ...] = DEFAULT_ELEVATE

    def executable(self, name: str) -> str:
        """Return the path configured for 'apt' or 'apt_mark'."""
        if name not in ('apt', 'apt_mark'):
            raise KeyError(name)
        return getattr(self, name)


def _parse_elevate(value, source: str) -> Tuple[str, ...]:
    """Normalize an elevate setting to an argv prefix.

    Strings are split with shell quoting rules; None or "" disables elevation.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        try:
            return tuple(os.path.expanduser(part) for part in shlex.split(value))
        except ValueError as e:
            raise ConfigError(f"{source}: invalid 'elevate' value {value!r}: {e}")
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return tuple(os.path.expanduser(v) for v in value)
    raise ConfigError(f"{source}: 'elevate' must be a string or a list of strings")


def _parse_path(key: str, value, source: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{source}: '{key}' must be a non-empty string")
    return os.path.expanduser(value.strip())


def apply_settings(config: Config, settings: Mapping, source: str) -> Config:
    """Return a copy of config with settings applied.

    Args:
        config: Config to start from
        settings: Mapping with any of 'apt', 'apt_mark', 'elevate'
        source: Name of the source, for error messages

    Raises:
        ConfigError: On unknown keys or badly typed values
    """
    unknown = sorted(str(k) for k in settings if k not in KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source}: unknown setting(s): {', '.join(unknown)}")

    changes = {}
    for key, value in settings.items():
        if key == 'elevate':
            changes[key] = _parse_elevate(value, source)
        else:
            changes[key] = _parse_path(key, value, source)
    return replace(config, **changes)


def read_config_file(path: Path) -> dict:
    """Read a YAML config file.

    Returns:
        Dict of settings, empty if the file does not exist or is empty

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping
    """
    import yaml

    if not path.exists():
        return {}

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}")
    except OSError as e:
        raise ConfigError(f"{path}: cannot read: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
    return data


def get_config_files(environ: Mapping = None) -> list:
    """Get the config files to read, lowest priority first."""
    if environ is None:
        environ = os.environ

    explicit = environ.get(ENV_CONFIG)
    if explicit:
        return [Path(explicit).expanduser()]

    xdg = environ.get('XDG_CONFIG_HOME')
    if xdg:
        user_dir = Path(xdg)
    else:
        user_dir = Path(environ.get('HOME') or Path.home()) / ".config"
    return [SYSTEM_CONFIG_FILE, user_dir / USER_CONFIG_NAME]


def load_config(files: Optional[Iterable[Path]] = None,
                environ: Mapping = None) -> Config:
    """Build the configuration from defaults, files and environment.

    Args:
        files: Config files to read in order (default: get_config_files())
        environ: Environment mapping (default: os.environ)

    Raises:
        ConfigError: If any source is invalid
    """
    if environ is None:
        environ = os.environ
    if files is None:
        files = get_config_files(environ)

    config = Config()
    for path in files:
        settings = read_config_file(Path(path))
        if settings:
            logger.debug(f"Loaded settings from {path}: {sorted(settings)}")
            config = apply_settings(config, settings, str(path))

    env_settings = {key: environ[var] for var, key in ENV_OVERRIDES.items() if var in environ}
    if env_settings:
        config = apply_settings(config, env_settings, "environment")

    logger.debug(f"Using apt={config.apt} apt_mark={config.apt_mark} "
                 f"elevate={' '.join(config.elevate) or '(none)'}")
    return config
