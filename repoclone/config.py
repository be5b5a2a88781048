"""Configuration for the clone cache location and the git program"""

import configparser
import os
import platform
from typing import Optional, Any

from pathlib import Path

APP_NAME = "repoclone"

# Environment variable overriding the configured cache root
CACHE_DIR_ENV = "REPOCLONE_CACHE_DIR"

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")
xdg_cache_home = os.environ.get("XDG_CACHE_HOME") or os.path.join(_home, ".cache")


default_cfg = {
    "dirs": {"clone_cache": os.path.join(xdg_cache_home, APP_NAME, "repos")},
    "git": {"program": "git"},
}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/repoclone").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file():
    return config_dir / f"{APP_NAME}.cfg"


def init_dirs(path: Path):
    """Create the directory holding the configuration file.

    Fails gracefully if it cannot be created (e.g., read-only filesystem).
    """
    import logging

    logger = logging.getLogger(__name__)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.warning(
            f"Could not create config directory {path}: {e}. "
            "Using in-memory configuration only."
        )


class ConfigAccessor:
    """
    A dict-like accessor for configuration files.

    Missing sections or keys are handled gracefully by returning a default.

    Usage:
        config = ConfigAccessor()
        value = config.get('dirs', 'clone_cache', default='~/.cache/repoclone/repos')
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize a ConfigAccessor with an optional config file path.

        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        if config_path is None:
            self.config_path = get_config_file()
        else:
            self.config_path = config_path

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get a configuration value from the specified section and key.

        Args:
            section: The configuration section
            key: The configuration key
            default: Value to return if the section or key doesn't exist

        Returns:
            The configuration value if it exists, otherwise the default value
        """
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)

        self.config[section][key] = value

    def save(self) -> None:
        """
        Save the current configuration to the config file.

        Creates the config directory first; loading configuration never does.

        Fails gracefully if the file cannot be written (e.g., read-only filesystem).
        """
        import logging

        logger = logging.getLogger(__name__)

        init_dirs(self.config_path.parent)

        try:
            with open(self.config_path, "w") as configfile:
                self.config.write(configfile)
        except (OSError, IOError) as e:
            logger.warning(
                f"Could not save configuration to {self.config_path}: {e}. "
                "Configuration changes will not persist."
            )

    def sections(self) -> list:
        return self.config.sections()

    def options(self, section: str) -> list:
        """
        Get all options (keys) in a section.

        Returns:
            List of options in the section or empty list if section doesn't exist
        """
        try:
            return self.config.options(section)
        except configparser.NoSectionError:
            return []


# Create a global config accessor instance
config = ConfigAccessor()


def get_clone_cache_dir() -> Path:
    """
    Get the root directory of the clone cache.

    Resolution order: the REPOCLONE_CACHE_DIR environment variable, the
    ``[dirs] clone_cache`` config key, then ``$XDG_CACHE_HOME/repoclone/repos``.

    Returns:
        Path to the cache root, created if missing
    """
    cache_dir_str = os.environ.get(CACHE_DIR_ENV) or config.get(
        "dirs", "clone_cache", default_cfg["dirs"]["clone_cache"]
    )
    cache_dir = Path(cache_dir_str).expanduser()

    cache_dir.mkdir(parents=True, exist_ok=True)

    return cache_dir


def get_git_program() -> str:
    """Name or path of the git executable, from ``[git] program``."""
    return config.get("git", "program", default_cfg["git"]["program"])
