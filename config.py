"""Configuration management for skillbook."""

import os

# Define path constants directly to avoid circular imports with utils
# (utils.terminal_ui imports Config, and utils.runtime is in the utils package)
_RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".skillbook")
_CONFIG_FILE = os.path.join(_RUNTIME_DIR, "config")

# Default configuration template
_DEFAULT_CONFIG = """\
# skillbook Configuration

# Root directory holding one subdirectory per collection (plugin)
PLUGINS_DIR=~/.skillbook/plugins

# Treat malformed documents as errors instead of skipping them
STRICT_LOAD=false

# Optional settings
LOG_LEVEL=DEBUG
TUI_THEME=dark
"""


def _load_config(path: str) -> dict[str, str]:
    """Parse a KEY=VALUE config file, skipping comments and blank lines."""
    cfg: dict[str, str] = {}
    if not os.path.isfile(path):
        return cfg
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            # Strip inline comments (# ...) from the value
            if "#" in value:
                value = value[: value.index("#")]
            cfg[key.strip()] = value.strip()
    return cfg


def _ensure_config():
    """Ensure ~/.skillbook/config exists, create with defaults if not."""
    if not os.path.exists(_CONFIG_FILE):
        os.makedirs(_RUNTIME_DIR, exist_ok=True)
        with open(_CONFIG_FILE, "w", encoding="utf-8") as f:
            f.write(_DEFAULT_CONFIG)


# Ensure config exists and load it
_ensure_config()
_cfg = _load_config(_CONFIG_FILE)


class Config:
    """Configuration for skillbook.

    All configuration is centralized here. Access config values directly via Config.XXX.
    The SKILLBOOK_PLUGINS_DIR environment variable overrides PLUGINS_DIR.
    """

    # Catalog Configuration
    PLUGINS_DIR = os.path.expanduser(
        os.environ.get("SKILLBOOK_PLUGINS_DIR")
        or _cfg.get("PLUGINS_DIR")
        or os.path.join(_RUNTIME_DIR, "plugins")
    )
    STRICT_LOAD = _cfg.get("STRICT_LOAD", "false").lower() == "true"

    # Logging Configuration
    # Note: Logging is controlled via --verbose flag; files go to ~/.skillbook/logs/
    LOG_LEVEL = _cfg.get("LOG_LEVEL", "DEBUG").upper()

    # TUI Configuration
    TUI_THEME = _cfg.get("TUI_THEME", "dark")  # "dark" or "light"

    @classmethod
    def validate(cls):
        """Validate configuration.

        Raises:
            ValueError: If a configuration value is unusable
        """
        if not cls.PLUGINS_DIR:
            raise ValueError(
                "PLUGINS_DIR not set. Please set it in ~/.skillbook/config.\n"
                "Example: PLUGINS_DIR=~/.skillbook/plugins"
            )
        if cls.TUI_THEME not in ("dark", "light"):
            raise ValueError(f"TUI_THEME must be 'dark' or 'light', got '{cls.TUI_THEME}'.")
        if cls.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL '{cls.LOG_LEVEL}'.")
