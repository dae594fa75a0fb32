"""Runtime directory management for skillbook.

All runtime data is stored under ~/.skillbook/ directory:
- config: Configuration file (created by config.py on first import)
- plugins/: Default root of installed collections
- logs/: Log files (only created with --verbose)
"""

import os

RUNTIME_DIR = os.path.join(os.path.expanduser("~"), ".skillbook")


def get_plugins_dir() -> str:
    """Get the default plugins root.

    Returns:
        Path to ~/.skillbook/plugins/
    """
    return os.path.join(RUNTIME_DIR, "plugins")


def get_log_dir() -> str:
    """Get the log directory path.

    Returns:
        Path to ~/.skillbook/logs/
    """
    return os.path.join(RUNTIME_DIR, "logs")


def ensure_runtime_dirs(create_logs: bool = False) -> None:
    """Ensure runtime directories exist.

    Creates:
    - ~/.skillbook/plugins/
    - ~/.skillbook/logs/ (only if create_logs=True)

    Args:
        create_logs: Whether to create the logs directory (for --verbose mode)
    """
    os.makedirs(get_plugins_dir(), exist_ok=True)

    if create_logs:
        os.makedirs(get_log_dir(), exist_ok=True)
