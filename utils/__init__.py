"""Utility modules for skillbook."""

from .logger import get_log_file_path, get_logger, setup_logger

# Note: terminal_ui is NOT imported here; it reads config.py, which writes
# ~/.skillbook/config on first import. Import it directly from the CLI:
#   from utils import terminal_ui
# Runtime functions are not exported either:
#   from utils.runtime import get_plugins_dir, ensure_runtime_dirs

__all__ = [
    "setup_logger",
    "get_logger",
    "get_log_file_path",
]
