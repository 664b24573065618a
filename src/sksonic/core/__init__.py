"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging and user-facing output (Loguru)
- Console management (Rich)
"""

# Configuration
from .config import (
    Config,
    ConfigError,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
)

# Output
from .output import setup_loguru, set_ui_mode, drain_status_messages, log

# Console
from .console import get_console, safe_print

__all__ = [
    # Config
    "Config",
    "ConfigError",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    # Output
    "setup_loguru",
    "set_ui_mode",
    "drain_status_messages",
    "log",
    # Console
    "get_console",
    "safe_print",
]
