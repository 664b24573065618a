"""
sksonic - startup, the interactive session and shutdown.
"""

import dataclasses
from pathlib import Path
from typing import Optional

from loguru import logger

from sksonic.core import config
from sksonic.core.console import get_console, safe_print
from sksonic.core.output import setup_loguru
from sksonic.domain.catalog import CatalogError, SubsonicClient

from .context import AppContext


def configure_logging(cfg: config.Config, level: Optional[str] = None) -> Path:
    """Initialize the loguru file sink from config (level may be overridden)."""
    log_file = config.get_log_file_path(cfg)
    setup_loguru(
        log_file,
        level=(level or cfg.logging.level).upper(),
        max_file_size_mb=cfg.logging.max_file_size_mb,
        backup_count=cfg.logging.backup_count,
    )
    return log_file


def print_config(cfg: config.Config, config_path: Path) -> int:
    """Show the effective configuration with the password masked."""
    data = dataclasses.asdict(cfg)
    if data["server"]["password"]:
        data["server"]["password"] = "********"

    console = get_console()
    console.print(f"Configuration file: {config_path}", markup=False, highlight=False)
    console.print_json(data=data)
    return 0


def ping_server(cfg: config.Config) -> int:
    """Check that the server answers and accepts the credentials."""
    client = SubsonicClient(cfg.server)
    client.ping()
    safe_print(f"Server {client.base_url} is reachable", style="green")
    return 0


def interactive_mode(cfg: config.Config) -> int:
    """Load the artist list, run the UI and stop the player on the way out."""
    from sksonic.ui.blessed import run_interface

    ctx = AppContext.create(cfg, console=get_console())
    try:
        safe_print(f"Connecting to {ctx.client.base_url} ...", style="cyan")
        ctx.catalog.load_artists()
        ctx.dispatcher.initialize()
        run_interface(ctx)
    finally:
        ctx.player.shutdown()

    logger.info("Goodbye")
    return 0


def run(
    config_path: Optional[Path] = None,
    log_level: Optional[str] = None,
    ping: bool = False,
    show_config: bool = False,
) -> int:
    """
    Run sksonic.

    Catalog and configuration errors are fatal: the message is logged,
    printed to stderr and the exit status is 1.

    Returns:
        Process exit status
    """
    try:
        cfg = config.load_config(config_path)
    except config.ConfigError as e:
        safe_print(f"Configuration error: {e}", style="red", stderr=True)
        return 1

    configure_logging(cfg, log_level)

    try:
        if show_config:
            return print_config(cfg, config_path or config.get_config_path())
        if ping:
            return ping_server(cfg)
        return interactive_mode(cfg)
    except config.ConfigError as e:
        logger.error(f"Configuration error: {e}")
        safe_print(f"Configuration error: {e}", style="red", stderr=True)
        return 1
    except CatalogError as e:
        logger.error(f"Catalog error: {e}")
        safe_print(f"Error talking to the server: {e}", style="red", stderr=True)
        return 1
