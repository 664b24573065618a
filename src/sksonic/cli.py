"""
sksonic CLI - entry point.
"""

import argparse
import sys
from pathlib import Path

from sksonic import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sksonic",
        description="sksonic - terminal client for Subsonic-compatible servers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.toml (default: ./config.toml, then ~/.config/sksonic)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Override [logging] level",
    )
    parser.add_argument(
        "--ping",
        action="store_true",
        help="Check the server connection and exit",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the effective configuration and exit",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main() -> None:
    """Main entry point for the sksonic command."""
    args = build_parser().parse_args()

    from sksonic.main import run

    sys.exit(
        run(
            config_path=args.config,
            log_level=args.log_level,
            ping=args.ping,
            show_config=args.print_config,
        )
    )


if __name__ == "__main__":
    main()
