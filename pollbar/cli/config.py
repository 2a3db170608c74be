"""
CLI Configuration Module

Handles command-line argument parsing and environment configuration for the
demo runner.
"""

import os
import argparse
import logging
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.1
DEFAULT_DEMO_SECONDS = 8.0


def _positive_float(env_name: str, raw: str, default: float) -> float:
    """Convert an environment value to a positive float, warning on bad input."""
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid {env_name} value '{raw}', using default {default}")
        return default
    if value <= 0:
        logger.warning(f"{env_name} must be positive, got {value}. Using default {default}.")
        return default
    return value


def parse_arguments(argv=None):
    """
    Parse command-line arguments and load environment configuration.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        argparse.Namespace: Parsed arguments with additional attributes:
            - log_file: Optional[Path]
            - console_log_level: int
    """
    # Load environment variables from .env file (if present)
    load_dotenv()

    env_interval = os.getenv('POLLBAR_INTERVAL', str(DEFAULT_INTERVAL))
    env_terminal = os.getenv('POLLBAR_TERMINAL', 'auto')
    env_demo_seconds = os.getenv('POLLBAR_DEMO_SECONDS', str(DEFAULT_DEMO_SECONDS))
    env_log_file = os.getenv('LOG_FILE')

    default_interval = _positive_float('POLLBAR_INTERVAL', env_interval, DEFAULT_INTERVAL)
    default_demo_seconds = _positive_float(
        'POLLBAR_DEMO_SECONDS', env_demo_seconds, DEFAULT_DEMO_SECONDS
    )

    if env_terminal not in ['auto', 'on', 'off']:
        logger.warning(f"Invalid POLLBAR_TERMINAL value '{env_terminal}', using default 'auto'")
        env_terminal = 'auto'

    parser = argparse.ArgumentParser(
        description='Render concurrently updating progress bars in place'
    )
    parser.add_argument(
        '--interval',
        type=float,
        default=default_interval,
        help=f'Seconds between redraws (default: {default_interval})'
    )
    parser.add_argument(
        '--terminal',
        type=str,
        choices=['auto', 'on', 'off'],
        default=env_terminal,
        help='In-place updates: auto (detect terminal), on (always ANSI), off (plain lines)'
    )
    parser.add_argument(
        '--seconds',
        type=float,
        default=default_demo_seconds,
        help=f'Cancel the demo after this many seconds (default: {default_demo_seconds})'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=Path(env_log_file) if env_log_file and env_log_file.strip() else None,
        help='Write full DEBUG logs to this file'
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--verbose',
        action='store_true',
        help='Show INFO messages on the console'
    )
    verbosity.add_argument(
        '--debug',
        action='store_true',
        help='Show DEBUG messages on the console'
    )

    args = parser.parse_args(argv)

    if args.interval <= 0:
        parser.error(f"--interval must be positive, got {args.interval}")
    if args.seconds <= 0:
        parser.error(f"--seconds must be positive, got {args.seconds}")

    if args.debug:
        args.console_log_level = logging.DEBUG
    elif args.verbose:
        args.console_log_level = logging.INFO
    else:
        args.console_log_level = logging.WARNING

    return args
