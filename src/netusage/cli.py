"""Command-line interface for the usage monitor."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .classifier import SYSFS_NET_ROOT
from .config import MonitorConfig
from .counters import NET_DEV_PATH


def _positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {text}")
    return value


def parse_args(argv: list[str] | None = None) -> tuple[MonitorConfig, bool]:
    """Parse command-line arguments.

    Returns:
        The monitor configuration and whether verbose logging was
        requested.
    """
    parser = argparse.ArgumentParser(
        prog="netusage",
        description="Record daily per-interface network usage",
    )
    parser.add_argument(
        "-o",
        "--root-dir",
        type=Path,
        default=Path.home() / "NetworkUsage",
        help="Directory for usage history files (default: ~/NetworkUsage)",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=_positive_float,
        default=3.0,
        help="Polling interval in seconds (default: 3.0)",
    )
    parser.add_argument(
        "-d",
        "--duration",
        type=int,
        default=0,
        help="Run duration in seconds, 0 for unlimited (default: 0)",
    )
    parser.add_argument(
        "--sysfs-root",
        default=SYSFS_NET_ROOT,
        help=f"Net class directory for classification (default: {SYSFS_NET_ROOT})",
    )
    parser.add_argument(
        "--net-dev",
        default=NET_DEV_PATH,
        help=f"Kernel counter table (default: {NET_DEV_PATH})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    config = MonitorConfig(
        root_dir=args.root_dir,
        interval=args.interval,
        duration=args.duration,
        sysfs_root=args.sysfs_root,
        net_dev_path=args.net_dev,
    )
    return config, args.verbose


def main(argv: list[str] | None = None) -> None:
    """Entry point for the netusage CLI."""
    config, verbose = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from .monitor import run_monitor

    try:
        run_monitor(config)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)
