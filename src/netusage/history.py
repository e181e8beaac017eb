"""Daily usage history files.

One line per date, ascending::

    2024-01-01: Transmitted: 1MB , Received: 2MB, Total: 3MB

Values are whole megabytes (bytes // 1048576).  Sub-megabyte remainders
are dropped every time a file is rewritten.  ``Total`` is informational
and ignored on load.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .usage import BYTES_PER_MB, ByteCounterPair, DailyHistory

log = logging.getLogger(__name__)

_TRANSMITTED_RE = re.compile(r"Transmitted:\s*(\d+)\s*MB")
_RECEIVED_RE = re.compile(r"Received:\s*(\d+)\s*MB")


def format_history_line(date: str, usage: ByteCounterPair) -> str:
    """Render one history line (without the trailing newline)."""
    tx_mb = usage.transmitted // BYTES_PER_MB
    rx_mb = usage.received // BYTES_PER_MB
    return (
        f"{date}: Transmitted: {tx_mb}MB , "
        f"Received: {rx_mb}MB, "
        f"Total: {tx_mb + rx_mb}MB"
    )


def parse_history_line(line: str) -> tuple[str, ByteCounterPair] | None:
    """Parse one history line.

    Returns:
        ``(date, usage)`` with usage expanded back to bytes, or ``None``
        if the line is malformed.
    """
    date, sep, rest = line.partition(":")
    if not sep or not date:
        return None

    tx_match = _TRANSMITTED_RE.search(rest)
    rx_match = _RECEIVED_RE.search(rest)
    if tx_match is None or rx_match is None:
        return None

    return date, ByteCounterPair(
        received=int(rx_match.group(1)) * BYTES_PER_MB,
        transmitted=int(tx_match.group(1)) * BYTES_PER_MB,
    )


def save_history(path: Path, history: DailyHistory) -> bool:
    """Rewrite ``path`` with the full history.

    Returns:
        True if the file was written.  Write failures are logged and
        reported as False; the caller keeps its in-memory history and
        the next save writes the larger totals.
    """
    lines = [format_history_line(date, history[date]) for date in sorted(history)]
    try:
        with open(path, "w") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        log.warning("Failed to save usage history to %s: %s", path, e)
        return False
    return True


def load_history(path: Path) -> DailyHistory:
    """Load a history file written by :func:`save_history`.

    A missing file means no prior history.  Malformed lines are skipped
    one at a time; the rest of the file still loads.
    """
    history: DailyHistory = {}
    path = Path(path)
    if not path.exists():
        return history

    try:
        raw = path.read_bytes()
    except OSError as e:
        log.warning("Cannot read usage history %s: %s", path, e)
        return history

    for lineno, raw_line in enumerate(raw.splitlines(), start=1):
        # Decoded per line so one damaged line does not lose the file
        try:
            line = raw_line.decode()
        except UnicodeDecodeError:
            log.debug("%s:%d: skipping undecodable line", path, lineno)
            continue
        parsed = parse_history_line(line)
        if parsed is None:
            if line.strip():
                log.debug("%s:%d: skipping malformed line %r", path, lineno, line)
            continue
        date, usage = parsed
        history[date] = usage

    return history
