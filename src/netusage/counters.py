"""Cumulative per-interface byte counters from /proc/net/dev.

Format (two header lines, then one line per interface)::

    Inter-|   Receive                            ...|  Transmit
     face |bytes    packets errs drop fifo frame compressed multicast|bytes ...
        lo: 1234567   8901    0    0    0     0          0         0  1234567 ...

Received bytes is the first field after the name, transmitted bytes the
ninth.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .usage import ByteCounterPair

log = logging.getLogger(__name__)

NET_DEV_PATH = "/proc/net/dev"

# Field offsets after the interface name
_RX_BYTES_FIELD = 0
_TX_BYTES_FIELD = 8

_HEADER_LINES = 2


def parse_net_dev_line(line: str) -> tuple[str, ByteCounterPair] | None:
    """Parse one interface record from /proc/net/dev.

    Returns:
        ``(iface, counters)``, or ``None`` if the line is not a valid
        record.
    """
    name, sep, rest = line.partition(":")
    name = name.strip()
    if not sep or not name:
        return None

    fields = rest.split()
    try:
        rx = int(fields[_RX_BYTES_FIELD])
        tx = int(fields[_TX_BYTES_FIELD])
    except (IndexError, ValueError):
        return None
    if rx < 0 or tx < 0:
        return None

    return name, ByteCounterPair(received=rx, transmitted=tx)


def read_counters(path: str = NET_DEV_PATH) -> dict[str, ByteCounterPair]:
    """Read a snapshot of every interface's cumulative byte counters.

    The whole table is read at once.  Unparseable records are skipped,
    and a missing or unreadable table gives an empty snapshot.
    """
    try:
        # Interface names are arbitrary bytes; keep them round-trippable
        text = Path(path).read_bytes().decode(errors="surrogateescape")
    except OSError as e:
        log.warning("Cannot read %s: %s", path, e)
        return {}

    snapshot: dict[str, ByteCounterPair] = {}
    for line in text.splitlines()[_HEADER_LINES:]:
        parsed = parse_net_dev_line(line)
        if parsed is None:
            if line.strip():
                log.debug("Skipping unparseable %s record: %r", path, line)
            continue
        iface, counters = parsed
        snapshot[iface] = counters
    return snapshot


class CounterSource:
    """Snapshot reader bound to a /proc/net/dev path."""

    def __init__(self, path: str = NET_DEV_PATH) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def read(self) -> dict[str, ByteCounterPair]:
        """Return the current counters for every interface."""
        return read_counters(self._path)
