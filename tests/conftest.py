"""Shared fixtures: fake /sys/class/net and /proc/net/dev."""

from __future__ import annotations

from pathlib import Path

import pytest

NET_DEV_HEADER = (
    "Inter-|   Receive                                                |"
    "  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|"
    "bytes    packets errs drop fifo colls carrier compressed\n"
)


def net_dev_text(counters: dict[str, tuple[int, int]]) -> str:
    """Render a /proc/net/dev table from ``{iface: (rx_bytes, tx_bytes)}``."""
    lines = [NET_DEV_HEADER]
    for iface, (rx, tx) in counters.items():
        lines.append(
            f"{iface:>6}: {rx} 100 0 0 0 0 0 0 {tx} 200 0 0 0 0 0 0\n"
        )
    return "".join(lines)


@pytest.fixture()
def fake_sysfs(tmp_path: Path) -> Path:
    """Create a fake /sys/class/net with two physical and two virtual NICs."""
    root = tmp_path / "sys_class_net"
    for iface in ["eth0", "wlan0"]:
        (root / iface / "device").mkdir(parents=True)
    for iface in ["lo", "docker0"]:
        (root / iface).mkdir(parents=True)
    return root
