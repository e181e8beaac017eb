"""Physical/virtual interface classification from sysfs.

An interface is physical when ``/sys/class/net/{iface}/device`` exists,
i.e. it is backed by a real device (PCI, USB, SDIO, ...).  Bridges,
veth pairs, tunnels and loopback have no ``device`` entry.
"""

from __future__ import annotations

from pathlib import Path

from .usage import InterfaceCategory

SYSFS_NET_ROOT = "/sys/class/net"


def classify(iface: str, sysfs_root: str = SYSFS_NET_ROOT) -> InterfaceCategory:
    """Return the category of a single interface."""
    if (Path(sysfs_root) / iface / "device").exists():
        return InterfaceCategory.PHYSICAL
    return InterfaceCategory.VIRTUAL


def list_interfaces(
    category: InterfaceCategory | None = None,
    sysfs_root: str = SYSFS_NET_ROOT,
) -> set[str]:
    """List interfaces currently known to the kernel.

    Args:
        category: Only return interfaces of this category.  ``None``
            returns every interface.
        sysfs_root: Base path to the net class directory.

    Returns:
        Set of interface names.  Empty if ``sysfs_root`` does not exist.
    """
    root = Path(sysfs_root)
    interfaces: set[str] = set()

    try:
        entries = list(root.iterdir())
    except OSError:
        return interfaces

    for entry in entries:
        # Skips plain files such as bonding_masters
        if not entry.is_dir():
            continue
        iface = entry.name
        if category is None or classify(iface, sysfs_root) is category:
            interfaces.add(iface)

    return interfaces
