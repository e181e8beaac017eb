"""Configuration for the usage monitor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .classifier import SYSFS_NET_ROOT
from .counters import NET_DEV_PATH
from .usage import InterfaceCategory


@dataclass
class MonitorConfig:
    """Runtime configuration for the usage monitor."""

    # Root directory for the per-category history folders
    root_dir: Path = field(default_factory=lambda: Path.home() / "NetworkUsage")

    # Polling interval in seconds
    interval: float = 3.0

    # Maximum run duration in seconds (0 = unlimited)
    duration: int = 0

    # Net class directory used to classify interfaces
    sysfs_root: str = SYSFS_NET_ROOT

    # Kernel counter table
    net_dev_path: str = NET_DEV_PATH

    def __post_init__(self) -> None:
        self.root_dir = Path(self.root_dir)

    def category_dir(self, category: InterfaceCategory) -> Path:
        """Folder holding history files for ``category``."""
        return self.root_dir / category.folder_name

    @property
    def physical_dir(self) -> Path:
        return self.category_dir(InterfaceCategory.PHYSICAL)

    @property
    def virtual_dir(self) -> Path:
        return self.category_dir(InterfaceCategory.VIRTUAL)
