"""Polling loop: counters in, daily history files out.

Startup classifies interfaces once and reloads every history file so a
restart continues the day's totals.  Each cycle reads the counter table,
rewrites the file of every interface whose usage changed, and then
rewrites the category totals that changed.  SIGTERM/SIGINT stop the loop
at the next cycle boundary.
"""

from __future__ import annotations

import datetime
import logging
import signal
import sys
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from .classifier import list_interfaces
from .counters import CounterSource
from .delta import DeltaEngine
from .history import load_history, save_history
from .usage import (
    BYTES_PER_MB,
    AggregateState,
    ByteCounterPair,
    DailyHistory,
    InterfaceCategory,
)

if TYPE_CHECKING:
    from .config import MonitorConfig

log = logging.getLogger(__name__)


def local_date() -> str:
    """Today's date in local time as YYYY-MM-DD."""
    return datetime.date.today().isoformat()


class UsageMonitor:
    """Tracks every interface and its category totals."""

    def __init__(
        self,
        config: MonitorConfig,
        counter_source: CounterSource | None = None,
        today: Callable[[], str] = local_date,
    ) -> None:
        self._config = config
        self._source = counter_source or CounterSource(config.net_dev_path)
        self._today = today

        self._engine = DeltaEngine()
        self._physical: set[str] = set()
        self._aggregates: dict[InterfaceCategory, AggregateState] = {
            category: AggregateState(category) for category in InterfaceCategory
        }
        self._cycles = 0

    @property
    def engine(self) -> DeltaEngine:
        return self._engine

    @property
    def cycles(self) -> int:
        """Number of completed polling cycles."""
        return self._cycles

    def aggregate(self, category: InterfaceCategory) -> AggregateState:
        return self._aggregates[category]

    def category_of(self, iface: str) -> InterfaceCategory:
        """Category from the startup snapshot.

        Anything not physical at startup, including interfaces created
        later, is virtual.
        """
        if iface in self._physical:
            return InterfaceCategory.PHYSICAL
        return InterfaceCategory.VIRTUAL

    def history_path(self, iface: str) -> Path:
        return self._config.category_dir(self.category_of(iface)) / iface

    def aggregate_path(self, category: InterfaceCategory) -> Path:
        return self._config.category_dir(category) / category.aggregate_name

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Create the history folders and reload all persisted history."""
        for category in InterfaceCategory:
            self._config.category_dir(category).mkdir(parents=True, exist_ok=True)

        sysfs_root = self._config.sysfs_root
        self._physical = list_interfaces(InterfaceCategory.PHYSICAL, sysfs_root)
        virtual = list_interfaces(InterfaceCategory.VIRTUAL, sysfs_root)

        for iface in sorted(self._physical | virtual):
            self._engine.track(iface, load_history(self.history_path(iface)))

        for category, aggregate in self._aggregates.items():
            aggregate.history = load_history(self.aggregate_path(category))

        log.info(
            "Tracking %d physical and %d virtual interfaces",
            len(self._physical),
            len(virtual),
        )

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def poll_once(self) -> bool:
        """Run one polling cycle.

        Returns:
            True if any interface accumulated usage this cycle.
        """
        today = self._today()
        snapshot = self._source.read()
        cycle_totals = {category: ByteCounterPair() for category in InterfaceCategory}

        for iface, counters in snapshot.items():
            if iface not in self._engine:
                # Appeared after startup; keep whatever is already on disk
                self._engine.track(iface, load_history(self.history_path(iface)))

            delta = self._engine.observe(iface, counters, today)
            if not delta:
                continue

            save_history(self.history_path(iface), self._engine.history(iface))
            category = self.category_of(iface)
            cycle_totals[category] = cycle_totals[category] + delta

        changed = False
        for category, total in cycle_totals.items():
            if not total:
                continue
            changed = True
            aggregate = self._aggregates[category]
            aggregate.add(today, total)
            save_history(self.aggregate_path(category), aggregate.history)

        self._cycles += 1
        return changed

    def run(self, stop_event: threading.Event | None = None) -> None:
        """Poll until ``stop_event`` is set or the duration limit is hit.

        The event is checked once per cycle boundary; the wait between
        cycles is a fixed interval regardless of how long a cycle took.
        """
        stop = stop_event or threading.Event()
        duration = self._config.duration
        start_mono = time.monotonic()

        while not stop.is_set():
            if duration > 0 and time.monotonic() - start_mono >= duration:
                print(f"Duration limit reached ({duration}s).", file=sys.stderr)
                break

            self.poll_once()
            stop.wait(self._config.interval)


def _today_mb(history: DailyHistory, today: str) -> int:
    return history.get(today, ByteCounterPair()).total // BYTES_PER_MB


def run_monitor(config: MonitorConfig) -> None:
    """Run the monitor with SIGTERM/SIGINT handling."""
    stop = threading.Event()

    def _signal_handler(signum: int, frame: object) -> None:
        stop.set()

    signal.signal(signal.SIGTERM, _signal_handler)
    signal.signal(signal.SIGINT, _signal_handler)

    monitor = UsageMonitor(config)
    monitor.initialize()

    print(f"Recording usage under {config.root_dir}", file=sys.stderr)
    print(f"  Interval: {config.interval}s", file=sys.stderr)
    if config.duration > 0:
        print(f"  Duration: {config.duration}s", file=sys.stderr)
    print("  Press Ctrl+C to stop.\n", file=sys.stderr)

    start_mono = time.monotonic()
    try:
        monitor.run(stop)
    finally:
        today = local_date()
        total_elapsed = time.monotonic() - start_mono
        print(
            f"\nDone. {monitor.cycles} cycles in {total_elapsed:.1f}s",
            file=sys.stderr,
        )
        for category in InterfaceCategory:
            used = _today_mb(monitor.aggregate(category).history, today)
            print(f"  {category.value} today: {used}MB", file=sys.stderr)
