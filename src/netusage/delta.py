"""Convert successive cumulative counter snapshots into daily usage.

Counters are cumulative since the interface came up.  The first reading
of an interface after process start only sets a baseline: crediting it
would count the interface's whole lifetime as today's usage.

If a counter goes backwards the interface was reset (driver reload,
reboot between runs, 32-bit wrap) and the whole new value is taken as
the delta.  Traffic between the reset and the reading before it is
lost, but totals never decrease.
"""

from __future__ import annotations

from .usage import ByteCounterPair, DailyHistory, InterfaceState, accumulate


def _counter_delta(current: int, last: int) -> int:
    if current < last:
        return current
    return current - last


def compute_delta(state: InterfaceState, current: ByteCounterPair) -> ByteCounterPair:
    """Advance ``state``'s baseline to ``current`` and return the increment.

    Returns a zero pair on the first measurement.
    """
    if state.is_first_measurement:
        state.is_first_measurement = False
        state.last = current
        return ByteCounterPair()

    delta = ByteCounterPair(
        received=_counter_delta(current.received, state.last.received),
        transmitted=_counter_delta(current.transmitted, state.last.transmitted),
    )
    state.last = current
    return delta


class DeltaEngine:
    """Per-interface delta tracking and daily accumulation."""

    def __init__(self) -> None:
        self._states: dict[str, InterfaceState] = {}

    def __contains__(self, iface: str) -> bool:
        return iface in self._states

    @property
    def interfaces(self) -> list[str]:
        """Names of all tracked interfaces, sorted."""
        return sorted(self._states)

    def track(self, iface: str, history: DailyHistory) -> InterfaceState:
        """Start tracking ``iface`` with previously persisted history."""
        state = self.state_for(iface)
        state.history = history
        return state

    def state_for(self, iface: str) -> InterfaceState:
        """Return the state for ``iface``, creating it if unseen."""
        state = self._states.get(iface)
        if state is None:
            state = self._states[iface] = InterfaceState()
        return state

    def history(self, iface: str) -> DailyHistory:
        return self.state_for(iface).history

    def observe(
        self, iface: str, current: ByteCounterPair, today: str
    ) -> ByteCounterPair:
        """Record a counter reading for ``iface``.

        Args:
            iface: Interface name.
            current: Cumulative counters just read from the kernel.
            today: Date key (YYYY-MM-DD) to credit usage to.

        Returns:
            The increment since the previous reading.  A nonzero result
            means ``history[today]`` grew and the interface's file
            should be rewritten.
        """
        state = self.state_for(iface)
        delta = compute_delta(state, current)
        if delta:
            accumulate(state.history, today, delta)
        return delta
