"""Daily per-interface network usage accounting from kernel byte counters."""

__version__ = "0.1.0"
