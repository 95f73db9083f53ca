"""
Timer scheduler - One-shot delayed callbacks on the GLib main loop.

The search pipeline only needs timeout_add / source_remove, so any object
with that pair can stand in (tests drive timers by hand).
"""

from typing import Callable

from gi.repository import GLib


class GLibScheduler:
    """Schedules callbacks with GLib.timeout_add. Needs a running main loop."""

    def timeout_add(self, delay_ms: int, callback: Callable, *args) -> int:
        """
        Call callback(*args) after delay_ms milliseconds.

        The callback should return False so it runs once.

        Returns:
            GLib source id for source_remove()
        """
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        return GLib.timeout_add(delay_ms, callback, *args)

    def source_remove(self, source_id: int) -> bool:
        return GLib.source_remove(source_id)
