"""
sampras.event_log
~~~~~~~~~~~~~~~~~
Append-only diagnostic trail of timestamped messages.

Entries are kept in the order they were generated.  ``display()`` picks
the presentation order; the default lists the newest entry first without
re-sorting on timestamps, so two entries that share a timestamp (or a
clock that steps backwards) can never swap places.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterator, Literal, Optional

from .models import LogEntry

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DisplayOrder = Literal["newest", "oldest", "timestamp"]


class EventLog:
    """
    Unbounded, non-deduplicating event log.

    Args:
        clock: Zero-argument callable returning the current ``datetime``.
               Defaults to ``datetime.now``; tests pass a fixed clock.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or datetime.now
        self._entries: list[LogEntry] = []

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, message: str) -> LogEntry:
        entry = LogEntry(timestamp=self._clock(), message=message)
        self._entries.append(entry)
        logger.info("%s", message)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        """All entries in generation order."""
        return tuple(self._entries)

    def messages(self) -> list[str]:
        return [e.message for e in self._entries]

    def display(self, order: DisplayOrder = "newest") -> list[str]:
        """
        Render the log as ``"<time> <message>"`` lines.

        Args:
            order: ``"newest"``:    reverse generation order (default).
                   ``"oldest"``:    generation order.
                   ``"timestamp"``: newest timestamp first; entries with
                   equal timestamps keep their generation order.
        """
        if order == "oldest":
            entries = list(self._entries)
        elif order == "newest":
            entries = list(reversed(self._entries))
        elif order == "timestamp":
            entries = sorted(self._entries, key=lambda e: e.timestamp, reverse=True)
        else:
            raise ValueError(f"Unknown display order: {order!r}")
        return [e.formatted() for e in entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(tuple(self._entries))
