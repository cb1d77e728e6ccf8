"""
Time-bucketed snapshot cache owned by the caller.

A cached snapshot is served until ``expires_at``. The first call after expiry
recomputes; calls that arrive while that recompute is running wait for it and
share its result instead of issuing their own upstream fetch.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

from ..config.settings import DEFAULT_CONFIG, load_standings_config
from ..pipeline.models import StandingsSnapshot

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = DEFAULT_CONFIG["revalidate_seconds"]


class _InFlight:
    """One running load that other callers can wait on."""

    def __init__(self):
        self.done = threading.Event()
        self.result: Optional[StandingsSnapshot] = None
        self.error: Optional[BaseException] = None


class SnapshotCache:
    """Cache a snapshot loader for ``ttl_seconds`` with single-flight refresh."""

    def __init__(
        self,
        loader: Callable[[], StandingsSnapshot],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds must be >= 0, got {ttl_seconds}")
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._value: Optional[StandingsSnapshot] = None
        self._expires_at: Optional[float] = None
        self._in_flight: Optional[_InFlight] = None

    @classmethod
    def from_config(
        cls,
        loader: Callable[[], StandingsSnapshot],
        config: Optional[Dict[str, Any]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "SnapshotCache":
        """Build a cache whose TTL is config["revalidate_seconds"] (None = load config/standings.yaml)."""
        if config is None:
            config = load_standings_config()
        ttl = config.get("revalidate_seconds", DEFAULT_TTL_SECONDS)
        return cls(loader, ttl_seconds=ttl, clock=clock)

    @property
    def expires_at(self) -> Optional[float]:
        return self._expires_at

    def _fresh(self, now: float) -> bool:
        return self._value is not None and self._expires_at is not None and now < self._expires_at

    def get(self) -> StandingsSnapshot:
        """Return the cached snapshot, recomputing it once when it has expired."""
        with self._lock:
            if self._fresh(self._clock()):
                return self._value

            flight = self._in_flight
            leader = flight is None
            if leader:
                flight = _InFlight()
                self._in_flight = flight

        if not leader:
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            return flight.result

        try:
            snapshot = self._loader()
        except BaseException as e:
            flight.error = e
            with self._lock:
                self._in_flight = None
            flight.done.set()
            raise

        with self._lock:
            self._value = snapshot
            self._expires_at = self._clock() + self._ttl
            self._in_flight = None
        flight.result = snapshot
        flight.done.set()

        logger.debug(f"Snapshot cache refreshed (fetched_at={snapshot.fetched_at})")
        return snapshot

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next ``get`` recomputes."""
        with self._lock:
            self._value = None
            self._expires_at = None
