"""Dashboard state and the subscription wiring that drives it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from functools import lru_cache
from threading import Event, Lock, Thread
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from app.schemas import DashboardSnapshot, SeriesPoint as SeriesPointSchema, Threshold
from datastore.realtime_db import MockRealtimeDatabase, Subscription, build_default_database
from models.records import Reading, SeriesPoint
from services.classifier import RiskStatus, StatusClassifier
from services.history_logger import HistoryLogger
from services.ingestor import LEVEL_FIELD, ReadingIngestor, coerce_level
from services.projector import NO_DATA, Bound, HistoryProjector, records_from_snapshot
from settings import get_settings

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class DashboardState:
    """Everything the dashboard displays, replaced wholesale on each event."""

    water_level: float = 0.0
    status: RiskStatus = RiskStatus.SAFE
    history: Tuple[SeriesPoint, ...] = ()
    min_level: Bound = NO_DATA
    max_level: Bound = NO_DATA
    now: Optional[datetime] = None


def apply_feed_update(
    state: DashboardState, reading: Reading, classifier: StatusClassifier
) -> DashboardState:
    return replace(state, water_level=reading.level, status=classifier.classify(reading.level))


def apply_history_update(
    state: DashboardState, series: Sequence[SeriesPoint], projector: HistoryProjector
) -> DashboardState:
    minimum, maximum = projector.min_max(series)
    return replace(state, history=tuple(series), min_level=minimum, max_level=maximum)


def apply_clock_tick(state: DashboardState, now: datetime) -> DashboardState:
    return replace(state, now=now)


class ClockTicker:
    """Calls ``on_tick`` with the current time every ``interval`` seconds."""

    def __init__(
        self,
        interval: float,
        on_tick: Callable[[datetime], None],
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.interval = interval
        self._on_tick = on_tick
        self._clock = clock
        self._stop = Event()
        self._thread: Optional[Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = Thread(target=self._run, name="dashboard-clock", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread = self._thread
        self._thread = None
        if thread is not None:
            thread.join(timeout=self.interval + 1.0)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self._on_tick(self._clock())


class DashboardService:
    """Subscribes the pure handlers to the feed and history nodes."""

    def __init__(
        self,
        database: MockRealtimeDatabase,
        feed_path: str,
        history_path: str,
        ingestor: ReadingIngestor,
        history_logger: HistoryLogger,
        projector: HistoryProjector,
        classifier: StatusClassifier,
        clock_interval: float = 1.0,
        location: str = "",
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.database = database
        self.feed_path = feed_path
        self.history_path = history_path
        self.ingestor = ingestor
        self.history_logger = history_logger
        self.projector = projector
        self.classifier = classifier
        self.location = location
        self._clock = clock
        self._state = DashboardState()
        self._state_lock = Lock()
        self._subscriptions: list[Subscription] = []
        self._ticker = ClockTicker(clock_interval, self.handle_clock_tick, clock=clock)

    @property
    def state(self) -> DashboardState:
        with self._state_lock:
            return self._state

    @property
    def running(self) -> bool:
        return bool(self._subscriptions)

    def start(self) -> None:
        if self._subscriptions:
            return
        self.handle_clock_tick(self._clock())
        self._subscriptions.append(self.database.subscribe(self.feed_path, self.handle_feed_update))
        self._subscriptions.append(
            self.database.subscribe(self.history_path, self.handle_history_update)
        )
        self._ticker.start()
        logger.info("Dashboard started", extra={"path": self.feed_path})

    def shutdown(self) -> None:
        """Release both subscriptions and the clock timer."""
        while self._subscriptions:
            self._subscriptions.pop().unsubscribe()
        self._ticker.stop()

    def snapshot(self) -> DashboardSnapshot:
        state = self.state
        return DashboardSnapshot(
            water_level=state.water_level,
            status=state.status,
            status_color=self.classifier.color_for(state.status),
            alert=state.status is RiskStatus.DANGER,
            min_level=state.min_level,
            max_level=state.max_level,
            history=[
                SeriesPointSchema(index=point.index, level=point.level) for point in state.history
            ],
            thresholds=[
                Threshold(status=marker.status, level=marker.level, color=marker.color)
                for marker in self.classifier.markers()
            ],
            time=state.now,
            location=self.location,
        )

    def submit_reading(self, payload: Mapping[str, Any]) -> bool:
        """Write ``payload`` to the feed node as the upstream sensor would.

        Returns whether the payload carries a level the ingestor will accept.
        """
        self.database.set(self.feed_path, dict(payload))
        return coerce_level(payload.get(LEVEL_FIELD)) is not None

    def handle_feed_update(self, payload: Any) -> Optional[Reading]:
        reading = self.ingestor.on_reading(payload)
        if reading is None:
            return None

        with self._state_lock:
            previous = self._state.status
            self._state = apply_feed_update(self._state, reading, self.classifier)
            current = self._state.status

        if current is not previous:
            log = logger.warning if current is RiskStatus.DANGER else logger.info
            log(
                "Flood risk status changed",
                extra={"status": current.value, "water_level": reading.level},
            )

        self.history_logger.append(reading)
        return reading

    def handle_history_update(self, snapshot: Any) -> None:
        if not snapshot:
            return
        if not isinstance(snapshot, Mapping):
            logger.warning(
                "Ignoring history snapshot",
                extra={"path": self.history_path, "reason": "snapshot is not a mapping"},
            )
            return

        series = self.projector.project(records_from_snapshot(snapshot))
        with self._state_lock:
            self._state = apply_history_update(self._state, series, self.projector)
        logger.debug(
            "History projected",
            extra={"path": self.history_path, "record_count": len(series)},
        )

    def handle_clock_tick(self, now: datetime) -> None:
        with self._state_lock:
            self._state = apply_clock_tick(self._state, now)


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires and starts the dashboard against the default database."""
    settings = get_settings()
    database = build_default_database()
    service = DashboardService(
        database=database,
        feed_path=settings.feed_path,
        history_path=settings.history_path,
        ingestor=ReadingIngestor(),
        history_logger=HistoryLogger(
            database, settings.history_path, deduplicate=settings.history_deduplicate
        ),
        projector=HistoryProjector(order=settings.history_order),
        classifier=StatusClassifier(),
        clock_interval=settings.clock_interval,
        location=settings.location,
    )
    service.start()
    return service
