"""Projection of the raw history log into a chartable series."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from models.records import HistoryRecord, SeriesPoint
from services.ingestor import LEVEL_FIELD, TIMESTAMP_FIELD, coerce_level, coerce_timestamp

NO_DATA = "-"

Bound = Union[float, str]


def records_from_snapshot(snapshot: Optional[Mapping[str, Any]]) -> List[HistoryRecord]:
    """Convert the keyed history node into records, keeping mapping order."""

    if not snapshot:
        return []
    records: List[HistoryRecord] = []
    for value in snapshot.values():
        payload = value if isinstance(value, Mapping) else {}
        records.append(
            HistoryRecord(
                water_level=coerce_level(payload.get(LEVEL_FIELD)),
                timestamp=coerce_timestamp(payload.get(TIMESTAMP_FIELD)),
            )
        )
    return records


class HistoryProjector:
    """Pure projection component that can be unit tested in isolation.

    ``order="insertion"`` trusts the storage order of the records.
    ``order="timestamp"`` stably sorts by timestamp first; records without a
    timestamp go last in their stored order.
    """

    def __init__(self, order: str = "insertion") -> None:
        if order not in ("insertion", "timestamp"):
            raise ValueError(f"Unsupported history order {order!r}.")
        self.order = order

    def project(self, records: Iterable[HistoryRecord]) -> List[SeriesPoint]:
        ordered = list(records)
        if self.order == "timestamp":
            ordered.sort(key=lambda record: (record.timestamp is None, record.timestamp or 0))

        series: List[SeriesPoint] = []
        for record in ordered:
            if record.water_level is None:
                continue
            series.append(SeriesPoint(index=len(series) + 1, level=record.water_level))
        return series

    def min_max(self, series: Sequence[SeriesPoint]) -> Tuple[Bound, Bound]:
        if not series:
            return NO_DATA, NO_DATA
        levels = [point.level for point in series]
        return min(levels), max(levels)
