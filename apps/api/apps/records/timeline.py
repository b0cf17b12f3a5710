"""
Timeline aggregation.

Merges a patient's per-kind record streams into one sequence ordered by
created_at. Each store is already sorted, so the merge is a single k-way
pass (heapq.merge) rather than a re-sort. Records with equal timestamps
come out in kind precedence order, then in their store's own order.

If any store fails while being read, aggregation fails as a whole with
PartialDataError; a partial timeline is never returned.
"""
import heapq
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Iterator, List, Optional

from apps.core.observability import metrics
from apps.core.observability.events import log_partial_data
from apps.records.stores import DEFAULT_STORES, KIND_PRECEDENCE, RecordKind

logger = logging.getLogger(__name__)


class PartialDataError(Exception):
    """A record store could not be read; the timeline would be incomplete."""

    def __init__(self, kind, message=None):
        self.kind = RecordKind(kind)
        super().__init__(message or f"Failed to fetch {self.kind.label.lower()} records")


@dataclass(frozen=True)
class TimelineEntry:
    kind: RecordKind
    created_at: datetime
    record: Any


@dataclass
class Timeline:
    """Request-scoped, time-ordered view of one patient's record."""
    patient_id: str
    entries: List[TimelineEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[TimelineEntry]:
        return iter(self.entries)

    def __len__(self):
        return len(self.entries)

    @property
    def is_empty(self):
        return not self.entries

    def of_kind(self, kind) -> List[Any]:
        """Records of one kind, in timeline order."""
        kind = RecordKind(kind)
        return [entry.record for entry in self.entries if entry.kind == kind]

    @property
    def kinds_present(self):
        return {entry.kind for entry in self.entries}


def _pull(store, patient_id) -> Iterator[TimelineEntry]:
    """Wrap a store so that any read failure surfaces as PartialDataError."""
    try:
        for record in store.list_by_patient(patient_id):
            yield TimelineEntry(store.kind, record.created_at, record)
    except Exception as exc:
        log_partial_data(patient_id, store.kind, exc)
        raise PartialDataError(store.kind) from exc


def merge_streams(streams: Iterable[Iterable[TimelineEntry]]) -> List[TimelineEntry]:
    """
    K-way merge of streams that are each sorted by created_at.

    heapq.merge is stable: on equal keys it yields from earlier streams
    first, so the caller controls cross-stream tie-breaking by stream order.
    """
    return list(heapq.merge(*streams, key=lambda entry: entry.created_at))


@metrics.track_duration(metrics.timeline_aggregation_duration_seconds)
def aggregate(patient_id, stores: Optional[Iterable] = None) -> Timeline:
    """
    Build the patient's timeline from every record store.

    Callers must have obtained an Allow decision from the authorization
    guard for the patient first.

    Args:
        patient_id: Patient whose records are merged
        stores: Record stores to read (defaults to one store per kind)

    Returns:
        Timeline ordered by created_at ascending. Empty if the patient
        has no records at all.

    Raises:
        PartialDataError: a store failed; no timeline is produced
    """
    stores = sorted(
        stores if stores is not None else DEFAULT_STORES,
        key=lambda store: KIND_PRECEDENCE[store.kind],
    )

    try:
        entries = merge_streams(_pull(store, patient_id) for store in stores)
    except PartialDataError:
        metrics.timeline_aggregations_total.labels(result='partial_data').inc()
        raise

    metrics.timeline_aggregations_total.labels(result='success').inc()
    metrics.timeline_entries.observe(len(entries))
    logger.debug(
        'Timeline aggregated',
        extra={'patient_id': str(patient_id), 'entries_count': len(entries)}
    )
    return Timeline(patient_id=str(patient_id), entries=entries)
