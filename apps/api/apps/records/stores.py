"""
Per-kind record stores.

Each store yields one patient's records of a single kind, oldest first,
with ties on created_at kept in creation (primary key) order.
"""
from typing import Iterator, Sequence

from django.db import models

from apps.records.models import Note, Prescription, RecordFile, Vital


class RecordKind(models.TextChoices):
    """
    Record variants.

    Declaration order is the tie-break precedence used when records of
    different kinds share a timestamp. It only makes the merge reproducible;
    it carries no clinical meaning.
    """
    VITAL = 'vital', 'Vital'
    NOTE = 'note', 'Note'
    FILE = 'file', 'File'
    PRESCRIPTION = 'prescription', 'Prescription'


KIND_PRECEDENCE = {kind: index for index, kind in enumerate(RecordKind)}


class RecordStore:
    """
    Read access to one record kind.

    ``list_by_patient`` returns a lazily-pulled iterator; it can be consumed
    once and is not restartable.
    """

    def __init__(self, kind: RecordKind, model, related: Sequence[str] = ()):
        self.kind = RecordKind(kind)
        self.model = model
        self.related = tuple(related)

    def __repr__(self):
        return f"<RecordStore {self.kind.value}>"

    def queryset(self, patient_id):
        queryset = self.model.objects.filter(patient_id=patient_id)
        if self.related:
            queryset = queryset.select_related(*self.related)
        return queryset.order_by('created_at', 'id')

    def list_by_patient(self, patient_id) -> Iterator:
        return self.queryset(patient_id).iterator()


VITAL_STORE = RecordStore(RecordKind.VITAL, Vital)
NOTE_STORE = RecordStore(RecordKind.NOTE, Note, related=['doctor'])
FILE_STORE = RecordStore(RecordKind.FILE, RecordFile)
PRESCRIPTION_STORE = RecordStore(RecordKind.PRESCRIPTION, Prescription, related=['doctor'])

DEFAULT_STORES = (VITAL_STORE, NOTE_STORE, FILE_STORE, PRESCRIPTION_STORE)

STORES_BY_KIND = {store.kind: store for store in DEFAULT_STORES}
