"""
Record write services.

Notes and prescriptions are written by doctors for the patients they consult.
Authorization happens before these are called; they only persist and log.
"""
import logging
from typing import List

from django.db import transaction

from apps.core.observability import metrics
from apps.core.observability.events import log_record_written
from apps.records.models import Note, Prescription
from apps.records.stores import RecordKind

logger = logging.getLogger(__name__)


def add_note(patient_id, doctor, content: str) -> Note:
    """Create a clinical note authored by ``doctor``."""
    with transaction.atomic():
        note = Note.objects.create(
            patient_id=patient_id,
            doctor=doctor,
            content=content,
        )

    metrics.record_writes_total.labels(kind=RecordKind.NOTE.value).inc()
    log_record_written(note, RecordKind.NOTE.value)
    return note


def issue_prescription(patient_id, doctor, medications: List[str], instructions: str) -> Prescription:
    """Create a prescription issued by ``doctor``."""
    with transaction.atomic():
        prescription = Prescription.objects.create(
            patient_id=patient_id,
            doctor=doctor,
            medications=list(medications),
            instructions=instructions,
        )

    metrics.record_writes_total.labels(kind=RecordKind.PRESCRIPTION.value).inc()
    log_record_written(prescription, RecordKind.PRESCRIPTION.value)
    return prescription
