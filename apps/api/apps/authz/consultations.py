"""
Consultation registry.

A doctor's consulted-patient set is the set of ConsultationLink rows leaving
that doctor. Authorization only ever reads this doctor-owned direction.
"""
import logging
from typing import Optional, Set, Tuple

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Q

from apps.authz.models import ConsultationLink, RoleChoices, User
from apps.core.observability import metrics
from apps.core.observability.events import log_consultation_change

logger = logging.getLogger(__name__)


class ConsultationError(Exception):
    """Raised when a consultation link cannot be created."""
    pass


class ConsultationRegistry:
    """
    Read-only view of doctor -> patients consultation links.

    Every call queries the current links; nothing is cached between calls,
    so a removed link stops granting access immediately.
    """

    def _resolve_doctor(self, doctor_id) -> Optional[User]:
        try:
            return User.objects.filter(
                id=doctor_id,
                role=RoleChoices.DOCTOR,
                is_active=True,
            ).first()
        except (ValidationError, ValueError, TypeError):
            # Malformed identifier: the doctor simply does not resolve
            return None

    def get_consulted_patients(self, doctor_id) -> Set[str]:
        """Return the ids (as strings) of the patients this doctor consults."""
        doctor = self._resolve_doctor(doctor_id)
        if doctor is None:
            return set()
        patient_ids = ConsultationLink.objects.filter(
            doctor=doctor
        ).values_list('patient_id', flat=True)
        return {str(pid) for pid in patient_ids}

    def is_consulting(self, doctor_id, patient_id) -> bool:
        """
        True if the doctor's consulted set contains the patient.

        An unknown, malformed, inactive or non-doctor identity is
        "not consulting" and never an error.
        """
        if doctor_id is None or patient_id is None:
            return False
        return str(patient_id) in self.get_consulted_patients(doctor_id)


registry = ConsultationRegistry()


def consulted_patients_queryset(doctor: User, search: Optional[str] = None):
    """
    Patients in the doctor's consulted set, optionally filtered by a
    case-insensitive match on name or email.
    """
    queryset = User.objects.filter(
        consulted_by_links__doctor=doctor,
        role=RoleChoices.PATIENT,
    )
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) | Q(email__icontains=search)
        )
    return queryset.order_by('name', 'email')


def start_consultation(doctor: User, patient: User) -> Tuple[ConsultationLink, bool]:
    """
    Add a patient to the doctor's own consulted set.

    Idempotent: returns the existing link with created=False if present.

    Raises:
        ConsultationError: if the roles are not doctor -> patient
    """
    if doctor.role != RoleChoices.DOCTOR:
        raise ConsultationError('Only doctors can start a consultation.')
    if patient.role != RoleChoices.PATIENT:
        raise ConsultationError('Consultations can only target patients.')

    try:
        with transaction.atomic():
            link, created = ConsultationLink.objects.get_or_create(
                doctor=doctor,
                patient=patient,
            )
    except IntegrityError:
        # Concurrent request created the same link
        link = ConsultationLink.objects.get(doctor=doctor, patient=patient)
        created = False

    if created:
        metrics.consultation_changes_total.labels(action='start').inc()
    log_consultation_change(doctor.id, patient.id, 'started', changed=created)
    return link, created


def end_consultation(doctor: User, patient_id) -> bool:
    """
    Remove a patient from the doctor's consulted set.

    Returns True if a link was removed.
    """
    try:
        deleted, _ = ConsultationLink.objects.filter(
            doctor=doctor,
            patient_id=patient_id,
        ).delete()
    except (ValidationError, ValueError):
        deleted = 0

    if deleted:
        metrics.consultation_changes_total.labels(action='end').inc()
    log_consultation_change(doctor.id, patient_id, 'ended', changed=bool(deleted))
    return bool(deleted)
