"""
Authorization guard for patient health records.

Decides, for an actor and a target patient, whether an operation is
permitted. Rules, evaluated in order:

1. A patient acting on their own record may perform read operations
   (vitals, files, notes, prescriptions, timeline). Never writes.
2. A doctor whose consulted set contains the patient may perform any
   operation (reads, note/prescription writes, summary).
3. Anything else is denied with reason ``not_authorized``.

The decision is recomputed on every call from the current registry state.
"""
from dataclasses import dataclass
from typing import Optional

from django.db import models

from apps.authz.consultations import ConsultationRegistry, registry as default_registry
from apps.authz.models import RoleChoices
from apps.core.observability import metrics
from apps.core.observability.events import log_access_denied


class Operation(models.TextChoices):
    """Operations on a patient record."""
    VITALS_READ = 'vitals:read', 'Read vitals'
    FILES_READ = 'files:read', 'Read files'
    NOTES_READ = 'notes:read', 'Read notes'
    PRESCRIPTIONS_READ = 'prescriptions:read', 'Read prescriptions'
    TIMELINE_READ = 'timeline:read', 'Read timeline'
    SUMMARY_READ = 'summary:read', 'Generate summary'
    NOTES_WRITE = 'notes:write', 'Write notes'
    PRESCRIPTIONS_WRITE = 'prescriptions:write', 'Write prescriptions'


class DenyReason(models.TextChoices):
    NOT_AUTHORIZED = 'not_authorized', 'Not authorized'


READ_OPERATIONS = frozenset({
    Operation.VITALS_READ,
    Operation.FILES_READ,
    Operation.NOTES_READ,
    Operation.PRESCRIPTIONS_READ,
    Operation.TIMELINE_READ,
    Operation.SUMMARY_READ,
})

WRITE_OPERATIONS = frozenset({
    Operation.NOTES_WRITE,
    Operation.PRESCRIPTIONS_WRITE,
})

# Summary generation is a doctor-facing operation
PATIENT_SELF_OPERATIONS = READ_OPERATIONS - {Operation.SUMMARY_READ}


@dataclass(frozen=True)
class Actor:
    """Authenticated identity performing a request."""
    id: str
    role: str

    @classmethod
    def from_user(cls, user):
        return cls(id=str(user.id), role=user.role)


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization check: Allow, or Deny with a reason."""
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls):
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason=DenyReason.NOT_AUTHORIZED):
        return cls(allowed=False, reason=reason)

    def __bool__(self):
        return self.allowed


def _evaluate(actor, patient_id, operation, registry):
    if actor.role == RoleChoices.PATIENT and str(actor.id) == str(patient_id):
        if operation in PATIENT_SELF_OPERATIONS:
            return Decision.allow()
        return Decision.deny()

    if actor.role == RoleChoices.DOCTOR and registry.is_consulting(actor.id, patient_id):
        return Decision.allow()

    return Decision.deny()


def authorize(
    actor: Actor,
    patient_id,
    operation,
    registry: Optional[ConsultationRegistry] = None,
) -> Decision:
    """
    Decide whether ``actor`` may perform ``operation`` on ``patient_id``'s record.

    Args:
        actor: Authenticated identity (id, role)
        patient_id: Target patient identifier
        operation: An Operation value (or its string form)
        registry: Consultation registry to consult (defaults to the database one)

    Returns:
        Decision.allow() or Decision.deny(DenyReason.NOT_AUTHORIZED)
    """
    registry = registry or default_registry
    operation = Operation(operation)

    decision = _evaluate(actor, patient_id, operation, registry)

    metrics.authz_decisions_total.labels(
        operation=operation.value,
        result='allow' if decision.allowed else 'deny',
    ).inc()
    if not decision.allowed:
        log_access_denied(actor, patient_id, operation.value, decision.reason)

    return decision
