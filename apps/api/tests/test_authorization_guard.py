"""
Tests for the authorization guard.

Rules under test:
- Patients read their own record (all read operations except summary), never write
- Consulting doctors may perform every operation on the patient
- Everything else is Deny(not_authorized)
- Decisions are recomputed on every call
"""
import uuid

import pytest

from apps.authz.guard import (
    PATIENT_SELF_OPERATIONS,
    READ_OPERATIONS,
    WRITE_OPERATIONS,
    Actor,
    Decision,
    DenyReason,
    Operation,
    authorize,
)
from apps.authz.models import ConsultationLink, RoleChoices


class StaticRegistry:
    """In-memory consultation registry."""

    def __init__(self, links=None):
        self.links = {(str(d), str(p)) for d, p in (links or [])}
        self.calls = 0

    def is_consulting(self, doctor_id, patient_id):
        self.calls += 1
        return (str(doctor_id), str(patient_id)) in self.links


DOCTOR_ID = str(uuid.uuid4())
PATIENT_ID = str(uuid.uuid4())
OTHER_PATIENT_ID = str(uuid.uuid4())


class TestDecision:

    def test_allow_is_truthy(self):
        decision = Decision.allow()
        assert decision
        assert decision.reason is None

    def test_deny_carries_reason(self):
        decision = Decision.deny()
        assert not decision
        assert decision.reason == DenyReason.NOT_AUTHORIZED


class TestPatientSelfAccess:

    @pytest.mark.parametrize('operation', sorted(PATIENT_SELF_OPERATIONS))
    def test_patient_reads_own_record(self, operation):
        actor = Actor(id=PATIENT_ID, role=RoleChoices.PATIENT)

        assert authorize(actor, PATIENT_ID, operation, registry=StaticRegistry())

    @pytest.mark.parametrize('operation', sorted(WRITE_OPERATIONS))
    def test_patient_cannot_write_own_record(self, operation):
        actor = Actor(id=PATIENT_ID, role=RoleChoices.PATIENT)

        decision = authorize(actor, PATIENT_ID, operation, registry=StaticRegistry())

        assert decision == Decision.deny(DenyReason.NOT_AUTHORIZED)

    def test_patient_cannot_request_own_summary(self):
        actor = Actor(id=PATIENT_ID, role=RoleChoices.PATIENT)

        decision = authorize(actor, PATIENT_ID, Operation.SUMMARY_READ, registry=StaticRegistry())

        assert not decision

    @pytest.mark.parametrize('operation', sorted(READ_OPERATIONS))
    def test_patient_cannot_read_other_patient(self, operation):
        actor = Actor(id=PATIENT_ID, role=RoleChoices.PATIENT)

        decision = authorize(actor, OTHER_PATIENT_ID, operation, registry=StaticRegistry())

        assert decision.reason == DenyReason.NOT_AUTHORIZED

    def test_patient_id_compared_as_string(self):
        actor = Actor(id=PATIENT_ID, role=RoleChoices.PATIENT)

        assert authorize(actor, uuid.UUID(PATIENT_ID), Operation.VITALS_READ, registry=StaticRegistry())


class TestDoctorAccess:

    @pytest.mark.parametrize('operation', sorted(READ_OPERATIONS | WRITE_OPERATIONS))
    def test_consulting_doctor_may_do_everything(self, operation):
        actor = Actor(id=DOCTOR_ID, role=RoleChoices.DOCTOR)
        registry = StaticRegistry(links=[(DOCTOR_ID, PATIENT_ID)])

        assert authorize(actor, PATIENT_ID, operation, registry=registry)

    @pytest.mark.parametrize('operation', sorted(READ_OPERATIONS | WRITE_OPERATIONS))
    def test_non_consulting_doctor_is_denied(self, operation):
        actor = Actor(id=DOCTOR_ID, role=RoleChoices.DOCTOR)
        registry = StaticRegistry(links=[(DOCTOR_ID, OTHER_PATIENT_ID)])

        decision = authorize(actor, PATIENT_ID, operation, registry=registry)

        assert decision == Decision.deny(DenyReason.NOT_AUTHORIZED)

    def test_patient_role_with_link_is_not_a_doctor(self):
        """Only the doctor role is ever checked against the registry."""
        actor = Actor(id=PATIENT_ID, role=RoleChoices.PATIENT)
        registry = StaticRegistry(links=[(PATIENT_ID, OTHER_PATIENT_ID)])

        assert not authorize(actor, OTHER_PATIENT_ID, Operation.NOTES_READ, registry=registry)

    def test_unknown_role_is_denied(self):
        actor = Actor(id=DOCTOR_ID, role='admin')
        registry = StaticRegistry(links=[(DOCTOR_ID, PATIENT_ID)])

        assert not authorize(actor, PATIENT_ID, Operation.VITALS_READ, registry=registry)

    def test_decision_is_recomputed_each_call(self):
        actor = Actor(id=DOCTOR_ID, role=RoleChoices.DOCTOR)
        registry = StaticRegistry(links=[(DOCTOR_ID, PATIENT_ID)])

        assert authorize(actor, PATIENT_ID, Operation.TIMELINE_READ, registry=registry)

        registry.links.clear()

        assert not authorize(actor, PATIENT_ID, Operation.TIMELINE_READ, registry=registry)
        assert registry.calls == 2

    def test_accepts_operation_string(self):
        actor = Actor(id=DOCTOR_ID, role=RoleChoices.DOCTOR)
        registry = StaticRegistry(links=[(DOCTOR_ID, PATIENT_ID)])

        assert authorize(actor, PATIENT_ID, 'notes:write', registry=registry)

    def test_rejects_unknown_operation(self):
        actor = Actor(id=DOCTOR_ID, role=RoleChoices.DOCTOR)

        with pytest.raises(ValueError):
            authorize(actor, PATIENT_ID, 'records:delete', registry=StaticRegistry())


@pytest.mark.django_db
class TestGuardWithDatabaseRegistry:

    def test_consultation_link_grants_access(self, doctor, patient, consultation):
        decision = authorize(Actor.from_user(doctor), patient.id, Operation.SUMMARY_READ)
        assert decision.allowed

    def test_removed_link_revokes_access(self, doctor, patient, consultation):
        actor = Actor.from_user(doctor)
        assert authorize(actor, patient.id, Operation.NOTES_READ)

        ConsultationLink.objects.filter(doctor=doctor, patient=patient).delete()

        assert not authorize(actor, patient.id, Operation.NOTES_READ)

    def test_other_doctors_link_does_not_grant(self, other_doctor, patient, consultation):
        decision = authorize(Actor.from_user(other_doctor), patient.id, Operation.VITALS_READ)
        assert decision.reason == DenyReason.NOT_AUTHORIZED
