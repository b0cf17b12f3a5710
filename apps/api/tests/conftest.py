"""
Global test fixtures for pytest.

Provides reusable fixtures for API testing:
- Authenticated API clients by role (doctor, patient)
- Users, consultation links and record factories
"""
import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient

from apps.authz.models import ConsultationLink, RoleChoices, User
from apps.core.observability.correlation import clear_request_context
from apps.records.models import Note, Prescription, RecordFile, Vital


@pytest.fixture(autouse=True)
def _clean_request_context():
    """Thread-local correlation context must not leak between tests."""
    yield
    clear_request_context()


# ============================================================================
# Users
# ============================================================================

@pytest.fixture
def doctor(db):
    return User.objects.create_user(
        email='dr.house@test.com',
        password='testpass123',
        name='Gregory House',
        role=RoleChoices.DOCTOR,
    )


@pytest.fixture
def other_doctor(db):
    return User.objects.create_user(
        email='dr.wilson@test.com',
        password='testpass123',
        name='James Wilson',
        role=RoleChoices.DOCTOR,
    )


@pytest.fixture
def patient(db):
    return User.objects.create_user(
        email='jane.doe@test.com',
        password='testpass123',
        name='Jane Doe',
        role=RoleChoices.PATIENT,
    )


@pytest.fixture
def other_patient(db):
    return User.objects.create_user(
        email='john.roe@test.com',
        password='testpass123',
        name='John Roe',
        role=RoleChoices.PATIENT,
    )


@pytest.fixture
def consultation(doctor, patient):
    """Doctor consults patient."""
    return ConsultationLink.objects.create(doctor=doctor, patient=patient)


# ============================================================================
# API Clients
# ============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def doctor_client(doctor):
    """Authenticated API client for the doctor fixture."""
    client = APIClient()
    client.force_authenticate(user=doctor)
    return client


@pytest.fixture
def other_doctor_client(other_doctor):
    client = APIClient()
    client.force_authenticate(user=other_doctor)
    return client


@pytest.fixture
def patient_client(patient):
    """Authenticated API client for the patient fixture."""
    client = APIClient()
    client.force_authenticate(user=patient)
    return client


@pytest.fixture
def other_patient_client(other_patient):
    client = APIClient()
    client.force_authenticate(user=other_patient)
    return client


# ============================================================================
# Records
# ============================================================================

@pytest.fixture
def base_time():
    """Fixed reference instant so record ordering is deterministic."""
    return timezone.now().replace(microsecond=0) - timedelta(days=30)


@pytest.fixture
def make_vital(db):
    def _make(patient, created_at=None, **fields):
        fields.setdefault('bp', '120/80')
        if created_at is not None:
            fields['created_at'] = created_at
        return Vital.objects.create(patient=patient, **fields)
    return _make


@pytest.fixture
def make_note(db):
    def _make(patient, doctor=None, content='Patient stable.', created_at=None):
        fields = {'patient': patient, 'doctor': doctor, 'content': content}
        if created_at is not None:
            fields['created_at'] = created_at
        return Note.objects.create(**fields)
    return _make


@pytest.fixture
def make_file(db):
    def _make(patient, file_name='lab-results.pdf', created_at=None):
        fields = {'patient': patient, 'file_name': file_name}
        if created_at is not None:
            fields['created_at'] = created_at
        return RecordFile.objects.create(**fields)
    return _make


@pytest.fixture
def make_prescription(db):
    def _make(patient, doctor=None, medications=None, instructions='Once daily.', created_at=None):
        fields = {
            'patient': patient,
            'doctor': doctor,
            'medications': medications or ['Amoxicillin 500mg'],
            'instructions': instructions,
        }
        if created_at is not None:
            fields['created_at'] = created_at
        return Prescription.objects.create(**fields)
    return _make
