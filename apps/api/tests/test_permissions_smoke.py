"""
Smoke tests for API permissions by role.

Fast HTTP status code validation without deep content checks.
Validates that consultation-based access works across every patient endpoint.
"""
import pytest
from rest_framework import status


READ_ENDPOINTS = ['vitals', 'files', 'notes', 'prescriptions', 'timeline']


# ============================================================================
# Patient record reads
# ============================================================================

@pytest.mark.django_db
class TestRecordReadPermissions:
    """Test patient record read permissions by actor."""

    @pytest.mark.parametrize('resource', READ_ENDPOINTS)
    @pytest.mark.parametrize('client_fixture,expected_status', [
        ('doctor_client', status.HTTP_200_OK),
        ('patient_client', status.HTTP_200_OK),
        ('other_doctor_client', status.HTTP_403_FORBIDDEN),
        ('other_patient_client', status.HTTP_403_FORBIDDEN),
    ])
    def test_read_by_actor(self, resource, client_fixture, expected_status, request, patient, consultation):
        """GET /api/v1/patients/{id}/{resource}/ - owner and consulting doctor only."""
        client = request.getfixturevalue(client_fixture)
        response = client.get(f'/api/v1/patients/{patient.id}/{resource}/')
        assert response.status_code == expected_status

    @pytest.mark.parametrize('resource', READ_ENDPOINTS)
    def test_unauthenticated(self, resource, api_client, patient):
        response = api_client.get(f'/api/v1/patients/{patient.id}/{resource}/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# ============================================================================
# Patient record writes
# ============================================================================

@pytest.mark.django_db
class TestRecordWritePermissions:
    """Only consulting doctors write notes and prescriptions."""

    @pytest.mark.parametrize('client_fixture,expected_status', [
        ('doctor_client', status.HTTP_201_CREATED),
        ('patient_client', status.HTTP_403_FORBIDDEN),
        ('other_doctor_client', status.HTTP_403_FORBIDDEN),
        ('other_patient_client', status.HTTP_403_FORBIDDEN),
    ])
    def test_add_note_by_actor(self, client_fixture, expected_status, request, patient, consultation):
        """POST /api/v1/patients/{id}/notes/"""
        client = request.getfixturevalue(client_fixture)
        response = client.post(
            f'/api/v1/patients/{patient.id}/notes/',
            {'content': 'Routine check.'},
            format='json'
        )
        assert response.status_code == expected_status

    @pytest.mark.parametrize('client_fixture,expected_status', [
        ('doctor_client', status.HTTP_201_CREATED),
        ('patient_client', status.HTTP_403_FORBIDDEN),
        ('other_doctor_client', status.HTTP_403_FORBIDDEN),
    ])
    def test_issue_prescription_by_actor(self, client_fixture, expected_status, request, patient, consultation):
        """POST /api/v1/patients/{id}/prescriptions/"""
        client = request.getfixturevalue(client_fixture)
        response = client.post(
            f'/api/v1/patients/{patient.id}/prescriptions/',
            {'medications': ['Paracetamol 500mg'], 'instructions': 'As needed.'},
            format='json'
        )
        assert response.status_code == expected_status


# ============================================================================
# Doctor endpoints
# ============================================================================

@pytest.mark.django_db
class TestDoctorEndpointPermissions:

    @pytest.mark.parametrize('client_fixture,expected_status', [
        ('doctor_client', status.HTTP_200_OK),
        ('patient_client', status.HTTP_403_FORBIDDEN),
    ])
    def test_my_patients(self, client_fixture, expected_status, request):
        client = request.getfixturevalue(client_fixture)
        response = client.get('/api/v1/doctor/my-patients/')
        assert response.status_code == expected_status

    @pytest.mark.parametrize('client_fixture,expected_status', [
        ('patient_client', status.HTTP_403_FORBIDDEN),
        ('other_doctor_client', status.HTTP_403_FORBIDDEN),
    ])
    def test_summary_forbidden(self, client_fixture, expected_status, request, patient, consultation):
        """GET /api/v1/patients/{id}/summary/ - denied before any summarizer call."""
        client = request.getfixturevalue(client_fixture)
        response = client.get(f'/api/v1/patients/{patient.id}/summary/')
        assert response.status_code == expected_status


# ============================================================================
# Health endpoints
# ============================================================================

@pytest.mark.django_db
class TestHealthEndpoints:

    def test_healthz(self, api_client):
        response = api_client.get('/healthz')
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['status'] == 'ok'

    def test_readyz(self, api_client):
        response = api_client.get('/readyz')
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['checks']['database'] is True
