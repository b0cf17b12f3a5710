"""
Tests for patient record endpoints.

Endpoints:
- GET /api/v1/patients/{id}/vitals|files|notes|prescriptions/ (newest first)
- POST /api/v1/patients/{id}/notes|prescriptions/ (consulting doctor only)
- GET /api/v1/patients/{id}/timeline/ (oldest first)
- GET /api/v1/me/prescriptions/
"""
from datetime import timedelta
from unittest.mock import patch

import pytest
from rest_framework import status

from apps.records.models import Note, Prescription
from apps.records.stores import NOTE_STORE


def url(patient, resource):
    return f'/api/v1/patients/{patient.id}/{resource}/'


# ============================================================================
# Raw record lists
# ============================================================================

@pytest.mark.django_db
class TestRecordLists:

    def test_patient_lists_own_vitals_newest_first(self, patient_client, patient, base_time, make_vital):
        older = make_vital(patient, created_at=base_time, bp='110/70')
        newer = make_vital(patient, created_at=base_time + timedelta(days=1), bp='125/80')

        response = patient_client.get(url(patient, 'vitals'))

        assert response.status_code == status.HTTP_200_OK
        ids = [item['id'] for item in response.data['results']]
        assert ids == [newer.id, older.id]
        assert response.data['results'][0]['bp'] == '125/80'

    def test_consulting_doctor_lists_files(self, doctor_client, patient, consultation, make_file):
        make_file(patient, file_name='blood-test.pdf')

        response = doctor_client.get(url(patient, 'files'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'][0]['file_name'] == 'blood-test.pdf'

    def test_notes_include_author(self, patient_client, patient, doctor, make_note):
        make_note(patient, doctor, content='Follow up in two weeks.')

        response = patient_client.get(url(patient, 'notes'))

        assert response.status_code == status.HTTP_200_OK
        note = response.data['results'][0]
        assert note['content'] == 'Follow up in two weeks.'
        assert note['doctor']['name'] == 'Gregory House'

    def test_lists_exclude_other_patients(self, patient_client, patient, other_patient, make_prescription):
        make_prescription(other_patient)

        response = patient_client.get(url(patient, 'prescriptions'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'] == []

    @pytest.mark.parametrize('resource', ['vitals', 'files', 'notes', 'prescriptions', 'timeline'])
    def test_non_consulting_doctor_is_forbidden(self, resource, other_doctor_client, patient, consultation):
        response = other_doctor_client.get(url(patient, resource))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.parametrize('resource', ['vitals', 'files', 'notes', 'prescriptions', 'timeline'])
    def test_patient_cannot_read_other_patient(self, resource, other_patient_client, patient):
        response = other_patient_client.get(url(patient, resource))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unauthenticated_is_rejected(self, api_client, patient):
        response = api_client.get(url(patient, 'vitals'))

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_unsupported_write_is_method_not_allowed(self, doctor_client, patient, consultation):
        response = doctor_client.post(url(patient, 'vitals'), {'bp': '120/80'}, format='json')

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


# ============================================================================
# Writes
# ============================================================================

@pytest.mark.django_db
class TestNoteWrites:

    def test_consulting_doctor_adds_note(self, doctor_client, doctor, patient, consultation):
        response = doctor_client.post(url(patient, 'notes'), {'content': 'Prescribed rest.'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['message'] == 'Note added'
        assert response.data['note']['content'] == 'Prescribed rest.'
        note = Note.objects.get(patient=patient)
        assert note.doctor == doctor

    def test_blank_content_is_rejected(self, doctor_client, patient, consultation):
        response = doctor_client.post(url(patient, 'notes'), {'content': '   '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Note.objects.exists()

    def test_non_consulting_doctor_cannot_add_note(self, other_doctor_client, patient, consultation):
        response = other_doctor_client.post(url(patient, 'notes'), {'content': 'x'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Note.objects.exists()

    def test_patient_cannot_add_note_to_own_record(self, patient_client, patient):
        response = patient_client.post(url(patient, 'notes'), {'content': 'Self note'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_note_appears_in_timeline(self, doctor_client, patient, consultation):
        doctor_client.post(url(patient, 'notes'), {'content': 'Check BP weekly.'}, format='json')

        response = doctor_client.get(url(patient, 'timeline'))

        assert response.data['count'] == 1
        assert response.data['entries'][0]['kind'] == 'note'


@pytest.mark.django_db
class TestPrescriptionWrites:

    def test_consulting_doctor_issues_prescription(self, doctor_client, doctor, patient, consultation):
        payload = {'medications': ['Metformin 500mg', 'Vitamin D'], 'instructions': 'After meals.'}

        response = doctor_client.post(url(patient, 'prescriptions'), payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['message'] == 'Prescription issued successfully.'
        prescription = Prescription.objects.get(patient=patient)
        assert prescription.medications == ['Metformin 500mg', 'Vitamin D']
        assert prescription.doctor == doctor

    @pytest.mark.parametrize('payload', [
        {'medications': [], 'instructions': 'x'},
        {'medications': ['Aspirin']},
        {'instructions': 'x'},
        {'medications': ['Aspirin'], 'instructions': ''},
    ])
    def test_invalid_payload(self, doctor_client, patient, consultation, payload):
        response = doctor_client.post(url(patient, 'prescriptions'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Prescription.objects.exists()

    def test_patient_cannot_issue_prescription(self, patient_client, patient):
        payload = {'medications': ['Aspirin'], 'instructions': 'x'}

        response = patient_client.post(url(patient, 'prescriptions'), payload, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestMyPrescriptions:

    def test_patient_lists_own_prescriptions(self, patient_client, patient, other_patient, doctor, make_prescription):
        mine = make_prescription(patient, doctor)
        make_prescription(other_patient, doctor)

        response = patient_client.get('/api/v1/me/prescriptions/')

        assert response.status_code == status.HTTP_200_OK
        assert [item['id'] for item in response.data['results']] == [mine.id]
        assert response.data['count'] == 1
        assert response.data['next'] is None

    def test_doctor_has_no_own_prescriptions(self, doctor_client):
        response = doctor_client.get('/api/v1/me/prescriptions/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == 'Access denied. Patients only.'


# ============================================================================
# Timeline
# ============================================================================

@pytest.mark.django_db
class TestTimelineAPI:

    def test_timeline_is_oldest_first(
        self, doctor_client, doctor, patient, consultation, base_time,
        make_vital, make_note, make_file, make_prescription,
    ):
        make_prescription(patient, doctor, created_at=base_time + timedelta(hours=3))
        make_file(patient, created_at=base_time + timedelta(hours=2))
        make_note(patient, doctor, created_at=base_time + timedelta(hours=1))
        make_vital(patient, created_at=base_time)

        response = doctor_client.get(url(patient, 'timeline'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['patient_id'] == str(patient.id)
        assert response.data['count'] == 4
        assert [e['kind'] for e in response.data['entries']] == ['vital', 'note', 'file', 'prescription']

    def test_entries_carry_kind_specific_record(self, patient_client, patient, make_file):
        make_file(patient, file_name='ecg.png')

        response = patient_client.get(url(patient, 'timeline'))

        entry = response.data['entries'][0]
        assert entry['record']['file_name'] == 'ecg.png'

    def test_empty_timeline(self, patient_client, patient):
        response = patient_client.get(url(patient, 'timeline'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 0
        assert response.data['entries'] == []

    def test_store_failure_returns_partial_data(self, doctor_client, patient, consultation):
        with patch.object(NOTE_STORE, 'list_by_patient', side_effect=RuntimeError('db down')):
            response = doctor_client.get(url(patient, 'timeline'))

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data['error']['code'] == 'PARTIAL_DATA'
        assert response.data['error']['details']['kind'] == 'note'
        assert 'entries' not in response.data

    def test_revoked_consultation_blocks_next_request(self, doctor_client, patient, consultation):
        assert doctor_client.get(url(patient, 'timeline')).status_code == status.HTTP_200_OK

        consultation.delete()

        assert doctor_client.get(url(patient, 'timeline')).status_code == status.HTTP_403_FORBIDDEN
