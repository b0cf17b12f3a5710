"""
Record views - per-kind record lists, note/prescription writes, timeline.

Every endpoint is scoped to one patient and guarded by the authorization
guard through PatientRecordPermission.
"""
import logging
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.guard import Operation
from apps.authz.permissions import IsPatient, PatientRecordPermission
from apps.records.serializers import (
    NoteSerializer,
    NoteWriteSerializer,
    PrescriptionSerializer,
    PrescriptionWriteSerializer,
    RecordFileSerializer,
    TimelineSerializer,
    VitalSerializer,
)
from apps.records.services import add_note, issue_prescription
from apps.records.stores import STORES_BY_KIND, RecordKind
from apps.records.timeline import PartialDataError, aggregate

logger = logging.getLogger(__name__)


class PatientRecordMixin:
    """
    Binds a view to a patient (URL ``patient_id``) and to the guarded
    operations for reading and, optionally, writing.
    """
    permission_classes = [PatientRecordPermission]
    read_operation = None
    write_operation = None

    def get_patient_id(self):
        return self.kwargs['patient_id']

    def get_record_operation(self):
        if self.request.method in permissions.SAFE_METHODS or self.write_operation is None:
            # Unsupported write methods fall through to 405 once authorized
            return self.read_operation
        return self.write_operation


class RecordListView(PatientRecordMixin, generics.ListAPIView):
    """
    Raw list of one record kind for a patient, newest first.
    """
    kind = None
    filter_backends = []

    def get_queryset(self):
        store = STORES_BY_KIND[self.kind]
        return store.queryset(self.get_patient_id()).order_by('-created_at', '-id')


class VitalListView(RecordListView):
    """GET /api/v1/patients/{patient_id}/vitals/"""
    kind = RecordKind.VITAL
    read_operation = Operation.VITALS_READ
    serializer_class = VitalSerializer


class FileListView(RecordListView):
    """GET /api/v1/patients/{patient_id}/files/"""
    kind = RecordKind.FILE
    read_operation = Operation.FILES_READ
    serializer_class = RecordFileSerializer


class NoteListCreateView(RecordListView):
    """
    GET /api/v1/patients/{patient_id}/notes/ - patient (own) or consulting doctor
    POST /api/v1/patients/{patient_id}/notes/ - consulting doctor only
    """
    kind = RecordKind.NOTE
    read_operation = Operation.NOTES_READ
    write_operation = Operation.NOTES_WRITE
    serializer_class = NoteSerializer

    def post(self, request, patient_id=None):
        serializer = NoteWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        note = add_note(patient_id, request.user, serializer.validated_data['content'])
        return Response(
            {'message': 'Note added', 'note': NoteSerializer(note).data},
            status=status.HTTP_201_CREATED
        )


class PrescriptionListCreateView(RecordListView):
    """
    GET /api/v1/patients/{patient_id}/prescriptions/ - patient (own) or consulting doctor
    POST /api/v1/patients/{patient_id}/prescriptions/ - consulting doctor only
    """
    kind = RecordKind.PRESCRIPTION
    read_operation = Operation.PRESCRIPTIONS_READ
    write_operation = Operation.PRESCRIPTIONS_WRITE
    serializer_class = PrescriptionSerializer

    def post(self, request, patient_id=None):
        serializer = PrescriptionWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        prescription = issue_prescription(
            patient_id,
            request.user,
            serializer.validated_data['medications'],
            serializer.validated_data['instructions'],
        )
        return Response(
            {
                'message': 'Prescription issued successfully.',
                'prescription': PrescriptionSerializer(prescription).data,
            },
            status=status.HTTP_201_CREATED
        )


class MyPrescriptionsView(RecordListView):
    """
    GET /api/v1/me/prescriptions/

    Shortcut for a patient reading their own prescriptions, newest first.
    """
    permission_classes = [IsPatient, PatientRecordPermission]
    kind = RecordKind.PRESCRIPTION
    read_operation = Operation.PRESCRIPTIONS_READ
    serializer_class = PrescriptionSerializer

    def get_patient_id(self):
        return str(self.request.user.id)


class TimelineView(PatientRecordMixin, APIView):
    """
    GET /api/v1/patients/{patient_id}/timeline/

    All of the patient's records merged into one sequence, oldest first.
    Fails with 503 rather than returning a timeline missing a record kind.
    """
    read_operation = Operation.TIMELINE_READ

    def get(self, request, patient_id=None):
        try:
            timeline = aggregate(patient_id)
        except PartialDataError as e:
            return Response(
                {
                    'error': {
                        'code': 'PARTIAL_DATA',
                        'message': str(e),
                        'details': {'kind': e.kind.value},
                    }
                },
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response(TimelineSerializer(timeline).data)
