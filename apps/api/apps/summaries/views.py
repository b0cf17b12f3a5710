"""
Summary views - AI health summary of a patient's record.
"""
import logging
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.guard import Operation
from apps.authz.models import RoleChoices
from apps.records.timeline import PartialDataError, aggregate
from apps.records.views import PatientRecordMixin
from apps.summaries.services import build_and_dispatch_summary

User = get_user_model()
logger = logging.getLogger(__name__)


class PatientSummaryView(PatientRecordMixin, APIView):
    """
    GET /api/v1/patients/{patient_id}/summary/

    Consulting doctors only. Aggregates the patient's timeline and asks the
    external summarizer for a concise health summary.

    Responses:
    - 200 {"summary": "..."}
    - 403 not consulting this patient
    - 404 patient not found
    - 500 SUMMARIZER_NOT_CONFIGURED
    - 503 PARTIAL_DATA | SUMMARY_UNAVAILABLE
    """
    read_operation = Operation.SUMMARY_READ

    def get(self, request, patient_id=None):
        patient = User.objects.filter(id=patient_id, role=RoleChoices.PATIENT).first()
        if patient is None:
            return Response(
                {'error': {'code': 'NOT_FOUND', 'message': 'Patient not found.'}},
                status=status.HTTP_404_NOT_FOUND
            )

        try:
            timeline = aggregate(patient.id)
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

        result = build_and_dispatch_summary(patient, timeline)

        if result.is_config_error:
            return Response(
                {
                    'error': {
                        'code': 'SUMMARIZER_NOT_CONFIGURED',
                        'message': result.detail,
                    }
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        if not result.ok:
            return Response(
                {
                    'error': {
                        'code': 'SUMMARY_UNAVAILABLE',
                        'message': 'Failed to generate summary from AI.',
                        'details': {'reason': result.reason.value, 'detail': result.detail},
                    }
                },
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response({'summary': result.summary_text}, status=status.HTTP_200_OK)
