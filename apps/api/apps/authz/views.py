"""
Authz views - doctor's consulted patients and consultation management.
"""
import logging
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.consultations import (
    ConsultationError,
    consulted_patients_queryset,
    end_consultation,
    start_consultation,
)
from apps.authz.permissions import IsDoctor
from apps.authz.serializers import (
    ConsultationCreateSerializer,
    ConsultationLinkSerializer,
    ConsultedPatientSerializer,
)

logger = logging.getLogger(__name__)


class MyPatientsView(generics.ListAPIView):
    """
    GET /api/v1/doctor/my-patients/

    Lists the patients in the requesting doctor's consulted set.

    Query parameters:
    - ?search=term - case-insensitive match on name or email
    """
    permission_classes = [IsDoctor]
    serializer_class = ConsultedPatientSerializer
    filter_backends = []

    def get_queryset(self):
        search = self.request.query_params.get('search')
        return consulted_patients_queryset(self.request.user, search=search)


class ConsultationView(APIView):
    """
    POST /api/v1/doctor/consultations/ - add a patient to my consulted set
    DELETE /api/v1/doctor/consultations/{patient_id}/ - remove a patient

    A doctor only ever edits their own consulted set.
    """
    permission_classes = [IsDoctor]

    def post(self, request):
        serializer = ConsultationCreateSerializer(data=request.data, context={})
        serializer.is_valid(raise_exception=True)
        patient = serializer.context['patient']

        try:
            link, created = start_consultation(request.user, patient)
        except ConsultationError as e:
            return Response(
                {'error': {'code': 'INVALID_CONSULTATION', 'message': str(e)}},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            ConsultationLinkSerializer(link).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    def delete(self, request, patient_id=None):
        removed = end_consultation(request.user, patient_id)
        if not removed:
            return Response(
                {'error': {'code': 'NOT_FOUND', 'message': 'You are not consulting this patient.'}},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
