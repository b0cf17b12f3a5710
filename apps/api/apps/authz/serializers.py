"""
Authz serializers for consultations.
"""
from rest_framework import serializers

from apps.authz.models import ConsultationLink, RoleChoices, User


class ConsultedPatientSerializer(serializers.ModelSerializer):
    """Patient as listed in a doctor's consulted set (no credentials)."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'created_at']
        read_only_fields = fields


class ConsultationLinkSerializer(serializers.ModelSerializer):
    """Serializer for a consultation link."""
    doctor_id = serializers.UUIDField(read_only=True)
    patient = ConsultedPatientSerializer(read_only=True)

    class Meta:
        model = ConsultationLink
        fields = ['id', 'doctor_id', 'patient', 'created_at']
        read_only_fields = fields


class ConsultationCreateSerializer(serializers.Serializer):
    """Input for POST /api/v1/doctor/consultations/."""
    patient_id = serializers.UUIDField()

    def validate_patient_id(self, value):
        patient = User.objects.filter(
            id=value,
            role=RoleChoices.PATIENT,
            is_active=True,
        ).first()
        if patient is None:
            raise serializers.ValidationError('Patient not found.')
        self.context['patient'] = patient
        return value
