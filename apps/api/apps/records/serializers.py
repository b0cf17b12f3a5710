"""
Record serializers for vitals, files, notes, prescriptions and the timeline.
"""
from rest_framework import serializers

from apps.records.models import Note, Prescription, RecordFile, Vital
from apps.records.stores import RecordKind


class AuthorSerializer(serializers.Serializer):
    """Nested doctor reference (name and email only)."""
    id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)


class VitalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vital
        fields = ['id', 'patient_id', 'bp', 'sugar', 'heart_rate', 'temperature', 'weight', 'created_at']
        read_only_fields = fields


class RecordFileSerializer(serializers.ModelSerializer):
    class Meta:
        model = RecordFile
        fields = ['id', 'patient_id', 'file_name', 'file_url', 'content_type', 'size_bytes', 'created_at']
        read_only_fields = fields


class NoteSerializer(serializers.ModelSerializer):
    """Serializer for Note read views (author populated)."""
    doctor = AuthorSerializer(read_only=True)

    class Meta:
        model = Note
        fields = ['id', 'patient_id', 'doctor', 'content', 'created_at']
        read_only_fields = fields


class NoteWriteSerializer(serializers.Serializer):
    """Input for POST /api/v1/patients/{id}/notes/."""
    content = serializers.CharField(
        allow_blank=False,
        trim_whitespace=True,
        error_messages={'required': 'Note content is required.', 'blank': 'Note content is required.'},
    )


class PrescriptionSerializer(serializers.ModelSerializer):
    """Serializer for Prescription read views (author populated)."""
    doctor = AuthorSerializer(read_only=True)

    class Meta:
        model = Prescription
        fields = ['id', 'patient_id', 'doctor', 'medications', 'instructions', 'created_at']
        read_only_fields = fields


class PrescriptionWriteSerializer(serializers.Serializer):
    """Input for POST /api/v1/patients/{id}/prescriptions/."""
    medications = serializers.ListField(
        child=serializers.CharField(allow_blank=False, trim_whitespace=True, max_length=255),
        allow_empty=False,
        error_messages={'required': 'Medications and instructions are required.'},
    )
    instructions = serializers.CharField(
        allow_blank=False,
        trim_whitespace=True,
        error_messages={'required': 'Medications and instructions are required.'},
    )


RECORD_SERIALIZERS = {
    RecordKind.VITAL: VitalSerializer,
    RecordKind.NOTE: NoteSerializer,
    RecordKind.FILE: RecordFileSerializer,
    RecordKind.PRESCRIPTION: PrescriptionSerializer,
}


class TimelineEntrySerializer(serializers.Serializer):
    """One timeline entry: its kind, timestamp and the kind-specific record."""
    kind = serializers.CharField(read_only=True)
    created_at = serializers.DateTimeField(read_only=True)
    record = serializers.SerializerMethodField()

    def get_record(self, entry):
        serializer_class = RECORD_SERIALIZERS[entry.kind]
        return serializer_class(entry.record, context=self.context).data


class TimelineSerializer(serializers.Serializer):
    patient_id = serializers.CharField(read_only=True)
    count = serializers.SerializerMethodField()
    entries = TimelineEntrySerializer(many=True, read_only=True)

    def get_count(self, timeline):
        return len(timeline)
