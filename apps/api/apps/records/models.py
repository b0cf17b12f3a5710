"""
Record models: vital, record_file, note, prescription

Every record belongs to one patient. Notes and prescriptions are authored
by a doctor; vitals and files come from the patient or a device.
The auto-increment primary key is the stable creation order used to break
ties between records with the same created_at.
"""
from django.conf import settings
from django.db import models
from django.utils import timezone


class PatientRecord(models.Model):
    """Fields shared by every record kind."""
    patient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        abstract = True
        ordering = ['created_at', 'id']


class Vital(PatientRecord):
    """
    A set of measurements taken at one point in time.

    Every measurement is optional; only the ones present are reported.
    """
    bp = models.CharField(max_length=20, blank=True, default='', help_text='Blood pressure, e.g. 120/80')
    sugar = models.DecimalField(max_digits=6, decimal_places=1, null=True, blank=True, help_text='Blood sugar (mg/dL)')
    heart_rate = models.PositiveSmallIntegerField(null=True, blank=True, help_text='Beats per minute')
    temperature = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True, help_text='Body temperature (C)')
    weight = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True, help_text='Weight (kg)')

    class Meta(PatientRecord.Meta):
        db_table = 'record_vital'
        verbose_name = 'Vital'
        verbose_name_plural = 'Vitals'
        indexes = [
            models.Index(fields=['patient', 'created_at'], name='idx_vital_patient_created'),
        ]

    def __str__(self):
        return f"Vital {self.pk} ({self.created_at:%Y-%m-%d})"


class RecordFile(PatientRecord):
    """
    Metadata of a file uploaded to the patient's record.

    The file itself lives in external storage; only its name and reference
    are kept here.
    """
    file_name = models.CharField(max_length=255)
    file_url = models.URLField(max_length=500, blank=True, default='')
    content_type = models.CharField(max_length=100, blank=True, default='')
    size_bytes = models.PositiveBigIntegerField(null=True, blank=True)

    class Meta(PatientRecord.Meta):
        db_table = 'record_file'
        verbose_name = 'Record File'
        verbose_name_plural = 'Record Files'
        indexes = [
            models.Index(fields=['patient', 'created_at'], name='idx_file_patient_created'),
        ]

    def __str__(self):
        return self.file_name


class Note(PatientRecord):
    """Free-text clinical note written by a doctor."""
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='authored_notes',
    )
    content = models.TextField()

    class Meta(PatientRecord.Meta):
        db_table = 'record_note'
        verbose_name = 'Note'
        verbose_name_plural = 'Notes'
        indexes = [
            models.Index(fields=['patient', 'created_at'], name='idx_note_patient_created'),
        ]

    def __str__(self):
        return f"Note {self.pk} ({self.created_at:%Y-%m-%d})"


class Prescription(PatientRecord):
    """Medications issued by a doctor, with instructions."""
    doctor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='issued_prescriptions',
    )
    medications = models.JSONField(default=list, help_text='List of medication strings')
    instructions = models.TextField()

    class Meta(PatientRecord.Meta):
        db_table = 'record_prescription'
        verbose_name = 'Prescription'
        verbose_name_plural = 'Prescriptions'
        indexes = [
            models.Index(fields=['patient', 'created_at'], name='idx_rx_patient_created'),
        ]

    def __str__(self):
        return f"Prescription {self.pk} ({self.created_at:%Y-%m-%d})"
