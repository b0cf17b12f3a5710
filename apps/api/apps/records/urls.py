"""
Record URLs - Patient-scoped records and timeline.
"""
from django.urls import path

from .views import (
    FileListView,
    MyPrescriptionsView,
    NoteListCreateView,
    PrescriptionListCreateView,
    TimelineView,
    VitalListView,
)

urlpatterns = [
    path('patients/<uuid:patient_id>/vitals/', VitalListView.as_view(), name='patient-vitals'),
    path('patients/<uuid:patient_id>/files/', FileListView.as_view(), name='patient-files'),
    path('patients/<uuid:patient_id>/notes/', NoteListCreateView.as_view(), name='patient-notes'),
    path('patients/<uuid:patient_id>/prescriptions/', PrescriptionListCreateView.as_view(), name='patient-prescriptions'),
    path('patients/<uuid:patient_id>/timeline/', TimelineView.as_view(), name='patient-timeline'),
    path('me/prescriptions/', MyPrescriptionsView.as_view(), name='my-prescriptions'),
]
