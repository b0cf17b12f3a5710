"""
Summary URLs.
"""
from django.urls import path

from .views import PatientSummaryView

urlpatterns = [
    path('patients/<uuid:patient_id>/summary/', PatientSummaryView.as_view(), name='patient-summary'),
]
