"""
Authz URLs - Doctor's consulted patients and consultations.
"""
from django.urls import path

from .views import ConsultationView, MyPatientsView

urlpatterns = [
    path('doctor/my-patients/', MyPatientsView.as_view(), name='doctor-my-patients'),
    path('doctor/consultations/', ConsultationView.as_view(), name='doctor-consultations'),
    path('doctor/consultations/<uuid:patient_id>/', ConsultationView.as_view(), name='doctor-consultation-detail'),
]
