"""
Authz permissions for DRF endpoints.
"""
from rest_framework import permissions

from apps.authz.guard import Actor, authorize
from apps.authz.models import RoleChoices
from apps.core.observability.correlation import bind_actor


class IsDoctor(permissions.BasePermission):
    """
    Permission class that only allows doctors.

    Used for endpoints that manage the doctor's own consulted set.
    """
    message = 'Access denied. Doctors only.'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        bind_actor(request.user)
        return request.user.role == RoleChoices.DOCTOR


class IsPatient(permissions.BasePermission):
    """Permission class that only allows patients."""
    message = 'Access denied. Patients only.'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        bind_actor(request.user)
        return request.user.role == RoleChoices.PATIENT


class PatientRecordPermission(permissions.BasePermission):
    """
    Permission for endpoints scoped to one patient's record.

    The view names the guarded operation through ``get_record_operation()``
    (read operation for safe methods, write operation otherwise) and the
    target patient through ``get_patient_id()``. The decision is delegated
    to the authorization guard on every request.
    """
    message = 'Access denied. Not authorized to access this patient record.'

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        bind_actor(request.user)

        operation = view.get_record_operation()
        if operation is None:
            return False

        decision = authorize(
            Actor.from_user(request.user),
            view.get_patient_id(),
            operation,
        )
        return decision.allowed
