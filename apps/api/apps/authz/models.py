"""
Authz models: auth_user, consultation_link
"""
import uuid
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin


# ============================================================================
# Enums
# ============================================================================

class RoleChoices(models.TextChoices):
    """
    Actor roles.

    - PATIENT: owns a health record, may read it
    - DOCTOR: may read and write the records of patients they consult
    """
    PATIENT = 'patient', 'Patient'
    DOCTOR = 'doctor', 'Doctor'


# ============================================================================
# User Management
# ============================================================================

class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        return self.create_user(email, password, **extra_fields)

    def patients(self):
        return self.filter(role=RoleChoices.PATIENT)

    def doctors(self):
        return self.filter(role=RoleChoices.DOCTOR)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom user model for authentication.

    A user is either a patient or a doctor. The role is established at
    registration and is what the authorization guard sees as the actor role.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255)
    name = models.CharField(max_length=255, blank=True)
    role = models.CharField(
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.PATIENT
    )
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)  # Required for admin access
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'auth_user'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        indexes = [
            models.Index(fields=['email'], name='idx_user_email'),
            models.Index(fields=['role'], name='idx_user_role'),
        ]

    def __str__(self):
        return self.email

    @property
    def is_doctor(self):
        return self.role == RoleChoices.DOCTOR

    @property
    def is_patient(self):
        return self.role == RoleChoices.PATIENT


# ============================================================================
# Consultations
# ============================================================================

class ConsultationLink(models.Model):
    """
    Directed grant: a doctor consults a patient.

    The set of links leaving a doctor is that doctor's consulted-patient set.
    Only this doctor-owned direction is ever checked by authorization; there
    is no patient-side mirror to keep in sync.
    """
    doctor = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='consultation_links',
        limit_choices_to={'role': RoleChoices.DOCTOR},
    )
    patient = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='consulted_by_links',
        limit_choices_to={'role': RoleChoices.PATIENT},
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'consultation_link'
        verbose_name = 'Consultation Link'
        verbose_name_plural = 'Consultation Links'
        constraints = [
            models.UniqueConstraint(
                fields=['doctor', 'patient'],
                name='uniq_consultation_doctor_patient',
            ),
        ]
        indexes = [
            models.Index(fields=['doctor'], name='idx_consultation_doctor'),
        ]

    def __str__(self):
        return f"{self.doctor.email} -> {self.patient.email}"
