"""Data access layer."""

from patient_api.repositories.patient import PatientRepository

__all__ = ["PatientRepository"]
