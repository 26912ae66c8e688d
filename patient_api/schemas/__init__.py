"""API schemas."""

from patient_api.schemas.patient import Patient, PatientIn

__all__ = [
    "Patient",
    "PatientIn",
]
