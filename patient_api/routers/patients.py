"""Patient CRUD router."""
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends

from patient_api.dependencies import get_patient_repository
from patient_api.exceptions import PatientNotFoundError
from patient_api.repositories import PatientRepository
from patient_api.schemas.patient import Patient, PatientIn

router = APIRouter(prefix="/api/v1/patient", tags=["Patients"])

Repository = Annotated[PatientRepository, Depends(get_patient_repository)]


@router.get("/", response_model=List[Patient], response_model_exclude_none=True)
def list_patients(repo: Repository):
    """Get all patients."""
    return repo.list_all()


@router.get("/{patient_id}", response_model=Optional[Patient], response_model_exclude_none=True)
def get_patient(patient_id: str, repo: Repository):
    """Get a patient by id; null when nothing matches."""
    return repo.get_by_id(patient_id)


@router.post("/", response_model=str)
def add_patient(data: PatientIn, repo: Repository):
    """Add a new patient."""
    repo.create(data.patient_name, data.doctor_assigned, data.diagnosis)
    return "Patient added!"


@router.put("/update/{patient_id}", response_model=str)
def update_patient(patient_id: str, data: PatientIn, repo: Repository):
    """Replace every field of an existing patient."""
    updated = repo.update(patient_id, data.patient_name, data.doctor_assigned, data.diagnosis)
    if updated is None:
        raise PatientNotFoundError(patient_id)
    return "Patient updated!"


@router.delete("/delete/{patient_id}", response_model=str)
def delete_patient(patient_id: str, repo: Repository):
    """Delete a patient."""
    deleted = repo.delete_by_id(patient_id)
    if deleted is None:
        raise PatientNotFoundError(patient_id)
    return "Patient deleted."
