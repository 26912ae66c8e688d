"""Patient schemas."""
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, model_validator


class PatientIn(BaseModel):
    """Request body for creating or updating a patient."""

    patient_name: str = Field(..., alias="patientName", min_length=1)
    doctor_assigned: str = Field(..., alias="doctorAssigned", min_length=1)
    diagnosis: Optional[str] = None


class Patient(BaseModel):
    """Patient document as stored in MongoDB.

    Keys outside the known fields (e.g. a version key written by another
    client) are kept and returned as-is.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., alias="_id")
    patient_name: str = Field(..., alias="patientName")
    doctor_assigned: str = Field(..., alias="doctorAssigned")
    diagnosis: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def stringify_object_ids(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: str(v) if isinstance(v, ObjectId) else v for k, v in data.items()}
        return data

    @classmethod
    def from_document(cls, document: dict) -> "Patient":
        return cls.model_validate(document)
