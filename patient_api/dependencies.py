from fastapi import Request

from patient_api.exceptions import StorageError
from patient_api.repositories import PatientRepository


def get_patient_repository(request: Request) -> PatientRepository:
    """Build a repository over the collection opened at startup."""
    collection = getattr(request.app.state, "patients_collection", None)
    if collection is None:
        raise StorageError("ConfigurationError: MongoDB client is not initialized")
    return PatientRepository(collection)
