"""Patient repository over a MongoDB collection."""

from typing import Any, Dict, List, Optional
import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from patient_api.exceptions import PatientValidationError, StorageError
from patient_api.schemas.patient import Patient

logger = logging.getLogger(__name__)


class PatientRepository:
    """CRUD operations for patient documents.

    Every driver failure, including an id that does not parse as an
    ObjectId, is raised as ``StorageError``. Lookups that match nothing
    return ``None`` and leave the not-found decision to the caller.
    """

    def __init__(self, collection: Collection):
        """Initialize the repository.

        Args:
            collection: Collection holding patient documents
        """
        self.collection = collection

    def list_all(self) -> List[Patient]:
        """Return every stored patient in store-native order."""
        try:
            documents = list(self.collection.find())
        except PyMongoError as e:
            raise self._storage_error("list", e) from e

        return [Patient.from_document(doc) for doc in documents]

    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        """Fetch one patient.

        Args:
            patient_id: Hex string of the document ObjectId

        Returns:
            The patient, or None if no document matches
        """
        try:
            document = self.collection.find_one({"_id": ObjectId(patient_id)})
        except (InvalidId, TypeError, PyMongoError) as e:
            raise self._storage_error("get", e) from e

        return Patient.from_document(document) if document else None

    def create(
        self,
        patient_name: Optional[str],
        doctor_assigned: Optional[str],
        diagnosis: Optional[str] = None,
    ) -> Patient:
        """Insert a new patient; the store assigns its id."""
        document = self._build_document(patient_name, doctor_assigned, diagnosis)

        try:
            result = self.collection.insert_one(document)
        except PyMongoError as e:
            raise self._storage_error("create", e) from e

        document["_id"] = result.inserted_id
        logger.info(f"Created patient {result.inserted_id}")
        return Patient.from_document(document)

    def update(
        self,
        patient_id: str,
        patient_name: Optional[str],
        doctor_assigned: Optional[str],
        diagnosis: Optional[str] = None,
    ) -> Optional[Patient]:
        """Overwrite all mutable fields of a patient.

        The stored document is replaced with exactly the supplied values, so
        a missing diagnosis removes the existing one.

        Returns:
            The updated patient, or None if no document matches
        """
        document = self._build_document(patient_name, doctor_assigned, diagnosis)

        try:
            updated = self.collection.find_one_and_replace(
                {"_id": ObjectId(patient_id)},
                document,
                return_document=ReturnDocument.AFTER,
            )
        except (InvalidId, TypeError, PyMongoError) as e:
            raise self._storage_error("update", e) from e

        if updated is None:
            return None

        logger.info(f"Updated patient {patient_id}")
        return Patient.from_document(updated)

    def delete_by_id(self, patient_id: str) -> Optional[Patient]:
        """Remove a patient and return the deleted record, or None."""
        try:
            deleted = self.collection.find_one_and_delete({"_id": ObjectId(patient_id)})
        except (InvalidId, TypeError, PyMongoError) as e:
            raise self._storage_error("delete", e) from e

        if deleted is None:
            return None

        logger.info(f"Deleted patient {patient_id}")
        return Patient.from_document(deleted)

    @staticmethod
    def _build_document(
        patient_name: Optional[str],
        doctor_assigned: Optional[str],
        diagnosis: Optional[str],
    ) -> Dict[str, Any]:
        missing = [
            field
            for field, value in (("patientName", patient_name), ("doctorAssigned", doctor_assigned))
            if not value
        ]
        if missing:
            raise PatientValidationError(
                "; ".join(f"{field}: Field required" for field in missing)
            )

        document: Dict[str, Any] = {
            "patientName": patient_name,
            "doctorAssigned": doctor_assigned,
        }
        # An absent diagnosis is stored as a missing key
        if diagnosis is not None:
            document["diagnosis"] = diagnosis
        return document

    @staticmethod
    def _storage_error(operation: str, exc: Exception) -> StorageError:
        logger.warning(f"Patient {operation} failed: {exc}")
        return StorageError.from_exception(exc)
