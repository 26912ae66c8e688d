"""Error taxonomy for the patient service.

Every error raised by the repository or the routers derives from
``PatientServiceError`` and carries the HTTP status it maps to. The
exception handlers in ``patient_api.main`` turn them into the
``"Error: ..."`` JSON strings returned to clients.
"""


class PatientServiceError(Exception):
    """Base class for errors surfaced by the patient API."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class PatientValidationError(PatientServiceError):
    """A required patient field is missing or empty."""

    def __str__(self) -> str:
        return f"ValidationError: {self.message}"


class PatientNotFoundError(PatientServiceError):
    """No patient document matches the requested id."""

    status_code = 404

    def __init__(self, patient_id: str):
        super().__init__("Patient not found")
        self.patient_id = patient_id


class StorageError(PatientServiceError):
    """The document store rejected or failed a query.

    Covers connectivity loss, malformed ids and any other driver error.
    """

    @classmethod
    def from_exception(cls, exc: Exception) -> "StorageError":
        return cls(f"{type(exc).__name__}: {exc}")
