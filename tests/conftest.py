"""Pytest configuration and fixtures."""

import copy
from typing import AsyncGenerator, Any, Dict, List, Optional

import pytest
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from patient_api.dependencies import get_patient_repository
from patient_api.main import app
from patient_api.repositories import PatientRepository


class InsertResult:
    def __init__(self, inserted_id: ObjectId):
        self.inserted_id = inserted_id


class InMemoryCollection:
    """Stand-in for the subset of ``pymongo.collection.Collection`` in use."""

    full_name = "test.patients"

    def __init__(self):
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.writes = 0

    def _match(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.documents.get(query["_id"])

    def find(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self.documents.values()]

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._match(query)
        return copy.deepcopy(doc) if doc else None

    def insert_one(self, document: Dict[str, Any]) -> InsertResult:
        self.writes += 1
        _id = ObjectId()
        self.documents[_id] = {"_id": _id, **copy.deepcopy(document)}
        return InsertResult(_id)

    def find_one_and_replace(self, query, replacement, return_document=ReturnDocument.BEFORE):
        before = self._match(query)
        if before is None:
            return None
        self.writes += 1
        after = {"_id": before["_id"], **copy.deepcopy(replacement)}
        self.documents[before["_id"]] = after
        return copy.deepcopy(after if return_document == ReturnDocument.AFTER else before)

    def find_one_and_delete(self, query):
        doc = self._match(query)
        if doc is None:
            return None
        self.writes += 1
        return self.documents.pop(doc["_id"])


class UnreachableCollection:
    """Collection whose every call fails like a lost connection."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

    find = find_one = insert_one = find_one_and_replace = find_one_and_delete = _fail


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def collection() -> InMemoryCollection:
    return InMemoryCollection()


@pytest.fixture
def repository(collection) -> PatientRepository:
    return PatientRepository(collection)


@pytest.fixture
def broken_repository() -> PatientRepository:
    return PatientRepository(UnreachableCollection())


@pytest.fixture
async def client(collection) -> AsyncGenerator:
    """HTTP client against the app with the store swapped for ``collection``."""
    app.dependency_overrides[get_patient_repository] = lambda: PatientRepository(collection)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def broken_client(broken_repository) -> AsyncGenerator:
    """HTTP client whose store is unreachable."""
    app.dependency_overrides[get_patient_repository] = lambda: broken_repository
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def sample_patient():
    """Sample patient body for testing."""
    return {
        "patientName": "Jane Doe",
        "doctorAssigned": "Dr. Smith",
        "diagnosis": "flu",
    }
