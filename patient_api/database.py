"""MongoDB client lifecycle."""
import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, PyMongoError

from patient_api.config import Settings

logger = logging.getLogger(__name__)


def create_mongo_client(settings: Settings) -> MongoClient:
    """Create the process-wide MongoDB client.

    The client connects lazily; use ``check_mongodb_connection`` to find out
    whether the server is actually reachable.
    """
    return MongoClient(
        settings.MONGO_URI,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )


def check_mongodb_connection(client: MongoClient) -> bool:
    """Ping the server behind ``client``."""
    try:
        client.admin.command("ping")
        return True
    except ConnectionFailure as e:
        logger.error(f"MongoDB connection failed: {e}")
        return False
    except PyMongoError as e:
        logger.error(f"MongoDB check error: {e}")
        return False


def get_patients_collection(client: MongoClient, settings: Settings) -> Collection:
    """Resolve the patients collection.

    The database named in ``MONGO_URI`` wins; ``MONGODB_DB`` is used when
    the URI names none.
    """
    db = client.get_default_database(default=settings.MONGODB_DB)
    return db[settings.MONGODB_COLLECTION]


def close_mongo_client(client: Optional[MongoClient]) -> None:
    if client is not None:
        client.close()
        logger.info("MongoDB client closed")
