"""MongoDB helpers for the application."""

from datetime import datetime, timezone

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from .config import STUDENTS_COLLECTION, get_mongo_uri

_indexed_collections = set()


def utc_now() -> datetime:
    """Return the current time as naive UTC at BSON (millisecond) precision."""

    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _naive_utc(value):
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def create_client(uri=None) -> MongoClient:
    """Create a MongoDB client using the configured URI."""

    return MongoClient(uri or get_mongo_uri(), serverSelectionTimeoutMS=5000)


def _ensure_students_indexes(collection: Collection) -> None:
    key = (collection.database.name, collection.name)
    if key in _indexed_collections:
        return

    collection.create_index("huid", name="huid_idx")
    collection.create_index([("name", ASCENDING)], name="name_asc")
    _indexed_collections.add(key)


def get_students_collection(database: Database) -> Collection:
    """Return the collection that stores student documents."""

    collection = database[STUDENTS_COLLECTION]
    _ensure_students_indexes(collection)
    return collection


def serialize_academic_record(document):
    return {
        "level": document.get("level"),
        "program": document.get("program"),
        "status": document.get("status"),
    }


def serialize_student(document):
    """Convert a MongoDB student document into a template-friendly dict."""

    academics = document.get("academics", [])
    if not isinstance(academics, list):
        academics = []

    return {
        "id": str(document.get("_id", "")),
        "name": document.get("name"),
        "huid": document.get("huid"),
        "email": document.get("email"),
        "academics": [
            serialize_academic_record(entry)
            for entry in academics
            if isinstance(entry, dict)
        ],
        "createdAt": _naive_utc(document.get("createdAt")),
        "updatedAt": _naive_utc(document.get("updatedAt")),
    }


__all__ = [
    "create_client",
    "utc_now",
    "get_students_collection",
    "serialize_academic_record",
    "serialize_student",
]
