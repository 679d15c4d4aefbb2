"""Student record store backed by a single MongoDB collection."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Dict, List, Mapping, TypeVar, cast

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .db import serialize_student, utc_now
from .schema import ValidationError, require_valid_academic_record, require_valid_student

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])


class StudentStoreError(Exception):
    """Base class for record store failures."""


class StudentNotFound(StudentStoreError):
    """Raised when no student matches the requested id."""

    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student {student_id} not found.")


class InvalidStudentId(StudentStoreError):
    """Raised when a student id is not a well-formed ObjectId."""

    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"{student_id!r} is not a valid student id.")


class StoreUnavailable(StudentStoreError):
    """Raised when MongoDB cannot be reached or rejects an operation."""


def _wrap_db_errors(action: str) -> Callable[[_F], _F]:
    def decorator(func: _F) -> _F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            try:
                return func(*args, **kwargs)
            except PyMongoError as exc:
                logger.exception("%s due to MongoDB error", action)
                raise StoreUnavailable(str(exc)) from exc

        return cast(_F, wrapper)

    return decorator


def _object_id(student_id: Any) -> ObjectId:
    if isinstance(student_id, ObjectId):
        return student_id
    try:
        return ObjectId(str(student_id))
    except (InvalidId, TypeError):
        raise InvalidStudentId(str(student_id)) from None


class StudentStore:
    """Count, list, find, create, update and delete student documents.

    Every mutation is one single-document write, so MongoDB's document-level
    atomicity is the only consistency guarantee. Concurrent updates to the
    same student are not reconciled; the last write wins.
    """

    def __init__(self, collection: Collection, client=None):
        self.collection = collection
        self._client = client

    @_wrap_db_errors("Failed to count students")
    def count(self) -> int:
        return self.collection.count_documents({})

    @_wrap_db_errors("Failed to list students")
    def list_all(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort("_id", ASCENDING)
        return [serialize_student(document) for document in cursor]

    @_wrap_db_errors("Failed to load student")
    def find_by_id(self, student_id: Any) -> Dict[str, Any]:
        object_id = _object_id(student_id)
        document = self.collection.find_one({"_id": object_id})
        if document is None:
            raise StudentNotFound(str(student_id))
        return serialize_student(document)

    @_wrap_db_errors("Failed to create student")
    def create(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        document = require_valid_student(fields)
        document.setdefault("academics", [])
        timestamp = utc_now()
        document["createdAt"] = timestamp
        document["updatedAt"] = timestamp

        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created student %s", result.inserted_id)
        return serialize_student(document)

    @_wrap_db_errors("Failed to update student")
    def update(self, student_id: Any, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Overwrite name, huid and email of an existing student."""

        object_id = _object_id(student_id)
        cleaned = require_valid_student(
            {field: fields.get(field) for field in ("name", "huid", "email")}
        )
        cleaned["updatedAt"] = utc_now()

        document = self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": cleaned},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            raise StudentNotFound(str(student_id))
        return serialize_student(document)

    @_wrap_db_errors("Failed to add academic record")
    def add_academic_record(
        self, student_id: Any, record: Mapping[str, Any]
    ) -> Dict[str, Any]:
        object_id = _object_id(student_id)
        cleaned = require_valid_academic_record(record)

        document = self.collection.find_one_and_update(
            {"_id": object_id},
            {"$push": {"academics": cleaned}, "$set": {"updatedAt": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            raise StudentNotFound(str(student_id))
        return serialize_student(document)

    @_wrap_db_errors("Failed to delete student")
    def delete_by_id(self, student_id: Any) -> None:
        object_id = _object_id(student_id)
        result = self.collection.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise StudentNotFound(str(student_id))
        logger.info("Deleted student %s", object_id)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


__all__ = [
    "InvalidStudentId",
    "StoreUnavailable",
    "StudentNotFound",
    "StudentStore",
    "StudentStoreError",
    "ValidationError",
]
