from __future__ import annotations

import atexit
import logging
from pathlib import Path

from flask import Flask, Response
from pymongo.errors import PyMongoError

from student_records import config
from student_records.db import create_client, get_students_collection
from student_records.routes import students_bp
from student_records.store import (
    InvalidStudentId,
    StoreUnavailable,
    StudentNotFound,
    StudentStore,
)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATE_FOLDER = BASE_DIR / "templates"

NOT_FOUND_MESSAGE = "404: Student Not Found"

logger = logging.getLogger(__name__)


def _text_response(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _connect_store() -> StudentStore:
    client = create_client()
    database = client[config.get_db_name()]

    try:
        database.command("ping")
        collection = get_students_collection(database)
        logger.info("Connected to DB")
    except PyMongoError as exc:
        # No retry here; requests fail with StoreUnavailable until Mongo is up.
        logger.error("Could not connect to database: %s", exc)
        collection = database[config.STUDENTS_COLLECTION]

    store = StudentStore(collection, client=client)
    atexit.register(store.close)
    return store


def _not_found(_exc):
    return _text_response(NOT_FOUND_MESSAGE, 404)


def _missing_student(exc):
    logger.info("%s", exc)
    return _text_response(NOT_FOUND_MESSAGE, 404)


def _store_unavailable(_exc):
    return _text_response("Database unavailable. Please try again later.", 503)


def create_app(store: StudentStore | None = None, *, secret_key: str | None = None) -> Flask:
    """Build the Flask application around a student store.

    Without an explicit ``store`` one is connected from the environment
    configuration and closed at interpreter exit.
    """

    app = Flask(__name__, template_folder=str(TEMPLATE_FOLDER))
    app.secret_key = secret_key or config.SECRET_KEY
    app.config["SESSION_COOKIE_NAME"] = config.SESSION_COOKIE_NAME

    app.extensions["student_store"] = store if store is not None else _connect_store()

    app.register_blueprint(students_bp)

    # Unknown paths and unsupported methods share the same response.
    app.register_error_handler(404, _not_found)
    app.register_error_handler(405, _not_found)
    app.register_error_handler(StudentNotFound, _missing_student)
    app.register_error_handler(InvalidStudentId, _missing_student)
    app.register_error_handler(StoreUnavailable, _store_unavailable)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=True)
