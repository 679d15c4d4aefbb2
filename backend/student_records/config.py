"""Application configuration helpers."""

import os
from urllib.parse import quote_plus

from dotenv import load_dotenv

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DOTENV_PATH = os.path.join(_BASE_DIR, ".env")

if os.path.exists(_DOTENV_PATH):
    load_dotenv(_DOTENV_PATH)


class ConfigError(RuntimeError):
    """Raised when configuration values are missing or invalid."""


DEFAULT_DB_NAME = "students"
STUDENTS_COLLECTION = "student"

SECRET_KEY = (
    os.getenv("SESSION_SECRET") or os.getenv("SECRET_KEY") or "dev-insecure-secret"
)
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "student_records_session")


def get_mongo_uri():
    """Return the MongoDB connection string from the environment.

    ``MONGODB_URI`` wins; otherwise an Atlas URI is assembled from
    ``DB_USER``, ``DB_PWD`` and ``DB_HOST``.
    """

    uri = os.getenv("MONGODB_URI")
    if uri:
        return uri

    user = os.getenv("DB_USER")
    password = os.getenv("DB_PWD")
    host = os.getenv("DB_HOST")
    if not (user and password and host):
        raise ConfigError(
            "MONGODB_URI is not set. Define it (or DB_USER, DB_PWD and DB_HOST) "
            "in backend/.env."
        )

    db_name = os.getenv("MONGODB_DB") or DEFAULT_DB_NAME
    return (
        f"mongodb+srv://{quote_plus(user)}:{quote_plus(password)}@{host}/"
        f"{db_name}?retryWrites=true&w=majority"
    )


def get_db_name():
    """Return the database name from the env var, the URI, or the default."""

    db_name = os.getenv("MONGODB_DB")
    if db_name:
        return db_name

    main = get_mongo_uri().split("?", 1)[0].rstrip("/")

    if "://" in main:
        after_scheme = main.split("://", 1)[1]
    else:
        after_scheme = main

    if "/" not in after_scheme:
        return DEFAULT_DB_NAME

    candidate = after_scheme.split("/", 1)[1]
    return candidate or DEFAULT_DB_NAME


__all__ = [
    "ConfigError",
    "DEFAULT_DB_NAME",
    "SECRET_KEY",
    "SESSION_COOKIE_NAME",
    "STUDENTS_COLLECTION",
    "get_mongo_uri",
    "get_db_name",
]
