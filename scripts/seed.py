"""Seed helper that loads sample students into MongoDB."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

from student_records.config import ConfigError, get_db_name
from student_records.db import create_client, get_students_collection, utc_now
from student_records.schema import validate_student

ROOT_DIR = Path(__file__).resolve().parent.parent
BACKEND_DIR = ROOT_DIR / "backend"
ENV_PATH = BACKEND_DIR / ".env"
SEED_PATH = Path(__file__).resolve().parent / "seed.json"


def load_env() -> None:
    if ENV_PATH.exists():
        load_dotenv(ENV_PATH)


def read_seed_file(path: Path = SEED_PATH) -> List[Dict[str, Any]]:
    with path.open("r", encoding="utf-8") as seed_file:
        data = json.load(seed_file)
    if not isinstance(data, list):
        raise ValueError("Seed file must contain a list of students")
    return data


def build_documents(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Validate seed entries and stamp them like the store would."""

    documents = []
    timestamp = utc_now()
    for index, entry in enumerate(entries):
        cleaned, errors = validate_student(entry)
        if errors:
            raise ValueError(f"Seed student #{index} is invalid: {errors}")
        cleaned.setdefault("academics", [])
        cleaned["createdAt"] = timestamp
        cleaned["updatedAt"] = timestamp
        documents.append(cleaned)
    return documents


def main() -> None:
    load_env()
    try:
        client = create_client()
        db_name = get_db_name()
    except ConfigError as exc:  # pragma: no cover - simple CLI utility
        print(f"Configuration error: {exc}")
        raise SystemExit(1)

    try:
        documents = build_documents(read_seed_file())
        collection = get_students_collection(client[db_name])
        collection.delete_many({})
        if documents:
            collection.insert_many(documents)

        print(
            f"Loaded {len(documents)} student(s) into '{collection.name}' "
            f"collection of database '{db_name}'."
        )
    except PyMongoError as exc:  # pragma: no cover - requires Mongo connection
        print(f"MongoDB error: {exc}")
        raise SystemExit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
