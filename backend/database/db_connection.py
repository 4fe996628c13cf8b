"""
MongoDB connection helper and the user credential store.

Provides get_db() for the gateway and UserStore for the auth service.
"""

import logging
from typing import Any, Dict, Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from backend.common.errors import ConflictError

USERS_COLLECTION = "users"


def get_db(uri: Optional[str], db_name: str) -> Database:
    """
    Returns a pymongo Database handle for the given connection string.

    MongoClient connects lazily, so this does not touch the network until
    the first query.

    Usage:
        db = get_db(config["MONGO_URI"], config["MONGO_DB_NAME"])
        store = UserStore(db[USERS_COLLECTION])

    Raises:
        RuntimeError: If the connection string is missing.
    """
    if not uri:
        raise RuntimeError("MONGO_URI is not set. Please set the environment variable.")

    client = MongoClient(uri)
    return client[db_name]


class UserStore:
    """
    Credential store keyed by email.

    Records look like {"email": ..., "password_hash": ...}. They are
    created on register and never updated.
    """

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def ensure_indexes(self) -> None:
        """Create the unique email index that enforces one record per email."""
        self.collection.create_index([("email", ASCENDING)], unique=True)
        logging.info("[DB] Unique index on users.email ensured.")

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"email": email})

    def create(self, email: str, password_hash: str) -> None:
        """
        Insert a new user record.

        Raises:
            ConflictError: If a record with this email already exists.
        """
        try:
            self.collection.insert_one({"email": email, "password_hash": password_hash})
        except DuplicateKeyError:
            raise ConflictError()
