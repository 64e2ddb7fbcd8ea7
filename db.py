from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "products", "orders", "categories")


@dataclass
class DbStatus:
    enabled: bool
    ok: bool
    message: str


class MarketplaceStore:
    """Owns the MongoDB handles for the marketplace collections.

    A ready ``database`` (e.g. a mongomock database in tests) may be passed
    in; otherwise a client is built from ``mongodb_uri``.
    """

    def __init__(self, mongodb_uri: str | None, db_name: str, database: Any = None):
        self._mongodb_uri = mongodb_uri
        self._db_name = db_name
        self._client = None
        self._db = database

        if self._db is None and mongodb_uri:
            self._client = MongoClient(mongodb_uri, serverSelectionTimeoutMS=5000)
            self._db = self._client[db_name]

    @property
    def enabled(self) -> bool:
        return self._db is not None

    def collection(self, name: str):
        if self._db is None:
            return None
        return self._db[name]

    def ensure_indexes(self) -> None:
        if self._db is None:
            return

        self._db["users"].create_index("email", unique=True)
        self._db["products"].create_index("slug", unique=True)
        self._db["products"].create_index([("seller_id", ASCENDING), ("status", ASCENDING)])
        self._db["products"].create_index("name")
        self._db["orders"].create_index("items.seller_id")
        self._db["orders"].create_index([("created_at", DESCENDING)])
        self._db["orders"].create_index("user_id")
        self._db["categories"].create_index("slug", unique=True)

    def status(self) -> DbStatus:
        if self._db is None:
            return DbStatus(enabled=False, ok=True, message="MongoDB disabled (MONGODB_URI not set)")

        if self._client is None:
            return DbStatus(enabled=True, ok=True, message="MongoDB attached")

        try:
            # Touch the server to surface connection errors
            self._client.admin.command("ping")
            return DbStatus(enabled=True, ok=True, message="MongoDB connected")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", e)
            return DbStatus(enabled=True, ok=False, message="MongoDB unreachable")
