# Connections/mongo_connection.py
import logging
from typing import Any, Callable

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from Connections.settings import Settings
from utils.errors import DatastoreUnavailable
from utils.mongo_index import ensure_index

logger = logging.getLogger(__name__)

COMPLAINTS_COLLECTION = "complaints"


class MongoConnectionManager:
    """
    Owns the process-wide MongoDB handle.

    The handle is created lazily on the first `connect()` and reused by every later
    call, so a warm serverless process does not re-dial the cluster on each request.
    Reuse is decided from the driver's own topology state; the network is only
    touched again when the driver reports no known server. A failed attempt is
    never cached.
    """

    def __init__(self, settings: Settings, client_factory: Callable[..., Any] = AsyncIOMotorClient):
        self.settings = settings
        self._client_factory = client_factory
        self._client = None
        self._db = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self):
        if self._db is not None:
            if self._client.topology_description.has_known_servers:
                return self._db
            return await self._wait_for_server()

        if self.settings.uses_default_uri:
            logger.warning("MONGODB_URI is not set; using the local development default")

        client = None
        try:
            client = self._client_factory(
                self.settings.mongo_uri,
                serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
                socketTimeoutMS=self.settings.socket_timeout_ms,
                tz_aware=True,
            )
            # Motor connects lazily; ping forces server selection now.
            await client.admin.command("ping")
            db = client.get_default_database(self.settings.mongo_db)
        except (PyMongoError, ValueError) as e:
            if client is not None:
                client.close()
            logger.error("MongoDB connection error: %s", e)
            raise DatastoreUnavailable("Could not connect to MongoDB", str(e)) from e

        if self._db is not None:
            # Another request finished connecting while this one waited on its ping.
            client.close()
            return self._db

        self._client = client
        self._db = db
        logger.info("MongoDB connected (db=%s)", db.name)

        await self._ensure_indexes(db)
        return db

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None

    async def _wait_for_server(self):
        # The cached client keeps monitoring and reconnects by itself; other
        # requests may hold it, so it is re-checked in place rather than replaced.
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB connection lost: %s", e)
            raise DatastoreUnavailable("Could not connect to MongoDB", str(e)) from e
        logger.info("MongoDB connection restored")
        return self._db

    async def _ensure_indexes(self, db) -> None:
        try:
            await ensure_index(
                db[COMPLAINTS_COLLECTION],
                [("createdAt", DESCENDING)],
                name="createdAt_desc",
                drop_if_mismatch=self.settings.allow_index_drop,
            )
        except PyMongoError as e:
            logger.warning("Could not ensure indexes on %s: %s", COMPLAINTS_COLLECTION, e)
