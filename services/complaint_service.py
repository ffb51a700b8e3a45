# services/complaint_service.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from Connections.mongo_connection import COMPLAINTS_COLLECTION, MongoConnectionManager
from Models.complaint_model import ComplaintRecord, ComplaintStatus
from utils.date_utils import utc_now
from utils.errors import DatastoreError, ErrorKind, PersistenceError
from utils.mongo_helpers import to_object_id
from utils.validation import validate_complaint, validate_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Result of a service call: `data` on success, otherwise an error kind."""

    data: Any = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any = None) -> "Outcome":
        return cls(data=data)

    @classmethod
    def invalid(cls, reason: str, message: str) -> "Outcome":
        return cls(error=ErrorKind.VALIDATION, message=message, detail=reason)

    @classmethod
    def not_found(cls) -> "Outcome":
        return cls(error=ErrorKind.NOT_FOUND, message="Complaint not found", detail="not_found")

    @classmethod
    def from_datastore_error(cls, e: DatastoreError) -> "Outcome":
        return cls(error=e.kind, message=e.message, detail=e.detail)


class MongoComplaintStore:
    """All reads and writes against the complaints collection."""

    def __init__(self, connections: MongoConnectionManager):
        self.connections = connections

    async def ready(self) -> None:
        """Acquire the datastore handle; raises DatastoreUnavailable."""
        await self.connections.connect()

    async def _collection(self):
        db = await self.connections.connect()
        return db[COMPLAINTS_COLLECTION]

    async def insert(self, record: ComplaintRecord) -> ComplaintRecord:
        coll = await self._collection()
        try:
            result = await coll.insert_one(record.to_document())
        except PyMongoError as e:
            raise PersistenceError("Could not save complaint", str(e)) from e
        record.id = result.inserted_id
        return record

    async def list_newest_first(self) -> List[ComplaintRecord]:
        coll = await self._collection()
        try:
            docs = await coll.find({}).sort("createdAt", DESCENDING).to_list(length=None)
        except PyMongoError as e:
            raise PersistenceError("Could not fetch complaints", str(e)) from e
        return [ComplaintRecord.from_document(d) for d in docs]

    async def get(self, oid) -> Optional[ComplaintRecord]:
        coll = await self._collection()
        try:
            doc = await coll.find_one({"_id": oid})
        except PyMongoError as e:
            raise PersistenceError("Could not fetch complaint", str(e)) from e
        return ComplaintRecord.from_document(doc) if doc else None

    async def set_status(self, oid, status: ComplaintStatus) -> Optional[ComplaintRecord]:
        coll = await self._collection()
        try:
            doc = await coll.find_one_and_update(
                {"_id": oid},
                {"$set": {"status": status.value}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise PersistenceError("Could not update status", str(e)) from e
        return ComplaintRecord.from_document(doc) if doc else None

    async def delete(self, oid) -> bool:
        coll = await self._collection()
        try:
            doc = await coll.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            raise PersistenceError("Could not delete complaint", str(e)) from e
        return doc is not None


class ComplaintService:
    """
    Complaint operations. Each one acquires the datastore handle before looking
    at its input, so an unreachable store is reported ahead of any validation
    result. Datastore exceptions stop here and come back as an `Outcome`
    carrying the error kind; handlers never see them.
    """

    def __init__(self, store: MongoComplaintStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    async def create(self, payload: Mapping[str, Any]) -> Outcome:
        try:
            await self.store.ready()
            checked = validate_complaint(payload)
            if not checked.ok:
                return Outcome.invalid(checked.reason, checked.message)
            saved = await self.store.insert(ComplaintRecord(**checked.value, created_at=self.clock()))
        except DatastoreError as e:
            logger.error("Complaint create failed: %s", e.detail)
            return Outcome.from_datastore_error(e)
        logger.info("Complaint %s created", saved.id)
        return Outcome.success(saved)

    async def list_all(self) -> Outcome:
        try:
            return Outcome.success(await self.store.list_newest_first())
        except DatastoreError as e:
            logger.error("Complaint list failed: %s", e.detail)
            return Outcome.from_datastore_error(e)

    async def get(self, complaint_id: str) -> Outcome:
        try:
            await self.store.ready()
            oid = to_object_id(complaint_id)
            if oid is None:
                return Outcome.not_found()
            record = await self.store.get(oid)
        except DatastoreError as e:
            logger.error("Complaint %s fetch failed: %s", complaint_id, e.detail)
            return Outcome.from_datastore_error(e)
        return Outcome.success(record) if record else Outcome.not_found()

    async def update_status(self, complaint_id: str, status: Any) -> Outcome:
        try:
            await self.store.ready()
            checked = validate_status(status)
            if not checked.ok:
                return Outcome.invalid(checked.reason, checked.message)
            oid = to_object_id(complaint_id)
            if oid is None:
                return Outcome.not_found()
            record = await self.store.set_status(oid, checked.value)
        except DatastoreError as e:
            logger.error("Complaint %s status update failed: %s", complaint_id, e.detail)
            return Outcome.from_datastore_error(e)
        if record is None:
            return Outcome.not_found()
        logger.info("Complaint %s status -> %s", complaint_id, checked.value.value)
        return Outcome.success(record)

    async def delete(self, complaint_id: str) -> Outcome:
        try:
            await self.store.ready()
            oid = to_object_id(complaint_id)
            if oid is None:
                return Outcome.not_found()
            deleted = await self.store.delete(oid)
        except DatastoreError as e:
            logger.error("Complaint %s delete failed: %s", complaint_id, e.detail)
            return Outcome.from_datastore_error(e)
        if not deleted:
            return Outcome.not_found()
        logger.info("Complaint %s deleted", complaint_id)
        return Outcome.success()
