"""Shared fixtures: an in-memory stand-in for the Motor client."""

import asyncio
import copy
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from Connections.mongo_connection import MongoConnectionManager
from Connections.settings import Settings
from main import create_app


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction):
        self._docs = sorted(self._docs, key=lambda d: d[key], reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return [copy.deepcopy(d) for d in self._docs]


class FakeCollection:
    def __init__(self):
        self.docs = {}
        self.indexes = {"_id_": {"key": [("_id", 1)]}}
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def insert_one(self, doc):
        self._check()
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = doc
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, flt=None):
        self._check()
        return FakeCursor(list(self.docs.values()))

    async def find_one(self, flt):
        self._check()
        doc = self.docs.get(flt["_id"])
        return copy.deepcopy(doc) if doc else None

    async def find_one_and_update(self, flt, update, return_document=ReturnDocument.BEFORE):
        self._check()
        doc = self.docs.get(flt["_id"])
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        doc.update(update["$set"])
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, flt):
        self._check()
        return self.docs.pop(flt["_id"], None)

    async def index_information(self):
        return copy.deepcopy(self.indexes)

    async def create_index(self, keys, name):
        self.indexes[name] = {"key": list(keys)}
        return name

    async def drop_index(self, name):
        if name not in self.indexes:
            raise OperationFailure("index not found")
        del self.indexes[name]


class FakeDatabase:
    def __init__(self, name):
        self.name = name
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


class FakeAdmin:
    def __init__(self, client):
        self.client = client

    async def command(self, name):
        self.client.pings += 1
        await asyncio.sleep(0)
        if not self.client.server.up:
            raise ServerSelectionTimeoutError("localhost:27017: connection refused")
        self.client.reached = True
        return {"ok": 1.0}


class FakeServer:
    """One fake MongoDB deployment shared by every client the factory creates."""

    def __init__(self):
        self.up = True
        self.databases = {}
        self.clients = []

    def database(self, name):
        return self.databases.setdefault(name, FakeDatabase(name))

    def client_factory(self, uri, **kwargs):
        client = FakeMotorClient(self, uri, kwargs)
        self.clients.append(client)
        return client


class FakeMotorClient:
    def __init__(self, server, uri, options):
        self.server = server
        self.uri = uri
        self.options = options
        self.pings = 0
        self.reached = False
        self.closed = False
        self.admin = FakeAdmin(self)

    @property
    def topology_description(self):
        # Like the driver's monitor: a server is known once reached and while up.
        return SimpleNamespace(has_known_servers=self.server.up and self.reached)

    def get_default_database(self, default=None):
        return self.server.database(default)

    def close(self):
        self.closed = True


class StepClock:
    """Returns strictly increasing UTC times, one second apart."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def settings():
    return Settings(mongo_uri="mongodb://fake:27017/complaintDB", mongo_db="complaintDB")


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def connections(settings, server):
    return MongoConnectionManager(settings, client_factory=server.client_factory)


@pytest.fixture
def app(settings, connections):
    return create_app(settings=settings, connections=connections)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def complaints_coll(server, settings):
    return server.database(settings.mongo_db)["complaints"]


@pytest.fixture
def valid_payload():
    return {
        "name": "Ravi",
        "mobile": "9876543210",
        "email": "ravi@test.com",
        "address": "Patna",
        "complaint": "Streetlight broken",
    }
