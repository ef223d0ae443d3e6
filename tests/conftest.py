# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Fixtures shared by all tests:
# - settings with every integration configured
# - an upstream stub that records outbound HTTP calls (Resend, Google Places)
# - in-memory replacements for the MongoDB record store and object storage
# - a TestClient with those wired in through dependency overrides
# =============================================================================

import os

# Set up the test environment before the app reads its settings
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient

from ideal_properties.core.config import Settings, get_settings
from ideal_properties.core.http_client import get_http_client
from ideal_properties.db.records import TABLES, get_record_store
from ideal_properties.db.storage import get_object_storage, public_url
from ideal_properties.main import app

OWNER_PASSCODE = "correct-horse-battery"


# =============================================================================
# Fakes
# =============================================================================

class UpstreamStub:
    """
    Plays back queued responses for outbound HTTP calls and records every
    request it receives, in order.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._queue: List[Any] = []

    def respond(self, status_code: int = 200, json: Any = None, text: Optional[str] = None) -> "UpstreamStub":
        if text is not None:
            self._queue.append(httpx.Response(status_code, text=text))
        else:
            self._queue.append(httpx.Response(status_code, json=json if json is not None else {}))
        return self

    def fail(self, error: Exception) -> "UpstreamStub":
        self._queue.append(error)
        return self

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._queue:
            raise AssertionError(f"Unexpected upstream call: {request.method} {request.url}")
        item = self._queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def call_count(self) -> int:
        return len(self.requests)


class FakeRecordStore:
    """Dict-backed stand-in for RecordStore with the same semantics."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {name: [] for name in TABLES}

    def _table(self, table: str) -> List[Dict[str, Any]]:
        if table not in self.tables:
            raise ValueError(f"Unknown table '{table}'")
        return self.tables[table]

    async def select(self, table, filters=None, order_by=None, descending=False, limit=None):
        rows = [dict(row) for row in self._table(table)
                if all(row.get(key) == value for key, value in (filters or {}).items())]
        if order_by:
            rows.sort(key=lambda row: row.get(order_by), reverse=descending)
        return rows[:limit] if limit else rows

    async def get(self, table, record_id):
        for row in self._table(table):
            if row["id"] == record_id:
                return dict(row)
        return None

    async def insert(self, table, record):
        row = dict(record)
        row.setdefault("id", str(uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc))
        self._table(table).append(row)
        return dict(row)

    async def update(self, table, record_id, changes):
        for row in self._table(table):
            if row["id"] == record_id:
                row.update(changes)
                return dict(row)
        return None

    async def delete(self, table, record_id):
        rows = self._table(table)
        for index, row in enumerate(rows):
            if row["id"] == record_id:
                del rows[index]
                return True
        return False


class FakeObjectStorage:

    def __init__(self, base_url: str = ""):
        self.base_url = base_url
        self.objects: Dict[Tuple[str, str], Tuple[bytes, str]] = {}

    async def upload(self, bucket, key, data, content_type="application/octet-stream"):
        self.objects[(bucket, key)] = (data, content_type)
        return public_url(bucket, key, self.base_url)

    async def download(self, bucket, key):
        if (bucket, key) not in self.objects:
            raise FileNotFoundError(f"{bucket}/{key}")
        return self.objects[(bucket, key)]

    async def remove(self, bucket, key):
        return self.objects.pop((bucket, key), None) is not None


# =============================================================================
# Fixtures
# =============================================================================

def make_settings(**overrides) -> Settings:
    values = {
        "resend_api_key": "re_test_key",
        "contact_recipient_email": "inbox@idealproperties.test",
        "contact_from_email": None,
        "google_places_api_key": "places-test-key",
        "google_place_id": "ChIJ-fixed-place",
        "google_place_query": None,
        "owner_passcode": OWNER_PASSCODE,
        "asset_base_url": "/assets",
        "public_base_url": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
def record_store():
    return FakeRecordStore()


@pytest.fixture
def object_storage():
    return FakeObjectStorage()


@pytest.fixture
def client(settings, upstream, record_store, object_storage):
    """TestClient with settings, outbound HTTP and storage replaced."""

    async def override_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handle)) as http_client:
            yield http_client

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = override_http_client
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_object_storage] = lambda: object_storage

    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def owner_headers():
    return {"Authorization": f"Bearer {OWNER_PASSCODE}"}


@pytest.fixture
def override_settings(client):
    """Swap the settings the app sees for the rest of the test."""
    def _override(**overrides) -> Settings:
        new_settings = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: new_settings
        return new_settings
    return _override
