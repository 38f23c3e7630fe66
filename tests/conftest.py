"""Shared fixtures: an in-memory stand-in for the hosted entity API."""
import itertools
from types import SimpleNamespace

import pytest

from workdesk import settings as settings_module
from workdesk.data import api_client, repositories
from workdesk.data.api_client import ApiError
from workdesk.models import Task


class FakeEntityStore:
    def __init__(self, entity_name):
        self.entity_name = entity_name
        self.records = {}
        self.calls = []
        self._ids = itertools.count(1)
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def seed(self, **fields):
        record_id = fields.get("id") or f"{self.entity_name.lower()}-{next(self._ids)}"
        self.records[record_id] = {**fields, "id": record_id}
        return self.records[record_id]

    def list(self, sort=None):
        self._check()
        self.calls.append(("list", sort))
        rows = [dict(row) for row in self.records.values()]
        if sort:
            field = sort.lstrip("-")
            rows.sort(key=lambda row: row.get(field) or "", reverse=sort.startswith("-"))
        return rows

    def filter(self, predicate, sort=None):
        self._check()
        self.calls.append(("filter", predicate))
        return [
            dict(row)
            for row in self.records.values()
            if all(row.get(key) == value for key, value in predicate.items())
        ]

    def create(self, fields):
        self._check()
        self.calls.append(("create", fields))
        stamp = "2026-10-18T12:00:00"
        return dict(self.seed(**fields, created_date=stamp, updated_date=stamp))

    def update(self, record_id, fields):
        self._check()
        self.calls.append(("update", record_id, fields))
        if record_id not in self.records:
            raise ApiError(404, "Not Found", {"message": "Entity not found"})
        self.records[record_id].update(fields)
        return dict(self.records[record_id])

    def delete(self, record_id):
        self._check()
        self.calls.append(("delete", record_id))
        if record_id not in self.records:
            raise ApiError(404, "Not Found", {"message": "Entity not found"})
        del self.records[record_id]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    for name in ("API_BASE_URL", "API_KEY", "DASHBOARD_TIMEZONE", "API_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    settings_module.reset_settings()
    api_client.configure(None)
    yield
    settings_module.reset_settings()
    api_client.configure(None)


@pytest.fixture
def backend():
    registry = {}
    invalidations = []

    def store(entity_name):
        if entity_name not in registry:
            registry[entity_name] = FakeEntityStore(entity_name)
        return registry[entity_name]

    repositories.configure(store_factory=store, invalidate_callback=lambda: invalidations.append(True))
    yield SimpleNamespace(store=store, invalidations=invalidations)
    repositories.configure()


@pytest.fixture
def make_task():
    counter = itertools.count(1)

    def factory(**fields):
        payload = {"id": f"task-{next(counter)}", "title": "Write report", "board_id": "board-1"}
        payload.update(fields)
        return Task.model_validate(payload)

    return factory
