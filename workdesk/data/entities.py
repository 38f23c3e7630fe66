"""Uniform CRUD access to the hosted entity API, one store per record type."""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

from workdesk.constants import ENTITY_NAMES
from workdesk.data import api_client

logger = logging.getLogger(__name__)


class EntityStore:
    def __init__(self, entity_name: str, request: Optional[Callable[..., Any]] = None):
        if entity_name not in ENTITY_NAMES:
            raise ValueError(f"Unknown entity: {entity_name!r}")
        self.entity_name = entity_name
        self._request = request or api_client.request

    def _path(self, record_id: Optional[str] = None) -> str:
        path = f"/entities/{self.entity_name}"
        if record_id is not None:
            path = f"{path}/{quote(str(record_id), safe='')}"
        return path

    def list(self, sort: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"sort": sort} if sort else None
        return self._request("GET", self._path(), params=params) or []

    def filter(self, predicate: Dict[str, Any], sort: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"q": json.dumps(predicate, sort_keys=True)}
        if sort:
            params["sort"] = sort
        return self._request("GET", self._path(), params=params) or []

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        record = self._request("POST", self._path(), json=fields)
        logger.info("Created %s %s", self.entity_name, (record or {}).get("id"))
        return record

    def update(self, record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        record = self._request("PUT", self._path(record_id), json=fields)
        logger.info("Updated %s %s fields=%s", self.entity_name, record_id, sorted(fields))
        return record

    def delete(self, record_id: str) -> None:
        self._request("DELETE", self._path(record_id))
        logger.info("Deleted %s %s", self.entity_name, record_id)
