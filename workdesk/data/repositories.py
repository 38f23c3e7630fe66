from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from pydantic import ValidationError

from workdesk.columns import next_rank
from workdesk.constants import (
    BOARD_ENTITY,
    DEFAULT_CATEGORY_ICON,
    DIARY_CATEGORY_ENTITY,
    DIARY_ENTRY_ENTITY,
    TASK_ENTITY,
    USER_ENTITY,
)
from workdesk.data import api_client
from workdesk.data.entities import EntityStore
from workdesk.models import Board, DiaryCategory, DiaryDraft, DiaryEntry, Task, TaskDraft, User
from workdesk.reorder import DragResult, reorder

logger = logging.getLogger(__name__)

_STORE_FACTORY = None
_INVALIDATE_CALLBACK = None
_STORES = {}


def configure(store_factory=None, invalidate_callback=None):
    global _STORE_FACTORY, _INVALIDATE_CALLBACK
    _STORE_FACTORY = store_factory
    _INVALIDATE_CALLBACK = invalidate_callback
    _STORES.clear()


def api_enabled():
    return _STORE_FACTORY is not None or api_client.is_enabled()


def _store(entity_name) -> EntityStore:
    if entity_name not in _STORES:
        factory = _STORE_FACTORY or EntityStore
        _STORES[entity_name] = factory(entity_name)
    return _STORES[entity_name]


def _invalidate():
    if _INVALIDATE_CALLBACK is None:
        return
    try:
        _INVALIDATE_CALLBACK()
    except Exception:
        logger.exception("Cache invalidation failed.")


def _parse_rows(model, rows: Iterable[dict], entity_name: str) -> list:
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning("Skipping malformed %s record %s: %s", entity_name, row.get("id"), exc)
    return parsed


def list_boards() -> List[Board]:
    return _parse_rows(Board, _store(BOARD_ENTITY).list(), BOARD_ENTITY)


def list_users() -> List[User]:
    return _parse_rows(User, _store(USER_ENTITY).list(), USER_ENTITY)


def list_tasks(board_id: Optional[str] = None) -> List[Task]:
    store = _store(TASK_ENTITY)
    rows = store.filter({"board_id": board_id}) if board_id else store.list()
    return _parse_rows(Task, rows, TASK_ENTITY)


def save_task(draft: TaskDraft, board_id: str, task: Optional[Task] = None) -> Optional[Task]:
    if not draft.is_submittable():
        logger.info("Refusing to save task without a title.")
        return None
    payload = draft.to_payload(board_id)
    store = _store(TASK_ENTITY)
    if task is not None:
        record = store.update(task.id, payload)
    else:
        siblings = list_tasks(board_id)
        payload["order"] = next_rank(siblings, draft.status)
        record = store.create(payload)
    _invalidate()
    return Task.model_validate(record)


def delete_task(task_id: str) -> None:
    _store(TASK_ENTITY).delete(task_id)
    _invalidate()


def move_task(drag: DragResult) -> Optional[Task]:
    patch = reorder(drag)
    if patch is None:
        return None
    record = _store(TASK_ENTITY).update(drag.task_id, patch.to_payload())
    _invalidate()
    return Task.model_validate(record)


def list_diary_entries() -> List[DiaryEntry]:
    rows = _store(DIARY_ENTRY_ENTITY).list(sort="-created_date")
    return _parse_rows(DiaryEntry, rows, DIARY_ENTRY_ENTITY)


def list_diary_categories() -> List[DiaryCategory]:
    return _parse_rows(DiaryCategory, _store(DIARY_CATEGORY_ENTITY).list(), DIARY_CATEGORY_ENTITY)


def save_diary_entry(draft: DiaryDraft, entry: Optional[DiaryEntry] = None) -> Optional[DiaryEntry]:
    if not draft.is_submittable():
        logger.info("Refusing to save diary entry without title and content.")
        return None
    store = _store(DIARY_ENTRY_ENTITY)
    if entry is not None:
        record = store.update(entry.id, draft.to_payload())
    else:
        record = store.create(draft.to_payload())
    _invalidate()
    return DiaryEntry.model_validate(record)


def delete_diary_entry(entry_id: str) -> None:
    _store(DIARY_ENTRY_ENTITY).delete(entry_id)
    _invalidate()


def create_diary_category(name: str, icon: str = DEFAULT_CATEGORY_ICON) -> Optional[DiaryCategory]:
    name = (name or "").strip()
    if not name:
        return None
    record = _store(DIARY_CATEGORY_ENTITY).create({"name": name, "icon": icon})
    _invalidate()
    return DiaryCategory.model_validate(record)
