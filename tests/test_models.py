from datetime import date

import pytest
from pydantic import ValidationError

from workdesk.constants import Priority, Status
from workdesk.models import Task, TaskDraft


def test_task_parses_wire_record():
    task = Task.model_validate(
        {
            "id": "t1",
            "title": "Ship release",
            "status": "review",
            "priority": "high",
            "board_id": "b1",
            "due_date": "2026-10-20T00:00:00.000Z",
            "assigned_to": "",
            "checklist": [{"text": "Changelog", "checked": True}],
            "order": 3,
            "created_date": "2026-10-01T10:00:00Z",
            "updated_date": "2026-10-02T10:00:00Z",
            "created_by": "someone@example.com",
        }
    )
    assert task.status is Status.REVIEW
    assert task.priority is Priority.HIGH
    assert task.due_date == date(2026, 10, 20)
    assert task.assignee is None
    assert task.checklist[0].done is True
    assert task.rank == 3


def test_task_rejects_unknown_status():
    with pytest.raises(ValidationError):
        Task.model_validate({"id": "t1", "title": "x", "status": "em_andamento"})


def test_task_defaults():
    task = Task.model_validate({"id": "t1", "title": "x", "checklist": None, "due_date": None})
    assert task.status is Status.BACKLOG
    assert task.priority is Priority.MEDIUM
    assert task.checklist == []
    assert task.rank is None


def test_draft_is_not_submittable_without_title():
    assert not TaskDraft(title="   ").is_submittable()
    assert TaskDraft(title="Plan sprint").is_submittable()


def test_draft_checklist_editing():
    draft = TaskDraft(title="Plan")
    assert draft.add_checklist_item("  Book room ")
    assert not draft.add_checklist_item("  ")
    draft.add_checklist_item("Send invites")
    draft.toggle_checklist_item(0)
    draft.remove_checklist_item(1)
    assert [(item.text, item.done) for item in draft.checklist] == [("Book room", True)]


def test_draft_payload_uses_wire_keys():
    draft = TaskDraft(
        title="  Plan  ",
        description=" notes ",
        status=Status.IN_PROGRESS,
        due_date=date(2026, 10, 25),
        assignee="ana@example.com",
    )
    draft.add_checklist_item("Agenda")
    assert draft.to_payload("b1") == {
        "title": "Plan",
        "description": "notes",
        "status": "in_progress",
        "priority": "medium",
        "board_id": "b1",
        "due_date": "2026-10-25",
        "assigned_to": "ana@example.com",
        "checklist": [{"text": "Agenda", "checked": False}],
    }


def test_draft_from_task_copies_checklist(make_task):
    task = make_task(checklist=[{"text": "a", "checked": False}])
    draft = TaskDraft.from_task(task)
    draft.toggle_checklist_item(0)
    assert task.checklist[0].done is False
