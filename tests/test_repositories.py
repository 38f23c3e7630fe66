import pytest

from workdesk.constants import Status
from workdesk.data import repositories
from workdesk.data.api_client import ApiError
from workdesk.models import DiaryDraft, TaskDraft
from workdesk.reorder import DragResult, DropPosition


def test_list_tasks_filters_by_board(backend):
    store = backend.store("KanbanTask")
    store.seed(id="t1", title="a", board_id="b1", status="backlog")
    store.seed(id="t2", title="b", board_id="b2", status="done")

    tasks = repositories.list_tasks("b1")

    assert [task.id for task in tasks] == ["t1"]
    assert store.calls[-1] == ("filter", {"board_id": "b1"})


def test_new_task_is_appended_to_its_column(backend):
    store = backend.store("KanbanTask")
    store.seed(id="t1", title="a", board_id="b1", status="backlog", order=0)
    store.seed(id="t2", title="b", board_id="b1", status="backlog", order=4)

    task = repositories.save_task(TaskDraft(title=" New "), "b1")

    assert task.title == "New"
    assert task.status is Status.BACKLOG
    assert task.rank == 5
    assert task.created_at is not None
    assert backend.invalidations == [True]


def test_invalid_draft_is_not_sent(backend):
    assert repositories.save_task(TaskDraft(title="   "), "b1") is None
    assert backend.store("KanbanTask").calls == []
    assert backend.invalidations == []


def test_edit_updates_existing_task(backend):
    store = backend.store("KanbanTask")
    store.seed(id="t1", title="old", board_id="b1", status="review", order=2)
    task = repositories.list_tasks("b1")[0]

    draft = TaskDraft.from_task(task)
    draft.title = "new"
    updated = repositories.save_task(draft, "b1", task)

    assert updated.title == "new"
    assert updated.status is Status.REVIEW
    assert store.calls[-1][0] == "update"


def test_move_task_sends_patch_then_invalidates(backend):
    store = backend.store("KanbanTask")
    store.seed(id="t1", title="a", board_id="b1", status="backlog", order=0)

    drag = DragResult("t1", DropPosition(Status.BACKLOG, 0), DropPosition(Status.DONE, 2))
    moved = repositories.move_task(drag)

    assert store.calls[-1] == ("update", "t1", {"status": "done", "order": 2})
    assert moved.status is Status.DONE
    assert moved.rank == 2
    assert backend.invalidations == [True]


def test_cancelled_move_does_nothing(backend):
    drag = DragResult("t1", DropPosition(Status.BACKLOG, 0), None)
    assert repositories.move_task(drag) is None
    assert backend.store("KanbanTask").calls == []
    assert backend.invalidations == []


def test_failed_mutation_propagates_without_invalidating(backend):
    store = backend.store("KanbanTask")
    store.fail_with = ApiError(503, "Service Unavailable", "down")

    with pytest.raises(ApiError):
        repositories.delete_task("t1")
    assert backend.invalidations == []


def test_diary_entries_newest_first(backend):
    store = backend.store("DiaryEntry")
    store.seed(id="e1", title="old", created_date="2026-10-01T10:00:00")
    store.seed(id="e2", title="new", created_date="2026-10-10T10:00:00")

    entries = repositories.list_diary_entries()

    assert [entry.id for entry in entries] == ["e2", "e1"]
    assert store.calls[-1] == ("list", "-created_date")


def test_save_and_delete_diary_entry(backend):
    entry = repositories.save_diary_entry(DiaryDraft(title="Day", content="Went well", tags=["calm"]))
    assert entry.tags == ["calm"]
    assert repositories.save_diary_entry(DiaryDraft(title="Day", content="")) is None

    repositories.delete_diary_entry(entry.id)
    assert backend.store("DiaryEntry").records == {}
    assert len(backend.invalidations) == 2


def test_create_category(backend):
    assert repositories.create_diary_category("  ") is None
    category = repositories.create_diary_category(" Ideas ", "Lightbulb")
    assert category.name == "Ideas"
    assert category.icon == "Lightbulb"


def test_users_and_boards(backend):
    backend.store("User").seed(id="u1", email="ana@example.com", full_name="Ana")
    backend.store("KanbanBoard").seed(id="b1", name="Home")
    assert repositories.list_users()[0].email == "ana@example.com"
    assert repositories.list_boards()[0].name == "Home"


def test_malformed_rows_are_skipped(backend, caplog):
    store = backend.store("KanbanTask")
    store.seed(id="t1", title="a", board_id="b1", status="backlog")
    store.seed(id="t2", title="b", board_id="b1", status="em_andamento")
    store.seed(id="t3", board_id="b1", status="done")

    with caplog.at_level("WARNING", logger="workdesk.data.repositories"):
        tasks = repositories.list_tasks("b1")

    assert [task.id for task in tasks] == ["t1"]
    assert "t2" in caplog.text and "t3" in caplog.text
