from workdesk.constants import Status
from workdesk.reorder import DragResult, DropPosition, reorder


def test_cancelled_drop_produces_no_patch():
    drag = DragResult(task_id="t1", source=DropPosition(Status.BACKLOG, 0), destination=None)
    assert reorder(drag) is None


def test_drop_sets_status_and_rank():
    drag = DragResult(
        task_id="t1",
        source=DropPosition(Status.BACKLOG, 0),
        destination=DropPosition(Status.DONE, 2),
    )
    patch = reorder(drag)
    assert patch.status == Status.DONE
    assert patch.rank == 2
    assert patch.to_payload() == {"status": "done", "order": 2}


def test_drop_within_same_column():
    drag = DragResult(
        task_id="t1",
        source=DropPosition(Status.REVIEW, 3),
        destination=DropPosition("review", 0),
    )
    assert reorder(drag).to_payload() == {"status": "review", "order": 0}
