"""Kanban column projection and the small helpers used to render task cards."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from workdesk.constants import STATUSES, Status
from workdesk.models import ChecklistItem, Task, User


@dataclass(frozen=True)
class DueBadge:
    label: str
    overdue: bool


def _rank_key(task: Task):
    return task.rank or 0


def project_columns(tasks: Iterable[Task], statuses: Sequence[Status] = STATUSES) -> Dict[Status, List[Task]]:
    """Group tasks into one bucket per status, each sorted by rank.

    ``sorted`` is stable, so tasks sharing a rank keep their incoming order.
    """
    tasks = list(tasks)
    columns: Dict[Status, List[Task]] = {}
    for status in statuses:
        status = Status(status)
        matching = [task for task in tasks if task.status == status]
        columns[status] = sorted(matching, key=_rank_key)
    return columns


def next_rank(tasks: Iterable[Task], status=Status.BACKLOG):
    ranks = [_rank_key(task) for task in tasks if task.status == Status(status)]
    if not ranks:
        return 0
    return max(ranks) + 1


def checklist_progress(checklist: Sequence[ChecklistItem]) -> Optional[Tuple[int, int, int]]:
    if not checklist:
        return None
    total = len(checklist)
    completed = sum(1 for item in checklist if item.done)
    percent = int(completed * 100 / total + 0.5)
    return completed, total, percent


def due_badge(due_date: Optional[date], today: date) -> Optional[DueBadge]:
    if due_date is None:
        return None
    if due_date == today:
        label = "Today"
    elif due_date == today + timedelta(days=1):
        label = "Tomorrow"
    else:
        label = due_date.strftime("%d/%m")
    return DueBadge(label=label, overdue=due_date < today)


def display_name(assignee: Optional[str], users: Iterable[User]) -> Optional[str]:
    if not assignee:
        return None
    for user in users:
        if user.email == assignee:
            return user.full_name or assignee
    return assignee


def short_name(assignee: Optional[str], users: Iterable[User]) -> Optional[str]:
    name = display_name(assignee, users)
    if not name:
        return None
    return name.split(" ")[0]
