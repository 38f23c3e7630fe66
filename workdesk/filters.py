from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional

from workdesk.clock import local_today
from workdesk.constants import ASSIGNEE_ALL, ASSIGNEE_UNASSIGNED, DueBucket
from workdesk.models import Task


def matches_due_bucket(task: Task, bucket, today: date) -> bool:
    bucket = DueBucket(bucket)
    if bucket is DueBucket.ALL:
        return True
    due = task.due_date
    if due is None:
        return False
    if bucket is DueBucket.OVERDUE:
        return due < today
    if bucket is DueBucket.TODAY:
        return due == today
    if bucket is DueBucket.TOMORROW:
        return due == today + timedelta(days=1)
    # Past-due tasks also pass this bucket.
    return due <= today + timedelta(days=7)


def matches_assignee(task: Task, assignee: str) -> bool:
    if assignee == ASSIGNEE_ALL:
        return True
    if assignee == ASSIGNEE_UNASSIGNED:
        return not task.assignee
    return task.assignee == assignee


def filter_tasks(
    tasks: Iterable[Task],
    due_bucket=DueBucket.ALL,
    assignee: str = ASSIGNEE_ALL,
    today: Optional[date] = None,
) -> List[Task]:
    today = today or local_today()
    bucket = DueBucket(due_bucket)
    return [
        task
        for task in tasks
        if matches_due_bucket(task, bucket, today) and matches_assignee(task, assignee)
    ]


def has_active_filters(due_bucket, assignee: str) -> bool:
    return DueBucket(due_bucket) is not DueBucket.ALL or assignee != ASSIGNEE_ALL
