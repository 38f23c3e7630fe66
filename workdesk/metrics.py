from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from workdesk.clock import local_now
from workdesk.constants import ASSIGNEE_ALL, STATUSES, Status
from workdesk.models import Task


@dataclass
class UserReport:
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    review: int = 0
    overdue: int = 0
    completion_rate: int = 0


@dataclass
class BoardPerformance:
    status_counts: Dict[Status, int] = field(default_factory=lambda: {status: 0 for status in STATUSES})
    bottlenecks: List[Status] = field(default_factory=list)
    avg_completion_days: int = 0
    total_tasks: int = 0


def round_half_up(value):
    return int(math.floor(value + 0.5))


def percent(part, whole):
    if not whole:
        return 0
    return round_half_up(part * 100 / whole)


def tasks_for_board(tasks: Iterable[Task], board_id: Optional[str]) -> List[Task]:
    return [task for task in tasks if task.board_id == board_id]


def is_overdue(task: Task, now: datetime) -> bool:
    if task.due_date is None or task.status == Status.DONE:
        return False
    due_start = datetime.combine(task.due_date, time.min, tzinfo=now.tzinfo)
    return due_start < now


def user_report(tasks: Iterable[Task], assignee: str = ASSIGNEE_ALL, now: Optional[datetime] = None) -> UserReport:
    now = now or local_now()
    tasks = list(tasks)
    if assignee != ASSIGNEE_ALL:
        tasks = [task for task in tasks if task.assignee == assignee]

    counts = {status: 0 for status in STATUSES}
    for task in tasks:
        counts[task.status] += 1

    return UserReport(
        total=len(tasks),
        completed=counts[Status.DONE],
        in_progress=counts[Status.IN_PROGRESS],
        pending=counts[Status.BACKLOG],
        review=counts[Status.REVIEW],
        overdue=sum(1 for task in tasks if is_overdue(task, now)),
        completion_rate=percent(counts[Status.DONE], len(tasks)),
    )


def _as_aware(moment: datetime) -> datetime:
    # Offset-less API timestamps are UTC.
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def _elapsed_whole_days(task: Task) -> int:
    if task.created_at is None or task.updated_at is None:
        return 0
    return int((_as_aware(task.updated_at) - _as_aware(task.created_at)) / timedelta(days=1))


def board_performance(tasks: Iterable[Task]) -> BoardPerformance:
    tasks = list(tasks)
    status_counts = {status: 0 for status in STATUSES}
    for task in tasks:
        status_counts[task.status] += 1

    open_statuses = [status for status in STATUSES if status != Status.DONE]
    max_open = max(status_counts[status] for status in open_statuses)
    bottlenecks = [status for status in open_statuses if max_open > 0 and status_counts[status] == max_open]

    # updated_at stands in for the completion time.
    completed = [task for task in tasks if task.status == Status.DONE]
    avg_days = 0
    if completed:
        avg_days = round_half_up(sum(_elapsed_whole_days(task) for task in completed) / len(completed))

    return BoardPerformance(
        status_counts=status_counts,
        bottlenecks=bottlenecks,
        avg_completion_days=avg_days,
        total_tasks=len(tasks),
    )


def status_percentages(performance: BoardPerformance) -> Dict[Status, int]:
    return {
        status: percent(count, performance.total_tasks)
        for status, count in performance.status_counts.items()
    }
