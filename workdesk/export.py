"""CSV rendering for the reports page.

Only the task title is quoted. Every other column is an enum value, a formatted date,
an assignee email or a fixed placeholder, none of which carry commas.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from workdesk.clock import local_today
from workdesk.constants import (
    ASSIGNEE_ALL,
    CSV_DATE_FORMAT,
    NO_BOTTLENECKS_PLACEHOLDER,
    NO_DUE_DATE_PLACEHOLDER,
    UNASSIGNED_PLACEHOLDER,
    Status,
)
from workdesk.metrics import BoardPerformance, UserReport
from workdesk.models import Task

LINE_TERMINATOR = "\r\n"
METRIC_HEADER = ["Metric", "Value"]
DETAILED_HEADER = ["Title", "Status", "Priority", "Assignee", "DueDate", "CreatedDate"]
EXPORT_KINDS = ("user", "board", "detailed")
CSV_MIME = "text/csv"


def quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def _render(rows: Iterable[list]) -> str:
    return "".join(",".join(str(cell) for cell in row) + LINE_TERMINATOR for row in rows)


def user_report_rows(report: UserReport) -> List[list]:
    return [
        ["Total Tasks", report.total],
        ["Completed", report.completed],
        ["In Progress", report.in_progress],
        ["Pending", report.pending],
        ["In Review", report.review],
        ["Overdue", report.overdue],
        ["Completion Rate", f"{report.completion_rate}%"],
    ]


def board_report_rows(performance: BoardPerformance) -> List[list]:
    counts = performance.status_counts
    bottlenecks = "; ".join(Status(status).value for status in performance.bottlenecks)
    return [
        ["Total Tasks", performance.total_tasks],
        ["Backlog", counts.get(Status.BACKLOG, 0)],
        ["In Progress", counts.get(Status.IN_PROGRESS, 0)],
        ["Review", counts.get(Status.REVIEW, 0)],
        ["Done", counts.get(Status.DONE, 0)],
        ["Average Completion Time", f"{performance.avg_completion_days} days"],
        ["Bottlenecks", bottlenecks or NO_BOTTLENECKS_PLACEHOLDER],
    ]


def _format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return value.strftime(CSV_DATE_FORMAT)


def detailed_rows(tasks: Iterable[Task]) -> List[dict]:
    rows = []
    for task in tasks:
        rows.append(
            {
                "Title": task.title,
                "Status": task.status.value,
                "Priority": task.priority.value,
                "Assignee": task.assignee or UNASSIGNED_PLACEHOLDER,
                "DueDate": _format_date(task.due_date) if task.due_date else NO_DUE_DATE_PLACEHOLDER,
                "CreatedDate": _format_date(task.created_at.date() if task.created_at else None),
            }
        )
    return rows


def user_report_csv(report: UserReport) -> str:
    return _render([METRIC_HEADER, *user_report_rows(report)])


def board_report_csv(performance: BoardPerformance) -> str:
    return _render([METRIC_HEADER, *board_report_rows(performance)])


def detailed_csv(tasks: Iterable[Task], assignee: str = ASSIGNEE_ALL) -> str:
    if assignee != ASSIGNEE_ALL:
        tasks = [task for task in tasks if task.assignee == assignee]
    lines = [DETAILED_HEADER]
    for row in detailed_rows(tasks):
        lines.append([quote(row["Title"])] + [row[column] for column in DETAILED_HEADER[1:]])
    return _render(lines)


def to_csv(kind: str, payload, assignee: str = ASSIGNEE_ALL) -> str:
    if kind == "user":
        return user_report_csv(payload)
    if kind == "board":
        return board_report_csv(payload)
    if kind == "detailed":
        return detailed_csv(payload, assignee=assignee)
    raise ValueError(f"Unknown export kind: {kind!r}")


def export_filename(kind: str, day: Optional[date] = None) -> str:
    if kind not in EXPORT_KINDS:
        raise ValueError(f"Unknown export kind: {kind!r}")
    day = day or local_today()
    return f"{kind}_{day.isoformat()}.csv"
