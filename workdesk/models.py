from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workdesk.constants import DEFAULT_DIARY_CATEGORY, DEFAULT_CATEGORY_ICON, Priority, Status

Rank = Union[int, float]


def _date_part(value):
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    if isinstance(value, datetime):
        return value.date()
    if value == "":
        return None
    return value


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ChecklistItem(Record):
    text: str
    done: bool = Field(False, alias="checked")


class Task(Record):
    id: str
    title: str
    description: Optional[str] = ""
    status: Status = Status.BACKLOG
    priority: Priority = Priority.MEDIUM
    board_id: Optional[str] = None
    due_date: Optional[date] = None
    assignee: Optional[str] = Field(None, alias="assigned_to")
    checklist: List[ChecklistItem] = Field(default_factory=list)
    rank: Optional[Rank] = Field(None, alias="order")
    created_at: Optional[datetime] = Field(None, alias="created_date")
    updated_at: Optional[datetime] = Field(None, alias="updated_date")

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date_only(cls, value):
        return _date_part(value)

    @field_validator("assignee", mode="before")
    @classmethod
    def _blank_assignee(cls, value):
        return value or None

    @field_validator("checklist", mode="before")
    @classmethod
    def _null_checklist(cls, value):
        return value or []


class Board(Record):
    id: str
    name: str


class User(Record):
    id: str
    email: str
    full_name: Optional[str] = None


class TaskPatch(Record):
    status: Optional[Status] = None
    rank: Optional[Rank] = Field(None, alias="order")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TaskDraft(BaseModel):
    title: str = ""
    description: str = ""
    status: Status = Status.BACKLOG
    priority: Priority = Priority.MEDIUM
    due_date: Optional[date] = None
    assignee: Optional[str] = None
    checklist: List[ChecklistItem] = Field(default_factory=list)

    @classmethod
    def from_task(cls, task: Task) -> "TaskDraft":
        return cls(
            title=task.title,
            description=task.description or "",
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            assignee=task.assignee,
            checklist=[item.model_copy() for item in task.checklist],
        )

    def is_submittable(self) -> bool:
        return bool(self.title.strip())

    def add_checklist_item(self, text: str) -> bool:
        text = (text or "").strip()
        if not text:
            return False
        self.checklist.append(ChecklistItem(text=text))
        return True

    def toggle_checklist_item(self, index: int) -> None:
        item = self.checklist[index]
        item.done = not item.done

    def remove_checklist_item(self, index: int) -> None:
        del self.checklist[index]

    def to_payload(self, board_id: str) -> Dict[str, Any]:
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "status": self.status.value,
            "priority": self.priority.value,
            "board_id": board_id,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "assigned_to": self.assignee or None,
            "checklist": [item.model_dump(mode="json", by_alias=True) for item in self.checklist],
        }


class DiaryEntry(Record):
    id: str
    title: str
    content: str = ""
    category: str = DEFAULT_DIARY_CATEGORY
    favorite: bool = False
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, alias="created_date")


class DiaryCategory(Record):
    id: str
    name: str
    icon: str = DEFAULT_CATEGORY_ICON


class DiaryDraft(BaseModel):
    title: str = ""
    content: str = ""
    category: str = DEFAULT_DIARY_CATEGORY
    favorite: bool = False
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: DiaryEntry) -> "DiaryDraft":
        return cls(
            title=entry.title,
            content=entry.content,
            category=entry.category,
            favorite=entry.favorite,
            tags=list(entry.tags),
        )

    def is_submittable(self) -> bool:
        return bool(self.title.strip() and self.content.strip())

    def add_tag(self, tag: str) -> bool:
        tag = (tag or "").strip()
        if not tag or tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, tag: str) -> None:
        self.tags = [item for item in self.tags if item != tag]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "title": self.title.strip(),
            "content": self.content,
            "category": self.category,
            "favorite": self.favorite,
            "tags": list(self.tags),
        }
