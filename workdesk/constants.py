from enum import Enum


class Status(str, Enum):
    BACKLOG = "backlog"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


STATUSES = [Status.BACKLOG, Status.IN_PROGRESS, Status.REVIEW, Status.DONE]
STATUS_LABELS = {
    Status.BACKLOG: "Backlog",
    Status.IN_PROGRESS: "In Progress",
    Status.REVIEW: "Review",
    Status.DONE: "Done",
}
STATUS_COLORS = {
    Status.BACKLOG: "#94A3B8",
    Status.IN_PROGRESS: "#3B82F6",
    Status.REVIEW: "#EAB308",
    Status.DONE: "#22C55E",
}

PRIORITIES = [Priority.LOW, Priority.MEDIUM, Priority.HIGH]
PRIORITY_LABELS = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
}
PRIORITY_BADGES = {
    Priority.LOW: "🔵",
    Priority.MEDIUM: "🟡",
    Priority.HIGH: "🔴",
}


class DueBucket(str, Enum):
    ALL = "all"
    OVERDUE = "overdue"
    TODAY = "today"
    TOMORROW = "tomorrow"
    WITHIN_7_DAYS = "within7days"


DUE_BUCKET_LABELS = {
    DueBucket.ALL: "All due dates",
    DueBucket.OVERDUE: "Overdue",
    DueBucket.TODAY: "Today",
    DueBucket.TOMORROW: "Tomorrow",
    DueBucket.WITHIN_7_DAYS: "Next 7 days",
}

ASSIGNEE_ALL = "all"
ASSIGNEE_UNASSIGNED = "unassigned"

UNASSIGNED_PLACEHOLDER = "Unassigned"
NO_DUE_DATE_PLACEHOLDER = "No due date"
NO_BOTTLENECKS_PLACEHOLDER = "None"


class DiaryWindow(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


DIARY_WINDOW_LABELS = {
    DiaryWindow.ALL: "All dates",
    DiaryWindow.TODAY: "Today",
    DiaryWindow.WEEK: "Last 7 days",
    DiaryWindow.MONTH: "Last month",
}
CATEGORY_ALL = "all"
DEFAULT_DIARY_CATEGORY = "personal"

DEFAULT_CATEGORY_ICON = "BookOpen"
CATEGORY_ICONS = {
    "BookOpen": "📖",
    "Lightbulb": "💡",
    "Brain": "🧠",
    "Star": "⭐",
    "User": "👤",
    "Heart": "❤️",
    "Sparkles": "✨",
    "Target": "🎯",
    "Coffee": "☕",
    "Music": "🎵",
}

DIARY_ENTRY_ENTITY = "DiaryEntry"
DIARY_CATEGORY_ENTITY = "DiaryCategory"
BOARD_ENTITY = "KanbanBoard"
TASK_ENTITY = "KanbanTask"
USER_ENTITY = "User"
ACTIVITY_ENTITY = "Activity"
ENTITY_NAMES = [
    DIARY_ENTRY_ENTITY,
    DIARY_CATEGORY_ENTITY,
    BOARD_ENTITY,
    TASK_ENTITY,
    USER_ENTITY,
    ACTIVITY_ENTITY,
]

CSV_DATE_FORMAT = "%d/%m/%Y"
