from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from workdesk.constants import Status
from workdesk.models import TaskPatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DropPosition:
    status: Status
    index: int


@dataclass(frozen=True)
class DragResult:
    task_id: str
    source: DropPosition
    destination: Optional[DropPosition] = None


def reorder(drag: DragResult) -> Optional[TaskPatch]:
    if drag.destination is None:
        logger.debug("Drop of task %s cancelled, nothing to patch.", drag.task_id)
        return None
    # Sibling ranks are left untouched; the drop index becomes the new rank.
    return TaskPatch(status=Status(drag.destination.status), rank=drag.destination.index)
