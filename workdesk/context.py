from dataclasses import dataclass, field
from datetime import date
from typing import List

from workdesk.columns import display_name
from workdesk.models import User


@dataclass
class DashboardContext:
    today: date
    users: List[User] = field(default_factory=list)

    def user_label(self, assignee):
        return display_name(assignee, self.users)
