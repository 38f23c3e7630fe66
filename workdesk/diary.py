from __future__ import annotations

import calendar as _calendar
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from workdesk.clock import local_now
from workdesk.constants import CATEGORY_ALL, CATEGORY_ICONS, DEFAULT_CATEGORY_ICON, DiaryWindow
from workdesk.models import DiaryCategory, DiaryEntry


def one_month_before(moment: datetime) -> datetime:
    if moment.month == 1:
        year, month = moment.year - 1, 12
    else:
        year, month = moment.year, moment.month - 1
    last_day = _calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))


def _created_local(entry: DiaryEntry, now: datetime) -> Optional[datetime]:
    created = entry.created_at
    if created is None:
        return None
    if now.tzinfo is not None and created.tzinfo is not None:
        return created.astimezone(now.tzinfo)
    if now.tzinfo is not None:
        return created.replace(tzinfo=now.tzinfo)
    if created.tzinfo is not None:
        return created.replace(tzinfo=None)
    return created


def matches_window(entry: DiaryEntry, window, now: datetime) -> bool:
    window = DiaryWindow(window)
    if window is DiaryWindow.ALL:
        return True
    created = _created_local(entry, now)
    if created is None:
        return False
    if window is DiaryWindow.TODAY:
        return created.date() == now.date()
    if window is DiaryWindow.WEEK:
        return created >= now - timedelta(days=7)
    return created >= one_month_before(now)


def filter_entries(
    entries: Iterable[DiaryEntry],
    category: str = CATEGORY_ALL,
    window=DiaryWindow.ALL,
    now: Optional[datetime] = None,
) -> List[DiaryEntry]:
    now = now or local_now()
    return [
        entry
        for entry in entries
        if (category == CATEGORY_ALL or entry.category == category) and matches_window(entry, window, now)
    ]


def _local_day(entry: DiaryEntry, now: datetime) -> Optional[date]:
    created = _created_local(entry, now)
    return created.date() if created is not None else None


def entries_on_day(entries: Iterable[DiaryEntry], day: date, now: Optional[datetime] = None) -> List[DiaryEntry]:
    now = now or local_now()
    return [entry for entry in entries if _local_day(entry, now) == day]


def days_with_entries(entries: Iterable[DiaryEntry], now: Optional[datetime] = None) -> List[date]:
    now = now or local_now()
    days = {_local_day(entry, now) for entry in entries}
    days.discard(None)
    return sorted(days)


def icon_for(icon_name: Optional[str]) -> str:
    return CATEGORY_ICONS.get(icon_name or "", CATEGORY_ICONS[DEFAULT_CATEGORY_ICON])


def category_icon(category_name: str, categories: Iterable[DiaryCategory]) -> str:
    for category in categories:
        if category.name == category_name:
            return icon_for(category.icon)
    return icon_for(DEFAULT_CATEGORY_ICON)
