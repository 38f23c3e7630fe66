from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from workdesk.settings import get_settings

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    tz_name = get_settings().timezone
    try:
        return datetime.now(ZoneInfo(tz_name))
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, falling back to system time.", tz_name)
        return datetime.now().astimezone()


def local_today() -> date:
    return local_now().date()
