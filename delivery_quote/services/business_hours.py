"""Advisory text telling the customer when we will get back to them.

Office hours are Monday to Friday from 09:00. Requests received up to 15:40
are answered the same day within ``RESPONSE_LEAD`` minutes; later ones move to
the next morning. Friday evening and Saturday requests wait until Monday.
"""
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from delivery_quote.core.config import settings

OPENING_TIME = time(9, 0)
LAST_SAME_DAY_TIME = time(15, 40)
RESPONSE_LEAD = timedelta(minutes=80)

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

MONDAY, THURSDAY, FRIDAY, SUNDAY = 0, 3, 4, 6


def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def compute_advisory(now: datetime) -> str:
    weekday = now.weekday()
    minutes = now.hour * 60 + now.minute

    if weekday == SUNDAY:
        return "We are closed on Sundays. We will contact you on Monday morning."

    if MONDAY <= weekday <= THURSDAY and minutes < _minutes(OPENING_TIME):
        return (
            f"We open at {OPENING_TIME:%H:%M}. "
            f"We will contact you this {WEEKDAY_NAMES[weekday]} morning."
        )

    if MONDAY <= weekday <= FRIDAY and _minutes(OPENING_TIME) <= minutes <= _minutes(LAST_SAME_DAY_TIME):
        eta = now + RESPONSE_LEAD
        return f"We will contact you at approximately {eta:%H:%M}."

    if MONDAY <= weekday <= THURSDAY and minutes > _minutes(LAST_SAME_DAY_TIME):
        tomorrow = WEEKDAY_NAMES[(weekday + 1) % 7]
        return f"We will contact you tomorrow, {tomorrow}, in the morning."

    return "We will contact you on Monday morning."


def local_now() -> datetime:
    return datetime.now(ZoneInfo(settings.TIMEZONE))
