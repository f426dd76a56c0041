from datetime import datetime, date, time, timedelta
from typing import Optional

import pytz

UTC = pytz.utc

def now_in(tz=UTC) -> datetime:
    return datetime.now(tz)

def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)

def next_occurrence(at: time, now: datetime, tz=None) -> datetime:
    """
    Next wall-clock occurrence of ``at`` strictly after ``now``.

    Builds today's HH:MM:00.000 and rolls forward one calendar day when that
    moment is not after ``now``. With a pytz zone the candidate is localized in
    that zone; otherwise it takes ``now``'s tzinfo (or stays naive).
    """
    if tz is not None and now.tzinfo is not None:
        now = now.astimezone(tz)

    def build(day: date) -> datetime:
        naive = datetime.combine(day, at)
        if tz is not None:
            return tz.localize(naive)
        return naive.replace(tzinfo=now.tzinfo)

    candidate = build(now.date())
    if candidate <= now:
        candidate = build(add_days(now.date(), 1))
    return candidate

def epoch_millis(dt: Optional[datetime] = None) -> int:
    dt = dt or now_in(UTC)
    return int(dt.timestamp() * 1000)
