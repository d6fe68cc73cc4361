from datetime import date, datetime, time
from typing import Optional


def start_of_day(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.min) if day else None


def end_of_day(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.max) if day else None
