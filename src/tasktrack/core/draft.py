"""New-task form state and due date composition."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time, tzinfo

DEFAULT_TIME = time(12, 0)


def parse_time(value: str) -> time:
    """Parse 'HH:MM' (or 'HH:MM:SS') into a time of day."""
    return time.fromisoformat(value.strip())


@dataclass(frozen=True)
class Draft:
    """
    A task that has not been submitted yet.

    Mirrors the add-task form: title may still be empty, date and time
    always hold a value.
    """

    title: str
    date: date
    time: time = DEFAULT_TIME

    @classmethod
    def blank(cls, today: date, default_time: time = DEFAULT_TIME) -> "Draft":
        """Empty title, due today at the default time."""
        return cls(title="", date=today, time=default_time)

    def with_title(self, title: str) -> "Draft":
        return replace(self, title=title)

    def with_date(self, value: date) -> "Draft":
        return replace(self, date=value)

    def with_time(self, value: time) -> "Draft":
        return replace(self, time=value)

    def due_date(self, tz: tzinfo | None = None) -> datetime:
        """
        Combine date and time into one aware instant.

        Interpreted as wall-clock time in tz, or the system local timezone
        when tz is None.
        """
        naive = datetime.combine(self.date, self.time)
        if tz is None:
            return naive.astimezone()
        return naive.replace(tzinfo=tz)
