"""Pure task domain logic - no I/O dependencies."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo

PENDING = "pending"

# Python's parser stops at microseconds; the store may send nanoseconds.
_FRACTION = re.compile(r"\.(\d{6})\d+")

def parse_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 instant from the wire.

    Accepts a trailing 'Z' and any fractional-second precision. Values
    without an offset are taken as UTC.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(r".\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

def format_instant(value: datetime) -> str:
    """Render an instant as UTC ISO-8601 with millisecond precision."""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

@dataclass(frozen=True)
class Task:
    """A task held by the remote store."""

    id: int | str
    title: str
    due_date: datetime
    status: str = PENDING

    @classmethod
    def from_api(cls, data: dict) -> "Task":
        """Create Task from a store record."""
        return cls(
            id=data["id"],
            title=data["title"],
            due_date=parse_instant(data["due_date"]),
            status=data.get("status") or PENDING,
        )

    def is_overdue(self, as_of: datetime | None = None) -> bool:
        """Due strictly before as_of (default: now)."""
        as_of = as_of or datetime.now(timezone.utc)
        return self.due_date < as_of

def sort_by_due_date(tasks: list[Task]) -> list[Task]:
    """
    Sort tasks by due date, earliest first.

    Stable: tasks due at the same instant keep their input order.
    Pure function - no I/O.
    """
    return sorted(tasks, key=lambda t: t.due_date)


def format_due_date(task: Task, tz: tzinfo | None = None) -> str:
    """
    Short human-readable due date, e.g. 'Tue, Jan 2, 10:00 AM'.

    Rendered in tz, or the system local timezone when tz is None.
    """
    local = task.due_date.astimezone(tz)
    hour = local.hour % 12 or 12
    return f"{local:%a}, {local:%b} {local.day}, {hour}:{local:%M} {'AM' if local.hour < 12 else 'PM'}"
