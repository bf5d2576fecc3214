"""Functional core - pure business logic with no I/O."""

from .tasks import (
    PENDING,
    Task,
    format_due_date,
    format_instant,
    parse_instant,
    sort_by_due_date,
)
from .draft import DEFAULT_TIME, Draft, parse_time

__all__ = [
    # Tasks
    "PENDING",
    "Task",
    "format_due_date",
    "format_instant",
    "parse_instant",
    "sort_by_due_date",
    # Draft
    "DEFAULT_TIME",
    "Draft",
    "parse_time",
]
