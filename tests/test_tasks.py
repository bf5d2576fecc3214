"""Tests for core task logic."""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from tasktrack.core.draft import DEFAULT_TIME, Draft, parse_time
from tasktrack.core.tasks import (
    Task,
    format_due_date,
    format_instant,
    parse_instant,
    sort_by_due_date,
)

# Fixtures
@pytest.fixture
def now():
    return datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

@pytest.fixture
def sample_tasks(now):
    """Store order, deliberately unsorted."""
    return [
        Task(id=1, title="Later", due_date=now + timedelta(days=2)),
        Task(id=2, title="Overdue", due_date=now - timedelta(hours=3)),
        Task(id=3, title="Soon", due_date=now + timedelta(hours=1)),
        Task(id=4, title="Also soon", due_date=now + timedelta(hours=1)),
    ]

class TestParseInstant:
    def test_zulu_suffix(self):
        assert parse_instant("2024-01-02T10:00:00Z") == datetime(2024, 1, 2, 10, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        parsed = parse_instant("2024-01-02T10:00:00-05:00")
        assert parsed.utcoffset() == timedelta(hours=-5)
        assert parsed == datetime(2024, 1, 2, 15, tzinfo=timezone.utc)

    def test_naive_value_is_utc(self):
        assert parse_instant("2024-01-02T10:00:00").tzinfo == timezone.utc

    def test_nanosecond_precision(self):
        parsed = parse_instant("2024-01-02T10:00:00.123456789Z")
        assert parsed.microsecond == 123456

    def test_millisecond_precision(self):
        parsed = parse_instant("2024-06-01T13:30:00.000Z")
        assert parsed == datetime(2024, 6, 1, 13, 30, tzinfo=timezone.utc)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_instant("next tuesday")

class TestFormatInstant:
    def test_utc_with_milliseconds(self):
        value = datetime(2024, 6, 1, 9, 30, tzinfo=ZoneInfo("America/Toronto"))
        assert format_instant(value) == "2024-06-01T13:30:00.000Z"

class TestTask:
    def test_from_api(self):
        task = Task.from_api(
            {"id": 7, "title": "Pay rent", "due_date": "2024-02-01T09:00:00Z", "status": "pending"}
        )
        assert task.id == 7
        assert task.title == "Pay rent"
        assert task.due_date == datetime(2024, 2, 1, 9, tzinfo=timezone.utc)
        assert task.status == "pending"

    def test_from_api_keeps_unknown_status(self):
        task = Task.from_api({"id": 1, "title": "X", "due_date": "2024-02-01T09:00:00Z", "status": "done"})
        assert task.status == "done"

    def test_from_api_missing_status_defaults_pending(self):
        task = Task.from_api({"id": 1, "title": "X", "due_date": "2024-02-01T09:00:00Z"})
        assert task.status == "pending"

    def test_from_api_missing_field(self):
        with pytest.raises(KeyError):
            Task.from_api({"id": 1, "title": "X"})

    def test_is_overdue_past(self, now):
        task = Task(id=1, title="T", due_date=now - timedelta(seconds=1))
        assert task.is_overdue(as_of=now) is True

    def test_is_overdue_future(self, now):
        task = Task(id=1, title="T", due_date=now + timedelta(seconds=1))
        assert task.is_overdue(as_of=now) is False

    def test_is_overdue_exact_instant_is_not_overdue(self, now):
        task = Task(id=1, title="T", due_date=now)
        assert task.is_overdue(as_of=now) is False

    def test_is_overdue_compares_instants_across_zones(self, now):
        task = Task(id=1, title="T", due_date=now.astimezone(ZoneInfo("Asia/Tokyo")))
        assert task.is_overdue(as_of=now + timedelta(minutes=1)) is True

    def test_task_is_immutable(self, now):
        task = Task(id=1, title="T", due_date=now)
        with pytest.raises(AttributeError):
            task.title = "changed"

class TestSortByDueDate:
    def test_earliest_first(self, sample_tasks):
        result = sort_by_due_date(sample_tasks)
        assert [t.title for t in result] == ["Overdue", "Soon", "Also soon", "Later"]

    def test_ties_keep_store_order(self, now):
        tasks = [Task(id=i, title=str(i), due_date=now) for i in (3, 1, 2)]
        assert [t.id for t in sort_by_due_date(tasks)] == [3, 1, 2]

    def test_does_not_mutate_input(self, sample_tasks):
        before = list(sample_tasks)
        sort_by_due_date(sample_tasks)
        assert sample_tasks == before

    def test_store_example(self):
        tasks = [
            Task.from_api({"id": 1, "title": "A", "due_date": "2024-01-02T10:00:00Z", "status": "pending"}),
            Task.from_api({"id": 2, "title": "B", "due_date": "2024-01-01T10:00:00Z", "status": "pending"}),
        ]
        assert [t.title for t in sort_by_due_date(tasks)] == ["B", "A"]

    def test_empty(self):
        assert sort_by_due_date([]) == []


class TestFormatDueDate:
    def test_morning(self):
        task = Task(id=1, title="T", due_date=datetime(2024, 1, 2, 10, 0, tzinfo=timezone.utc))
        assert format_due_date(task, timezone.utc) == "Tue, Jan 2, 10:00 AM"

    def test_afternoon(self):
        task = Task(id=1, title="T", due_date=datetime(2024, 6, 1, 17, 5, tzinfo=timezone.utc))
        assert format_due_date(task, timezone.utc) == "Sat, Jun 1, 5:05 PM"

    def test_midnight_and_noon(self):
        midnight = Task(id=1, title="T", due_date=datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc))
        noon = Task(id=2, title="T", due_date=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
        assert format_due_date(midnight, timezone.utc) == "Mon, Jan 1, 12:00 AM"
        assert format_due_date(noon, timezone.utc) == "Mon, Jan 1, 12:00 PM"

    def test_renders_in_given_zone(self):
        task = Task(id=1, title="T", due_date=datetime(2024, 1, 2, 3, 0, tzinfo=timezone.utc))
        assert format_due_date(task, ZoneInfo("America/Toronto")) == "Mon, Jan 1, 10:00 PM"

class TestDraft:
    def test_blank_defaults(self):
        draft = Draft.blank(date(2024, 6, 1))
        assert draft.title == ""
        assert draft.date == date(2024, 6, 1)
        assert draft.time == DEFAULT_TIME == time(12, 0)

    def test_setters_return_new_draft(self):
        draft = Draft.blank(date(2024, 6, 1))
        changed = draft.with_title("X").with_date(date(2024, 7, 1)).with_time(time(9, 30))
        assert draft.title == ""
        assert (changed.title, changed.date, changed.time) == ("X", date(2024, 7, 1), time(9, 30))

    def test_due_date_in_zone(self):
        draft = Draft(title="X", date=date(2024, 6, 1), time=time(9, 30))
        due = draft.due_date(ZoneInfo("America/Toronto"))
        assert due == datetime(2024, 6, 1, 13, 30, tzinfo=timezone.utc)

    def test_due_date_local_is_aware(self):
        draft = Draft(title="X", date=date(2024, 6, 1), time=time(9, 30))
        due = draft.due_date()
        assert due.tzinfo is not None
        assert (due.hour, due.minute) == (9, 30)

    def test_parse_time(self):
        assert parse_time("09:30") == time(9, 30)
        with pytest.raises(ValueError):
            parse_time("9.30pm")
