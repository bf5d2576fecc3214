"""Task synchronization - local task state kept in step with the remote store."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone, tzinfo
from typing import Callable

from .core.draft import DEFAULT_TIME, Draft
from .core.tasks import Task, format_due_date, sort_by_due_date
from .errors import CreateFailed, DeleteFailed, FetchFailed, TrackerError
from .ports.task_gateway import GatewayError, TaskGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskView:
    """Immutable snapshot of manager state, handed to the rendering surface."""

    tasks: tuple[Task, ...]
    draft: Draft
    error: str | None = None
    fetched: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.tasks


Listener = Callable[[TaskView], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskSyncManager:
    """
    Owns the local task collection, the add-task draft and the error slot.

    Every successful mutation is followed by a full refresh from the store,
    so the collection only ever reflects a confirmed fetch. Gateway calls
    run in a worker thread; state is only touched on the event loop.
    """

    def __init__(
        self,
        gateway: TaskGateway,
        tz: tzinfo | None = None,
        default_time: time = DEFAULT_TIME,
        now: Callable[[], datetime] = _utc_now,
    ):
        self._gateway = gateway
        self._tz = tz
        self._default_time = default_time
        self._now = now
        self._tasks: tuple[Task, ...] = ()
        self._fetched = False
        self._error: TrackerError | None = None
        self._draft = self._blank_draft()
        self._listeners: list[Listener] = []

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def draft(self) -> Draft:
        return self._draft

    @property
    def error(self) -> TrackerError | None:
        return self._error

    def snapshot(self) -> TaskView:
        return TaskView(
            tasks=self._tasks,
            draft=self._draft,
            error=str(self._error) if self._error else None,
            fetched=self._fetched,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener with a fresh snapshot on every change.

        Exceptions raised by a listener are logged and otherwise ignored.
        Returns an unsubscribe function.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def is_overdue(self, task: Task) -> bool:
        """Due strictly before now. Evaluated on every call, never cached."""
        return task.is_overdue(self._now())

    def format_due_date(self, task: Task) -> str:
        return format_due_date(task, self._tz)

    def set_title(self, title: str) -> None:
        self._draft = self._draft.with_title(title)
        self._publish()

    def set_date(self, value: date) -> None:
        self._draft = self._draft.with_date(value)
        self._publish()

    def set_time(self, value: time) -> None:
        self._draft = self._draft.with_time(value)
        self._publish()

    async def initialize(self) -> None:
        """Load the collection once at client start."""
        await self.refresh()

    async def refresh(self) -> bool:
        """
        Replace the collection with a freshly fetched, sorted copy.

        On failure the previous collection is kept and FetchFailed is
        published. Returns whether the fetch succeeded.
        """
        try:
            fetched = await asyncio.to_thread(self._gateway.list_all)
        except GatewayError as e:
            logger.error(f"Error fetching todos: {e}")
            self._fail(FetchFailed())
            return False

        self._tasks = tuple(sort_by_due_date(fetched))
        self._fetched = True
        logger.debug(f"Fetched {len(self._tasks)} tasks")
        self._publish()
        return True

    async def submit(self, draft: Draft | None = None) -> bool:
        """
        Create a task from draft (default: the current draft).

        The draft is reset only once the store confirms the create; the
        collection changes only through the refresh that follows.
        """
        if draft is None:
            draft = self._draft
        due_date = draft.due_date(self._tz)
        try:
            await asyncio.to_thread(self._gateway.create, draft.title, due_date)
        except GatewayError as e:
            logger.error(f"Error creating todo: {e}")
            self._fail(CreateFailed())
            return False

        self._draft = self._blank_draft()
        await self.refresh()
        return True

    async def remove(self, task_id: int | str) -> bool:
        """Delete a task; the collection changes only through the refresh that follows."""
        try:
            await asyncio.to_thread(self._gateway.delete, task_id)
        except GatewayError as e:
            logger.error(f"Error deleting todo: {e}")
            self._fail(DeleteFailed())
            return False

        await self.refresh()
        return True

    def dismiss_error(self) -> None:
        self._error = None
        self._publish()

    def _blank_draft(self) -> Draft:
        today = self._now().astimezone(self._tz).date()
        return Draft.blank(today, self._default_time)

    def _fail(self, error: TrackerError) -> None:
        # One slot: a new failure replaces an unacknowledged one.
        self._error = error
        self._publish()

    def _publish(self) -> None:
        view = self.snapshot()
        for listener in list(self._listeners):
            # Listener failures never propagate into commands
            try:
                listener(view)
            except Exception:
                logger.exception(f"Task view listener {listener!r} failed")
