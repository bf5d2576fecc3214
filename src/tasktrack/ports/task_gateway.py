"""Remote task store interface."""

from datetime import datetime
from typing import Protocol

from tasktrack.core.tasks import Task


class GatewayError(Exception):
    """Raised when a round trip to the task store fails, for any reason."""

    def __init__(self, operation: str, message: str = ""):
        self.operation = operation
        super().__init__(message or f"{operation} request failed")


class TaskGateway(Protocol):
    """Interface for the remote store holding the task collection."""

    def list_all(self) -> list[Task]:
        """Fetch every task, in store order."""
        ...

    def create(self, title: str, due_date: datetime) -> None:
        """Create a pending task."""
        ...

    def delete(self, task_id: int | str) -> None:
        """Delete a task by id."""
        ...
