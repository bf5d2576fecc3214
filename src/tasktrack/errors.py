"""User-facing failures published by the sync manager."""


class TrackerError(Exception):
    """A failed command. Carries only a human-readable message."""

    message = "Something went wrong"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class FetchFailed(TrackerError):
    """Fetching the task list failed."""

    message = "Failed to fetch todos"


class CreateFailed(TrackerError):
    """Creating a task failed."""

    message = "Failed to create todo"


class DeleteFailed(TrackerError):
    """Deleting a task failed."""

    message = "Failed to delete todo"
