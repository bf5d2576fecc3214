"""HTTP adapter - requests client for the remote task store."""

import logging
from datetime import datetime

import requests

from tasktrack.core.tasks import PENDING, Task, format_instant
from tasktrack.ports.task_gateway import GatewayError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://localhost:8080"
TODOS_PATH = "/api/todos"


class HttpTaskGateway:
    """
    Task store over HTTP/JSON.

    Implements TaskGateway protocol. One request per call, no retries and
    no timeout beyond the transport default. No business logic - just I/O.
    """

    def __init__(self, api_base: str = DEFAULT_API_BASE, session: requests.Session | None = None):
        self.api_base = api_base.rstrip("/")
        self._session = session or requests.Session()

    def _url(self, suffix: str = "") -> str:
        return f"{self.api_base}{TODOS_PATH}{suffix}"

    def list_all(self) -> list[Task]:
        """Fetch all tasks."""
        try:
            resp = self._session.get(self._url())
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            logger.debug(f"Listing tasks failed: {e}")
            raise GatewayError("list", str(e)) from e

        try:
            return [Task.from_api(item) for item in data]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.debug(f"Malformed task list from store: {e!r}")
            raise GatewayError("list", f"malformed response: {e!r}") from e

    def create(self, title: str, due_date: datetime) -> None:
        """Create a pending task. Response body is ignored."""
        payload = {
            "title": title,
            "due_date": format_instant(due_date),
            "status": PENDING,
        }
        try:
            resp = self._session.post(self._url(), json=payload)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.debug(f"Creating task {title!r} failed: {e}")
            raise GatewayError("create", str(e)) from e

    def delete(self, task_id: int | str) -> None:
        """Delete a task. Any rejection is reported the same way."""
        try:
            resp = self._session.delete(self._url(f"/{task_id}"))
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.debug(f"Deleting task {task_id} failed: {e}")
            raise GatewayError("delete", str(e)) from e
