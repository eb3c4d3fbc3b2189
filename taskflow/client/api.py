"""HTTP client for the TaskFlow API.

Every failure mode of a call (connection refused, timeout, non-2xx status,
unreadable body) surfaces as :class:`TransportError` so callers have a single
thing to catch.
"""

import logging
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from ..config import API_BASE_URL, API_TIMEOUT
from ..schemas.task import Task, TaskBase
from ..schemas.user import User, UserStat

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """A remote call did not succeed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _task_payload(task: TaskBase) -> dict:
    # Full replacement: the id travels in the URL, never in the body.
    return task.model_dump(
        mode="json",
        by_alias=True,
        exclude={"id", "created_at", "updated_at"},
    )


class TaskApiClient:
    """Thin wrapper over ``requests.Session`` for the TaskFlow endpoints."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = API_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if not response.ok:
            try:
                message = response.json().get("message", response.reason)
            except (ValueError, AttributeError):
                message = response.reason
            raise TransportError(
                f"{method} {path} returned {response.status_code}: {message}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"{method} {path} returned a non-JSON body") from exc

    def _parse(self, model, data: Any):
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise TransportError(f"Unexpected {model.__name__} payload: {exc}") from exc

    def list_tasks(self, user_id: Optional[str] = None) -> List[Task]:
        params = {"userId": user_id} if user_id else None
        data = self._request("GET", "/api/tasks", params=params)
        if not isinstance(data, list):
            raise TransportError("GET /api/tasks did not return a list")
        return [self._parse(Task, item) for item in data]

    def create_task(self, task: TaskBase) -> Task:
        data = self._request("POST", "/api/tasks", json=_task_payload(task))
        return self._parse(Task, data)

    def replace_task(self, task_id: str, task: TaskBase) -> Task:
        data = self._request("PUT", f"/api/tasks/{task_id}", json=_task_payload(task))
        return self._parse(Task, data)

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")

    def sync_user(self, user: User) -> User:
        payload = user.model_dump(mode="json", by_alias=True, include={"name", "email", "avatar"})
        data = self._request("POST", "/api/users/sync", json=payload)
        return self._parse(User, data)

    def list_user_stats(self) -> List[UserStat]:
        data = self._request("GET", "/api/admin/users")
        if not isinstance(data, list):
            raise TransportError("GET /api/admin/users did not return a list")
        return [self._parse(UserStat, item) for item in data]
