# app/client/api.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

import httpx
from pydantic.alias_generators import to_camel

from app.client.overview import group_tasks_by_user
from app.client.session import Session

logger = logging.getLogger(__name__)


def _camel(fields: dict) -> dict:
    return {to_camel(key): value for key, value in fields.items() if value is not None}


@dataclass
class ApiResult:
    status: int
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ApiClient:
    """Thin HTTP client for the task API.

    Never raises for HTTP or transport failures: every call returns an
    ``ApiResult`` whose ``error`` is the server's message, so a UI can show it
    verbatim.
    """

    def __init__(
        self,
        session: Session,
        base_url: str = "http://localhost:8000",
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.session = session
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self):
        self.http.close()

    def request(self, method: str, path: str, body: Optional[dict] = None, auth: bool = False) -> ApiResult:
        headers = {"Content-Type": "application/json"}
        if auth and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            res = self.http.request(method, path, json=body, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("[API] Request failed: %s", exc)
            return ApiResult(status=0, error="Network error")

        try:
            payload = res.json()
        except ValueError:
            payload = res.text

        if not res.is_success:
            if isinstance(payload, str) and payload:
                message = payload
            elif isinstance(payload, dict) and payload.get("message"):
                message = payload["message"]
            else:
                message = "Request failed"
            return ApiResult(status=res.status_code, error=message)

        return ApiResult(status=res.status_code, data=payload)

    # auth

    def register(self, name: str, email: str, password: str) -> ApiResult:
        return self.request("POST", "/api/v1/auth/register", {"name": name, "email": email, "password": password})

    def create_admin(self, name: str, email: str, password: str, admin_secret: str) -> ApiResult:
        body = {"name": name, "email": email, "password": password, "adminSecret": admin_secret}
        return self.request("POST", "/api/v1/auth/create-admin", body)

    def login(self, email: str, password: str) -> ApiResult:
        result = self.request("POST", "/api/v1/auth/login", {"email": email, "password": password})
        if not result.ok:
            return result
        token = result.data.get("token") if isinstance(result.data, dict) else None
        if not token:
            return ApiResult(status=result.status, error="Invalid response from server")
        self.session.save(token, result.data.get("role"))
        return result

    def logout(self):
        self.session.clear()

    # tasks

    def list_tasks(self) -> ApiResult:
        return self.request("GET", "/api/v1/tasks", auth=True)

    def create_task(self, title: str, description: str, **fields) -> ApiResult:
        body = {"title": title, "description": description}
        body.update(_camel(fields))
        return self.request("POST", "/api/v1/tasks", body, auth=True)

    def update_task(self, task_id: str, **fields) -> ApiResult:
        return self.request("PUT", f"/api/v1/tasks/{task_id}", _camel(fields), auth=True)

    def delete_task(self, task_id: str) -> ApiResult:
        return self.request("DELETE", f"/api/v1/tasks/{task_id}", auth=True)

    def list_users(self) -> ApiResult:
        return self.request("GET", "/api/v1/tasks/users", auth=True)

    def user_task_overview(self, now: Optional[datetime] = None) -> ApiResult:
        """Admin view: every user with the tasks they created and status counts."""
        users = self.list_users()
        if not users.ok:
            return users
        tasks = self.list_tasks()
        if not tasks.ok:
            return tasks
        return ApiResult(status=tasks.status, data=group_tasks_by_user(users.data, tasks.data, now))

    def health(self) -> ApiResult:
        return self.request("GET", "/api/v1/health")
