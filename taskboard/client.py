"""Small synchronous client for the Taskboard HTTP API.

The client holds no credentials. Every authenticated call takes the bearer
token as its first argument and sends it on that request only::

    client = TaskboardClient("http://localhost:8000")
    session = client.login("ann@x.com", "Secr3t!1")
    task = client.create_task(session["token"], "Buy milk")
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


def _auth(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TaskboardClient:
    def __init__(self, base_url: str = "http://localhost:8000", http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self):
        if self._owns_http:
            self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, token: Optional[str] = None, **kwargs) -> Any:
        headers = _auth(token) if token is not None else None
        response = self.http.request(method, path, headers=headers, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.debug(f"{method} {path} failed with {response.status_code}")
            raise ApiError(response.status_code, detail)
        return response.json()

    # Auth

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/register", json={"name": name, "email": email, "password": password})

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/auth/login", json={"email": email, "password": password})

    def profile(self, token: str) -> Dict[str, Any]:
        return self._request("GET", "/auth/profile", token)

    # Tasks

    def create_task(
        self,
        token: str,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
        due_date: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"title": title}
        if description is not None:
            body["description"] = description
        if status is not None:
            body["status"] = status
        if due_date is not None:
            body["dueDate"] = due_date.isoformat()
        return self._request("POST", "/tasks", token, json=body)

    def list_tasks(self, token: str, status: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"status": status} if status else None
        return self._request("GET", "/tasks", token, params=params)

    def get_task(self, token: str, task_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}", token)

    def update_task(self, token: str, task_id: int, **changes: Any) -> Dict[str, Any]:
        """Send only the given fields. Pass ``description=None`` to clear it."""
        body = {k: (v.isoformat() if isinstance(v, datetime) else v) for k, v in changes.items()}
        return self._request("PUT", f"/tasks/{task_id}", token, json=body)

    def delete_task(self, token: str, task_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/tasks/{task_id}", token)

    def toggle_task(self, token: str, task_id: int) -> Dict[str, Any]:
        return self._request("PATCH", f"/tasks/{task_id}/toggle", token)
