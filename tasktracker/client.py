"""HTTP client for the Task Tracker API.

Credentials are an explicit object owned by the caller. A single httpx auth hook
(BearerAuth) attaches the token to every request and clears the credentials when
the server answers 401, so an expired or revoked session is dropped in one place.

    creds = Credentials()
    with TaskTrackerClient("http://localhost:8000", credentials=creds) as client:
        client.login("user@example.com", "user123")
        page = client.list_tasks(status="pending")
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 10.0


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status (error envelope)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class Credentials:
    """Client-held session: bearer token plus the user record returned at login."""

    def __init__(self, token: str | None = None, user: dict[str, Any] | None = None) -> None:
        self.token = token
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        return bool(self.user) and self.user.get("role") == "admin"

    def set(self, token: str, user: dict[str, Any] | None) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None


class BearerAuth(httpx.Auth):
    """Attach 'Authorization: Bearer <token>' and clear credentials on 401."""

    def __init__(self, credentials: Credentials) -> None:
        self.credentials = credentials

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if self.credentials.token:
            request.headers["Authorization"] = f"Bearer {self.credentials.token}"
        response = yield request
        if response.status_code == 401 and self.credentials.is_authenticated:
            logger.info("Received 401; clearing stored credentials")
            self.credentials.clear()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


class TaskTrackerClient:
    """Typed-ish wrapper over the v1 REST routes; returns the envelope's data field."""

    def __init__(
        self,
        base_url: str,
        credentials: Credentials | None = None,
        api_prefix: str = "/api/v1",
        timeout: float = DEFAULT_TIMEOUT_SEC,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.credentials = credentials if credentials is not None else Credentials()
        self.api_prefix = api_prefix.rstrip("/")
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            auth=BearerAuth(self.credentials),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> TaskTrackerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        versioned: bool = True,
    ) -> Any:
        url = f"{self.api_prefix}{path}" if versioned else path
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        response = self._http.request(method, url, json=json, params=params)
        if response.status_code >= 400:
            raise ApiError(_error_message(response), response.status_code)
        if not response.content:
            return None
        return response.json().get("data")

    def _store_session(self, data: dict[str, Any]) -> dict[str, Any]:
        self.credentials.set(data["token"], data.get("user"))
        return data["user"]

    # Auth

    def register(self, email: str, password: str, first_name: str, last_name: str) -> dict[str, Any]:
        data = self._request(
            "POST",
            "/auth/register",
            json={
                "email": email,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
            },
        )
        return self._store_session(data)

    def login(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._store_session(data)

    def logout(self) -> None:
        self.credentials.clear()

    # Users

    def get_profile(self) -> dict[str, Any]:
        user = self._request("GET", "/users/profile")
        if self.credentials.token:
            self.credentials.user = user
        return user

    def update_profile(
        self, first_name: str | None = None, last_name: str | None = None
    ) -> dict[str, Any]:
        body = {"firstName": first_name, "lastName": last_name}
        user = self._request(
            "PUT", "/users/profile", json={k: v for k, v in body.items() if v is not None}
        )
        self.credentials.user = user
        return user

    def list_users(self, page: int = 1, limit: int = 10) -> dict[str, Any]:
        return self._request("GET", "/users", params={"page": page, "limit": limit})

    def update_user(self, user_id: int, **fields: Any) -> dict[str, Any]:
        """Admin update; accepts firstName/lastName/role/isActive (or snake_case)."""
        return self._request("PUT", f"/users/{user_id}", json=fields)

    # Tasks

    def list_tasks(
        self,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        priority: str | None = None,
    ) -> dict[str, Any]:
        return self._request(
            "GET",
            "/tasks",
            params={"page": page, "limit": limit, "status": status, "priority": priority},
        )

    def get_task(self, task_id: int) -> dict[str, Any]:
        return self._request("GET", f"/tasks/{task_id}")

    def create_task(
        self,
        title: str,
        description: str | None = None,
        status: str | None = None,
        priority: str | None = None,
    ) -> dict[str, Any]:
        body = {"title": title, "description": description, "status": status, "priority": priority}
        return self._request("POST", "/tasks", json={k: v for k, v in body.items() if v is not None})

    def update_task(self, task_id: int, **fields: Any) -> dict[str, Any]:
        return self._request("PUT", f"/tasks/{task_id}", json=fields)

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/tasks/{task_id}")

    def list_all_tasks(
        self,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        priority: str | None = None,
    ) -> dict[str, Any]:
        return self._request(
            "GET",
            "/tasks/admin/all",
            params={"page": page, "limit": limit, "status": status, "priority": priority},
        )

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health", versioned=False)
