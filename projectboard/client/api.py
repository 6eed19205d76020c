"""
Async HTTP client for the projectboard API.

Mirrors the browser fetch wrapper: the stored token is attached to every
request, and any 401 (other than a rejected login) clears it and notifies
the registered ``on_unauthorized`` callbacks before the error is raised.
Transport failures are raised as ``ApiError`` with status 0.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from projectboard.models.pydantic_models.project import ProjectModel

logger = logging.getLogger(__name__)

UnauthorizedCallback = Callable[[], Awaitable[None] | None]


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code} {message}")


class TokenStore:
    """In-memory bearer token holder, the client-side stand-in for localStorage."""

    def __init__(self, token: str = ""):
        self._token = token

    def get(self) -> str:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = ""


class ProjectsApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:4500",
        token_store: TokenStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self.token_store = token_store or TokenStore()
        self._unauthorized_callbacks: list[UnauthorizedCallback] = []
        client_kwargs: dict[str, Any] = {"base_url": base_url, "transport": transport}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        self._http = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> "ProjectsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    def on_unauthorized(self, callback: UnauthorizedCallback) -> None:
        self._unauthorized_callbacks.append(callback)

    # ── transport ─────────────────────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        token = self.token_store.get()
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _notify_unauthorized(self) -> None:
        for callback in list(self._unauthorized_callbacks):
            result = callback()
            if inspect.isawaitable(result):
                await result

    async def _request(
        self, method: str, path: str, json: Any = None, notify_unauthorized: bool = True
    ) -> Any:
        try:
            response = await self._http.request(
                method, path, json=json, headers=self._headers()
            )
        except httpx.HTTPError as e:
            # no response at all: status 0, like a failed fetch
            logger.warning(f"{method} {path} failed: {e!r}")
            raise ApiError(0, str(e) or type(e).__name__) from e

        if response.status_code == 401 and notify_unauthorized:
            # token expired or invalid: log out and let the UI know
            self.token_store.clear()
            await self._notify_unauthorized()

        if response.is_error:
            message = response.text or response.reason_phrase
            raise ApiError(response.status_code, message)

        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return None

    # ── endpoints ─────────────────────────────────────────────────────────

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a token. A rejected login is not a logout."""
        data = await self._request(
            "POST",
            "/api/auth/login",
            json={"email": email, "password": password},
            notify_unauthorized=False,
        )
        token = data["token"]
        self.token_store.set(token)
        return token

    async def list_projects(self) -> list[ProjectModel]:
        data = await self._request("GET", "/api/projects")
        return [ProjectModel.model_validate(item) for item in data]

    async def get_project(self, project_id: int) -> ProjectModel:
        data = await self._request("GET", f"/api/projects/{project_id}")
        return ProjectModel.model_validate(data)

    async def create_project(self, title: str, description: str = "") -> ProjectModel:
        data = await self._request(
            "POST", "/api/projects", json={"title": title, "description": description}
        )
        return ProjectModel.model_validate(data)

    async def update_project(self, project_id: int, **fields: str) -> ProjectModel:
        """Send only the given fields (``title`` and/or ``description``)."""
        data = await self._request("PUT", f"/api/projects/{project_id}", json=fields)
        return ProjectModel.model_validate(data)

    async def delete_project(self, project_id: int) -> ProjectModel:
        data = await self._request("DELETE", f"/api/projects/{project_id}")
        return ProjectModel.model_validate(data)
