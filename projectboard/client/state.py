"""
Headless state controller for the project board UI.

All UI state lives in one ``BoardState`` owned by ``ProjectBoardController``.
The visible list is derived on every call from the server list plus the
debounced query and the sort settings; it is never stored.
"""

import logging
import time
import unicodedata
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from projectboard.client.api import ApiError, ProjectsApiClient
from projectboard.models.pydantic_models.project import ProjectModel

logger = logging.getLogger(__name__)

SortKey = Literal["title", "id"]
SortDir = Literal["asc", "desc"]

SEARCH_DEBOUNCE_SECONDS = 0.3
DEMO_EMAIL = "demo@demo.cz"
DEMO_PASSWORD = "demo"


class Debouncer:
    """Holds the latest value and exposes it only once it has been stable for *delay*."""

    def __init__(
        self,
        delay: float = SEARCH_DEBOUNCE_SECONDS,
        initial: str = "",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.delay = delay
        self._clock = clock
        self._pending = initial
        self._settled = initial
        self._changed_at = clock()

    def push(self, value: str) -> None:
        if value != self._pending:
            self._pending = value
            self._changed_at = self._clock()

    @property
    def pending(self) -> str:
        return self._pending

    def value(self) -> str:
        if self._pending != self._settled and self._clock() - self._changed_at >= self.delay:
            self._settled = self._pending
        return self._settled


def collation_key(text: str) -> str:
    """Accent- and case-insensitive key, so "Álfa" sorts next to "alfa"."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def filter_projects(projects: list[ProjectModel], query: str) -> list[ProjectModel]:
    q = query.strip().lower()
    if not q:
        return list(projects)
    return [
        p
        for p in projects
        if q in p.title.lower() or q in (p.description or "").lower()
    ]


def sort_projects(
    projects: list[ProjectModel], sort_by: SortKey, sort_dir: SortDir
) -> list[ProjectModel]:
    if sort_by == "title":
        key = lambda p: collation_key(p.title)  # noqa: E731
    else:
        key = lambda p: p.id  # noqa: E731
    return sorted(projects, key=key, reverse=sort_dir == "desc")


@dataclass
class EditDraft:
    project_id: int
    title: str
    description: str
    original_title: str
    original_description: str

    @property
    def changed(self) -> bool:
        return (
            self.original_title != self.title.strip()
            or (self.original_description or "") != (self.description or "")
        )


@dataclass
class BoardState:
    projects: list[ProjectModel] = field(default_factory=list)
    sort_by: SortKey = "title"
    sort_dir: SortDir = "asc"
    logged_in: bool = False
    loading: bool = False
    editing: EditDraft | None = None
    delete_target: ProjectModel | None = None
    new_title: str = ""
    new_description: str = ""


class ProjectBoardController:
    """
    Owns the board state and talks to the API.

    ``confirm`` and ``alert`` stand in for the browser's blocking dialogs:
    ``confirm(message)`` returns whether the user accepted, ``alert(message)``
    reports a failure or an outcome.
    """

    def __init__(
        self,
        api: ProjectsApiClient,
        confirm: Callable[[str], bool] = lambda message: True,
        alert: Callable[[str], None] = lambda message: None,
        clock: Callable[[], float] = time.monotonic,
        debounce_seconds: float = SEARCH_DEBOUNCE_SECONDS,
    ):
        self.api = api
        self.confirm = confirm
        self.alert = alert
        self.state = BoardState(logged_in=bool(api.token_store.get()))
        self._query = Debouncer(delay=debounce_seconds, clock=clock)
        api.on_unauthorized(self.handle_unauthorized)

    # ── derived views ─────────────────────────────────────────────────────

    @property
    def query(self) -> str:
        return self._query.pending

    def set_query(self, value: str) -> None:
        self._query.push(value)

    def clear_query(self) -> None:
        self._query.push("")

    def visible_projects(self) -> list[ProjectModel]:
        filtered = filter_projects(self.state.projects, self._query.value())
        return sort_projects(filtered, self.state.sort_by, self.state.sort_dir)

    def counts(self) -> tuple[int, int]:
        return len(self.visible_projects()), len(self.state.projects)

    def set_sort(self, sort_by: SortKey) -> None:
        if sort_by not in ("title", "id"):
            raise ValueError(f"Unknown sort key: {sort_by}")
        self.state.sort_by = sort_by

    def toggle_sort_direction(self) -> None:
        self.state.sort_dir = "desc" if self.state.sort_dir == "asc" else "asc"

    # ── session ───────────────────────────────────────────────────────────

    async def load(self) -> None:
        try:
            self.state.projects = await self.api.list_projects()
        except ApiError as e:
            logger.error(f"GET /api/projects failed: {e}")

    async def login_demo(self) -> bool:
        self.state.loading = True
        try:
            await self.api.login(DEMO_EMAIL, DEMO_PASSWORD)
            self.state.logged_in = True
            await self.load()
            self.alert("Login OK")
            return True
        except ApiError as e:
            logger.error(f"Login failed: {e}")
            self.alert("Login failed.")
            return False
        finally:
            self.state.loading = False

    async def logout(self) -> None:
        self.api.token_store.clear()
        self.state.logged_in = False
        self.state.editing = None
        await self.load()

    async def handle_unauthorized(self) -> None:
        """Called by the API client whenever a request comes back 401."""
        self.state.logged_in = False
        self.state.editing = None
        await self.load()

    # ── create ────────────────────────────────────────────────────────────

    async def add_project(self) -> bool:
        if not self.state.logged_in:
            self.alert("Please log in first.")
            return False
        try:
            await self.api.create_project(self.state.new_title, self.state.new_description)
        except ApiError as e:
            logger.error(f"POST /api/projects failed: {e}")
            self.alert("Saving failed.")
            return False
        self.state.new_title = ""
        self.state.new_description = ""
        await self.load()
        return True

    # ── edit ──────────────────────────────────────────────────────────────

    def start_edit(self, project: ProjectModel) -> None:
        self.state.editing = EditDraft(
            project_id=project.id,
            title=project.title,
            description=project.description,
            original_title=project.title,
            original_description=project.description,
        )

    def cancel_edit(self) -> None:
        self.state.editing = None

    async def save_edit(self) -> bool:
        if not self.state.logged_in:
            self.alert("Please log in first.")
            return False
        draft = self.state.editing
        if draft is None:
            return False
        if not draft.title.strip():
            self.alert("Title is required.")
            return False

        # only ask when something actually changed
        if draft.changed and not self.confirm("Save changes to this project?"):
            return False

        try:
            await self.api.update_project(
                draft.project_id, title=draft.title.strip(), description=draft.description
            )
        except ApiError as e:
            logger.error(f"PUT /api/projects/{draft.project_id} failed: {e}")
            self.alert("Saving failed.")
            return False
        self.cancel_edit()
        await self.load()
        return True

    # ── delete ────────────────────────────────────────────────────────────

    def request_delete(self, project: ProjectModel) -> None:
        self.state.delete_target = project

    def cancel_delete(self) -> None:
        self.state.delete_target = None

    def delete_prompt(self) -> str | None:
        target = self.state.delete_target
        if target is None:
            return None
        return f'Really delete project "{target.title}"?'

    async def confirm_delete(self) -> bool:
        target = self.state.delete_target
        if target is None:
            return False
        try:
            await self.api.delete_project(target.id)
        except ApiError as e:
            logger.error(f"DELETE /api/projects/{target.id} failed: {e}")
            self.alert("Deleting failed.")
            return False
        self.state.delete_target = None
        await self.load()
        return True
