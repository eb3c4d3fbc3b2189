"""Routes task reads and writes to the API or the local mirror.

The coordinator owns the session's task collection. While ONLINE it talks
to the server and mirrors every successful result locally; any failed call
flips it to OFFLINE, where the mirror is the only store. Going back ONLINE
happens on the next successful remote call.

Refresh replaces the collection wholesale with the server's list, so a task
created while offline is dropped by the next successful refresh. Writes are
last-write-wins; there is no conflict resolution.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol
from uuid import uuid4

from ..schemas.task import Task, TaskBase
from ..schemas.user import User
from .api import TransportError
from .mirror import LocalMirror

logger = logging.getLogger(__name__)


class SyncMode(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class TaskApi(Protocol):
    def list_tasks(self, user_id: Optional[str] = None) -> List[Task]: ...

    def create_task(self, task: TaskBase) -> Task: ...

    def replace_task(self, task_id: str, task: TaskBase) -> Task: ...

    def delete_task(self, task_id: str) -> None: ...

    def sync_user(self, user: User) -> User: ...


@dataclass
class AppState:
    user: Optional[User] = None
    tasks: List[Task] = field(default_factory=list)
    mode: SyncMode = SyncMode.ONLINE

    @property
    def offline(self) -> bool:
        return self.mode == SyncMode.OFFLINE


TasksListener = Callable[[List[Task]], None]


def new_local_id() -> str:
    return uuid4().hex


class SyncCoordinator:
    def __init__(
        self,
        api: TaskApi,
        mirror: LocalMirror,
        state: Optional[AppState] = None,
    ):
        self.api = api
        self.mirror = mirror
        self.state = state or AppState()
        self._listeners: List[TasksListener] = []

    # ---- mode and collection plumbing ----

    def subscribe(self, listener: TasksListener) -> None:
        """Call ``listener`` with the new collection after every change."""
        self._listeners.append(listener)

    def _go_offline(self, reason: Exception) -> None:
        if self.state.mode != SyncMode.OFFLINE:
            logger.info("Switching to offline mode: %s", reason)
        else:
            logger.debug("Still offline: %s", reason)
        self.state.mode = SyncMode.OFFLINE

    def _go_online(self) -> None:
        if self.state.mode != SyncMode.ONLINE:
            logger.info("Back online")
        self.state.mode = SyncMode.ONLINE

    def _commit(self, tasks: List[Task], persist: bool = True) -> None:
        # Mirror first, then a single reference swap; listeners never see a half state.
        if persist:
            self.mirror.save_tasks(tasks)
        self.state.tasks = tasks
        for listener in list(self._listeners):
            try:
                listener(tasks)
            except Exception:
                # The write stands even if a listener fails.
                logger.exception("Task listener %r failed", listener)

    def _owner(self) -> Optional[str]:
        return self.state.user.email if self.state.user else None

    # ---- session ----

    def restore_session(self) -> Optional[User]:
        """Pick up the identity persisted by a previous run, if any."""
        user = self.mirror.load_user()
        if user is None:
            return None
        self.state.user = user
        self.refresh()
        return user

    def login(self, user: User) -> User:
        self.mirror.save_user(user)
        self.state.user = user
        try:
            synced = self.api.sync_user(user)
        except TransportError as exc:
            self._go_offline(exc)
        else:
            self._go_online()
            self.state.user = synced
            self.mirror.save_user(synced)
        self.refresh()
        return self.state.user

    def logout(self) -> None:
        self.state.user = None
        self.mirror.remove_user()
        self._commit([], persist=False)

    def reset_local_state(self) -> None:
        """Wipe every persisted entry and the in-memory session. Irreversible."""
        logger.warning("Resetting all local state")
        self.mirror.clear()
        self.state.user = None
        self._commit([], persist=False)

    # ---- task operations ----

    def refresh(self) -> List[Task]:
        """Reload the collection from the server, or from the mirror when offline."""
        if self.state.user is None:
            return self.state.tasks
        try:
            tasks = self.api.list_tasks(user_id=self._owner())
        except TransportError as exc:
            self._go_offline(exc)
            self._commit(self.mirror.load_tasks(), persist=False)
        else:
            self._go_online()
            self._commit(list(tasks))
        return self.state.tasks

    def save(self, data: TaskBase, task_id: Optional[str] = None) -> Task:
        """Create a task, or replace task ``task_id`` with ``data``."""
        if data.user_id is None and self._owner() is not None:
            data = data.model_copy(update={"user_id": self._owner()})

        if not self.state.offline:
            try:
                if task_id is None:
                    saved = self.api.create_task(data)
                else:
                    saved = self.api.replace_task(task_id, data)
            except TransportError as exc:
                self._go_offline(exc)
            else:
                self._go_online()
                self._merge(saved, task_id)
                return saved

        return self._save_local(data, task_id)

    def _save_local(self, data: TaskBase, task_id: Optional[str]) -> Task:
        fields = data.model_dump(exclude={"id", "created_at", "updated_at"})
        previous = next((t for t in self.state.tasks if task_id is not None and t.id == task_id), None)
        if previous is not None:
            fields.update(created_at=previous.created_at, updated_at=previous.updated_at)
        saved = Task(id=task_id or new_local_id(), **fields)
        self._merge(saved, task_id)
        return saved

    def _merge(self, saved: Task, replaced_id: Optional[str]) -> None:
        if replaced_id is None:
            tasks = [saved] + self.state.tasks
        elif any(t.id == replaced_id for t in self.state.tasks):
            tasks = [saved if t.id == replaced_id else t for t in self.state.tasks]
        else:
            tasks = [saved] + self.state.tasks
        self._commit(tasks)

    def delete(
        self,
        task_id: str,
        confirm: Optional[Callable[[], bool]] = None,
    ) -> bool:
        """Delete a task. Returns False when ``confirm`` declines."""
        if confirm is not None and not confirm():
            return False

        if not self.state.offline:
            try:
                self.api.delete_task(task_id)
            except TransportError as exc:
                self._go_offline(exc)
            else:
                self._go_online()

        self._commit([t for t in self.state.tasks if t.id != task_id])
        return True
