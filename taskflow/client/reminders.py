import logging
from datetime import date, timedelta
from typing import Callable, List, Optional, Protocol, Sequence, Set

from ..schemas.task import Task
from ..schemas.user import User

logger = logging.getLogger(__name__)

PERMISSION_DEFAULT = "default"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"


class Notifier(Protocol):
    """Where reminders go (desktop notifications, a log, a test double)."""

    permission: str

    def request_permission(self) -> str: ...

    def notify(self, title: str, body: str) -> None: ...


class LogNotifier:
    """Notifier that writes reminders to the log; always permitted."""

    permission = PERMISSION_GRANTED

    def request_permission(self) -> str:
        return self.permission

    def notify(self, title: str, body: str) -> None:
        logger.info("%s - %s", title, body)


class ReminderChecker:
    """Emits a one-time notice for reminder tasks due tomorrow.

    The set of already-notified ids lives only as long as this object,
    i.e. one session. Checks run when the task collection changes, not on
    a timer, so a reminder can wait until the next change to fire.
    """

    def __init__(
        self,
        notifier: Notifier,
        today: Callable[[], date] = date.today,
    ):
        self.notifier = notifier
        self.today = today
        self.notified: Set[str] = set()
        self._permission_requested = False

    def _permitted(self) -> bool:
        permission = self.notifier.permission
        if permission == PERMISSION_DEFAULT and not self._permission_requested:
            self._permission_requested = True
            permission = self.notifier.request_permission()
            logger.debug("Notification permission request answered %s", permission)
        return permission == PERMISSION_GRANTED

    def check(self, tasks: Sequence[Task], user: Optional[User]) -> List[Task]:
        """Notify for every unseen reminder due tomorrow; return those tasks."""
        if user is None or not tasks:
            return []
        if not self._permitted():
            return []

        tomorrow = self.today() + timedelta(days=1)
        fired = []
        for task in tasks:
            if not task.reminder or task.due_date != tomorrow:
                continue
            if task.id in self.notified:
                continue
            self.notifier.notify(
                f"Reminder: {task.title}",
                f"This task is due tomorrow ({task.due_date.isoformat()})!",
            )
            self.notified.add(task.id)
            fired.append(task)
        return fired

    def attach(self, coordinator) -> None:
        """Re-check on every change to ``coordinator``'s task collection."""
        coordinator.subscribe(lambda tasks: self.check(tasks, coordinator.state.user))
