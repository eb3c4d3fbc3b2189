from pathlib import Path
from typing import Optional, Union

from .api import TaskApiClient, TransportError
from .mirror import LocalMirror
from .reminders import LogNotifier, Notifier, ReminderChecker
from .stats import (
    TaskFilter,
    admin_totals,
    category_breakdown,
    compute_stats,
    filter_tasks,
    status_breakdown,
)
from .sync import AppState, SyncCoordinator, SyncMode


def create_coordinator(
    base_url: Optional[str] = None,
    mirror_dir: Optional[Union[str, Path]] = None,
    notifier: Optional[Notifier] = None,
) -> SyncCoordinator:
    """Wire an API client, a mirror and reminder checks into one coordinator."""
    api = TaskApiClient(base_url) if base_url else TaskApiClient()
    mirror = LocalMirror(mirror_dir) if mirror_dir else LocalMirror()
    coordinator = SyncCoordinator(api, mirror)
    ReminderChecker(notifier or LogNotifier()).attach(coordinator)
    return coordinator


__all__ = [
    "AppState",
    "LocalMirror",
    "LogNotifier",
    "Notifier",
    "ReminderChecker",
    "SyncCoordinator",
    "SyncMode",
    "TaskApiClient",
    "TaskFilter",
    "TransportError",
    "admin_totals",
    "category_breakdown",
    "compute_stats",
    "create_coordinator",
    "filter_tasks",
    "status_breakdown",
]
