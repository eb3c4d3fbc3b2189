"""Derived views over a task collection: dashboard totals, list filters and
the breakdowns behind the analytics and admin charts.

All functions are pure; callers recompute them whenever the collection changes.
"""

import enum
import math
from datetime import date, datetime, time
from typing import Dict, Iterable, List, Optional, Sequence

from ..models.task import TaskStatus
from ..schemas.stats import AdminTotals, DashboardStats
from ..schemas.task import Task
from ..schemas.user import UserStat

SECONDS_PER_DAY = 24 * 60 * 60


class TaskFilter(str, enum.Enum):
    ALL = "all"
    TODAY = "today"
    OVERDUE = "overdue"
    WEEK = "week"
    MONTH = "month"


def compute_stats(tasks: Sequence[Task]) -> DashboardStats:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    pending_payments = sum(
        1 for t in tasks if t.amount > 0 and t.status != TaskStatus.COMPLETED
    )
    progress = (completed / total) * 100 if total > 0 else 0
    return DashboardStats(
        total_tasks=total,
        completed_tasks=completed,
        pending_payments=pending_payments,
        progress=progress,
    )


def _days_apart(due: date, now: datetime) -> int:
    # Due dates count from midnight; the distance is rounded up to whole days.
    due_at = datetime.combine(due, time.min, tzinfo=now.tzinfo)
    return math.ceil(abs((due_at - now).total_seconds()) / SECONDS_PER_DAY)


def _matches(task: Task, selected: TaskFilter, now: datetime) -> bool:
    if selected == TaskFilter.TODAY:
        return task.due_date.isoformat() == now.date().isoformat()
    if selected == TaskFilter.OVERDUE:
        return task.status == TaskStatus.OVERDUE
    if selected == TaskFilter.WEEK:
        # Past and future both count: a task three days late is "this week".
        return _days_apart(task.due_date, now) <= 7
    if selected == TaskFilter.MONTH:
        return task.due_date.month == now.month and task.due_date.year == now.year
    return True


def filter_tasks(
    tasks: Iterable[Task],
    selected: str = TaskFilter.ALL,
    now: Optional[datetime] = None,
) -> List[Task]:
    """Return the tasks matching a single list filter.

    Unknown filter names select everything, like ``all``.
    """
    try:
        selected = TaskFilter(selected)
    except ValueError:
        selected = TaskFilter.ALL
    now = now or datetime.now()
    return [t for t in tasks if _matches(t, selected, now)]


def status_breakdown(tasks: Iterable[Task]) -> Dict[str, int]:
    """Task counts per status for the donut chart, zero slices dropped."""
    counts = {status.value: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status.value] += 1
    return {name: value for name, value in counts.items() if value > 0}


def category_breakdown(tasks: Iterable[Task]) -> Dict[str, int]:
    """Task counts per category, in the order categories first appear."""
    counts: Dict[str, int] = {}
    for task in tasks:
        counts[task.category.value] = counts.get(task.category.value, 0) + 1
    return counts


def admin_totals(users: Sequence[UserStat]) -> AdminTotals:
    return AdminTotals(
        total_users=len(users),
        global_tasks=sum(u.total_tasks for u in users),
        global_spent=sum(u.total_spent for u in users),
    )
