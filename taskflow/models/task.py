from sqlmodel import SQLModel, Field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import uuid4
import enum


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(str, enum.Enum):
    PERSONAL = "Personal"
    WORK = "Work"
    FINANCE = "Finance"
    SHOPPING = "Shopping"
    HEALTH = "Health"


class TaskStatus(str, enum.Enum):
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class Task(SQLModel, table=True):
    """Task record, optionally tied to a user by email."""
    __tablename__ = "tasks"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    title: str
    description: Optional[str] = None
    category: Category
    amount: float = Field(default=0)
    due_date: date
    status: TaskStatus = Field(default=TaskStatus.UPCOMING)
    notes: Optional[str] = None
    reminder: bool = Field(default=False)
    # Plain reference, not a foreign key: tasks are linked by the owner's email.
    user_id: Optional[str] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
