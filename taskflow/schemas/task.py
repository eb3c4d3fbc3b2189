from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import date, datetime
import re
from typing import Optional

from ..models.task import Category, TaskStatus

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class TaskBase(BaseModel):
    """Base task schema with common fields.

    Serialized with camelCase keys (``dueDate``, ``userId``); snake_case
    names are accepted on input as well.
    """
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: Category
    amount: float = Field(default=0, ge=0)
    due_date: date
    status: TaskStatus = TaskStatus.UPCOMING
    notes: Optional[str] = None
    reminder: bool = False
    user_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_validator("due_date", mode="before")
    @classmethod
    def _calendar_date_only(cls, value):
        # Lax date parsing would take epoch numbers and full timestamps.
        if isinstance(value, date) and not isinstance(value, datetime):
            return value
        if isinstance(value, str) and _ISO_DATE.fullmatch(value):
            return value
        raise ValueError("must be a calendar date in YYYY-MM-DD form")


class TaskCreate(TaskBase):
    """Schema for creating new tasks."""
    pass


class TaskUpdate(TaskBase):
    """Schema for replacing a task; every field is sent, there are no patches."""
    pass


class Task(TaskBase):
    """Complete task schema with all fields.

    Timestamps are absent on tasks created while offline.
    """
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Message(BaseModel):
    message: str
