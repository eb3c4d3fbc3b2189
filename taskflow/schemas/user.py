from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class UserBase(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    avatar: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UserSync(UserBase):
    """Identity sent on login."""
    pass


class User(UserBase):
    """Identity as held by the client and returned by the server.

    ``id`` and ``last_login`` are only known once the server has seen the user.
    """
    id: Optional[str] = None
    last_login: Optional[datetime] = None


class UserStat(UserBase):
    """User plus aggregates derived from their tasks."""
    id: str
    last_login: datetime
    total_tasks: int = 0
    completed_tasks: int = 0
    total_spent: float = 0
