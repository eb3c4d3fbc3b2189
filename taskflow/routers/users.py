import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Task as TaskModel, TaskStatus, User
from ..models.task import utcnow
from ..schemas.user import User as UserSchema, UserStat, UserSync

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_user_stat(user: User, tasks: List[TaskModel]) -> UserStat:
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    spent = sum(t.amount or 0 for t in tasks)
    return UserStat(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        last_login=user.last_login,
        total_tasks=len(tasks),
        completed_tasks=completed,
        total_spent=spent,
    )


@router.post("/users/sync", response_model=UserSchema)
def sync_user(
    payload: UserSync,
    db: Session = Depends(get_db),
):
    """Upsert a user by email and stamp the login time."""
    now = utcnow()
    user = db.query(User).filter(User.email == payload.email).first()
    if not user:
        user = User(email=payload.email, name=payload.name)
        db.add(user)
        logger.info("Registered user email=%s", payload.email)

    user.name = payload.name
    user.avatar = payload.avatar
    user.last_login = now
    user.updated_at = now

    db.commit()
    db.refresh(user)
    return user


@router.get("/admin/users", response_model=List[UserStat])
def list_user_stats(db: Session = Depends(get_db)):
    """All users, most recent login first, with task aggregates.

    Aggregates are recomputed on every call from tasks whose owner
    reference is the user's email.
    """
    users = db.query(User).order_by(User.last_login.desc()).all()
    stats = []
    for user in users:
        tasks = db.query(TaskModel).filter(TaskModel.user_id == user.email).all()
        stats.append(_build_user_stat(user, tasks))
    return stats
