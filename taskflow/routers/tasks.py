import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import Task as TaskModel
from ..models.task import utcnow
from ..schemas.task import Message, Task as TaskSchema, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_task_or_404(db: Session, task_id: str) -> TaskModel:
    task = db.query(TaskModel).filter(TaskModel.id == task_id).first()
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.get("/tasks", response_model=List[TaskSchema])
def get_tasks(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
):
    """List tasks, newest first, optionally only those owned by ``userId``."""
    query = db.query(TaskModel)
    if user_id:
        query = query.filter(TaskModel.user_id == user_id)
    return query.order_by(TaskModel.created_at.desc()).all()


@router.post("/tasks", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    db: Session = Depends(get_db),
):
    """Create a new task; the server assigns its id."""
    db_task = TaskModel(**task.model_dump())
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    logger.info("Created task id=%s user=%s", db_task.id, db_task.user_id)
    return db_task


@router.put("/tasks/{task_id}", response_model=TaskSchema)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
):
    """Replace every field of a task."""
    task = _get_task_or_404(db, task_id)

    for field, value in task_update.model_dump().items():
        setattr(task, field, value)

    task.updated_at = utcnow()

    db.commit()
    db.refresh(task)
    return task


@router.delete("/tasks/{task_id}", response_model=Message)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
):
    task = _get_task_or_404(db, task_id)

    db.delete(task)
    db.commit()
    logger.info("Deleted task id=%s", task_id)
    return {"message": "Task deleted successfully"}
