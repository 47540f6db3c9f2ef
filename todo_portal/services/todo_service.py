# File: todo_portal/services/todo_service.py

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from todo_portal.core.errors import NotFoundError
from todo_portal.models.todo import Todo

logger = logging.getLogger(__name__)


def list_todos(db: Session) -> List[Todo]:
    # Primary keys are assigned in insertion order
    return list(db.scalars(select(Todo).order_by(Todo.id)))


def create_todo(db: Session, title: str) -> Optional[Todo]:
    """
    Persist a new, not yet completed todo.

    Returns None without touching the database when the title is blank.
    """
    title = (title or "").strip()
    if not title:
        return None

    todo = Todo(title=title, completed=False)
    db.add(todo)
    db.commit()
    db.refresh(todo)
    logger.debug("Created todo id=%s", todo.id)
    return todo


def get_todo(db: Session, todo_id: int) -> Todo:
    todo = db.get(Todo, todo_id)
    if todo is None:
        raise NotFoundError(f"Todo {todo_id} not found")
    return todo


def toggle_todo(db: Session, todo_id: int) -> Todo:
    todo = get_todo(db, todo_id)
    todo.completed = not todo.completed
    db.commit()
    db.refresh(todo)
    return todo


def delete_todo(db: Session, todo_id: int) -> None:
    """Delete by id. Deleting an id that does not exist is not an error."""
    result = db.execute(delete(Todo).where(Todo.id == todo_id))
    db.commit()
    if result.rowcount == 0:
        logger.debug("Delete of unknown todo id=%s ignored", todo_id)
