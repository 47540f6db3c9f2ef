# File: todo_portal/api/routes_todos.py

from fastapi import APIRouter, Depends, Form, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from todo_portal.api.deps import get_csrf_token, get_db, require_user
from todo_portal.api.templating import templates
from todo_portal.models.user import User
from todo_portal.schemas.todo import TodoForm
from todo_portal.services import todo_service

# Every route below sits behind the auth gate
router = APIRouter(dependencies=[Depends(require_user)])


@router.get("", summary="List all todos")
def list_todos(
    request: Request,
    user_id: int = Depends(require_user),
    csrf_token: str = Depends(get_csrf_token),
    db: Session = Depends(get_db),
):
    user = db.get(User, user_id)
    return templates.TemplateResponse(
        request,
        "todos/index.html",
        {
            "todos": todo_service.list_todos(db),
            "user": user,
            "csrf_token": csrf_token,
        },
    )


@router.post("", summary="Create a todo")
def create_todo(
    request: Request,
    title: str = Form(""),
    csrf_token: str = Depends(get_csrf_token),
    db: Session = Depends(get_db),
):
    form = TodoForm(title=title)
    todo = todo_service.create_todo(db, form.title)
    if todo is None:
        return RedirectResponse("/todos", status_code=status.HTTP_302_FOUND)
    return templates.TemplateResponse(
        request,
        "todos/_item.html",
        {"todo": todo, "csrf_token": csrf_token},
    )


@router.post("/{todo_id}/toggle", summary="Flip a todo's completed flag")
def toggle_todo(
    request: Request,
    todo_id: int,
    csrf_token: str = Depends(get_csrf_token),
    db: Session = Depends(get_db),
):
    todo = todo_service.toggle_todo(db, todo_id)
    return templates.TemplateResponse(
        request,
        "todos/_item.html",
        {"todo": todo, "csrf_token": csrf_token},
    )


@router.post("/{todo_id}/delete", summary="Delete a todo")
def delete_todo(
    todo_id: int,
    db: Session = Depends(get_db),
):
    todo_service.delete_todo(db, todo_id)
    return Response(status_code=status.HTTP_200_OK)
