# File: todo_portal/schemas/todo.py

from pydantic import BaseModel, ConfigDict


class TodoForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # Empty is allowed here; the workflow treats it as a no-op
    title: str = ""
