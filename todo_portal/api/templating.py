# File: todo_portal/api/templating.py

from pathlib import Path

from fastapi.templating import Jinja2Templates

from todo_portal.core.config import settings

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.globals["project_name"] = settings.PROJECT_NAME
templates.env.globals["csrf_field"] = settings.csrf_form_field
