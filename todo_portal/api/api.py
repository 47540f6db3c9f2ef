from fastapi import APIRouter

from todo_portal.api.routes_auth import router as auth_router
from todo_portal.api.routes_todos import router as todos_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(todos_router, prefix="/todos", tags=["todos"])
