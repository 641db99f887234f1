# roximity/api/v1/api.py
from fastapi import APIRouter

from roximity.api.routes import attendance, presence_logs, sessions, student_sessions

api_router = APIRouter()

api_router.include_router(
    sessions.router,
    prefix="/sessions",
    tags=["sessions"],
)
api_router.include_router(
    presence_logs.router,
    prefix="/presence-logs",
    tags=["presence_logs"],
)
api_router.include_router(
    attendance.router,
    prefix="/attendance",
    tags=["attendance"],
)
api_router.include_router(
    student_sessions.router,
    prefix="/student-sessions",
    tags=["student_sessions"],
)
