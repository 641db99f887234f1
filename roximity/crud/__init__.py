# roximity/crud/__init__.py
from roximity.crud.session import session
from roximity.crud.presence_log import presence_log
from roximity.crud.attendance_record import attendance_record
from roximity.crud.student_session import student_session

__all__ = [
    "session",
    "presence_log",
    "attendance_record",
    "student_session",
]
