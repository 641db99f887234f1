# roximity/models/__init__.py
from roximity.models.session import AttendanceSession
from roximity.models.presence_log import PresenceLog
from roximity.models.attendance_record import AttendanceRecord
from roximity.models.student_session import StudentSession

__all__ = [
    "AttendanceSession",
    "PresenceLog",
    "AttendanceRecord",
    "StudentSession",
]
