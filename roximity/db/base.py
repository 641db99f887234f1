from roximity.db.base_class import Base  # noqa

from roximity.models.attendance_record import AttendanceRecord  # noqa
from roximity.models.presence_log import PresenceLog  # noqa
from roximity.models.session import AttendanceSession  # noqa
from roximity.models.student_session import StudentSession  # noqa

__all__ = [
    "Base",
    "AttendanceSession",
    "PresenceLog",
    "AttendanceRecord",
    "StudentSession",
]
