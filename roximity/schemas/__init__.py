# roximity/schemas/__init__.py
from roximity.schemas.session import (
    SessionBase,
    SessionCreate,
    SessionUpdate,
    SessionRead,
)
from roximity.schemas.presence_log import (
    PresenceLogBase,
    PresenceLogCreate,
    PresenceLogBatchCreate,
    PresenceLogRead,
)
from roximity.schemas.student_session import (
    StudentSessionBase,
    StudentSessionCreate,
    StudentSessionRead,
    StudentSessionWithSession,
)
from roximity.schemas.attendance import (
    AttendanceComputeRequest,
    AttendanceRecordRead,
    AttendanceComputeResponse,
)

__all__ = [
    "SessionBase",
    "SessionCreate",
    "SessionUpdate",
    "SessionRead",
    "PresenceLogBase",
    "PresenceLogCreate",
    "PresenceLogBatchCreate",
    "PresenceLogRead",
    "AttendanceComputeRequest",
    "AttendanceRecordRead",
    "AttendanceComputeResponse",
    "StudentSessionBase",
    "StudentSessionCreate",
    "StudentSessionRead",
    "StudentSessionWithSession",
]
