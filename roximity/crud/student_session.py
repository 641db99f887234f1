# roximity/crud/student_session.py
from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from roximity.crud.base import CRUDBase, store_errors
from roximity.models.session import AttendanceSession
from roximity.models.student_session import StudentSession
from roximity.schemas.student_session import StudentSessionCreate


class CRUDStudentSession(CRUDBase[StudentSession, StudentSessionCreate, BaseModel]):
    async def get_by_student(
        self,
        db: AsyncSession,
        student_id: str,
    ) -> List[StudentSession]:
        """Matrículas de um aluno, da aula mais recente para a mais antiga."""
        stmt = (
            select(self.model)
            .join(AttendanceSession, AttendanceSession.id == self.model.session_id)
            .options(selectinload(self.model.session))
            .where(self.model.student_id == student_id)
            .order_by(AttendanceSession.start_time.desc(), self.model.id.desc())
        )
        async with store_errors(db, f"load enrollments for student {student_id}"):
            result = await db.execute(stmt)
            return list(result.scalars().all())

    async def get_by_session(
        self,
        db: AsyncSession,
        session_id: int,
    ) -> List[StudentSession]:
        stmt = (
            select(self.model)
            .where(self.model.session_id == session_id)
            .order_by(self.model.student_id.asc())
        )
        async with store_errors(db, f"load enrollments for session {session_id}"):
            result = await db.execute(stmt)
            return list(result.scalars().all())

    async def get_for_student_and_session(
        self,
        db: AsyncSession,
        *,
        student_id: str,
        session_id: int,
    ) -> Optional[StudentSession]:
        stmt = select(self.model).where(
            self.model.student_id == student_id,
            self.model.session_id == session_id,
        )
        async with store_errors(db, f"load enrollment of {student_id} in session {session_id}"):
            result = await db.execute(stmt)
            return result.scalars().first()


student_session = CRUDStudentSession(StudentSession)
