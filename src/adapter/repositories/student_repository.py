"""SQLAlchemy implementation of StudentRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.student_repository import StudentRepository
from src.domain.student import Student


class SqlAlchemyStudentRepository(StudentRepository):
    """SQLAlchemy implementation of StudentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, student_id: str) -> Optional[Student]:
        stmt = select(Student).where(Student.student_id == student_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Student]:
        stmt = select(Student).where(Student.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, student: Student) -> Student:
        """
        Create a new student

        Raises:
            IntegrityError: If student_id or email already exists
        """
        self.session.add(student)
        await self.session.flush()
        await self.session.refresh(student)
        return student
