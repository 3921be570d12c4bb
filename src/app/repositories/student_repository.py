"""Student Repository Interface

Defines the contract for student persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.student import Student


class StudentRepository(ABC):
    """Repository interface for Student persistence"""

    @abstractmethod
    async def get_by_id(self, student_id: str) -> Optional[Student]:
        """
        Retrieve student by student ID

        Args:
            student_id: Student identifier

        Returns:
            Student if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Student]:
        """
        Retrieve student by email

        Args:
            email: Student email

        Returns:
            Student if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, student: Student) -> Student:
        """
        Create a new student

        Args:
            student: Student entity to persist

        Returns:
            Created Student

        Raises:
            IntegrityError: If student_id or email already exists
        """
        pass
