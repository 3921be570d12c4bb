"""Printing Request Repository Interface

Defines the contract for printing request persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple
from src.domain.printing_request import PrintingRequest


class PrintingRequestRepository(ABC):
    """Repository interface for PrintingRequest persistence"""

    @abstractmethod
    async def create(self, request: PrintingRequest) -> PrintingRequest:
        """
        Create a new printing request

        Args:
            request: PrintingRequest entity to persist

        Returns:
            Created PrintingRequest with generated ID
        """
        pass

    @abstractmethod
    async def get_by_student_id(
        self, student_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[PrintingRequest], int]:
        """
        Retrieve a page of a student's printing requests, newest first

        Args:
            student_id: Student identifier
            limit: Maximum number of requests to return
            offset: Number of requests to skip

        Returns:
            Tuple of (requests, total count)
        """
        pass
