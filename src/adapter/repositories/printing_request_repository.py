"""SQLAlchemy implementation of PrintingRequestRepository"""

from typing import List, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.printing_request_repository import PrintingRequestRepository
from src.domain.printing_request import PrintingRequest


class SqlAlchemyPrintingRequestRepository(PrintingRequestRepository):
    """SQLAlchemy implementation of PrintingRequestRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, request: PrintingRequest) -> PrintingRequest:
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get_by_student_id(
        self, student_id: str, limit: int = 20, offset: int = 0
    ) -> Tuple[List[PrintingRequest], int]:
        """
        Retrieve a page of a student's printing requests

        Ordered by request_date DESC, then id DESC (most recent first).
        """
        count_stmt = (
            select(func.count())
            .select_from(PrintingRequest)
            .where(PrintingRequest.student_id == student_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(PrintingRequest)
            .where(PrintingRequest.student_id == student_id)
            .order_by(PrintingRequest.request_date.desc(), PrintingRequest.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total
