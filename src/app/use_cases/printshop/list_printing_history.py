"""
List Printing History Use Case

Retrieves a student's printing requests with pagination.
"""
from libs.result import Result, Return, Error
from src.app.repositories.student_repository import StudentRepository
from src.app.repositories.printing_request_repository import PrintingRequestRepository
from .dtos import ListPrintingHistoryResponseDTO, PrintingRequestDTO
from .error_codes import ErrorCode


class ListPrintingHistory:
    """
    Use case: View printing history

    Newest requests first, each joined with the student's name.
    """

    def __init__(self, printing_request_repo: PrintingRequestRepository, student_repo: StudentRepository):
        self.printing_request_repo = printing_request_repo
        self.student_repo = student_repo

    async def execute(
        self, student_id: str, limit: int = 20, offset: int = 0
    ) -> Result[ListPrintingHistoryResponseDTO]:
        student = await self.student_repo.get_by_id(student_id)
        if not student:
            return Return.err(
                Error(
                    code=ErrorCode.STUDENT_NOT_FOUND,
                    message=f"Student {student_id} not found",
                )
            )

        requests, total = await self.printing_request_repo.get_by_student_id(
            student_id=student_id,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListPrintingHistoryResponseDTO(
                student_id=student_id,
                requests=[
                    PrintingRequestDTO.from_entity(request, full_name=student.full_name)
                    for request in requests
                ],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
