"""Printing Request Domain Entity

One row per accepted print job. Created only by settlement, after the
wallet has been debited for total_cost.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Integer, Numeric, String, DateTime
from src.domain.base import BaseModel, utc_now


class PaperSize(str, Enum):
    """Supported paper sizes"""
    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"


class PrintType(str, Enum):
    """Supported color modes"""
    BLACK_WHITE = "Black & White"
    COLOR = "Color"


class PrintStatus(str, Enum):
    """Print queue status (settlement only ever creates PENDING)"""
    PENDING = "Pending"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class PrintingRequest(BaseModel, table=True):
    """
    Printing Request - Accepted print job

    Domain Rules:
    - num_pages and num_copies are >= 1
    - total_cost = cost_per_page * num_pages * num_copies (2 decimals)
    - Created in PENDING status in the same unit of work as its payment
    - Every request with total_cost > 0 has exactly one Print Payment transaction
    """

    __tablename__ = "printing_requests"
    __table_args__ = (
        CheckConstraint('num_pages > 0', name='printing_request_pages_positive'),
        CheckConstraint('num_copies > 0', name='printing_request_copies_positive'),
        Index('ix_printing_requests_request_date', 'request_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        description="Unique request identifier (auto-increment)"
    )

    student_id: str = Field(
        sa_column=Column(String(20), ForeignKey("students.student_id"), nullable=False, index=True),
        description="Student who submitted the job"
    )

    file_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Uploaded file name (opaque)"
    )

    file_type: str = Field(
        sa_column=Column(String(10), nullable=False),
        description="Uploaded file type, e.g. pdf (opaque)"
    )

    num_copies: int = Field(
        default=1,
        description="Number of copies (>= 1)"
    )

    num_pages: int = Field(
        description="Number of pages per copy (>= 1)"
    )

    paper_size: PaperSize = Field(
        default=PaperSize.A4,
        description="Paper size (A4, A3, Letter)"
    )

    print_type: PrintType = Field(
        default=PrintType.BLACK_WHITE,
        description="Color mode (Black & White, Color)"
    )

    double_sided: bool = Field(
        default=False,
        description="Duplex printing flag"
    )

    status: PrintStatus = Field(
        default=PrintStatus.PENDING,
        description="Print queue status"
    )

    total_cost: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Amount debited from the wallet (precision: 10,2)"
    )

    request_date: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Submission timestamp"
    )

    completion_date: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Completion timestamp (set by the print queue)"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "student_id": "2023001",
                "file_name": "thesis.pdf",
                "file_type": "pdf",
                "num_copies": 2,
                "num_pages": 3,
                "paper_size": "A4",
                "print_type": "Color",
                "double_sided": False,
                "status": "Pending",
                "total_cost": "3.00",
                "request_date": "2024-01-01T00:00:00Z",
                "completion_date": None
            }
        }
