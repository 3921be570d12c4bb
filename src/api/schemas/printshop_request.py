"""Request schemas for Print Shop API

Pydantic models for validating incoming HTTP requests. Only shape and types
are checked here; business ranges are enforced by the use cases so they
come back with their own error codes.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CreateStudentRequestSchema(BaseModel):
    """
    Request schema for opening a student account

    Used for POST /students endpoint.
    """

    student_id: str = Field(..., min_length=1, max_length=20)
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=100)
    password_hash: str = Field(..., min_length=1, max_length=255)
    department: str = Field(..., min_length=1, max_length=50)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Minimal shape check, the address is not verified"""
        if "@" not in v:
            raise ValueError("Email must contain '@'")
        return v.lower()

    class Config:
        json_schema_extra = {
            "example": {
                "student_id": "2023001",
                "full_name": "John Doe",
                "email": "john.doe@sdckl.edu",
                "password_hash": "$2b$12$examplehash",
                "department": "Computer Science"
            }
        }


class TopUpRequestSchema(BaseModel):
    """
    Request schema for topping up a wallet

    Used for POST /wallets/top-up endpoint.
    """

    student_id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., description="Amount to add (> 0, two decimals)")

    class Config:
        json_schema_extra = {
            "example": {"student_id": "2023001", "amount": "20.00"}
        }


class RefundRequestSchema(BaseModel):
    """
    Request schema for refunding to a wallet

    Used for POST /wallets/{wallet_id}/refund endpoint.
    """

    amount: Decimal = Field(..., description="Amount to refund (> 0, two decimals)")
    reference: Optional[str] = Field(default=None, min_length=1, max_length=50)

    class Config:
        json_schema_extra = {
            "example": {"amount": "10.00", "reference": "REF-PRINTER-JAM-0042"}
        }


class PrintRequestSchema(BaseModel):
    """
    Request schema for submitting a print job

    Used for POST /printing/requests endpoint.
    """

    student_id: str = Field(..., min_length=1)
    file_name: str
    file_type: str
    num_pages: int
    num_copies: int = 1
    paper_size: str = "A4"
    print_type: str = "Black & White"
    double_sided: bool = False

    class Config:
        json_schema_extra = {
            "example": {
                "student_id": "2023001",
                "file_name": "thesis.pdf",
                "file_type": "pdf",
                "num_pages": 3,
                "num_copies": 2,
                "paper_size": "A4",
                "print_type": "Color",
                "double_sided": False
            }
        }


class EstimateRequestSchema(BaseModel):
    """Request schema for POST /printing/estimate"""

    num_pages: int
    num_copies: int = 1
    paper_size: str = "A4"
    print_type: str = "Black & White"
