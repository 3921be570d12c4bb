"""Student Domain Entity

Identity and profile of a print-shop customer. Each student owns exactly
one Wallet, created together with the student.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import String, DateTime
from src.domain.base import BaseModel, utc_now


class Student(BaseModel, table=True):
    """
    Student - Print-shop account holder

    Domain Rules:
    - student_id is the natural primary key and never changes
    - email is unique across students
    - password_hash is opaque here (hashing is owned by the auth service)
    - Owns exactly one Wallet (1:1)
    """

    __tablename__ = "students"

    student_id: str = Field(
        sa_column=Column(String(20), primary_key=True),
        description="Student identifier (e.g., 2023001)"
    )

    full_name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Student full name"
    )

    email: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True),
        description="Student email (unique)"
    )

    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Credential hash supplied by the auth service"
    )

    department: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Academic department"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Account creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last profile update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "student_id": "2023001",
                "full_name": "John Doe",
                "email": "john.doe@sdckl.edu",
                "department": "Computer Science",
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
