"""Pydantic schemas for API request/response validation."""

from app.schemas.common import ErrorDetail, ErrorResponse
from app.schemas.student import SchoolDto, StudentDto

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "SchoolDto",
    "StudentDto",
]
