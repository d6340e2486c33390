"""Student management endpoints.

GET    /api/management/{studentId} - Read a student
POST   /api/management             - Add a student (deduplicated by natural key)
PUT    /api/management             - Replace a student
DELETE /api/management/{studentId} - Remove a student

Routers are thin: validate, call the student service, map the outcome to a
status code (not_found -> 404, backend_error -> 500).
"""

import logging

from fastapi import APIRouter, HTTPException, Path

from app.schemas import ErrorResponse, StudentDto
from app.services.students import add_student, delete_student, get_student, update_student
from app.stores.results import Outcome, StoreResult

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


def _fail(status_code: int, code: str, message: str, **detail: object) -> HTTPException:
    logger.error(message)
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse.build(code=code, message=message, detail=detail or None),
    )


def _validate_body(student: StudentDto) -> None:
    if student.id < 0 or (student.school_id is not None and student.school_id < 1):
        raise _fail(
            400,
            "INVALID_STUDENT",
            f"student id: {student.id} or school id: {student.school_id} are invalid",
            student_id=student.id,
            school_id=student.school_id,
        )


def _unwrap(result: StoreResult, not_found_message: str | None, error_message: str, **detail: object):
    """Return the value of an ok result, raise the matching HTTPException otherwise.

    Without a not_found_message, not_found is unexpected and maps to 500.
    """
    if result.outcome is Outcome.NOT_FOUND:
        if not_found_message is None:
            raise _fail(500, "STORAGE_ERROR", f"{error_message}. due to: no record returned", **detail)
        raise _fail(404, "STUDENT_NOT_FOUND", not_found_message, **detail)
    if result.outcome is Outcome.BACKEND_ERROR:
        raise _fail(500, "STORAGE_ERROR", f"{error_message}. due to: {result.error}", **detail)
    return result.value


@router.get("/{student_id}", response_model=StudentDto)
async def read_student(student_id: int = Path(description="Student id")) -> StudentDto:
    """Get a student with its school.

    Raises:
        HTTPException 400: If the id is not positive.
        HTTPException 404: If the student does not exist.
        HTTPException 500: If storage failed.
    """
    if student_id < 1:
        raise _fail(400, "INVALID_STUDENT_ID", f"student id: {student_id} must be positive", student_id=student_id)

    result = await get_student(student_id)
    return _unwrap(
        result,
        f"student with student id: {student_id} not found in DB",
        f"cannot get student with student id: {student_id}",
        student_id=student_id,
    )


@router.post("", response_model=StudentDto)
async def create_student(student: StudentDto) -> StudentDto:
    """Add a student; an identical existing student is returned instead of a duplicate."""
    _validate_body(student)

    result = await add_student(student)
    return _unwrap(
        result,
        None,
        f"cannot add student with student id: {student.id} to DB",
        student_id=student.id,
    )


@router.put("", response_model=StudentDto)
async def replace_student(student: StudentDto) -> StudentDto:
    """Replace all fields of an existing student."""
    _validate_body(student)

    result = await update_student(student)
    return _unwrap(
        result,
        f"student with student id: {student.id} not found in DB",
        f"cannot change the student with student id: {student.id}",
        student_id=student.id,
    )


@router.delete("/{student_id}")
async def remove_student(student_id: int = Path(description="Student id")) -> bool:
    """Delete a student by id.

    Returns:
        true when the student was removed.

    Raises:
        HTTPException 404: If the student does not exist.
    """
    if student_id < 0:
        raise _fail(400, "INVALID_STUDENT_ID", f"student id: {student_id} must be positive", student_id=student_id)

    result = await delete_student(student_id)
    deleted = _unwrap(
        result,
        f"student with student id: {student_id} not found in DB",
        f"cannot remove the student with student id: {student_id} from DB",
        student_id=student_id,
    )
    if not deleted:
        raise _fail(
            404,
            "STUDENT_NOT_FOUND",
            f"cannot remove the student with the id: {student_id} from DB",
            student_id=student_id,
        )
    return True
