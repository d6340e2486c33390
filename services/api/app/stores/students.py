"""Student persistence with natural-key deduplication.

Flow for add:
1. Look up a stored student with the same natural key -> return it unchanged
2. Resolve the embedded school by (name, address) -> reuse the stored school
3. Persist the candidate (an unknown school is inserted with it)
4. On a unique-constraint violation (concurrent add), return the student that
   won, or, when the clash was on a school created concurrently, attach that
   school and insert once more

Natural key: first_name + last_name + gpa + school (name, address).
Comparison is exact: case-sensitive strings, float equality on gpa.

Storage failures never raise out of this module: they are logged and
returned as `StoreResult.backend_error`.
"""

from dataclasses import dataclass
import logging

from sqlalchemy import Select, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import School, Student
from app.stores.results import Outcome, StoreResult
from app.stores.schools import SchoolRepository

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class NaturalKey:
    """Identity of a student independent of its primary key."""

    first_name: str
    last_name: str
    gpa: float
    school_name: str | None = None
    school_address: str | None = None
    school_id: int | None = None

    @classmethod
    def of(cls, student: Student) -> "NaturalKey":
        school = student.school
        if school is not None:
            return cls(
                first_name=student.first_name,
                last_name=student.last_name,
                gpa=student.gpa,
                school_name=school.name,
                school_address=school.address,
            )
        return cls(
            first_name=student.first_name,
            last_name=student.last_name,
            gpa=student.gpa,
            school_id=student.school_id,
        )

    def query(self) -> Select[tuple[Student]]:
        """Build the lookup for this key.

        Without an embedded school the key falls back to school_id, and a
        student without any school only matches other school-less rows.
        """
        query = select(Student).where(
            Student.first_name == self.first_name,
            Student.last_name == self.last_name,
            Student.gpa == self.gpa,
        )
        if self.school_name is not None:
            query = query.join(Student.school).where(
                School.name == self.school_name,
                School.address == self.school_address,
            )
        elif self.school_id is not None:
            query = query.where(Student.school_id == self.school_id)
        else:
            query = query.where(Student.school_id.is_(None))
        return query.order_by(Student.id).limit(1)


class StudentRepository:
    """CRUD access to students, with school resolution on insert."""

    def __init__(self, session: AsyncSession, schools: SchoolRepository | None = None) -> None:
        self._session = session
        self._schools = schools or SchoolRepository(session)

    async def get_by_id(self, student_id: int) -> StoreResult[Student]:
        """Get student (with its school) by id."""
        try:
            student = await self._load(student_id)
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.exception(f"Cannot get student from DB. With student id: {student_id}")
            return StoreResult.backend_error(str(e))

        if student is None:
            return StoreResult.not_found()
        return StoreResult.ok(student)

    async def find_by_natural_key(self, key: NaturalKey) -> StoreResult[Student]:
        """Get the stored student matching a natural key, if any."""
        try:
            result = await self._session.execute(key.query())
            student = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.exception(f"Cannot get student from DB. With natural key: {key}")
            return StoreResult.backend_error(str(e))

        if student is None:
            return StoreResult.not_found()
        return StoreResult.ok(student)

    async def add(self, candidate: Student) -> StoreResult[Student]:
        """Add student unless an identical one already exists.

        Args:
            candidate: Transient student, optionally embedding a school.

        Returns:
            ok(existing) on natural-key match, ok(persisted) after insert,
            backend_error on any storage failure.
        """
        key = NaturalKey.of(candidate)

        existing = await self.find_by_natural_key(key)
        if existing.is_ok:
            logger.info(f"Student: {existing.value!r} already exists")
            return existing
        if existing.outcome is Outcome.BACKEND_ERROR:
            return existing

        if candidate.school is not None:
            resolved = await self._schools.find_by_name_and_address(
                candidate.school.name, candidate.school.address
            )
            if resolved.outcome is Outcome.BACKEND_ERROR:
                return StoreResult.backend_error(resolved.error or "school lookup failed")
            if resolved.is_ok:
                candidate.school = resolved.value
                candidate.school_id = resolved.value.id
            else:
                # Unknown school: inserted as a new row along with the student.
                candidate.school.id = None
                candidate.school_id = None

        age = candidate.age
        inserted = await self._insert(candidate, key)
        if inserted is not None:
            return inserted

        existing = await self.find_by_natural_key(key)
        if existing.outcome is not Outcome.NOT_FOUND:
            return existing
        if key.school_name is None:
            return StoreResult.backend_error(f"insert conflicted but no student matches {key}")

        # The conflict was on the school row: a concurrent add created the school first.
        resolved = await self._schools.find_by_name_and_address(key.school_name, key.school_address)
        if not resolved.is_ok:
            return StoreResult.backend_error(f"insert conflicted on school but no school matches {key}")

        attached = Student(
            first_name=key.first_name,
            last_name=key.last_name,
            gpa=key.gpa,
            age=age,
            school=resolved.value,
            school_id=resolved.value.id,
        )
        inserted = await self._insert(attached, key)
        if inserted is not None:
            return inserted
        return await self._winner_of_conflict(key)

    async def _insert(self, student: Student, key: NaturalKey) -> StoreResult[Student] | None:
        """Persist a new student.

        Returns:
            The re-read row, backend_error on failure, or None when a unique
            constraint rejected the insert (rolled back, caller resolves it).
        """
        self._session.add(student)
        try:
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            logger.warning(f"Unique constraint hit while adding student with natural key: {key}")
            return None
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.exception(f"Cannot add student to DB. With natural key: {key}")
            return StoreResult.backend_error(str(e))

        persisted = await self.get_by_id(student.id)
        if persisted.outcome is Outcome.NOT_FOUND:
            return StoreResult.backend_error(f"student {student.id} vanished after insert")
        return persisted

    async def _winner_of_conflict(self, key: NaturalKey) -> StoreResult[Student]:
        existing = await self.find_by_natural_key(key)
        if existing.outcome is Outcome.NOT_FOUND:
            return StoreResult.backend_error(f"insert conflicted but no student matches {key}")
        return existing

    async def update(self, student: Student) -> StoreResult[Student]:
        """Replace all mutable fields of the student with the same id.

        Returns:
            ok(updated) re-read from the DB, not_found when no row has the id,
            backend_error on storage failure (including natural-key clashes).
        """
        school_id = student.school_id
        if school_id is None and student.school is not None:
            school_id = student.school.id

        try:
            result = await self._session.execute(
                update(Student)
                .where(Student.id == student.id)
                .values(
                    first_name=student.first_name,
                    last_name=student.last_name,
                    gpa=student.gpa,
                    age=student.age,
                    school_id=school_id,
                )
            )
            if result.rowcount == 0:
                await self._session.rollback()
                logger.info(f"Student with id: {student.id} not found for update")
                return StoreResult.not_found()
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.exception(f"Cannot update student in DB. student id: {student.id}")
            return StoreResult.backend_error(str(e))

        return await self.get_by_id(student.id)

    async def delete_by_id(self, student_id: int) -> StoreResult[bool]:
        """Delete student by id.

        Returns:
            ok(True) when removed, ok(False) when no such student,
            backend_error on storage failure.
        """
        try:
            student = await self._session.get(Student, student_id)
            if student is None:
                logger.info(f"Student with id: {student_id} not found")
                return StoreResult.ok(False)

            await self._session.delete(student)
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.exception(f"Cannot remove student from DB. student id: {student_id}")
            return StoreResult.backend_error(str(e))

        return StoreResult.ok(True)

    async def _load(self, student_id: int) -> Student | None:
        result = await self._session.execute(
            select(Student)
            .where(Student.id == student_id)
            .options(selectinload(Student.school))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
