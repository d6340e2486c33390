"""Schemas for student management (/api/management).

`StudentDto` is the single external shape of a student. The mapping to and
from the ORM models lives here so both directions stay side by side.
"""

from pydantic import BaseModel, Field

from app.models import School, Student


class SchoolDto(BaseModel):
    """School as exposed on the wire."""

    id: int | None = None
    name: str = Field(min_length=1, max_length=200)
    address: str = Field(min_length=1, max_length=500)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, school: School) -> "SchoolDto":
        return cls(id=school.id, name=school.name, address=school.address)

    def to_model(self) -> School:
        return School(id=self.id, name=self.name, address=self.address)


class StudentDto(BaseModel):
    """Student with its optional school.

    `schoolId` references an existing school; `school` embeds one by value.
    On create, an embedded school is matched against stored schools by
    (name, address) before a new row is written.
    """

    id: int = 0
    first_name: str = Field(alias="firstName", min_length=1, max_length=100)
    last_name: str = Field(alias="lastName", min_length=1, max_length=100)
    gpa: float = Field(ge=0)
    age: int | None = Field(default=None, ge=0)
    school_id: int | None = Field(alias="schoolId", default=None)
    school: SchoolDto | None = None

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, student: Student) -> "StudentDto":
        school = student.school
        return cls(
            id=student.id,
            first_name=student.first_name,
            last_name=student.last_name,
            gpa=student.gpa,
            age=student.age,
            school_id=student.school_id,
            school=SchoolDto.from_model(school) if school is not None else None,
        )

    def to_model(self) -> Student:
        """Build a transient Student; id 0 means "not assigned yet"."""
        return Student(
            id=self.id or None,
            first_name=self.first_name,
            last_name=self.last_name,
            gpa=self.gpa,
            age=self.age,
            school_id=self.school_id or (self.school.id if self.school else None),
            school=self.school.to_model() if self.school is not None else None,
        )
