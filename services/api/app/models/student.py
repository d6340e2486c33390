"""Student model.

Natural key: first_name + last_name + gpa + school. The unique constraint on
(first_name, last_name, gpa, school_id) backs the dedup check performed in
the student store.
"""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.school import School
from app.stores.postgres import Base


class Student(Base):
    """Student record with an optional school."""

    __tablename__ = "students"
    __table_args__ = (
        UniqueConstraint(
            "first_name",
            "last_name",
            "gpa",
            "school_id",
            name="uq_students_natural_key",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100), index=True)
    gpa: Mapped[float] = mapped_column()
    age: Mapped[int | None] = mapped_column()

    # Relations
    school_id: Mapped[int | None] = mapped_column(ForeignKey("schools.id"), index=True)
    school: Mapped[School | None] = relationship(lazy="selectin")

    def __repr__(self) -> str:
        return f"<Student {self.id} {self.first_name} {self.last_name} gpa={self.gpa}>"
