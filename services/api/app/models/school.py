"""School model.

A school is identified by its (name, address) pair. Schools are only read
through the student path; new rows appear when a student embedding an
unknown school is persisted.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.stores.postgres import Base


class School(Base):
    """School referenced by students."""

    __tablename__ = "schools"
    __table_args__ = (UniqueConstraint("name", "address", name="uq_schools_name_address"),)

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(200), index=True)
    address: Mapped[str] = mapped_column(String(500))

    def __repr__(self) -> str:
        return f"<School {self.id} {self.name!r} @ {self.address!r}>"
