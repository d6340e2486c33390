"""SQLAlchemy ORM models.

Models represent database tables:
- schools: Schools identified by (name, address)
- students: Student records referencing an optional school
"""

from app.models.school import School
from app.models.student import Student

__all__ = ["School", "Student"]
