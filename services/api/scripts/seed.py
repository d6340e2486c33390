#!/usr/bin/env python3
"""Seed database with sample schools and students.

Creates:
- A handful of schools (inserted transitively with their first student)
- Students spread across those schools, one without a school

The seed is idempotent: students go through the natural-key dedup in the
student store, so running it twice adds nothing the second time.

Usage:
    cd services/api
    python -m scripts.seed
"""

import asyncio
import os
import sys

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from app.schemas import SchoolDto, StudentDto
from app.stores.postgres import close_db, create_tables, get_session, init_db
from app.stores.students import NaturalKey, StudentRepository

load_dotenv()

LINCOLN_HIGH = SchoolDto(name="Lincoln High", address="1 Main St")
RIVERSIDE_ACADEMY = SchoolDto(name="Riverside Academy", address="42 River Rd")

STUDENTS = [
    StudentDto(first_name="Ana", last_name="Diaz", gpa=3.8, age=16, school=LINCOLN_HIGH),
    StudentDto(first_name="Ben", last_name="Okafor", gpa=3.1, age=17, school=LINCOLN_HIGH),
    StudentDto(first_name="Chen", last_name="Wei", gpa=3.95, age=15, school=RIVERSIDE_ACADEMY),
    StudentDto(first_name="Dara", last_name="Novak", gpa=2.7, age=18, school=RIVERSIDE_ACADEMY),
    StudentDto(first_name="Eli", last_name="Moreau", gpa=3.4, age=16),
]


async def seed_students(students: list[StudentDto] = STUDENTS) -> dict[str, int]:
    """Add the sample students, returning counts of added vs existing."""
    stats = {"added": 0, "existing": 0, "failed": 0}
    async with get_session() as session:
        repo = StudentRepository(session)
        for student in students:
            before = await repo.find_by_natural_key(NaturalKey.of(student.to_model()))
            result = await repo.add(student.to_model())
            label = f"{student.first_name} {student.last_name}"
            if not result.is_ok:
                stats["failed"] += 1
                print(f"  ❌ {label} ({result.error})")
            elif before.is_ok:
                stats["existing"] += 1
                print(f"  ⏭️  {label} (exists, id={result.value.id})")
            else:
                stats["added"] += 1
                print(f"  ✅ {label} (id={result.value.id}, school_id={result.value.school_id})")
    return stats


async def seed_database() -> None:
    """Seed database with initial data."""
    await init_db()
    try:
        await create_tables()
        print("🌱 Seeding database...")
        stats = await seed_students()
        print(f"\n✅ Done: {stats}")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(seed_database())
