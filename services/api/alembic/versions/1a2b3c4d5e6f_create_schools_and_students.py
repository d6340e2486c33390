"""create_schools_and_students

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-17
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "1a2b3c4d5e6f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "schools",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", "address", name="uq_schools_name_address"),
    )
    op.create_index(op.f("ix_schools_name"), "schools", ["name"], unique=False)

    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("gpa", sa.Float(), nullable=False),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("school_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "first_name",
            "last_name",
            "gpa",
            "school_id",
            name="uq_students_natural_key",
        ),
    )
    op.create_index(op.f("ix_students_last_name"), "students", ["last_name"], unique=False)
    op.create_index(op.f("ix_students_school_id"), "students", ["school_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_students_school_id"), table_name="students")
    op.drop_index(op.f("ix_students_last_name"), table_name="students")
    op.drop_table("students")
    op.drop_index(op.f("ix_schools_name"), table_name="schools")
    op.drop_table("schools")
