"""SQLModel data models.

Two tables: `courses` and `students`. Student is the owning side of the
one-to-many relationship through `course_id`; the foreign key is
declared `ON DELETE CASCADE` and the ORM relationship is kept passive so
that removing a course never tries to null out its students.
"""

from typing import List, Optional
from sqlmodel import SQLModel, Field, Relationship

NAME_MAX_LENGTH = 255
# largest value a SQLite INTEGER column can hold
MAX_ID = 2**63 - 1


class Course(SQLModel, table=True):
    """A course. `name` is unique across all courses."""
    __tablename__ = "courses"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=NAME_MAX_LENGTH, nullable=False, unique=True)
    students: List["Student"] = Relationship(
        back_populates="course",
        sa_relationship_kwargs={"passive_deletes": "all", "order_by": "Student.id"},
    )


class Student(SQLModel, table=True):
    """A student enrolled in exactly one course.

    Fields:
    - `email`: unique across all students
    - `course_id`: required reference to an existing `Course`
    """
    __tablename__ = "students"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=NAME_MAX_LENGTH, nullable=False)
    email: str = Field(max_length=NAME_MAX_LENGTH, nullable=False, unique=True)
    course_id: int = Field(foreign_key="courses.id", ondelete="CASCADE", nullable=False, index=True)
    course: Optional[Course] = Relationship(back_populates="students")
