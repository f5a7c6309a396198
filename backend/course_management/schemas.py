"""Pydantic transfer schemas used by the API.

Schemas keep the wire shapes (camelCase keys such as `courseId` and
`totalElements`) stable and independent from the persisted models.
Either the camelCase alias or the Python field name is accepted on
input.
"""

from math import ceil
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StudentDTO(_CamelModel):
    """External representation of a student; the course is flattened to `courseId`."""
    id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None
    course_id: Optional[int] = None


class CourseDTO(_CamelModel):
    """External representation of a course.

    `students` is only filled when a caller explicitly asks for it; it is
    ignored on input.
    """
    id: Optional[int] = None
    name: Optional[str] = None
    students: Optional[List[StudentDTO]] = None


class Page(_CamelModel, Generic[T]):
    """A zero-based slice of an ordered result set plus the overall total."""
    content: List[T]
    total_elements: int
    total_pages: int
    number: int
    size: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool

    @classmethod
    def of(cls, content: List[T], page: int, size: int, total: int) -> "Page[T]":
        total_pages = ceil(total / size) if size else 0
        return cls(
            content=content,
            total_elements=total,
            total_pages=total_pages,
            number=page,
            size=size,
            number_of_elements=len(content),
            first=page == 0,
            last=page >= total_pages - 1,
            empty=not content,
        )
