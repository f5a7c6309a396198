"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table (courses,
students). Repositories return SQLModel objects, perform commits and
refreshes, and translate integrity failures into `ConstraintViolation`
after rolling the session back.
"""

from typing import Dict, List, Optional, Tuple
from sqlmodel import Session, select
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from . import models
from .exceptions import ConstraintViolation, InvalidQuery


def _storable(value: int) -> bool:
    """True when `value` fits a SQLite INTEGER column."""
    return -models.MAX_ID - 1 <= value <= models.MAX_ID


class _EntityRepository:
    """Shared find/save/delete plumbing; subclasses set `model` and `sortable`."""
    # set by subclasses to the mapped SQLModel table
    model = None
    # public sort key -> model attribute name
    sortable: Dict[str, str] = {}

    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, entity_id: Optional[int]):
        """Return the row with primary key `entity_id` or `None`."""
        if entity_id is None or not _storable(entity_id):
            return None
        return self.session.get(self.model, entity_id)

    def find_all(self, page: int, size: int, sort_by: str, ascending: bool = True) -> Tuple[list, int]:
        """Return one page of rows ordered by `sort_by` plus the total row count.

        A page past the end yields an empty list; the total is unaffected.
        """
        if page < 0:
            raise InvalidQuery("page index must not be less than zero")
        if size < 1:
            raise InvalidQuery("page size must not be less than one")
        attr = self.sortable.get(sort_by)
        if attr is None:
            raise InvalidQuery(f"No property '{sort_by}' found for type '{self.model.__name__}'")
        total = self.session.exec(select(func.count()).select_from(self.model)).one()
        if not _storable(page * size):
            return [], total
        column = getattr(self.model, attr)
        order = [column.asc() if ascending else column.desc()]
        if attr != "id":
            # id as tie-breaker keeps pages stable on duplicate sort values
            order.append(self.model.id.asc() if ascending else self.model.id.desc())
        stmt = select(self.model).order_by(*order).offset(page * size).limit(size)
        items = self.session.exec(stmt).all()
        return list(items), total

    def save(self, entity):
        """Insert or update `entity` and return the refreshed instance."""
        try:
            self._check(entity)
        except ConstraintViolation:
            # drop pending edits on the loaded row
            self.session.rollback()
            raise
        self.session.add(entity)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConstraintViolation(f"could not save {self.model.__name__}: {exc.orig}") from exc
        self.session.refresh(entity)
        return entity

    def delete(self, entity) -> None:
        self.session.delete(entity)
        self.session.commit()

    def _check(self, entity) -> None:
        """Validate required fields before writing; subclasses must override."""
        raise NotImplementedError

    @staticmethod
    def _require_text(kind: str, field: str, value) -> None:
        if value is None or not str(value).strip():
            raise ConstraintViolation(f"{kind} {field} must not be null or blank")
        if len(value) > models.NAME_MAX_LENGTH:
            raise ConstraintViolation(
                f"{kind} {field} must be at most {models.NAME_MAX_LENGTH} characters"
            )


class CourseRepository(_EntityRepository):
    """CRUD operations for `Course` rows."""
    model = models.Course
    sortable = {"id": "id", "name": "name"}

    def delete(self, course: models.Course) -> None:
        """Delete `course` and every student referencing it in one commit."""
        stmt = select(models.Student).where(models.Student.course_id == course.id)
        for student in self.session.exec(stmt).all():
            self.session.delete(student)
        self.session.delete(course)
        self.session.commit()

    def _check(self, course: models.Course) -> None:
        self._require_text("Course", "name", course.name)


class StudentRepository(_EntityRepository):
    """CRUD operations for `Student` rows plus the per-course lookup."""
    model = models.Student
    sortable = {
        "id": "id",
        "name": "name",
        "email": "email",
        "courseId": "course_id",
        "course_id": "course_id",
    }

    def find_by_course_id(self, course_id: int) -> List[models.Student]:
        """Return students referencing `course_id`; empty when there are none."""
        if not _storable(course_id):
            return []
        stmt = select(models.Student).where(models.Student.course_id == course_id).order_by(models.Student.id)
        return list(self.session.exec(stmt).all())

    def _check(self, student: models.Student) -> None:
        self._require_text("Student", "name", student.name)
        self._require_text("Student", "email", student.email)
        if student.course_id is None and student.course is None:
            raise ConstraintViolation("Student course must not be null")
