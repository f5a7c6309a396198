"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories
and the mapping layer. Services are intentionally thin: they check that
referenced rows exist, apply the allowed field changes and persist via
repositories. Errors from the repositories propagate unchanged.
"""

import logging
from typing import List
from sqlmodel import Session
from . import mappers, repositories
from .exceptions import ConstraintViolation, NotFound
from .schemas import CourseDTO, Page, StudentDTO

logger = logging.getLogger("course_management.services")


def sort_ascending(sort_dir: str) -> bool:
    """Return True only for a case-insensitive ``"asc"``; anything else sorts descending."""
    return isinstance(sort_dir, str) and sort_dir.lower() == "asc"


class CourseService:
    """Course CRUD and paginated listing."""
    def __init__(self, session: Session):
        self.session = session
        self.course_repo = repositories.CourseRepository(session)

    def create(self, dto: CourseDTO) -> CourseDTO:
        """Persist a new course; any client-supplied id is ignored."""
        course = mappers.dto_to_course(dto)
        course.id = None
        saved = self.course_repo.save(course)
        logger.info("course created id=%s", saved.id)
        return mappers.course_to_dto(saved)

    def get_by_id(self, course_id: int, include_students: bool = False) -> CourseDTO:
        return mappers.course_to_dto(self._load(course_id), include_students=include_students)

    def list(self, page: int, size: int, sort_by: str, sort_dir: str) -> Page[CourseDTO]:
        courses, total = self.course_repo.find_all(page, size, sort_by, sort_ascending(sort_dir))
        return Page[CourseDTO].of([mappers.course_to_dto(c) for c in courses], page, size, total)

    def update(self, course_id: int, dto: CourseDTO) -> CourseDTO:
        """Rename an existing course. Students cannot be moved through this call."""
        course = self._load(course_id)
        course.name = dto.name
        saved = self.course_repo.save(course)
        logger.info("course updated id=%s", saved.id)
        return mappers.course_to_dto(saved)

    def delete(self, course_id: int) -> None:
        """Delete a course together with all of its students."""
        course = self._load(course_id)
        self.course_repo.delete(course)
        logger.info("course deleted id=%s", course_id)

    def _load(self, course_id: int):
        course = self.course_repo.find_by_id(course_id)
        if course is None:
            raise NotFound("Course", course_id)
        return course


class StudentService:
    """Student CRUD, paginated listing and per-course lookup.

    Every write resolves the referenced course first so a student can
    never be saved against a course that does not exist.
    """
    def __init__(self, session: Session):
        self.session = session
        self.student_repo = repositories.StudentRepository(session)
        self.course_repo = repositories.CourseRepository(session)

    def create(self, dto: StudentDTO) -> StudentDTO:
        course = self._resolve_course(dto.course_id)
        student = mappers.dto_to_student(dto)
        student.course = course
        saved = self.student_repo.save(student)
        logger.info("student created id=%s course_id=%s", saved.id, saved.course_id)
        return mappers.student_to_dto(saved)

    def get_by_id(self, student_id: int) -> StudentDTO:
        return mappers.student_to_dto(self._load(student_id))

    def list(self, page: int, size: int, sort_by: str, sort_dir: str) -> Page[StudentDTO]:
        students, total = self.student_repo.find_all(page, size, sort_by, sort_ascending(sort_dir))
        return Page[StudentDTO].of([mappers.student_to_dto(s) for s in students], page, size, total)

    def list_by_course(self, course_id: int) -> List[StudentDTO]:
        """Return the students of `course_id`.

        The course itself is not looked up: an unknown course and a course
        without students both give an empty list.
        """
        return [mappers.student_to_dto(s) for s in self.student_repo.find_by_course_id(course_id)]

    def update(self, student_id: int, dto: StudentDTO) -> StudentDTO:
        """Overwrite name, email and course of an existing student."""
        student = self._load(student_id)
        course = self._resolve_course(dto.course_id)
        student.name = dto.name
        student.email = dto.email
        student.course = course
        saved = self.student_repo.save(student)
        logger.info("student updated id=%s course_id=%s", saved.id, saved.course_id)
        return mappers.student_to_dto(saved)

    def delete(self, student_id: int) -> None:
        student = self._load(student_id)
        self.student_repo.delete(student)
        logger.info("student deleted id=%s", student_id)

    def _load(self, student_id: int):
        student = self.student_repo.find_by_id(student_id)
        if student is None:
            raise NotFound("Student", student_id)
        return student

    def _resolve_course(self, course_id):
        if course_id is None:
            raise ConstraintViolation("Student course must not be null")
        course = self.course_repo.find_by_id(course_id)
        if course is None:
            raise NotFound("Course", course_id)
        return course
