"""Explicit conversions between persisted models and transfer schemas.

Every field is copied by hand so the mapping stays auditable. The
mappers never touch the database: a `StudentDTO.course_id` is not turned
into a `Course` here, the service resolves it.
"""

from . import models
from .schemas import CourseDTO, StudentDTO


def course_to_dto(course: models.Course, include_students: bool = False) -> CourseDTO:
    """Map a `Course` to its DTO; students are expanded only on request."""
    students = None
    if include_students:
        students = [student_to_dto(s) for s in course.students]
    return CourseDTO(id=course.id, name=course.name, students=students)


def dto_to_course(dto: CourseDTO) -> models.Course:
    """Build a `Course` from a DTO, ignoring any client-supplied students."""
    course = models.Course(name=dto.name)
    if dto.id is not None:
        course.id = dto.id
    return course


def student_to_dto(student: models.Student) -> StudentDTO:
    return StudentDTO(
        id=student.id,
        name=student.name,
        email=student.email,
        course_id=student.course_id,
    )


def dto_to_student(dto: StudentDTO) -> models.Student:
    """Build a `Student` carrying only name and email; the course is attached later."""
    return models.Student(name=dto.name, email=dto.email)
