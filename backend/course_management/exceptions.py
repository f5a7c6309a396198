"""Domain errors raised by repositories and services.

The HTTP layer maps these onto status codes; nothing below the API
catches them.
"""


class CourseManagementError(Exception):
    """Base class for errors raised by the course management core."""


class NotFound(CourseManagementError, LookupError):
    """A requested entity id does not exist."""

    def __init__(self, kind: str, entity_id):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} not found with id: {entity_id}")


class ConstraintViolation(CourseManagementError, ValueError):
    """A save broke a uniqueness, required-field or foreign-key rule."""


class InvalidQuery(CourseManagementError, ValueError):
    """A listing was requested with an unknown sort field or bad page bounds."""
