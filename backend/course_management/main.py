"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the course management backend.
Controllers are intentionally thin: they accept requests, delegate to
services, and return JSON responses. Domain errors are mapped onto
status codes by the exception handlers below.

Endpoints implemented:
- POST /courses/create
- GET /courses/get/{id}
- GET /courses/getall
- PUT /courses/edit/{id}
- DELETE /courses/del/{id}
- POST /students/create
- GET /students/get/{id}
- GET /students/getall
- GET /students/getcourse/{course_id}
- PUT /students/edit/{id}
- DELETE /students/del/{id}
- GET /health
"""

from typing import List

from fastapi import FastAPI, Depends, Path, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
import json
import logging
import time
import uuid
from .config import settings
from .database import create_db_and_tables, get_session
from .exceptions import ConstraintViolation, InvalidQuery, NotFound
from .schemas import CourseDTO, Page, StudentDTO
from .models import MAX_ID
from . import services

# page and size are 32-bit; page * size stays within an int64 offset
MAX_PAGE_PARAM = 2**31 - 1

app = FastAPI(title="Course Management API")
logger = logging.getLogger("course_management.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()


def _endpoint_name(request: Request):
    """Name of the view function that handled the request, once routing ran."""
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", None)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "endpoint": _endpoint_name(request),
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "endpoint": _endpoint_name(request),
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
                "client": request.client.host if request.client else "unknown",
            },
            ensure_ascii=True,
        ),
    )
    return response


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return PlainTextResponse(str(exc), status_code=404)


@app.exception_handler(ConstraintViolation)
async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
    logger.info("constraint_violation path=%s detail=%s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(InvalidQuery)
async def invalid_query_handler(request: Request, exc: InvalidQuery):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def get_course_service(db: Session = Depends(get_session)) -> services.CourseService:
    return services.CourseService(db)


def get_student_service(db: Session = Depends(get_session)) -> services.StudentService:
    return services.StudentService(db)


@app.post('/courses/create', response_model=CourseDTO, status_code=201)
def create_course(payload: CourseDTO, svc: services.CourseService = Depends(get_course_service)):
    """Create a course and return it with its assigned id."""
    return svc.create(payload)


@app.get('/courses/get/{course_id}', response_model=CourseDTO)
def get_course(
    course_id: int = Path(..., le=MAX_ID),
    include_students: bool = Query(False, alias="includeStudents"),
    svc: services.CourseService = Depends(get_course_service),
):
    """Fetch one course; `includeStudents=true` expands its students."""
    return svc.get_by_id(course_id, include_students=include_students)


@app.get('/courses/getall', response_model=Page[CourseDTO])
def list_courses(
    page: int = Query(0, ge=0, le=MAX_PAGE_PARAM),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_PARAM),
    sort_by: str = Query("id", alias="sortBy"),
    sort_dir: str = Query("asc", alias="sortDir"),
    svc: services.CourseService = Depends(get_course_service),
):
    """Return one page of courses.

    `sortDir` is case-insensitive; any value other than `asc` sorts
    descending.
    """
    return svc.list(page, size, sort_by, sort_dir)


@app.put('/courses/edit/{course_id}', response_model=CourseDTO)
def update_course(payload: CourseDTO, course_id: int = Path(..., le=MAX_ID), svc: services.CourseService = Depends(get_course_service)):
    return svc.update(course_id, payload)


@app.delete('/courses/del/{course_id}', status_code=204)
def delete_course(course_id: int = Path(..., le=MAX_ID), svc: services.CourseService = Depends(get_course_service)):
    """Delete a course and, with it, all of its students."""
    svc.delete(course_id)
    return Response(status_code=204)


@app.post('/students/create', response_model=StudentDTO, status_code=201)
def create_student(payload: StudentDTO, svc: services.StudentService = Depends(get_student_service)):
    """Create a student in an existing course (404 when `courseId` is unknown)."""
    return svc.create(payload)


@app.get('/students/get/{student_id}', response_model=StudentDTO)
def get_student(student_id: int = Path(..., le=MAX_ID), svc: services.StudentService = Depends(get_student_service)):
    return svc.get_by_id(student_id)


@app.get('/students/getall', response_model=Page[StudentDTO])
def list_students(
    page: int = Query(0, ge=0, le=MAX_PAGE_PARAM),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_PARAM),
    sort_by: str = Query("id", alias="sortBy"),
    sort_dir: str = Query("asc", alias="sortDir"),
    svc: services.StudentService = Depends(get_student_service),
):
    return svc.list(page, size, sort_by, sort_dir)


@app.get('/students/getcourse/{course_id}', response_model=List[StudentDTO])
def list_students_by_course(course_id: int = Path(..., le=MAX_ID), svc: services.StudentService = Depends(get_student_service)):
    """List the students of a course; an unknown course yields an empty list."""
    return svc.list_by_course(course_id)


@app.put('/students/edit/{student_id}', response_model=StudentDTO)
def update_student(payload: StudentDTO, student_id: int = Path(..., le=MAX_ID), svc: services.StudentService = Depends(get_student_service)):
    return svc.update(student_id, payload)


@app.delete('/students/del/{student_id}', status_code=204)
def delete_student(student_id: int = Path(..., le=MAX_ID), svc: services.StudentService = Depends(get_student_service)):
    svc.delete(student_id)
    return Response(status_code=204)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
