import os
import tempfile
from pathlib import Path

# Point the app at a throwaway SQLite file before anything imports settings.
_DB_DIR = Path(tempfile.mkdtemp(prefix="course-management-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ["ENV"] = "dev"

import pytest
from sqlmodel import SQLModel, Session

from course_management import models  # noqa: F401
from course_management.database import engine


@pytest.fixture(autouse=True)
def reset_db():
    """Start every test from empty tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s
