"""Simple migration runner for SQLite using provided SQL files in migrations/"""
from pathlib import Path
import logging
import sqlite3

from sqlalchemy.engine import make_url

from course_management.config import settings

BASE = Path(__file__).parent
MIGRATIONS = sorted((BASE / "migrations").glob("*.sql"))
logger = logging.getLogger("course_management.migrations")


def default_db_path() -> Path:
    """Return the SQLite file named by `DATABASE_URL`."""
    url = make_url(settings.DATABASE_URL)
    if not url.drivername.startswith("sqlite") or not url.database:
        raise RuntimeError("run_migrations only supports file-backed SQLite databases")
    return Path(url.database)


def run(db_path: Path = None):
    """Execute SQL migration files against a SQLite database.

    The function applies every `migrations/*.sql` file in lexical
    order. The shipped files are idempotent, so running twice is safe.
    """
    db_path = Path(db_path) if db_path is not None else default_db_path()
    logger.info("Using database: %s", db_path)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for m in MIGRATIONS:
            logger.info("Applying: %s", m.name)
            cur.executescript(m.read_text(encoding="utf-8"))
        conn.commit()
    finally:
        conn.close()
    logger.info("Migrations applied.")


if __name__ == '__main__':
    logging.basicConfig(level=settings.LOG_LEVEL)
    run()
