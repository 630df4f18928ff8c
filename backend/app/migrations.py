"""Bring the dashboard database to the latest alembic revision."""

from __future__ import annotations

import errno
import logging
import os
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.engine.reflection import Inspector

from .database import SQLALCHEMY_DATABASE_URL, build_engine_kwargs

LOGGER = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent
LOCK_PATH = BACKEND_DIR / ".alembic-migration.lock"
LOCK_TIMEOUT_ENV = "ALEMBIC_MIGRATION_LOCK_TIMEOUT"
DEFAULT_LOCK_TIMEOUT = 30.0
LOCK_RETRY_DELAY = 0.25

# Revisions recognisable from the tables they leave behind, newest first.
SCHEMA_SENTINELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "20260101_0001",
        ("sports_stats", "food_stats", "clothing_stats", "tenants", "events"),
    ),
)

if os.name == "posix":  # pragma: no cover - platform specific
    import fcntl
else:  # pragma: no cover - platform specific
    import msvcrt


def lock_timeout() -> float:
    raw = os.getenv(LOCK_TIMEOUT_ENV)
    if not raw:
        return DEFAULT_LOCK_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        LOGGER.warning("Ignoring %s=%s; waiting %.1f seconds", LOCK_TIMEOUT_ENV, raw, DEFAULT_LOCK_TIMEOUT)
        return DEFAULT_LOCK_TIMEOUT
    return value


def _try_lock(handle) -> bool:
    try:
        if os.name == "posix":  # pragma: no cover - platform specific
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        else:  # pragma: no cover - platform specific
            msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK, 1)
    except BlockingIOError:
        return False
    except OSError as error:
        # Windows reports a held lock as a sharing or lock violation
        if error.errno in {errno.EACCES, errno.EAGAIN, errno.EBUSY} or getattr(error, "winerror", None) in {32, 33}:
            return False
        raise
    return True


def _unlock(handle) -> None:
    try:
        if os.name == "posix":  # pragma: no cover - platform specific
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        else:  # pragma: no cover - platform specific
            msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)
    except OSError:  # pragma: no cover - released when the handle closes
        LOGGER.debug("Migration lock already released")


@contextmanager
def migration_lock(path: Path = LOCK_PATH, *, timeout: Optional[float] = None) -> Iterator[None]:
    """Hold an exclusive file lock so only one worker migrates at a time."""

    deadline = time.monotonic() + (timeout if timeout is not None else lock_timeout())
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a+") as handle:
        while not _try_lock(handle):
            if time.monotonic() >= deadline:
                raise TimeoutError(f"Timed out waiting for the migration lock at {path}")
            time.sleep(LOCK_RETRY_DELAY)
        try:
            yield
        finally:
            _unlock(handle)


def build_alembic_config(database_url: str) -> Config:
    config = Config(str(BACKEND_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    # configparser interpolation treats "%" as a directive
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def detect_revision(inspector: Inspector) -> Optional[str]:
    """Return the revision whose tables are all present in an unversioned database."""

    for revision, tables in SCHEMA_SENTINELS:
        if all(inspector.has_table(table) for table in tables):
            return revision
    return None


def run_database_migrations(database_url: Optional[str] = None) -> None:
    """Upgrade the database to head, stamping schemas created without alembic.

    ``database_url`` defaults to the URL the application engine was built with.
    """

    repo_root = BACKEND_DIR.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    url = database_url or SQLALCHEMY_DATABASE_URL
    config = build_alembic_config(url)
    head = ScriptDirectory.from_config(config).get_current_head()
    LOGGER.info("Migrating %s to revision %s", make_url(url).render_as_string(hide_password=True), head)

    with migration_lock():
        engine = create_engine(url, **build_engine_kwargs(url))
        try:
            inspector = inspect(engine)
            versioned = inspector.has_table("alembic_version")
            detected = None if versioned else detect_revision(inspector)
        finally:
            engine.dispose()

        if detected is not None:
            LOGGER.info("Stamping unversioned schema as revision %s", detected)
            command.stamp(config, detected)
            if detected == head:
                return
        command.upgrade(config, "head")
