"""Database layer utilities for SQLAlchemy-backed persistence."""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Generator, Literal

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings

logger = logging.getLogger(__name__)

StoreState = Literal["connected", "disconnected", "connecting", "disconnecting", "unknown"]

# Load settings (DATABASE_URL and others come from env/.env)
settings = get_settings()


def _engine_options(database_url: str, timeout: float) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True, "future": True}
    if make_url(database_url).get_backend_name() == "sqlite":
        # Requests are served from worker threads; sqlite waits `timeout` seconds on a locked file.
        options["connect_args"] = {"check_same_thread": False, "timeout": timeout}
    else:
        options["pool_timeout"] = timeout
    return options


engine: Engine = create_engine(
    settings.database_url,
    **_engine_options(settings.database_url, settings.database_timeout_seconds),
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False,
)

Base = declarative_base()


class StoreUnavailableError(RuntimeError):
    """Raised when the store cannot be reached within the configured attempts."""


class StoreConnection:
    """Process-wide view of the store connection lifecycle.

    The engine pools connections on its own; this object only tracks whether
    the service has established contact with the store, and answers the
    health endpoint.
    """

    def __init__(self, bind: Engine, *, sleep: Callable[[float], None] = time.sleep) -> None:
        self._engine = bind
        self._sleep = sleep
        self._state: StoreState = "disconnected"
        self._established = False
        self._lock = threading.Lock()

    @property
    def state(self) -> StoreState:
        return self._state

    def _set_state(self, state: StoreState) -> None:
        with self._lock:
            self._state = state

    def ping(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.debug("Store ping failed", exc_info=True)
            return False
        return True

    def connect(self, *, retry_delay: float = 5.0, max_attempts: int = 0) -> None:
        """Block until the store answers, retrying every ``retry_delay`` seconds.

        ``max_attempts`` of zero retries forever.
        """

        self._set_state("connecting")
        attempt = 0
        while True:
            attempt += 1
            if self.ping():
                self._set_state("connected")
                self._established = True
                logger.info("Store connected (%s)", self._engine.url.render_as_string(hide_password=True))
                return
            if max_attempts and attempt >= max_attempts:
                self._set_state("disconnected")
                raise StoreUnavailableError(f"Store unreachable after {attempt} attempt(s)")
            logger.error("Store connection attempt %d failed, retrying in %.1fs", attempt, retry_delay)
            self._sleep(retry_delay)

    def status(self) -> StoreState:
        """Return the lifecycle state, re-pinging once a connection has been established."""

        state = self._state
        # Before the first connect and after close() there is nothing to re-check.
        if not self._established or state in ("connecting", "disconnecting"):
            return state
        if not self.ping():
            self._set_state("disconnected")
            return "disconnected"
        self._set_state("connected")
        return "connected"

    def close(self) -> None:
        self._established = False
        self._set_state("disconnecting")
        try:
            self._engine.dispose()
        finally:
            self._set_state("disconnected")
        logger.info("Store connection closed")


store = StoreConnection(engine)


def get_engine() -> Engine:
    """Return the configured SQLAlchemy engine."""
    return engine


def get_store() -> StoreConnection:
    """FastAPI dependency returning the process-wide store connection."""
    return store


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db() -> None:
    """Initialise database schema by creating tables when missing."""
    # Import models to ensure they are registered on the metadata before create_all runs.
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


__all__ = [
    "Base",
    "SessionLocal",
    "StoreConnection",
    "StoreState",
    "StoreUnavailableError",
    "engine",
    "get_engine",
    "get_session",
    "get_store",
    "init_db",
    "store",
]
