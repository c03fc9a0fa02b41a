import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Optional

from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("storefront")

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every backend round-trips unchanged."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Database:
    """
    Handle on the relational store.

    Owns the async engine and session factory. One instance is built at
    startup and passed to every service that needs the store, so tests
    can run against their own isolated database.
    """
    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs: Dict[str, Any] = {"echo": echo}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
                # In-memory databases live as long as their one connection
                engine_kwargs["poolclass"] = StaticPool
        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False, class_=AsyncSession
        )

    @staticmethod
    def _ensure_sqlite_dir(url: str):
        path = url.split(":///", 1)[-1]
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def create_tables(self):
        """Create any missing tables for the registered models."""
        # Model modules register their tables on Base.metadata
        from storefront.auth import models as _auth_models  # noqa: F401
        from storefront.catalog import models as _catalog_models  # noqa: F401

        if self.url.startswith("sqlite"):
            self._ensure_sqlite_dir(self.url)
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()


class ApiResponse(JSONResponse):
    """
    Standard response envelope for all API endpoints:
    {"success": bool, "data"?: ..., "error"?: str, "message"?: str}
    """
    def __init__(
        self,
        data: Any = None,
        message: Optional[str] = None,
        error: Optional[str] = None,
        status_code: int = 200,
        **kwargs,
    ):
        content: Dict[str, Any] = {"success": error is None}
        if data is not None:
            content["data"] = jsonable_encoder(data)
        if message is not None:
            content["message"] = message
        if error is not None:
            content["error"] = error
        super().__init__(content=content, status_code=status_code, **kwargs)


class BaseService:
    """
    Base class for storefront services. Provides:
    - Event/error logging
    - Standard response envelopes
    """
    def __init__(self, name: str = "storefront"):
        self.name = name
        self.logger = logging.getLogger(f"storefront.{name}") if name != "storefront" else logger

    def api_response(self, data: Any = None, message: Optional[str] = None, status_code: int = 200):
        """
        Return a successful response envelope.
        """
        return ApiResponse(data=data, message=message, status_code=status_code)

    def error_response(self, error: str, status_code: int):
        """
        Return a failed response envelope.
        """
        return ApiResponse(error=error, status_code=status_code)

    def log_event(self, event: str, details: Optional[Dict[str, Any]] = None):
        self.logger.info(f"EVENT: {event} | Details: {details or {}}")

    def log_error(self, error: Exception, context: str = ""):
        self.logger.error(
            f"ERROR: {error.__class__.__name__}: {error} | Context: {context}"
        )
