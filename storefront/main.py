import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront import __version__
from storefront.base_service import BaseService, Database
from storefront.config import Settings, get_settings
from storefront.errors import StorefrontError
from storefront.auth.jwt import TokenService
from storefront.auth.users import UserService
from storefront.auth.router import router as auth_router
from storefront.catalog.products import ProductService
from storefront.catalog.router import router as catalog_router

base_service = BaseService()


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg", "Invalid request"))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI):
    """Translate every failure into the standard response envelope."""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        return base_service.error_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return base_service.error_response(_describe_validation_error(exc), 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return base_service.error_response(message, exc.status_code)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        base_service.log_error(exc, context=f"{request.method} {request.url.path}")
        return base_service.error_response("Internal server error", 500)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the storefront application.

    The store handle and services are created here once and shared by
    all requests through app.state.
    """
    settings = settings or get_settings()
    database = database or Database(settings.database_url)
    logging.getLogger("storefront").setLevel(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base_service.log_event("service.startup", {"service": "storefront", "env": settings.environment})
        await database.create_tables()
        yield
        base_service.log_event("service.shutdown", {"service": "storefront"})
        await database.dispose()

    app = FastAPI(
        title="Storefront API",
        description="Product catalog and customer accounts",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.token_service = TokenService(
        settings.jwt_secret_key,
        expire_seconds=settings.access_token_expire_seconds,
        algorithm=settings.jwt_algorithm,
    )
    app.state.user_service = UserService(database, app.state.token_service)
    app.state.product_service = ProductService(database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/auth")
    app.include_router(catalog_router, prefix="/products")

    @app.get("/health", tags=["health"])
    async def health_check():
        """Overall system health check."""
        return base_service.api_response(
            data={
                "status": "ok",
                "version": __version__,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        )

    return app


app = create_app()

# For running directly with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000, reload=True)
