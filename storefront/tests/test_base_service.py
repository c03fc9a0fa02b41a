import logging

import pytest
from httpx import AsyncClient, ASGITransport

from storefront.base_service import ApiResponse, BaseService, Database
from storefront.config import DEV_SECRET_KEY, Settings
from storefront.errors import ConfigurationError
from storefront.main import create_app


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["data"]["status"] == "ok"


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client):
    resp = await client.get("/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not found"}


@pytest.mark.asyncio
async def test_unexpected_errors_are_reported_generically(settings, database):
    app = create_app(settings, database)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        resp = await ac.get("/boom")

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}


def test_api_response_envelope():
    ok = ApiResponse(data={"a": 1}, message="done")
    assert ok.status_code == 200
    assert ok.body == b'{"success":true,"data":{"a":1},"message":"done"}'

    failed = ApiResponse(error="nope", status_code=400)
    assert failed.body == b'{"success":false,"error":"nope"}'


def test_log_event_and_error(caplog):
    service = BaseService("pytest")
    with caplog.at_level("INFO"):
        service.log_event("pytest_log_event", {"foo": "bar"})
    assert "pytest_log_event" in caplog.text

    with caplog.at_level("ERROR"):
        try:
            raise ValueError("test error")
        except Exception as e:
            service.log_error(e, context="pytest")
    assert "test error" in caplog.text
    assert "ValueError" in caplog.text


def test_missing_secret_fails_fast_outside_development(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        Settings(environment="production")


def test_missing_secret_falls_back_in_development(monkeypatch, caplog):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with caplog.at_level("WARNING"):
        settings = Settings(environment="development")
    assert settings.jwt_secret_key == DEV_SECRET_KEY
    assert "JWT_SECRET_KEY is not set" in caplog.text


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_SECONDS", "60")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    settings = Settings(environment="production")
    assert settings.jwt_secret_key == "from-env"
    assert settings.access_token_expire_seconds == 60
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


@pytest.mark.asyncio
async def test_databases_are_isolated():
    first = Database("sqlite+aiosqlite://")
    second = Database("sqlite+aiosqlite://")
    await first.create_tables()
    await second.create_tables()

    from storefront.catalog.products import ProductCreate, ProductService

    await ProductService(first).create_product(
        ProductCreate(name="Only Here", price=1.0, style="casual", sizes=["M"])
    )
    assert len(await ProductService(first).list_products()) == 1
    assert await ProductService(second).list_products() == []

    await first.dispose()
    await second.dispose()


@pytest.mark.asyncio
async def test_create_app_applies_log_level(database):
    storefront_logger = logging.getLogger("storefront")
    previous = storefront_logger.level
    try:
        create_app(Settings(jwt_secret_key="x", environment="test", log_level="warning"), database)
        assert storefront_logger.level == logging.WARNING
        assert not logging.getLogger("storefront.catalog").isEnabledFor(logging.INFO)
    finally:
        storefront_logger.setLevel(previous)


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings(jwt_secret_key="x", environment="test").log_level == "DEBUG"
