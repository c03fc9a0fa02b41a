"""
Shared fixtures: every test gets its own in-memory database and app.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from storefront.base_service import Database
from storefront.config import Settings
from storefront.main import create_app
from storefront.auth.jwt import TokenService
from storefront.auth.users import UserService
from storefront.catalog.products import ProductService

TEST_SECRET = "test-secret-key"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPass123"
CUSTOMER_EMAIL = "customer@example.com"
CUSTOMER_PASSWORD = "CustomerPass123"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt_secret_key=TEST_SECRET,
        environment="test",
    )


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.database_url)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def token_service(settings):
    return TokenService(settings.jwt_secret_key, expire_seconds=settings.access_token_expire_seconds)


@pytest.fixture
def user_service(database, token_service):
    return UserService(database, token_service)


@pytest.fixture
def product_service(database):
    return ProductService(database)


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_token(user_service):
    _, token = await user_service.register_user(ADMIN_EMAIL, ADMIN_PASSWORD, is_admin=True)
    return token


@pytest_asyncio.fixture
async def customer_token(user_service):
    _, token = await user_service.register_user(CUSTOMER_EMAIL, CUSTOMER_PASSWORD)
    return token


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
