import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Predictable environment before the app module builds its default instance
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("METRICS_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi import FastAPI  # noqa: E402

from app.config import Settings  # noqa: E402
from app.core.security import TokenService  # noqa: E402
from app.database import create_tables  # noqa: E402
from app.main import create_app  # noqa: E402

TEST_SECRET = "test-secret-key"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite database."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET_KEY=TEST_SECRET,
        METRICS_ENABLED=False,
        LOG_FORMAT="console",
        LOG_LEVEL="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """Application with its tables created."""
    application = create_app(settings)
    await create_tables(application.state.engine)

    yield application

    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def token_service() -> TokenService:
    """Token service sharing the test signing secret."""
    return TokenService(secret_key=TEST_SECRET)


@pytest.fixture
def signup_payload() -> dict:
    """Valid signup body."""
    return {
        "firstName": "Amina",
        "lastName": "Haddad",
        "phone": "555 123 456",
        "password": "secret123",
        "confirmPassword": "secret123",
    }


async def _signup(client: AsyncClient, **overrides) -> dict:
    payload = {
        "firstName": "Test",
        "lastName": "User",
        "phone": "555000111",
        "password": "secret123",
        "confirmPassword": "secret123",
    }
    payload.update(overrides)
    response = await client.post("/auth/signup", json=payload)
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "user": data["user"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest_asyncio.fixture
async def user_a(client: AsyncClient) -> dict:
    """First registered account with its auth headers."""
    return await _signup(client, firstName="Alice", phone="555 000 001")


@pytest_asyncio.fixture
async def user_b(client: AsyncClient) -> dict:
    """Second registered account with its auth headers."""
    return await _signup(client, firstName="Bob", phone="555 000 002")


@pytest.fixture
def auth_headers(user_a: dict) -> dict:
    """Create authentication headers for testing protected endpoints."""
    return user_a["headers"]


@pytest.fixture
def sample_card_data() -> dict:
    """Sample card data for testing."""
    return {
        "name": "Urgent O- needed",
        "location": "Casablanca General Hospital",
        "bloodType": "o-",
        "mobilePhone": "+212 600 000 000",
        "description": "Surgery scheduled tomorrow morning",
    }


@pytest.fixture
def sample_profile_data() -> dict:
    """Sample profile data for testing."""
    return {
        "firstName": "Alice",
        "lastName": "Martin",
        "email": "  Alice.Martin@Example.com ",
        "mobilePhone": "+33 6 00 00 00 01",
        "location": "Lyon",
        "bloodType": "o-",
        "dateOfBirth": "1990-05-17",
        "gender": "Female",
        "emergencyContact": {
            "name": "Paul Martin",
            "phone": "+33 6 00 00 00 02",
            "relationship": "brother",
        },
        "medicalHistory": "None",
    }


@pytest.fixture
def sample_product_data() -> dict:
    """Sample product data for testing."""
    return {
        "name": "Donor T-shirt",
        "price": 12.5,
        "description": "Cotton t-shirt for blood drive volunteers",
    }
