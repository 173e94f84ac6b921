"""Tests for signup, login and the bearer-token guard."""

from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.core.security import TokenService, TokenStatus
from app.database import create_tables
from app.main import create_app
from app.services.user_service import UserService


@pytest.mark.asyncio
async def test_signup(
    client: AsyncClient,
    signup_payload: dict,
    token_service: TokenService,
) -> None:
    """Test signing up returns a token bound to the normalized phone."""
    response = await client.post("/auth/signup", json=signup_payload)
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Signup successful"
    assert data["user"]["firstName"] == "Amina"
    assert data["user"]["lastName"] == "Haddad"
    assert data["user"]["phone"] == "555123456"
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]

    verification = token_service.verify(data["token"])
    assert verification.status is TokenStatus.VALID
    assert verification.claims.phone == "555123456"
    assert verification.claims.user_id == data["user"]["id"]


@pytest.mark.asyncio
async def test_signup_accepts_legacy_field_spellings(client: AsyncClient) -> None:
    """Test snake_case and lowercase keys are accepted."""
    response = await client.post(
        "/auth/signup",
        json={
            "first_name": "Omar",
            "lastname": "Benali",
            "phone_number": "555 222 333",
            "password": "secret123",
            "confirm_password": "secret123",
        },
    )
    assert response.status_code == 201
    assert response.json()["user"]["firstName"] == "Omar"


@pytest.mark.asyncio
async def test_signup_duplicate_phone_with_different_spacing(
    client: AsyncClient,
    signup_payload: dict,
) -> None:
    """Test phones differing only by whitespace collide."""
    first = await client.post("/auth/signup", json={**signup_payload, "phone": "555 123"})
    assert first.status_code == 201

    second = await client.post("/auth/signup", json={**signup_payload, "phone": "555123"})
    assert second.status_code == 409
    assert second.json()["message"] == "Phone number is already registered"


@pytest.mark.asyncio
async def test_signup_reports_all_missing_fields(client: AsyncClient) -> None:
    """Test every missing field is listed in one response."""
    response = await client.post("/auth/signup", json={"firstName": "Amina"})
    assert response.status_code == 400
    message = response.json()["message"]
    assert message.startswith("Missing required fields")
    for field in ["lastName", "phone", "password", "confirmPassword"]:
        assert field in message
    assert "firstName" not in message


@pytest.mark.asyncio
async def test_signup_empty_body(client: AsyncClient) -> None:
    """Test an empty body reports missing fields rather than a parse error."""
    response = await client.post("/auth/signup")
    assert response.status_code == 400
    assert response.json()["message"].startswith("Missing required fields")


@pytest.mark.asyncio
async def test_signup_rejects_non_object_body(client: AsyncClient) -> None:
    """Test a JSON array body is rejected."""
    response = await client.post("/auth/signup", json=["phone", "password"])
    assert response.status_code == 400
    assert response.json()["message"] == "Request body must be a JSON object"


@pytest.mark.asyncio
async def test_signup_password_mismatch(client: AsyncClient, signup_payload: dict) -> None:
    """Test confirmPassword must match password."""
    response = await client.post(
        "/auth/signup",
        json={**signup_payload, "confirmPassword": "different123"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Password and confirmPassword do not match"


@pytest.mark.asyncio
async def test_signup_short_password(client: AsyncClient, signup_payload: dict) -> None:
    """Test passwords shorter than six characters are rejected."""
    response = await client.post(
        "/auth/signup",
        json={**signup_payload, "password": "abc12", "confirmPassword": "abc12"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Password must be at least 6 characters"


@pytest.mark.asyncio
async def test_login(client: AsyncClient, signup_payload: dict) -> None:
    """Test logging in with a differently spaced phone."""
    await client.post("/auth/signup", json=signup_payload)

    response = await client.post(
        "/auth/login",
        json={"phone": "555123 456", "password": "secret123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"]["phone"] == "555123456"
    assert data["token"]


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, signup_payload: dict) -> None:
    """Test wrong passwords and unknown phones share one message."""
    await client.post("/auth/signup", json=signup_payload)

    wrong_password = await client.post(
        "/auth/login",
        json={"phone": "555123456", "password": "wrong-password"},
    )
    unknown_phone = await client.post(
        "/auth/login",
        json={"phone": "999999999", "password": "secret123"},
    )

    assert wrong_password.status_code == 401
    assert unknown_phone.status_code == 401
    assert wrong_password.json()["message"] == "Invalid phone or password"
    assert unknown_phone.json() == wrong_password.json()


@pytest.mark.asyncio
async def test_login_missing_fields(client: AsyncClient) -> None:
    """Test login requires both phone and password."""
    response = await client.post("/auth/login", json={"phone": "555123456"})
    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields: phone, password"


@pytest.mark.asyncio
async def test_logout(client: AsyncClient) -> None:
    """Test logout is a stateless acknowledgement."""
    response = await client.post("/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}


@pytest.mark.asyncio
async def test_protected_route_without_token(client: AsyncClient) -> None:
    """Test a missing bearer header is rejected."""
    response = await client.get("/profiles/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


@pytest.mark.asyncio
async def test_protected_route_with_invalid_token(client: AsyncClient) -> None:
    """Test a garbage bearer token is rejected."""
    response = await client.get(
        "/profiles/me",
        headers={"Authorization": "Bearer not-a-real-token"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_protected_route_with_expired_token(client: AsyncClient, user_a: dict) -> None:
    """Test an expired token is reported as expired."""
    expired = TokenService(secret_key="test-secret-key", expire_days=-1).issue(
        {"id": UUID(user_a["user"]["id"]), "phone": user_a["user"]["phone"]}
    )
    response = await client.get(
        "/profiles/me",
        headers={"Authorization": f"Bearer {expired}"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Token expired"


@pytest.mark.asyncio
async def test_token_for_deleted_user(app, client: AsyncClient, user_a: dict) -> None:
    """Test tokens stop working once their user is gone."""
    async with app.state.session_factory() as session:
        assert await UserService(session).delete_user(UUID(user_a["user"]["id"]))

    for _ in range(2):
        response = await client.get("/profiles/me", headers=user_a["headers"])
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"


@pytest_asyncio.fixture
async def unsigned_client(tmp_path, monkeypatch):
    """Client for an application started without a signing secret."""
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    settings = Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'unsigned.db'}",
        JWT_SECRET_KEY=None,
        METRICS_ENABLED=False,
        LOG_FORMAT="console",
        LOG_LEVEL="WARNING",
    )
    application = create_app(settings)
    await create_tables(application.state.engine)

    async with AsyncClient(
        transport=ASGITransport(app=application), base_url="http://test"
    ) as client:
        yield application, client

    await application.state.engine.dispose()


@pytest.mark.asyncio
async def test_signup_without_secret(unsigned_client, signup_payload: dict) -> None:
    """Test signup fails as a server error and leaves no account behind."""
    application, client = unsigned_client

    response = await client.post("/auth/signup", json=signup_payload)
    assert response.status_code == 500
    assert response.json()["message"] == "JWT secret is not configured"

    async with application.state.session_factory() as session:
        assert await UserService(session).get_user_by_phone("555123456") is None


@pytest.mark.asyncio
async def test_protected_route_without_secret(
    unsigned_client,
    token_service: TokenService,
) -> None:
    """Test token verification without a secret is a server error."""
    _, client = unsigned_client
    token = token_service.issue({"id": UUID(int=1), "phone": "555123456"})

    response = await client.get("/profiles/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 500
    assert response.json()["message"] == "Server configuration error"


@pytest.mark.asyncio
async def test_signup_phone_too_long(client: AsyncClient, signup_payload: dict) -> None:
    """Test phones that do not fit the account column are a bad request."""
    response = await client.post(
        "/auth/signup",
        json={**signup_payload, "phone": "+1 (555) 123-4567 ext. 1234 office"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "phone must be at most 32 characters"
