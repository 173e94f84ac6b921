"""Tests for help card endpoints."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

MISSING_ID = "00000000-0000-0000-0000-000000000000"


async def _create_card(client: AsyncClient, headers: dict, data: dict) -> dict:
    response = await client.post("/cards", json=data, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["card"]


@pytest.mark.asyncio
async def test_create_card(
    client: AsyncClient,
    user_a: dict,
    sample_card_data: dict,
) -> None:
    """Test creating a card."""
    response = await client.post("/cards", json=sample_card_data, headers=user_a["headers"])
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Card created successfully"
    card = data["card"]
    assert card["name"] == sample_card_data["name"]
    assert card["bloodType"] == "O-"
    assert card["status"] == "active"
    assert card["ownerId"] == user_a["user"]["id"]
    assert "id" in card
    assert "createdAt" in card


@pytest.mark.asyncio
async def test_create_card_requires_auth(client: AsyncClient, sample_card_data: dict) -> None:
    """Test creating a card without a token."""
    response = await client.post("/cards", json=sample_card_data)
    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


@pytest.mark.asyncio
async def test_create_card_missing_fields(client: AsyncClient, auth_headers: dict) -> None:
    """Test every missing card field is reported."""
    response = await client.post("/cards", json={"name": "Help"}, headers=auth_headers)
    assert response.status_code == 400
    assert (
        response.json()["message"]
        == "Missing required fields: location, bloodType, mobilePhone"
    )


@pytest.mark.asyncio
async def test_create_card_invalid_blood_type(
    client: AsyncClient,
    auth_headers: dict,
    sample_card_data: dict,
) -> None:
    """Test unknown blood types are rejected."""
    response = await client.post(
        "/cards",
        json={**sample_card_data, "bloodType": "z+"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid blood type")


@pytest.mark.asyncio
async def test_create_card_invalid_status(
    client: AsyncClient,
    auth_headers: dict,
    sample_card_data: dict,
) -> None:
    """Test unknown statuses are rejected."""
    response = await client.post(
        "/cards",
        json={**sample_card_data, "status": "archived"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid status")


@pytest.mark.asyncio
async def test_list_cards(
    client: AsyncClient,
    auth_headers: dict,
    sample_card_data: dict,
) -> None:
    """Test listing cards, newest first."""
    first = await _create_card(client, auth_headers, sample_card_data)
    second = await _create_card(client, auth_headers, {**sample_card_data, "name": "Second"})

    response = await client.get("/cards")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Cards retrieved successfully"
    assert data["count"] == 2
    assert [card["id"] for card in data["cards"]] == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_list_cards_with_filters(
    client: AsyncClient,
    auth_headers: dict,
    sample_card_data: dict,
) -> None:
    """Test filtering by blood type, status and location."""
    await _create_card(
        client,
        auth_headers,
        {**sample_card_data, "bloodType": "A+", "location": "Rabat Clinic"},
    )
    await _create_card(
        client,
        auth_headers,
        {**sample_card_data, "bloodType": "A+", "status": "completed"},
    )
    await _create_card(client, auth_headers, sample_card_data)

    response = await client.get("/cards", params={"bloodType": "a+", "status": "ACTIVE"})
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["cards"][0]["location"] == "Rabat Clinic"

    response = await client.get("/cards", params={"location": "casablanca"})
    data = response.json()
    assert data["count"] == 2
    assert all("Casablanca" in card["location"] for card in data["cards"])

    response = await client.get("/cards", params={"location": "%"})
    assert response.json()["count"] == 0


@pytest.mark.asyncio
async def test_get_card(client: AsyncClient, auth_headers: dict, sample_card_data: dict) -> None:
    """Test getting a specific card without authentication."""
    card = await _create_card(client, auth_headers, sample_card_data)

    response = await client.get(f"/cards/{card['id']}")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Card retrieved successfully"
    assert data["card"]["id"] == card["id"]


@pytest.mark.asyncio
async def test_get_card_bad_and_missing_ids(client: AsyncClient) -> None:
    """Test malformed IDs and absent cards are told apart."""
    response = await client.get("/cards/not-a-uuid")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid card ID format"

    response = await client.get(f"/cards/{MISSING_ID}")
    assert response.status_code == 404
    assert response.json()["message"] == "Card not found"


@pytest.mark.asyncio
async def test_update_card(client: AsyncClient, auth_headers: dict, sample_card_data: dict) -> None:
    """Test a partial update only touches provided fields."""
    card = await _create_card(client, auth_headers, sample_card_data)

    response = await client.put(
        f"/cards/{card['id']}",
        json={"status": "Completed", "blood_type": "ab+"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Card updated successfully"
    updated = data["card"]
    assert updated["status"] == "completed"
    assert updated["bloodType"] == "AB+"
    assert updated["name"] == card["name"]
    assert updated["location"] == card["location"]
    assert updated["mobilePhone"] == card["mobilePhone"]


@pytest.mark.asyncio
async def test_update_card_rejects_blank_required_field(
    client: AsyncClient,
    auth_headers: dict,
    sample_card_data: dict,
) -> None:
    """Test required fields cannot be blanked."""
    card = await _create_card(client, auth_headers, sample_card_data)

    response = await client.put(
        f"/cards/{card['id']}",
        json={"name": "   "},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "name cannot be empty"


@pytest.mark.asyncio
async def test_update_card_not_owner(
    client: AsyncClient,
    user_a: dict,
    user_b: dict,
    sample_card_data: dict,
) -> None:
    """Test only the owner may change a card."""
    card = await _create_card(client, user_a["headers"], sample_card_data)

    response = await client.put(
        f"/cards/{card['id']}",
        json={"status": "inactive"},
        headers=user_b["headers"],
    )
    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. You can only update your own cards"

    response = await client.delete(f"/cards/{card['id']}", headers=user_b["headers"])
    assert response.status_code == 403

    response = await client.get(f"/cards/{card['id']}")
    assert response.json()["card"]["status"] == "active"


@pytest.mark.asyncio
async def test_update_missing_card(client: AsyncClient, auth_headers: dict) -> None:
    """Test updating an absent card."""
    response = await client.put(
        f"/cards/{MISSING_ID}",
        json={"status": "inactive"},
        headers=auth_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_card(client: AsyncClient, auth_headers: dict, sample_card_data: dict) -> None:
    """Test deleting a card returns it and removes it."""
    card = await _create_card(client, auth_headers, sample_card_data)

    response = await client.delete(f"/cards/{card['id']}", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Card deleted successfully"
    assert data["card"]["id"] == card["id"]

    response = await client.get(f"/cards/{card['id']}")
    assert response.status_code == 404

    response = await client.delete(f"/cards/{card['id']}", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_card_mobile_phone_too_long(
    client: AsyncClient,
    auth_headers: dict,
    sample_card_data: dict,
) -> None:
    """Test long mobile phones are rejected on create and update."""
    long_phone = "+1 (555) 123-4567 ext. 1234 office"

    response = await client.post(
        "/cards",
        json={**sample_card_data, "mobilePhone": long_phone},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "mobilePhone must be at most 32 characters"

    card = await _create_card(client, auth_headers, sample_card_data)
    response = await client.put(
        f"/cards/{card['id']}",
        json={"mobile_phone": long_phone},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["message"] == "mobilePhone must be at most 32 characters"


@pytest.mark.asyncio
async def test_card_timestamps_are_utc(
    client: AsyncClient,
    auth_headers: dict,
    sample_card_data: dict,
) -> None:
    """Test timestamps carry an explicit UTC offset."""
    card = await _create_card(client, auth_headers, sample_card_data)

    response = await client.get(f"/cards/{card['id']}")
    for key in ["createdAt", "updatedAt"]:
        value = datetime.fromisoformat(response.json()["card"][key])
        assert value.utcoffset() == timedelta(0)
