"""Help card endpoints."""

from fastapi import APIRouter, Query, status

from app.dependencies import CurrentUser, DatabaseSession, RequestBody
from app.schemas.cards import CardEnvelope, CardListResponse, CardResponse
from app.services.card_service import CardService

router = APIRouter(prefix="/cards", tags=["Cards"])


@router.post(
    "",
    response_model=CardEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create card",
)
async def create_card(
    body: RequestBody,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> CardEnvelope:
    """Create a help card owned by the authenticated user."""
    card = await CardService(db).create_card(current_user, body)
    return CardEnvelope(message="Card created successfully", card=CardResponse.model_validate(card))


@router.get("", response_model=CardListResponse, summary="List cards")
async def list_cards(
    db: DatabaseSession,
    blood_type: str | None = Query(None, alias="bloodType", description="Exact blood type"),
    status_filter: str | None = Query(None, alias="status", description="Exact status"),
    location: str | None = Query(None, description="Location substring"),
) -> CardListResponse:
    """List cards, newest first."""
    cards = await CardService(db).list_cards(
        blood_type=blood_type,
        status=status_filter,
        location=location,
    )
    return CardListResponse(
        message="Cards retrieved successfully",
        count=len(cards),
        cards=[CardResponse.model_validate(card) for card in cards],
    )


@router.get("/{card_id}", response_model=CardEnvelope, summary="Get card by ID")
async def get_card(card_id: str, db: DatabaseSession) -> CardEnvelope:
    """Get a specific card."""
    card = await CardService(db).get_card(card_id)
    return CardEnvelope(
        message="Card retrieved successfully",
        card=CardResponse.model_validate(card),
    )


@router.put("/{card_id}", response_model=CardEnvelope, summary="Update card")
async def update_card(
    card_id: str,
    body: RequestBody,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> CardEnvelope:
    """Partially update a card owned by the authenticated user."""
    card = await CardService(db).update_card(card_id, current_user, body)
    return CardEnvelope(message="Card updated successfully", card=CardResponse.model_validate(card))


@router.delete("/{card_id}", response_model=CardEnvelope, summary="Delete card")
async def delete_card(
    card_id: str,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> CardEnvelope:
    """Delete a card owned by the authenticated user."""
    card = await CardService(db).delete_card(card_id, current_user)
    return CardEnvelope(message="Card deleted successfully", card=CardResponse.model_validate(card))
