"""Profile endpoints."""

from fastapi import APIRouter, Query, status

from app.dependencies import CurrentUser, DatabaseSession, RequestBody
from app.schemas.profiles import ProfileEnvelope, ProfileListResponse, ProfileResponse
from app.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.post(
    "",
    response_model=ProfileEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create my profile",
)
async def create_profile(
    body: RequestBody,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> ProfileEnvelope:
    """
    Create the authenticated user's profile.

    Each user may own one profile and each email may be registered once.
    """
    profile = await ProfileService(db).create_profile(current_user, body)
    return ProfileEnvelope(
        message="Profile created successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.get("", response_model=ProfileListResponse, summary="List profiles")
async def list_profiles(
    db: DatabaseSession,
    blood_type: str | None = Query(None, alias="bloodType"),
    location: str | None = Query(None),
    is_available: str | None = Query(None, alias="isAvailable"),
    gender: str | None = Query(None),
) -> ProfileListResponse:
    """List profiles, newest first."""
    profiles = await ProfileService(db).list_profiles(
        blood_type=blood_type,
        location=location,
        is_available=is_available,
        gender=gender,
    )
    return ProfileListResponse(
        message="Profiles retrieved successfully",
        count=len(profiles),
        profiles=[ProfileResponse.model_validate(profile) for profile in profiles],
    )


@router.get("/me", response_model=ProfileEnvelope, summary="Get my profile")
async def get_my_profile(current_user: CurrentUser, db: DatabaseSession) -> ProfileEnvelope:
    """Get the authenticated user's profile."""
    profile = await ProfileService(db).get_profile_for_user(current_user.id)
    return ProfileEnvelope(
        message="Profile retrieved successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.get("/{profile_id}", response_model=ProfileEnvelope, summary="Get profile by ID")
async def get_profile(profile_id: str, db: DatabaseSession) -> ProfileEnvelope:
    """Get a specific profile."""
    profile = await ProfileService(db).get_profile(profile_id)
    return ProfileEnvelope(
        message="Profile retrieved successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.put("/{profile_id}", response_model=ProfileEnvelope, summary="Update my profile")
async def update_profile(
    profile_id: str,
    body: RequestBody,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> ProfileEnvelope:
    """Partially update the authenticated user's profile."""
    profile = await ProfileService(db).update_profile(profile_id, current_user, body)
    return ProfileEnvelope(
        message="Profile updated successfully",
        profile=ProfileResponse.model_validate(profile),
    )


@router.delete("/{profile_id}", response_model=ProfileEnvelope, summary="Delete my profile")
async def delete_profile(
    profile_id: str,
    current_user: CurrentUser,
    db: DatabaseSession,
) -> ProfileEnvelope:
    """Delete the authenticated user's profile."""
    profile = await ProfileService(db).delete_profile(profile_id, current_user)
    return ProfileEnvelope(
        message="Profile deleted successfully",
        profile=ProfileResponse.model_validate(profile),
    )
