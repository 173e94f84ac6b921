"""API v1 router configuration."""

from fastapi import APIRouter

from app.api.v1.endpoints import auth, cards, health, products, profiles

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(cards.router)
api_router.include_router(profiles.router)
api_router.include_router(products.router)
