"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripplanner.api.routes import (
    auth, users, state, trips, members, sharing, activities, accommodations,
    attractions, shopping, documents, expenses, places, flights
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(state.router)
api_router.include_router(trips.router)
api_router.include_router(members.router)
api_router.include_router(sharing.router)
api_router.include_router(activities.router)
api_router.include_router(accommodations.router)
api_router.include_router(attractions.router)
api_router.include_router(shopping.router)
api_router.include_router(documents.router)
api_router.include_router(expenses.router)
api_router.include_router(places.router)
api_router.include_router(flights.router)


@api_router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
