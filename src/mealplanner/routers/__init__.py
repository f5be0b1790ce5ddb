"""API routers for the mealplanner application."""

from mealplanner.routers.grocery import router as grocery_router

__all__ = [
    "grocery_router",
]
