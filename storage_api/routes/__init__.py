"""API routes package."""

from storage_api.routes.file_routes import router as file_router
from storage_api.routes.question_routes import router as question_router

__all__ = ["file_router", "question_router"]
