"""API routers."""
from bible_study.routers.api_health_router import router as api_health_router
from bible_study.routers.health_router import router as health_router
from bible_study.routers.plans_router import router as plans_router
from bible_study.routers.notes_router import router as notes_router
from bible_study.routers.highlights_router import router as highlights_router
from bible_study.routers.references_router import router as references_router

__all__ = [
    "api_health_router",
    "health_router",
    "plans_router",
    "notes_router",
    "highlights_router",
    "references_router",
]
