from fastapi import APIRouter

from api.v1.routes import (
    health,
)
from packages.auth.routes import auth
from packages.documents.routes import documents
from packages.sharing.routes import sharing
from packages.store.routes import store

api_router = APIRouter()

# Health check (no auth required)
api_router.include_router(health.router, prefix="/health", tags=["health"])

# Login is public; logout and /me resolve the session themselves
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Protected routes (require a session with the Document permission)
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(sharing.router, prefix="/sharing", tags=["sharing"])

# Store persistence (any logged-in user)
api_router.include_router(store.router, prefix="/store", tags=["store"])
