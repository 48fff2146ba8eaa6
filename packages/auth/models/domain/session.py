from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.documents.services.entry_batch import DocumentEntryBatch
from packages.store.app_state import AppState


@dataclass
class Session:
    """A logged-in user and the local store that lives as long as the login."""

    token: str
    user: AuthenticatedUser
    state: AppState = field(default_factory=AppState)
    # Document form being filled in, created on first use
    draft: Optional[DocumentEntryBatch] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
