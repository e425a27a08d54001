"""
Pending Invite Cache

Remembers an unauthenticated visitor's invitation across the login redirect.
Entries go stale after one hour regardless of the invitation's own expiry,
so a forgotten handoff on a shared device is not resumed later.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.app.services.clock import Clock, SystemClock

from .key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_PENDING_INVITE_KEY = "legalx_pending_invite"
DEFAULT_MAX_AGE = timedelta(hours=1)


class PendingInvite(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    invite_id: str = Field(alias="inviteId")
    token: str
    timestamp: datetime


class PendingInviteCache:
    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        key: str = DEFAULT_PENDING_INVITE_KEY,
        max_age: timedelta = DEFAULT_MAX_AGE,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.key = key
        self.max_age = max_age

    def save(self, invite_id: str, token: str) -> PendingInvite:
        """Overwrites any previous entry"""
        pending = PendingInvite(invite_id=invite_id, token=token, timestamp=self.clock.now())
        self.store.set(self.key, pending.model_dump_json(by_alias=True))
        logger.info(f"Pending invite {invite_id} saved until sign-in")
        return pending

    def get(self) -> Optional[PendingInvite]:
        """The stored invite, or None when absent, unreadable or stale"""
        raw = self.store.get(self.key)
        if raw is None:
            return None

        try:
            pending = PendingInvite.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable pending invite")
            self.clear()
            return None

        timestamp = pending.timestamp
        if timestamp.tzinfo is not None:
            timestamp = timestamp.astimezone(UTC).replace(tzinfo=None)

        if self.clock.now() - timestamp > self.max_age:
            logger.info(f"Pending invite {pending.invite_id} is stale, discarding")
            self.clear()
            return None

        return pending

    def clear(self) -> None:
        self.store.delete(self.key)

    def discard(self, invite_id: str) -> None:
        """Clear the entry only if it belongs to invite_id"""
        raw = self.store.get(self.key)
        if raw is None:
            return
        try:
            pending = PendingInvite.model_validate_json(raw)
        except ValidationError:
            self.clear()
            return
        if pending.invite_id == invite_id:
            self.clear()
