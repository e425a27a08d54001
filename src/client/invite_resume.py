"""
Invite Resume Coordinator

Reacts to the auth state becoming signed-in: redeems the invitation left in
the PendingInviteCache before the login redirect, exposes the outcome for a
short display window, and always clears the cache so later state changes
never resubmit it.
"""

import asyncio
import logging
from typing import Optional

from src.app.services.invite_acceptor import AcceptOutcome, InviteAcceptor
from src.domain.identity import Identity

from .pending_invite_cache import PendingInviteCache

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_SECONDS = 5.0


class InviteResumeCoordinator:
    def __init__(
        self,
        cache: PendingInviteCache,
        acceptor: InviteAcceptor,
        display_seconds: float = DEFAULT_DISPLAY_SECONDS,
    ):
        self.cache = cache
        self.acceptor = acceptor
        self.display_seconds = display_seconds
        self.processing = False
        self.result: Optional[AcceptOutcome] = None
        self._clear_handle: Optional[asyncio.TimerHandle] = None

    async def on_auth_state_changed(
        self, caller: Optional[Identity]
    ) -> Optional[AcceptOutcome]:
        """Auth state callback; None when there was nothing to resume"""
        if caller is None or self.processing:
            return None

        pending = self.cache.get()
        if pending is None:
            return None

        logger.info(f"Resuming pending invite {pending.invite_id}")
        self.processing = True
        try:
            outcome = await self.acceptor.accept(pending.invite_id, pending.token, caller)
        finally:
            self.cache.clear()
            self.processing = False

        self._show(outcome)
        return outcome

    def _show(self, outcome: AcceptOutcome) -> None:
        self.clear_result()
        self.result = outcome
        loop = asyncio.get_running_loop()
        self._clear_handle = loop.call_later(self.display_seconds, self.clear_result)

    def clear_result(self) -> None:
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None
        self.result = None
