"""
Wiring for the client-side invite handoff, from ApplicationConfig.
"""

from datetime import timedelta
from typing import NamedTuple

import httpx

from .api_client import InviteApiClient
from .invite_landing import InviteLanding
from .invite_resume import InviteResumeCoordinator
from .key_value_store import KeyValueStore
from .pending_invite_cache import PendingInviteCache


class InviteHandoff(NamedTuple):
    api: InviteApiClient
    cache: PendingInviteCache
    landing: InviteLanding
    coordinator: InviteResumeCoordinator


def build_invite_handoff(
    http: httpx.AsyncClient, store: KeyValueStore, ApplicationConfig
) -> InviteHandoff:
    api = InviteApiClient(http, prefix=ApplicationConfig.API_PREFIX)
    cache = PendingInviteCache(
        store,
        key=ApplicationConfig.PENDING_INVITE_KEY,
        max_age=timedelta(minutes=ApplicationConfig.PENDING_INVITE_MAX_AGE_MINUTES),
    )
    return InviteHandoff(
        api=api,
        cache=cache,
        landing=InviteLanding(api, cache),
        coordinator=InviteResumeCoordinator(
            cache, api, display_seconds=ApplicationConfig.INVITE_RESULT_DISPLAY_SECONDS
        ),
    )
