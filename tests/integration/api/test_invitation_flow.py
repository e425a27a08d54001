from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.base import utc_now
from src.domain.entities import Invitation, Membership, UserTeamRef


async def load_invitation(session_factory, invite_id):
    async with session_factory() as session:
        result = await session.execute(select(Invitation).where(Invitation.id == invite_id))
        return result.scalar_one()


async def load_refs(session_factory, uid):
    async with session_factory() as session:
        result = await session.execute(select(UserTeamRef).where(UserTeamRef.uid == uid))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_invite_and_accept_round_trip(
    client: AsyncClient, session_factory, bob_headers, team_id, invite
):
    """Invitation link is redeemed once and creates membership and team ref"""
    # Token is never stored
    stored = await load_invitation(session_factory, invite["invite_id"])
    assert stored.token_hash != invite["token"]
    assert len(stored.token_hash) == 64

    response = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=bob_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["team_id"] == team_id

    stored = await load_invitation(session_factory, invite["invite_id"])
    assert stored.status.value == "accepted"
    assert stored.accepted_by == "bob-uid"
    assert stored.accepted_at is not None

    refs = await load_refs(session_factory, "bob-uid")
    assert [(ref.team_id, ref.role.value) for ref in refs] == [(team_id, "member")]

    # Single use
    second = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=bob_headers,
    )
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "INVALID_STATE"

    async with session_factory() as session:
        result = await session.execute(
            select(Membership).where(Membership.uid == "bob-uid")
        )
        assert len(result.scalars().all()) == 1


@pytest.mark.asyncio
async def test_accept_with_differently_cased_email(
    client: AsyncClient, headers_for, invite
):
    response = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=headers_for("bob-uid", "Bob@Example.COM"),
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_accept_requires_authentication(client: AsyncClient, invite):
    response = await client.post(
        f"/invitations/{invite['invite_id']}/accept", json={"token": invite["token"]}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_overdue_invitation_expires_on_accept(
    client: AsyncClient, session_factory, bob_headers, invite
):
    # Arrange
    async with session_factory() as session:
        stored = await session.get(Invitation, invite["invite_id"])
        stored.expires_at = utc_now() - timedelta(seconds=1)
        session.add(stored)
        await session.commit()

    # Act
    response = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=bob_headers,
    )

    # Assert
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "EXPIRED"
    stored = await load_invitation(session_factory, invite["invite_id"])
    assert stored.status.value == "expired"
    assert await load_refs(session_factory, "bob-uid") == []


@pytest.mark.asyncio
async def test_tampered_token_leaves_invitation_pending(
    client: AsyncClient, session_factory, bob_headers, invite
):
    tampered = invite["token"][:-1] + ("0" if invite["token"][-1] != "0" else "1")

    response = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": tampered},
        headers=bob_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"
    stored = await load_invitation(session_factory, invite["invite_id"])
    assert stored.status.value == "pending"


@pytest.mark.asyncio
async def test_wrong_account_gets_email_mismatch(
    client: AsyncClient, session_factory, headers_for, invite
):
    response = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=headers_for("eve-uid", "eve@example.com"),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "EMAIL_MISMATCH"
    stored = await load_invitation(session_factory, invite["invite_id"])
    assert stored.status.value == "pending"


@pytest.mark.asyncio
async def test_duplicate_pending_invitation_conflicts(
    client: AsyncClient, owner_headers, team_id, invite
):
    response = await client.post(
        f"/teams/{team_id}/invitations",
        json={"email": " BOB@example.com", "role": "admin"},
        headers=owner_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_malformed_email_is_rejected(client: AsyncClient, owner_headers, team_id):
    response = await client.post(
        f"/teams/{team_id}/invitations",
        json={"email": "not-an-email"},
        headers=owner_headers,
    )

    assert response.status_code == 422
    listed = await client.get(f"/teams/{team_id}/invitations", headers=owner_headers)
    assert listed.json() == []


@pytest.mark.asyncio
async def test_regenerate_invalidates_previous_link(
    client: AsyncClient, owner_headers, bob_headers, invite
):
    # Act
    response = await client.post(
        f"/invitations/{invite['invite_id']}/regenerate", headers=owner_headers
    )
    assert response.status_code == 200
    fresh = response.json()
    assert fresh["invite_id"] == invite["invite_id"]
    assert fresh["token"] != invite["token"]

    # Assert
    old = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=bob_headers,
    )
    assert old.status_code == 400

    new = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": fresh["token"]},
        headers=bob_headers,
    )
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_cancelled_invitation_cannot_be_accepted(
    client: AsyncClient, owner_headers, bob_headers, invite
):
    response = await client.post(
        f"/invitations/{invite['invite_id']}/cancel", headers=owner_headers
    )
    assert response.status_code == 200
    assert response.json() == {"status": "cancelled"}

    accept = await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=bob_headers,
    )
    assert accept.status_code == 409
    assert accept.json()["error"]["message"] == "This invitation has been cancelled"

    again = await client.post(
        f"/invitations/{invite['invite_id']}/cancel", headers=owner_headers
    )
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_public_metadata_and_validation(client: AsyncClient, invite):
    preview = await client.get(f"/invitations/{invite['invite_id']}")
    assert preview.status_code == 200
    body = preview.json()
    assert body["email"] == "bob@example.com"
    assert body["status"] == "pending"
    assert body["metadata"] == {"team_name": "Acme", "inviter_name": "Olivia Owner"}
    assert "token_hash" not in body
    assert invite["token"] not in preview.text

    valid = await client.post(
        f"/invitations/{invite['invite_id']}/validate", json={"token": invite["token"]}
    )
    assert valid.status_code == 200
    assert valid.json()["valid"] is True

    invalid = await client.post(
        f"/invitations/{invite['invite_id']}/validate", json={"token": "x"}
    )
    assert invalid.json() == {
        "valid": False,
        "reason": "Invalid invitation token",
        "invitation": None,
    }

    missing = await client.get("/invitations/does-not-exist")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_team_invitation_listing(
    client: AsyncClient, owner_headers, bob_headers, team_id, invite
):
    # Arrange: one accepted, one cancelled, one pending
    await client.post(
        f"/invitations/{invite['invite_id']}/accept",
        json={"token": invite["token"]},
        headers=bob_headers,
    )
    cancelled = await client.post(
        f"/teams/{team_id}/invitations",
        json={"email": "carol@example.com"},
        headers=owner_headers,
    )
    await client.post(
        f"/invitations/{cancelled.json()['invite_id']}/cancel", headers=owner_headers
    )
    pending = await client.post(
        f"/teams/{team_id}/invitations",
        json={"email": "dave@example.com", "role": "admin"},
        headers=owner_headers,
    )

    # Act
    response = await client.get(f"/teams/{team_id}/invitations", headers=bob_headers)

    # Assert
    assert response.status_code == 200
    listed = {item["id"]: item["status"] for item in response.json()}
    assert listed == {
        invite["invite_id"]: "accepted",
        pending.json()["invite_id"]: "pending",
    }
