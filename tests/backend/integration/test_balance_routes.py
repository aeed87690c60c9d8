import json
import uuid

import pytest

from gateway.models.user import Role, User


pytestmark = pytest.mark.asyncio

# Valid, out of range, empty, wrong type, not JSON at all, no body
ANY_BODIES = [
    json.dumps({"money": 5000}).encode(),
    json.dumps({"money": -1}).encode(),
    b"{}",
    json.dumps({"money": "lots"}).encode(),
    b"{not json",
    b"",
]


async def test_non_admin_cannot_set_balance_whatever_the_payload(client, create_user, auth_header_factory):
    for role in (Role.REGULAR, Role.VIP):
        user, password = await create_user(role=role)
        headers = await auth_header_factory(user.email, password)

        for payload in ANY_BODIES:
            resp = await client.put("/balance", headers=headers, content=payload)
            assert resp.status_code == 403, payload
            assert resp.json()["detail"]["code"] == "FORBIDDEN_ADMIN_ONLY"

        await user.refresh_from_db()
        assert user.money == 1000


async def test_admin_sets_own_balance(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.email, password)

    resp = await client.put("/balance", headers=headers, json={"money": 4242})
    assert resp.status_code == 200
    updated = resp.json()["updatedUser"]
    assert updated["id"] == str(admin.id)
    assert updated["money"] == 4242
    assert "password" not in updated
    assert "password_hash" not in updated

    balance = await client.get("/balance", headers=headers)
    assert balance.json() == {"balance": 4242}


async def test_admin_sets_another_users_balance(client, create_admin, create_user, auth_header_factory):
    admin, password = await create_admin()
    member, _ = await create_user()
    headers = await auth_header_factory(admin.email, password)

    resp = await client.put("/balance", headers=headers, json={"money": 0, "userId": str(member.id)})
    assert resp.status_code == 200
    assert resp.json()["updatedUser"]["id"] == str(member.id)

    await member.refresh_from_db()
    assert member.money == 0
    await admin.refresh_from_db()
    assert admin.money == 1000


async def test_admin_unknown_target_is_not_found(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.email, password)

    resp = await client.put("/balance", headers=headers, json={"money": 10, "userId": str(uuid.uuid4())})
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "USER_NOT_FOUND"


async def test_admin_cannot_set_negative_balance(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.email, password)

    resp = await client.put("/balance", headers=headers, json={"money": -10})
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "INVALID_INPUT"
    assert (await User.get(id=admin.id)).money == 1000


async def test_set_balance_requires_token(client):
    resp = await client.put("/balance", json={"money": 10})
    assert resp.status_code == 403
    assert resp.json()["detail"]["code"] == "AUTH_REQUIRED"


async def test_set_balance_without_token_is_forbidden_for_any_body(client):
    for payload in ANY_BODIES:
        resp = await client.put("/balance", content=payload)
        assert resp.status_code == 403, payload
        assert resp.json()["detail"]["code"] == "AUTH_REQUIRED"


async def test_admin_malformed_body_is_invalid_input(client, create_admin, auth_header_factory):
    admin, password = await create_admin()
    headers = await auth_header_factory(admin.email, password)

    resp = await client.put("/balance", headers=headers, content=b"{not json")
    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "INVALID_INPUT"

    missing = await client.put("/balance", headers=headers, json={"userId": str(admin.id)})
    assert missing.status_code == 400
    assert {e["field"] for e in missing.json()["detail"]["errors"]} == {"money"}
    assert (await User.get(id=admin.id)).money == 1000
