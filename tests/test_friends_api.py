"""
tests.test_friends_api

End-to-end behavior of the /v1/friends endpoints: visibility, ordering,
validation, ownership, and moderator notifications.
"""

from __future__ import annotations

import httpx
import pytest

from conftest import FakeNetwork


def _link(name: str = "Alice Blog", **overrides: str) -> dict[str, str]:
    body = {
        "name": name,
        "desc": "Notes on compilers",
        "avatar": "https://alice.test/avatar.png",
        "url": "https://alice.test/",
    }
    body.update(overrides)
    return body


async def _apply(client: httpx.AsyncClient, headers: dict[str, str], **overrides: str) -> int:
    r = await client.post("/v1/friends", json=_link(**overrides), headers=headers)
    assert r.status_code == 200, r.text
    return r.json()["id"]


@pytest.mark.asyncio
async def test_user_application_is_pending_and_notifies(
    client: httpx.AsyncClient,
    network: FakeNetwork,
    alice_headers: dict[str, str],
) -> None:
    r = await client.post("/v1/friends", json=_link(), headers=alice_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "OK"

    # Hidden from the public until an admin accepts it.
    r = await client.get("/v1/friends")
    assert r.json() == {"friend_list": [], "apply_list": None}

    r = await client.get("/v1/friends", headers=alice_headers)
    body = r.json()
    assert body["friend_list"] == []
    assert body["apply_list"]["name"] == "Alice Blog"
    assert body["apply_list"]["accepted"] == 0
    assert body["apply_list"]["uid"] == 2

    assert network.webhook_messages == [
        "https://blog.test/friends\n"
        "alice applied for a friend link: Alice Blog\n"
        "Notes on compilers\n"
        "https://alice.test/"
    ]


@pytest.mark.asyncio
async def test_second_application_is_rejected(
    client: httpx.AsyncClient, alice_headers: dict[str, str]
) -> None:
    await _apply(client, alice_headers)

    r = await client.post("/v1/friends", json=_link(name="Again"), headers=alice_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Already sent"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "n" * 21},
        {"desc": "d" * 101},
        {"avatar": "https://a.test/" + "a" * 90},
        {"url": "https://u.test/" + "u" * 90},
        {"name": ""},
        {"url": ""},
    ],
)
async def test_application_input_limits(
    client: httpx.AsyncClient, alice_headers: dict[str, str], overrides: dict[str, str]
) -> None:
    r = await client.post("/v1/friends", json=_link(**overrides), headers=alice_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid input"


@pytest.mark.asyncio
async def test_boundary_lengths_are_accepted(
    client: httpx.AsyncClient, alice_headers: dict[str, str]
) -> None:
    r = await client.post(
        "/v1/friends", json=_link(name="n" * 20, desc="d" * 100), headers=alice_headers
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_anonymous_application_is_unauthorized(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/friends", json=_link())
    assert r.status_code == 401
    assert r.json()["detail"] == "Unauthorized"


@pytest.mark.asyncio
async def test_anonymous_bad_input_is_rejected_before_auth(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/friends", json=_link(name="n" * 21))
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid input"


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/friends", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_admin_application_is_accepted_without_notification(
    client: httpx.AsyncClient,
    network: FakeNetwork,
    admin_headers: dict[str, str],
) -> None:
    await _apply(client, admin_headers, name="One")
    await _apply(client, admin_headers, name="Two")

    r = await client.get("/v1/friends")
    names = [f["name"] for f in r.json()["friend_list"]]
    assert names == ["One", "Two"]
    assert all(f["accepted"] == 1 for f in r.json()["friend_list"])
    assert network.webhook_messages == []


@pytest.mark.asyncio
async def test_apply_switch_blocks_users_but_not_admins(
    client: httpx.AsyncClient,
    admin_headers: dict[str, str],
    alice_headers: dict[str, str],
) -> None:
    r = await client.post(
        "/v1/config/client", json={"friend_apply_enable": False}, headers=admin_headers
    )
    assert r.status_code == 200

    r = await client.post("/v1/friends", json=_link(), headers=alice_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Friend Link Apply Disabled"

    friend_id = await _apply(client, admin_headers)

    r = await client.put(
        f"/v1/friends/{friend_id}",
        json={"name": "x", "desc": "y", "url": "https://z.test/"},
        headers=alice_headers,
    )
    assert r.status_code == 403
    assert r.json()["detail"] == "Friend Link Apply Disabled"


@pytest.mark.asyncio
async def test_listing_order_and_admin_view(
    client: httpx.AsyncClient,
    admin_headers: dict[str, str],
    alice_headers: dict[str, str],
) -> None:
    await _apply(client, admin_headers, name="A")
    b = await _apply(client, admin_headers, name="B")
    await _apply(client, admin_headers, name="C")
    await _apply(client, alice_headers, name="Pending")

    r = await client.put(
        f"/v1/friends/{b}",
        json={"name": "", "desc": "", "url": "", "sort_order": 10},
        headers=admin_headers,
    )
    assert r.status_code == 200

    r = await client.get("/v1/friends")
    assert [f["name"] for f in r.json()["friend_list"]] == ["B", "A", "C"]

    r = await client.get("/v1/friends", headers=admin_headers)
    assert [f["name"] for f in r.json()["friend_list"]] == ["B", "A", "C", "Pending"]


@pytest.mark.asyncio
async def test_owner_edit_resets_review_and_ignores_sort_order(
    client: httpx.AsyncClient,
    network: FakeNetwork,
    admin_headers: dict[str, str],
    alice_headers: dict[str, str],
) -> None:
    friend_id = await _apply(client, alice_headers)
    r = await client.put(
        f"/v1/friends/{friend_id}",
        json={"name": "", "desc": "", "url": "", "accepted": 1},
        headers=admin_headers,
    )
    assert r.status_code == 200

    r = await client.put(
        f"/v1/friends/{friend_id}",
        json={
            "name": "Alice Notes",
            "desc": "",
            "url": "https://notes.alice.test/",
            "avatar": "",
            "accepted": 1,
            "sort_order": 99,
        },
        headers=alice_headers,
    )
    assert r.status_code == 200

    r = await client.get("/v1/friends", headers=alice_headers)
    own = r.json()["apply_list"]
    assert own["name"] == "Alice Notes"
    assert own["url"] == "https://notes.alice.test/"
    assert own["desc"] == "Notes on compilers"
    assert own["avatar"] == "https://alice.test/avatar.png"
    assert own["accepted"] == 0
    assert own["sort_order"] == 0

    assert network.webhook_messages[-1] == (
        "https://blog.test/friends\n"
        "alice updated a friend link: Alice Notes\n"
        "Notes on compilers\n"
        "https://notes.alice.test/"
    )


@pytest.mark.asyncio
async def test_update_permissions(
    client: httpx.AsyncClient,
    alice_headers: dict[str, str],
    bob_headers: dict[str, str],
) -> None:
    friend_id = await _apply(client, alice_headers)
    edit = {"name": "Hijack", "desc": "", "url": ""}

    r = await client.put(f"/v1/friends/{friend_id}", json=edit)
    assert r.status_code == 401

    r = await client.put(f"/v1/friends/{friend_id}", json=edit, headers=bob_headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Permission denied"

    r = await client.put("/v1/friends/9999", json=edit, headers=bob_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "Not found"


@pytest.mark.asyncio
async def test_delete_permissions(
    client: httpx.AsyncClient,
    admin_headers: dict[str, str],
    alice_headers: dict[str, str],
    bob_headers: dict[str, str],
) -> None:
    alice_id = await _apply(client, alice_headers)
    bob_id = await _apply(client, bob_headers, name="Bob Blog")

    r = await client.delete(f"/v1/friends/{alice_id}")
    assert r.status_code == 401

    r = await client.delete(f"/v1/friends/{alice_id}", headers=bob_headers)
    assert r.status_code == 403

    r = await client.delete(f"/v1/friends/{alice_id}", headers=alice_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "OK"

    r = await client.delete(f"/v1/friends/{alice_id}", headers=alice_headers)
    assert r.status_code == 404

    r = await client.delete(f"/v1/friends/{bob_id}", headers=admin_headers)
    assert r.status_code == 200

    r = await client.get("/v1/friends", headers=admin_headers)
    assert r.json()["friend_list"] == []

    # A deleted application frees the user to apply again.
    await _apply(client, alice_headers)


@pytest.mark.asyncio
async def test_webhook_failure_does_not_fail_the_request(
    client: httpx.AsyncClient,
    network: FakeNetwork,
    alice_headers: dict[str, str],
) -> None:
    network.webhook_status = 500

    r = await client.post("/v1/friends", json=_link(), headers=alice_headers)
    assert r.status_code == 200
    assert len(network.webhook_messages) == 1

    r = await client.get("/v1/friends", headers=alice_headers)
    assert r.json()["apply_list"] is not None


@pytest.mark.asyncio
async def test_server_config_webhook_overrides_settings(
    client: httpx.AsyncClient,
    network: FakeNetwork,
    admin_headers: dict[str, str],
    alice_headers: dict[str, str],
) -> None:
    r = await client.post(
        "/v1/config/server",
        json={"webhook_url": "https://other-hooks.test/x"},
        headers=admin_headers,
    )
    assert r.status_code == 200

    await _apply(client, alice_headers)
    assert network.webhook_messages == []
    assert [str(r.url) for r in network.requests] == ["https://other-hooks.test/x"]
