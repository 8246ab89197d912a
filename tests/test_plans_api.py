"""
HTTP flow for /api/plans: create from scope (content provider mocked), toggle, list, delete, daily focus.
"""
import uuid
from unittest.mock import AsyncMock, patch

import pytest

from bible_study.errors import ContentProviderError
from bible_study.services.plan_generator import BookCatalogEntry

OWNER_HEADERS = {"X-User-ID": "reader-1"}
OTHER_HEADERS = {"X-User-ID": "reader-2"}

GOSPELS_CATALOG = {
    "MAT": BookCatalogEntry(1, 28, "Matthew"),
    "MRK": BookCatalogEntry(1, 16, "Mark"),
    "LUK": BookCatalogEntry(1, 24, "Luke"),
    "JHN": BookCatalogEntry(1, 21, "John"),
}


def _explicit_items(n: int) -> list:
    return [
        {"translation_id": "BSB", "book_id": "JHN", "chapter_number": c, "label": f"John {c}"}
        for c in range(1, n + 1)
    ]


@pytest.mark.asyncio
async def test_requires_owner_header(client) -> None:
    resp = await client.get("/api/plans")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_scopes_listing(client) -> None:
    resp = await client.get("/api/plans/scopes")
    assert resp.status_code == 200
    scopes = {s["id"]: s for s in resp.json()}
    assert scopes["gospels"]["book_ids"] == ["MAT", "MRK", "LUK", "JHN"]
    assert len(scopes["new-testament"]["book_ids"]) == 27


@pytest.mark.asyncio
async def test_preview_does_not_persist(client) -> None:
    with patch(
        "bible_study.routers.plans_router.fetch_book_catalog",
        new=AsyncMock(return_value=GOSPELS_CATALOG),
    ) as mock_fetch:
        resp = await client.post("/api/plans/preview", json={"scope_id": "gospels", "readings_per_day": 2})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["total_items"] == 89
    assert data["estimated_days"] == 45
    assert data["translation_id"] == "BSB"
    assert data["items"][0]["label"] == "Matthew 1"
    mock_fetch.assert_awaited_once_with("BSB")

    resp = await client.get("/api/plans", headers=OWNER_HEADERS)
    assert resp.json()["plans"] == []


@pytest.mark.asyncio
async def test_create_from_scope_toggle_and_list(client) -> None:
    with patch(
        "bible_study.routers.plans_router.fetch_book_catalog",
        new=AsyncMock(return_value=GOSPELS_CATALOG),
    ):
        resp = await client.post(
            "/api/plans",
            json={"title": "Gospels in 45 days", "scope_id": "gospels", "readings_per_day": 2},
            headers=OWNER_HEADERS,
        )
    assert resp.status_code == 201, resp.text
    plan = resp.json()
    assert plan["total_items"] == 89
    assert plan["progress"] == 0
    assert plan["next_reading"] == "Matthew 1"
    assert plan["estimated_days"] == 45
    assert plan["items"][0]["order_index"] == 0

    first_id = plan["items"][0]["id"]
    resp = await client.put(
        f"/api/plans/{plan['id']}/items/{first_id}",
        json={"completed": True},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["plan"] == {
        "id": plan["id"],
        "progress": 1,
        "next_reading": "Matthew 2",
        "total_items": 89,
        "completed_items": 1,
    }
    assert body["item"]["id"] == first_id
    assert body["item"]["completed_at"] is not None

    resp = await client.get("/api/plans", headers=OWNER_HEADERS)
    listed = resp.json()["plans"]
    assert len(listed) == 1
    assert listed[0]["completed_items"] == 1
    assert listed[0]["items"][0]["completed_at"] is not None

    resp = await client.get("/api/plans", params={"include_items": "false"}, headers=OWNER_HEADERS)
    assert resp.json()["plans"][0]["items"] == []


@pytest.mark.asyncio
async def test_create_with_explicit_items_and_without(client) -> None:
    resp = await client.post(
        "/api/plans",
        json={"title": "John", "items": _explicit_items(3), "progress": 80},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 201
    assert resp.json()["progress"] == 0
    assert resp.json()["next_reading"] == "John 1"

    resp = await client.post(
        "/api/plans",
        json={"title": "Someday", "next_reading": "Psalm 1", "progress": 30},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 201
    data = resp.json()
    assert (data["progress"], data["next_reading"], data["total_items"], data["estimated_days"]) == (
        30,
        "Psalm 1",
        0,
        0,
    )


@pytest.mark.asyncio
async def test_create_rejects_blank_title_and_unknown_scope(client) -> None:
    resp = await client.post("/api/plans", json={"title": "  ", "items": _explicit_items(1)}, headers=OWNER_HEADERS)
    assert resp.status_code == 400
    assert resp.json()["code"] == "title_required"

    resp = await client.post(
        "/api/plans",
        json={"title": "Torah", "scope_id": "torah"},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Unknown plan scope", "code": "unknown_scope"}


@pytest.mark.asyncio
async def test_content_provider_failure_is_502(client) -> None:
    with patch(
        "bible_study.routers.plans_router.fetch_book_catalog",
        new=AsyncMock(side_effect=ContentProviderError("down", code="content_provider_unavailable")),
    ):
        resp = await client.post(
            "/api/plans",
            json={"title": "NT", "scope_id": "new-testament"},
            headers=OWNER_HEADERS,
        )
    assert resp.status_code == 502
    assert resp.json()["code"] == "content_provider_unavailable"


@pytest.mark.asyncio
async def test_toggle_not_found_cases(client) -> None:
    resp = await client.post(
        "/api/plans", json={"title": "A", "items": _explicit_items(2)}, headers=OWNER_HEADERS
    )
    plan = resp.json()
    item_id = plan["items"][0]["id"]

    resp = await client.put(
        f"/api/plans/{plan['id']}/items/{uuid.uuid4()}",
        json={"completed": True},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Plan item not found.", "code": "plan_item_not_found"}

    resp = await client.put(
        f"/api/plans/{plan['id']}/items/{item_id}",
        json={"completed": True},
        headers=OTHER_HEADERS,
    )
    assert resp.status_code == 404
    assert resp.json()["code"] == "plan_not_found"

    resp = await client.get(f"/api/plans/{plan['id']}", headers=OWNER_HEADERS)
    assert resp.json()["completed_items"] == 0


@pytest.mark.asyncio
async def test_delete_plan(client) -> None:
    resp = await client.post(
        "/api/plans", json={"title": "Temp", "items": _explicit_items(2)}, headers=OWNER_HEADERS
    )
    plan_id = resp.json()["id"]

    resp = await client.delete(f"/api/plans/{plan_id}", headers=OTHER_HEADERS)
    assert resp.status_code == 404

    resp = await client.delete(f"/api/plans/{plan_id}", headers=OWNER_HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}

    resp = await client.get(f"/api/plans/{plan_id}", headers=OWNER_HEADERS)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_daily_focus(client) -> None:
    resp = await client.get("/api/plans/daily-focus", headers=OWNER_HEADERS)
    assert resp.json() == {"focus": None}

    resp = await client.post(
        "/api/plans", json={"title": "Focus", "items": _explicit_items(2)}, headers=OWNER_HEADERS
    )
    plan = resp.json()

    resp = await client.get("/api/plans/daily-focus", headers=OWNER_HEADERS)
    focus = resp.json()["focus"]
    assert focus["plan_id"] == plan["id"]
    assert focus["plan_title"] == "Focus"
    assert focus["item"]["label"] in {"John 1", "John 2"}
    assert focus["item"]["completed_at"] is None
