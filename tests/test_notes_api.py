"""HTTP flow for notes, highlights and reference helpers."""
import uuid

import pytest

OWNER_HEADERS = {"X-User-ID": "reader-1"}
OTHER_HEADERS = {"X-User-ID": "reader-2"}

PASSAGE = {
    "translation_id": "BSB",
    "book_label": "John",
    "chapter_number": 3,
    "from_verse": 16,
    "to_verse": 18,
}


@pytest.mark.asyncio
async def test_note_from_passage_uses_selected_text(client) -> None:
    resp = await client.post(
        "/api/notes",
        json={"passage": PASSAGE, "text": "  ", "selected_text": " For God so loved the world "},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 201, resp.text
    note = resp.json()
    assert note["reference"] == "BSB John 3:16-18"
    assert note["text"] == "For God so loved the world"


@pytest.mark.asyncio
async def test_note_requires_reference_and_text(client) -> None:
    resp = await client.post("/api/notes", json={"text": "orphan"}, headers=OWNER_HEADERS)
    assert resp.status_code == 422

    resp = await client.post("/api/notes", json={"reference": "BSB John 1:1", "text": " "}, headers=OWNER_HEADERS)
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Reference and text are required.", "code": "note_incomplete"}


@pytest.mark.asyncio
async def test_note_passage_with_inverted_range_is_rejected(client) -> None:
    bad = dict(PASSAGE, from_verse=18, to_verse=16)
    resp = await client.post("/api/notes", json={"passage": bad, "text": "x"}, headers=OWNER_HEADERS)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_notes_are_owner_scoped(client) -> None:
    resp = await client.post(
        "/api/notes",
        json={"reference": " BSB Psalms 23:1 ", "text": "The Lord is my shepherd"},
        headers=OWNER_HEADERS,
    )
    note_id = resp.json()["id"]
    assert resp.json()["reference"] == "BSB Psalms 23:1"

    assert (await client.get("/api/notes", headers=OTHER_HEADERS)).json() == []
    resp = await client.delete(f"/api/notes/{note_id}", headers=OTHER_HEADERS)
    assert resp.status_code == 404
    assert resp.json()["code"] == "note_not_found"

    notes = (await client.get("/api/notes", headers=OWNER_HEADERS)).json()
    assert [n["id"] for n in notes] == [note_id]

    resp = await client.delete(f"/api/notes/{note_id}", headers=OWNER_HEADERS)
    assert resp.json() == {"ok": True}
    assert (await client.get("/api/notes", headers=OWNER_HEADERS)).json() == []


@pytest.mark.asyncio
async def test_highlight_create_list_delete(client) -> None:
    resp = await client.post(
        "/api/highlights",
        json={"passage": dict(PASSAGE, from_verse=16, to_verse=16), "color": "amber"},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 201, resp.text
    highlight = resp.json()
    assert highlight["reference"] == "BSB John 3:16"
    assert highlight["note"] == ""

    resp = await client.post(
        "/api/highlights",
        json={"reference": "BSB John 3:17", "color": "  "},
        headers=OWNER_HEADERS,
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "highlight_incomplete"

    listed = (await client.get("/api/highlights", headers=OWNER_HEADERS)).json()
    assert [h["id"] for h in listed] == [highlight["id"]]

    resp = await client.delete(f"/api/highlights/{uuid.uuid4()}", headers=OWNER_HEADERS)
    assert resp.status_code == 404
    assert resp.json()["code"] == "highlight_not_found"
    resp = await client.delete(f"/api/highlights/{highlight['id']}", headers=OWNER_HEADERS)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_reference_format_endpoint(client) -> None:
    resp = await client.post("/api/references/format", json=PASSAGE)
    assert resp.json() == {"reference": "BSB John 3:16-18"}

    resp = await client.post("/api/references/format", json=dict(PASSAGE, to_verse=16))
    assert resp.json() == {"reference": "BSB John 3:16"}


@pytest.mark.asyncio
async def test_selection_endpoint(client) -> None:
    resp = await client.post(
        "/api/references/selection",
        json={"anchor_verse": 5, "focus_verse": 3, "selected_text": "hope"},
    )
    assert resp.json()["selection"] == {"from_verse": 3, "to_verse": 5, "text": "hope", "rect": None}

    resp = await client.post(
        "/api/references/selection",
        json={"anchor_verse": 3, "focus_verse": 3, "selected_text": ""},
    )
    assert resp.json() == {"selection": None}


@pytest.mark.asyncio
async def test_health_endpoints(client) -> None:
    assert (await client.get("/health")).json() == {"ok": True}
    assert (await client.get("/api/healthz")).json() == {"status": "ok"}
    resp = await client.get("/api/readyz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db": "ok", "redis": "skipped"}
    resp = await client.get("/", headers={"X-Correlation-ID": "abc-123"})
    assert resp.headers["X-Correlation-ID"] == "abc-123"
