"""Vinyl CRUD - create, read, update, delete and track append through the HTTP API.

Invariants:
    - POST creates nested tracks with the vinyl and returns 201
    - GET of a missing id is 404 {"error": "Vinyl not found"}
    - PUT with tracks replaces the whole track set; PUT without tracks keeps it
    - Operations on a missing id return 404 and write nothing
    - DELETE removes the vinyl and its tracks
"""

from sqlalchemy import func, select

from vinyl_api.models import Track, Vinyl

NOT_FOUND = {"error": "Vinyl not found"}


async def _track_count(db, vinyl_id=None) -> int:
    stmt = select(func.count(Track.id))
    if vinyl_id is not None:
        stmt = stmt.where(Track.vinyl_id == vinyl_id)
    result = await db.execute(stmt)
    return result.scalar_one()


async def _create(client, **body):
    res = await client.post("/vinyls", json=body)
    assert res.status_code == 201, res.text
    return res.json()


# ─── Create / Get ────────────────────────────────────────────────

async def test_create_with_tracks_then_get_returns_same_tracks(client):
    created = await _create(
        client, title="X", artist="Y",
        tracks=[{"side": "A", "title": "T1"}, {"side": "B", "title": "T2"}],
    )
    assert [t["title"] for t in created["tracks"]] == ["T1", "T2"]
    assert [t["side"] for t in created["tracks"]] == ["A", "B"]

    res = await client.get(f"/vinyls/{created['id']}")
    assert res.status_code == 200
    fetched = res.json()
    assert [(t["side"], t["title"]) for t in fetched["tracks"]] == [
        ("A", "T1"), ("B", "T2"),
    ]


async def test_create_orders_tracks_by_side(client):
    created = await _create(
        client, title="Side Story", artist="Band",
        tracks=[
            {"side": "B", "title": "Second"},
            {"side": "A", "title": "First"},
        ],
    )
    assert [t["side"] for t in created["tracks"]] == ["A", "B"]


async def test_create_round_trips_fields(client):
    payload = {
        "title": "Blue", "artist": "Joni Mitchell", "genre": "Folk",
        "year": 1971, "label": "Reprise", "country": "US",
        "format": "LP", "condition": "VG+", "coverUrl": "http://img/blue.jpg",
        "notes": "Gatefold",
    }
    created = await _create(client, **payload)

    fetched = (await client.get(f"/vinyls/{created['id']}")).json()
    for key, value in payload.items():
        assert fetched[key] == value
    assert fetched["tracks"] == []
    assert fetched["createdAt"]


async def test_create_without_tracks_creates_none(client, test_db):
    created = await _create(client, title="Solo", artist="Someone")
    assert created["tracks"] == []
    assert await _track_count(test_db, created["id"]) == 0


async def test_create_missing_title_is_store_failure(client):
    res = await client.post("/vinyls", json={"artist": "Nobody"})
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Failed to create vinyl"
    assert body["details"]


async def test_create_with_unknown_field_is_store_failure(client, test_db):
    res = await client.post(
        "/vinyls", json={"title": "X", "artist": "Y", "bogus": 1},
    )
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to create vinyl"
    result = await test_db.execute(select(func.count(Vinyl.id)))
    assert result.scalar_one() == 0


async def test_create_with_wrong_year_type_is_store_failure(client, test_db):
    res = await client.post(
        "/vinyls", json={"title": "X", "artist": "Y", "year": "sometime"},
    )
    assert res.status_code == 500
    body = res.json()
    assert body["error"] == "Failed to create vinyl"
    assert "year" in body["details"]
    result = await test_db.execute(select(func.count(Vinyl.id)))
    assert result.scalar_one() == 0


async def test_create_with_non_list_tracks_is_store_failure(client):
    res = await client.post(
        "/vinyls", json={"title": "X", "artist": "Y", "tracks": "nope"},
    )
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to create vinyl"


async def test_create_with_unparseable_json_is_bad_request(client):
    res = await client.post(
        "/vinyls", content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request data"


async def test_update_with_wrong_year_type_is_store_failure(client):
    created = await _create(
        client, title="T", artist="A", tracks=[{"side": "A", "title": "S"}],
    )
    res = await client.put(f"/vinyls/{created['id']}", json={"year": "later"})
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to update vinyl"
    fetched = (await client.get(f"/vinyls/{created['id']}")).json()
    assert fetched["year"] is None
    assert len(fetched["tracks"]) == 1


async def test_add_track_with_wrong_position_type_is_store_failure(client):
    created = await _create(client, title="T", artist="A")
    res = await client.post(
        f"/vinyls/{created['id']}/tracks",
        json={"side": "A", "title": "X", "position": "first"},
    )
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to add track"


async def test_get_missing_vinyl_returns_404(client):
    res = await client.get("/vinyls/does-not-exist")
    assert res.status_code == 404
    assert res.json() == NOT_FOUND


# ─── Update ──────────────────────────────────────────────────────

async def test_update_with_tracks_replaces_all_tracks(client, test_db):
    created = await _create(
        client, title="Old", artist="A",
        tracks=[
            {"side": "A", "title": "Old 1"},
            {"side": "A", "title": "Old 2"},
            {"side": "B", "title": "Old 3"},
        ],
    )

    res = await client.put(
        f"/vinyls/{created['id']}",
        json={"tracks": [{"side": "A", "title": "New 1"}]},
    )
    assert res.status_code == 200
    assert [t["title"] for t in res.json()["tracks"]] == ["New 1"]

    fetched = (await client.get(f"/vinyls/{created['id']}")).json()
    assert [t["title"] for t in fetched["tracks"]] == ["New 1"]
    assert await _track_count(test_db, created["id"]) == 1


async def test_update_with_empty_tracks_clears_tracks(client):
    created = await _create(
        client, title="T", artist="A", tracks=[{"side": "A", "title": "Gone"}],
    )
    res = await client.put(f"/vinyls/{created['id']}", json={"tracks": []})
    assert res.status_code == 200
    assert res.json()["tracks"] == []


async def test_update_without_tracks_keeps_tracks(client):
    created = await _create(
        client, title="Keep", artist="A",
        tracks=[{"side": "A", "title": "Stay 1"}, {"side": "B", "title": "Stay 2"}],
    )

    res = await client.put(f"/vinyls/{created['id']}", json={"genre": "Soul"})
    assert res.status_code == 200
    updated = res.json()
    assert updated["genre"] == "Soul"
    assert updated["title"] == "Keep"
    assert [t["title"] for t in updated["tracks"]] == ["Stay 1", "Stay 2"]


async def test_update_empty_body_changes_nothing(client):
    created = await _create(
        client, title="Same", artist="A", tracks=[{"side": "A", "title": "S"}],
    )
    res = await client.put(f"/vinyls/{created['id']}", json={})
    assert res.status_code == 200
    assert res.json()["title"] == "Same"
    assert len(res.json()["tracks"]) == 1


async def test_update_with_null_tracks_keeps_tracks(client):
    created = await _create(
        client, title="N", artist="A", tracks=[{"side": "A", "title": "S"}],
    )
    res = await client.put(f"/vinyls/{created['id']}", json={"tracks": None})
    assert len(res.json()["tracks"]) == 1


async def test_update_fields_and_tracks_together(client):
    created = await _create(
        client, title="Before", artist="A", tracks=[{"side": "A", "title": "S"}],
    )
    res = await client.put(
        f"/vinyls/{created['id']}",
        json={
            "title": "After", "year": 2001,
            "tracks": [{"side": "B", "title": "b"}, {"side": "A", "title": "a"}],
        },
    )
    body = res.json()
    assert body["title"] == "After"
    assert body["year"] == 2001
    assert [t["title"] for t in body["tracks"]] == ["a", "b"]


async def test_update_missing_vinyl_returns_404_and_writes_nothing(client, test_db):
    res = await client.put(
        "/vinyls/missing", json={"title": "X", "tracks": [{"side": "A", "title": "T"}]},
    )
    assert res.status_code == 404
    assert res.json() == NOT_FOUND
    assert await _track_count(test_db) == 0


async def test_update_unknown_field_is_store_failure(client):
    created = await _create(client, title="T", artist="A")
    res = await client.put(f"/vinyls/{created['id']}", json={"bogus": True})
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to update vinyl"


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_removes_vinyl_and_tracks(client, test_db):
    created = await _create(
        client, title="Bye", artist="A",
        tracks=[{"side": "A", "title": "1"}, {"side": "B", "title": "2"}],
    )

    res = await client.delete(f"/vinyls/{created['id']}")
    assert res.status_code == 200
    assert res.json() == {"message": "Vinyl deleted successfully"}

    assert (await client.get(f"/vinyls/{created['id']}")).status_code == 404
    assert await _track_count(test_db, created["id"]) == 0


async def test_delete_missing_vinyl_returns_404(client, seed_vinyls, test_db):
    res = await client.delete("/vinyls/missing")
    assert res.status_code == 404
    assert res.json() == NOT_FOUND
    result = await test_db.execute(select(func.count(Vinyl.id)))
    assert result.scalar_one() == len(seed_vinyls)


# ─── Add track ───────────────────────────────────────────────────

async def test_add_track_returns_201_with_track(client):
    created = await _create(client, title="T", artist="A")

    res = await client.post(
        f"/vinyls/{created['id']}/tracks",
        json={"side": "A", "title": "Added", "position": 1, "duration": "3:45"},
    )
    assert res.status_code == 201
    track = res.json()
    assert track["id"]
    assert track["vinylId"] == created["id"]
    assert track["title"] == "Added"
    assert track["duration"] == "3:45"


async def test_added_track_appears_in_vinyl_ordered_by_side(client):
    created = await _create(
        client, title="T", artist="A", tracks=[{"side": "B", "title": "B1"}],
    )
    await client.post(
        f"/vinyls/{created['id']}/tracks", json={"side": "A", "title": "A1"},
    )

    fetched = (await client.get(f"/vinyls/{created['id']}")).json()
    assert [t["title"] for t in fetched["tracks"]] == ["A1", "B1"]


async def test_add_track_to_missing_vinyl_returns_404(client, test_db):
    res = await client.post(
        "/vinyls/missing/tracks", json={"side": "A", "title": "Orphan"},
    )
    assert res.status_code == 404
    assert res.json() == NOT_FOUND
    assert await _track_count(test_db) == 0


async def test_add_track_missing_title_is_store_failure(client):
    created = await _create(client, title="T", artist="A")
    res = await client.post(f"/vinyls/{created['id']}/tracks", json={"side": "A"})
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to add track"
