from floorgen.layout.errors import NoRoomsError
from floorgen.layout.pipeline import GenerationResult
from floorgen.routes import floor_api


def test_floor_json(client):
    r = client.get("/api/floor?seed=42&width=60&height=40")
    assert r.status_code == 200
    data = r.get_json()
    assert data["seed"] == 42
    assert (data["width"], data["height"]) == (60, 40)
    assert len(data["grid"]) == 40
    assert len(data["corridors"]) == len(data["rooms"]) - 1
    assert "metrics" in data


def test_floor_is_deterministic_per_seed(client, test_app):
    first = client.get("/api/floor?seed=dragon&grid=0").get_json()
    floor_api.clear_floor_cache()
    second = client.get("/api/floor?seed=dragon&grid=0").get_json()
    assert first["rooms"] == second["rooms"]
    assert "grid" not in first


def test_cache_returns_same_result(client, monkeypatch):
    calls = []
    real = floor_api.generate_floor

    def counting(config):
        calls.append(config.seed)
        return real(config)

    monkeypatch.setattr(floor_api, "generate_floor", counting)
    client.get("/api/floor?seed=5")
    client.get("/api/floor?seed=5")
    assert calls == [5]


def test_cache_can_be_disabled(client, monkeypatch):
    monkeypatch.setenv("FLOORGEN_DISABLE_CACHE", "1")
    calls = []
    real = floor_api.generate_floor
    monkeypatch.setattr(floor_api, "generate_floor", lambda c: calls.append(1) or real(c))
    client.get("/api/floor?seed=6")
    client.get("/api/floor?seed=6")
    assert len(calls) == 2


def test_ascii_endpoint(client):
    r = client.get("/api/floor/ascii?seed=7&annotate=1")
    assert r.status_code == 200
    assert r.mimetype == "text/plain"
    body = r.get_data(as_text=True)
    assert "#" in body and "E" in body


def test_entrance_endpoint(client):
    data = client.get("/api/floor/entrance?seed=8&tile_size=2").get_json()
    cx, cy = data["center"]
    assert data["room_id"] == 0
    assert data["position"] == [(cx + 0.5) * 2, (cy + 0.5) * 2]


def test_tile_endpoint(client):
    entrance = client.get("/api/floor/entrance?seed=9").get_json()
    x, y = entrance["center"]
    data = client.get(f"/api/floor/tile?seed=9&x={x}&y={y}").get_json()
    assert data["tile"] == "floor" and data["walkable"] is True
    assert data["room_id"] == entrance["room_id"]
    off = client.get("/api/floor/tile?seed=9&x=-1&y=0").get_json()
    assert off["tile"] == "empty" and off["walkable"] is False


def test_tile_endpoint_requires_coordinates(client):
    r = client.get("/api/floor/tile?seed=9&x=3")
    assert r.status_code == 400


def test_bad_integer_is_400(client):
    r = client.get("/api/floor?width=huge")
    assert r.status_code == 400
    assert r.get_json()["error"] == "configuration"


def test_bad_adjacency_is_400(client):
    assert client.get("/api/floor?adjacency=everything").status_code == 400


def test_extreme_dimensions_are_clamped(client):
    data = client.get("/api/floor?seed=3&width=2&height=100000&grid=0").get_json()
    assert data["width"] == 8 and data["height"] == 200


def test_generation_failure_is_422(client, monkeypatch):
    def failing(config):
        return GenerationResult(seed=config.seed, error=NoRoomsError("too small", seed=config.seed))

    monkeypatch.setattr(floor_api, "generate_floor", failing)
    r = client.get("/api/floor?seed=11")
    assert r.status_code == 422
    body = r.get_json()
    assert body["error"] == "no_rooms"
    assert body["seed"] == 11


def test_healthz(client):
    assert client.get("/healthz").get_json()["status"] == "ok"
