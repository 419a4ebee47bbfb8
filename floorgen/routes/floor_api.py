"""
project: floorgen
module: floor_api.py
License: MIT

Read-only HTTP access to generated floors.

    GET /api/floor           full LevelModel as JSON
    GET /api/floor/ascii     text/plain map
    GET /api/floor/entrance  entrance room and world-space anchor
    GET /api/floor/tile      tile type at ?x=&y=

Common query parameters: seed (int or any string), width, height, level,
adjacency. Untrusted dimensions are clamped by the configuration policy
before they reach the generator.
"""

import os
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from floorgen.layout import ConfigurationError, FloorConfig, generate_floor
from floorgen.layout.policy import clamp_config, coerce_seed
from floorgen.logging_utils import get_logger

bp_floor = Blueprint("floor", __name__)
log = get_logger("floorgen.http")

# Small in-process cache keyed by the resolved config. Generation is
# deterministic, so a cached result is indistinguishable from a fresh one.
_floor_cache = {}
_floor_cache_lock = threading.Lock()
_FLOOR_CACHE_MAX = 8


def _cache_disabled() -> bool:
    return os.environ.get("FLOORGEN_DISABLE_CACHE") == "1" or bool(
        current_app.config.get("FLOORGEN_DISABLE_CACHE")
    )


def get_cached_floor(config: FloorConfig):
    if _cache_disabled():
        return generate_floor(config)
    key = repr(config)
    with _floor_cache_lock:
        result = _floor_cache.get(key)
        if result is not None:
            return result
    result = generate_floor(config)
    with _floor_cache_lock:
        _floor_cache[key] = result
        if len(_floor_cache) > _FLOOR_CACHE_MAX:
            first_key = next(iter(_floor_cache.keys()))
            if first_key != key:
                _floor_cache.pop(first_key, None)
    return result


def clear_floor_cache():
    with _floor_cache_lock:
        _floor_cache.clear()


class _BadRequest(Exception):
    pass


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        raise _BadRequest(f"{name} must be an integer") from None


def _config_from_request() -> FloorConfig:
    cfg = current_app.config
    config = FloorConfig(
        width=_int_arg("width", cfg.get("FLOORGEN_DEFAULT_WIDTH", 80)),
        height=_int_arg("height", cfg.get("FLOORGEN_DEFAULT_HEIGHT", 60)),
        floor_level=_int_arg("level", 1),
        adjacency=request.args.get("adjacency", "siblings"),
        seed=coerce_seed(request.args.get("seed")),
        enable_metrics=bool(cfg.get("FLOORGEN_ENABLE_METRICS", True)),
    )
    if config.adjacency not in ("siblings", "geometric"):
        raise _BadRequest("adjacency must be 'siblings' or 'geometric'")
    return clamp_config(config)


def _resolve():
    """Return (result, None) or (None, error response)."""
    try:
        config = _config_from_request()
        result = get_cached_floor(config)
    except (_BadRequest, ConfigurationError) as exc:
        log.info(event="floor_request_rejected", path=request.path, reason=str(exc))
        return None, (jsonify({"error": "configuration", "message": str(exc)}), 400)
    if not result.ok:
        return None, (jsonify(result.error.to_dict()), 422)
    return result, None


@bp_floor.route("/api/floor")
def floor():
    result, err = _resolve()
    if err:
        return err
    include_grid = request.args.get("grid", "1") not in ("0", "false", "no")
    return jsonify(result.level.to_dict(include_grid=include_grid))


@bp_floor.route("/api/floor/ascii")
def floor_ascii():
    result, err = _resolve()
    if err:
        return err
    annotate = request.args.get("annotate", "0") in ("1", "true", "yes")
    return Response(result.level.to_ascii(annotate=annotate) + "\n", mimetype="text/plain")


@bp_floor.route("/api/floor/entrance")
def floor_entrance():
    result, err = _resolve()
    if err:
        return err
    level = result.level
    try:
        tile_size = float(request.args.get("tile_size", "1.0"))
    except ValueError:
        return jsonify({"error": "configuration", "message": "tile_size must be a number"}), 400
    return jsonify(
        {
            "seed": level.seed,
            "room_id": level.entrance_room.id,
            "center": list(level.entrance_room.center),
            "position": list(level.entrance_position(tile_size)),
        }
    )


@bp_floor.route("/api/floor/tile")
def floor_tile():
    result, err = _resolve()
    if err:
        return err
    try:
        x = _int_arg("x", None)
        y = _int_arg("y", None)
    except _BadRequest as exc:
        return jsonify({"error": "configuration", "message": str(exc)}), 400
    if x is None or y is None:
        return jsonify({"error": "configuration", "message": "x and y are required"}), 400
    level = result.level
    room = level.room_at(x, y)
    return jsonify(
        {
            "x": x,
            "y": y,
            "tile": level.tile_at(x, y).value,
            "walkable": level.is_floor(x, y),
            "room_id": room.id if room else None,
        }
    )
