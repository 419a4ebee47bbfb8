"""Minimal structured logging helper.

Emits one key=value line (or one JSON object) per call with a timestamp,
level and logger name. Generation code logs named events rather than
free-form prose so runs can be grepped and diffed:

    from floorgen.logging_utils import get_logger
    log = get_logger("floorgen.pipeline")
    log.info(event="floor_generated", seed=42, rooms=9)

    # context shared by several calls
    run_log = log.bind(seed=42)
    run_log.debug(event="floor_phase", phase="partition", ms=3)

Environment:
    FLOORGEN_LOG_LEVEL  debug | info | warn | error (default info)
    FLOORGEN_LOG_JSON   1/true/yes/on to emit JSON lines

Lines go to stderr so command output on stdout stays parseable. Values
that are None are dropped. Reserved keys are level, ts and logger; a
caller field using one of the first two is written with a trailing
underscore (``level_``) instead of replacing the record's own value.
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import Any, Dict, Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
RESERVED = ("level", "ts")
_TRUTHY = ("1", "true", "TRUE", "yes", "on")

CURRENT_LEVEL = LEVELS.get(os.getenv("FLOORGEN_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("FLOORGEN_LOG_JSON", "0") in _TRUTHY


def configure(level: str | None = None, json_mode: bool | None = None):
    """Adjust the process-wide threshold / output mode after import.

    Unknown level names raise ValueError so a typo in a CLI flag is not
    silently treated as "info".
    """
    global CURRENT_LEVEL, JSON_MODE
    if level is not None:
        key = level.lower()
        if key not in LEVELS:
            raise ValueError(f"unknown log level {level!r}; expected one of {sorted(LEVELS)}")
        CURRENT_LEVEL = LEVELS[key]
    if json_mode is not None:
        JSON_MODE = bool(json_mode)


def build_record(lvl: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    record: Dict[str, Any] = {"level": lvl, "ts": int(time.time())}
    for k, v in fields.items():
        if v is None:
            continue
        record[f"{k}_" if k in RESERVED else k] = v
    return record


def render(record: Dict[str, Any]) -> str:
    if JSON_MODE:
        return json.dumps(record, separators=(",", ":"), default=str)
    parts = []
    for k, v in record.items():
        if isinstance(v, (bool, int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, context: Optional[Dict[str, Any]] = None):
        self.name = name or "floorgen"
        self.context = dict(context or {})

    def bind(self, **context) -> "_Logger":
        """Child logger whose lines always carry `context`."""
        return _Logger(self.name, {**self.context, **context})

    def _log(self, lvl: str, fields: Dict[str, Any]):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        merged = {**self.context, **fields}
        merged.setdefault("logger", self.name)
        print(render(build_record(lvl, merged)), file=sys.stderr)

    def debug(self, **fields):
        self._log("debug", fields)

    def info(self, **fields):
        self._log("info", fields)

    def warn(self, **fields):
        self._log("warn", fields)

    def error(self, **fields):
        self._log("error", fields)


_LOGGER_CACHE: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("floorgen")
