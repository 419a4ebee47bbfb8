"""Exceptions raised by the layout pipeline.

Configuration problems are raised eagerly by FloorConfig.validate() and are
caller bugs. Generation failures are recoverable (retry with another seed);
each carries a short machine-readable `kind` so callers and the HTTP layer
can tell them apart without string matching.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class ConfigurationError(ValueError):
    """Invalid floor configuration, detected before any generation work."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("invalid floor configuration: " + "; ".join(self.problems))


class GenerationError(RuntimeError):
    kind = "generation"

    def __init__(self, message: str, seed: Optional[int] = None, **context: Any):
        super().__init__(message)
        self.seed = seed
        self.context: Dict[str, Any] = context

    def to_dict(self) -> Dict[str, Any]:
        out = {"error": self.kind, "message": str(self), "seed": self.seed}
        out.update(self.context)
        return out


class NoRoomsError(GenerationError):
    """Every leaf partition was too small to hold a room."""
    kind = "no_rooms"


class DisconnectedError(GenerationError):
    """The candidate corridor graph did not span every room."""
    kind = "disconnected"


class RoomTypeAssignmentError(GenerationError):
    """Entrance/Exit could not be resolved, or a room was typed twice."""
    kind = "type_assignment"


__all__ = [
    "ConfigurationError",
    "GenerationError",
    "NoRoomsError",
    "DisconnectedError",
    "RoomTypeAssignmentError",
]
