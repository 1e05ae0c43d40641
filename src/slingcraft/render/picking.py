"""Pointer hit-testing against body discs."""
from __future__ import annotations

import math
from typing import Sequence

from slingcraft.core.model import BodySnapshot


def pick_body(
    bodies: Sequence[BodySnapshot],
    point: tuple[float, float],
    tolerance: float = 0.0,
) -> int | None:
    """Id of the body under ``point`` (world units), or ``None``.

    When discs overlap the body whose center is nearest wins.
    """

    best_id: int | None = None
    best_distance = math.inf
    for body in bodies:
        distance = math.hypot(point[0] - body.position[0], point[1] - body.position[1])
        if distance <= body.radius + tolerance and distance < best_distance:
            best_id = body.id
            best_distance = distance
    return best_id


__all__ = ["pick_body"]
