from __future__ import annotations

import pytest

from slingcraft.core.model import BodySpec


@pytest.fixture
def slingcraft_specs() -> list[BodySpec]:
    return [
        BodySpec(name="Central", radius=5.0, position=(0.0, 0.0)),
        BodySpec(name="Sat", radius=2.0, position=(20.0, 0.0)),
    ]
