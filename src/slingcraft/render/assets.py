from __future__ import annotations

from collections import OrderedDict
from typing import Sequence

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]


class HudFont:
    """Font for the diagnostics panel.

    The HUD redraws the same handful of rows every frame, so rendered lines
    are kept in a small LRU cache owned by this font.
    """

    def __init__(self, names: Sequence[str], size: int, *, cache_size: int = 128) -> None:
        # SysFont takes a comma separated preference list and falls back to
        # pygame's bundled default when none of the names is installed.
        self.font = pygame.font.SysFont(",".join(names), size)
        self._cache: OrderedDict[tuple[str, Color], pygame.Surface] = OrderedDict()
        self._cache_size = max(1, cache_size)

    @property
    def line_height(self) -> int:
        return self.font.get_linesize()

    def width(self, text: str) -> int:
        return self.font.size(text)[0]

    def render(self, text: str, color: Color) -> pygame.Surface:
        key = (text, color)
        surface = self._cache.get(key)
        if surface is None:
            surface = self.font.render(text, True, color)
            self._cache[key] = surface
            if len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
        else:
            self._cache.move_to_end(key)
        return surface

    def cached_lines(self) -> int:
        return len(self._cache)


__all__ = ["Color", "HudFont"]
