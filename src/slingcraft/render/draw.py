from __future__ import annotations

import math
from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:  # pragma: no cover
    from slingcraft.core.config import RenderCfg
    from slingcraft.core.model import BodySnapshot
    from slingcraft.render.camera import Camera


def body_pixel_radius(body: BodySnapshot, camera: Camera, *, render_cfg: RenderCfg) -> int:
    return max(render_cfg.min_body_pixels, int(round(body.radius * camera.ppu)))


def draw_body(
    surface: pygame.Surface,
    body: BodySnapshot,
    camera: Camera,
    *,
    color: tuple[int, int, int],
    render_cfg: RenderCfg,
) -> None:
    center = camera.world_to_screen(*body.position)
    pygame.draw.circle(surface, color, center, body_pixel_radius(body, camera, render_cfg=render_cfg))


def draw_selection_ring(
    surface: pygame.Surface,
    body: BodySnapshot,
    camera: Camera,
    *,
    render_cfg: RenderCfg,
) -> None:
    center = camera.world_to_screen(*body.position)
    radius = body_pixel_radius(body, camera, render_cfg=render_cfg) + 5
    pygame.draw.circle(surface, render_cfg.selection_color, center, radius, 2)


def draw_craft_pips(
    surface: pygame.Surface,
    body: BodySnapshot,
    camera: Camera,
    capacity: int,
    *,
    render_cfg: RenderCfg,
) -> None:
    """Row of filled and hollow dots under a body, one per craft slot."""

    if capacity <= 0:
        return
    cx, cy = camera.world_to_screen(*body.position)
    top = cy + body_pixel_radius(body, camera, render_cfg=render_cfg) + 10
    spacing = render_cfg.craft_pip_spacing
    left = cx - spacing * (capacity - 1) // 2
    for slot in range(capacity):
        center = (left + slot * spacing, top)
        if slot < body.craft_count:
            pygame.draw.circle(surface, render_cfg.craft_pip_color, center, render_cfg.craft_pip_radius)
        else:
            pygame.draw.circle(
                surface, render_cfg.craft_pip_empty_color, center, render_cfg.craft_pip_radius, 1
            )


def draw_velocity_arrow(
    surface: pygame.Surface,
    start: tuple[int, int],
    end: tuple[int, int],
    *,
    render_cfg: RenderCfg,
) -> None:
    if start == end:
        return
    pygame.draw.line(surface, render_cfg.velocity_arrow_color, start, end, 2)
    angle = math.atan2(start[1] - end[1], end[0] - start[0])
    head_angle = math.radians(render_cfg.velocity_arrow_head_angle_deg)
    head_length = render_cfg.velocity_arrow_head_length
    left = (
        int(end[0] - head_length * math.cos(angle - head_angle)),
        int(end[1] + head_length * math.sin(angle - head_angle)),
    )
    right = (
        int(end[0] - head_length * math.cos(angle + head_angle)),
        int(end[1] + head_length * math.sin(angle + head_angle)),
    )
    pygame.draw.polygon(surface, render_cfg.velocity_arrow_color, [end, left, right])


def draw_body_velocity(
    surface: pygame.Surface,
    body: BodySnapshot,
    camera: Camera,
    *,
    render_cfg: RenderCfg,
) -> None:
    scale = render_cfg.velocity_arrow_scale
    start = camera.world_to_screen(*body.position)
    end = camera.world_to_screen(
        body.position[0] + body.velocity[0] * scale,
        body.position[1] + body.velocity[1] * scale,
    )
    draw_velocity_arrow(surface, start, end, render_cfg=render_cfg)


def draw_center_of_mass(
    surface: pygame.Surface,
    center_of_mass: tuple[float, float],
    camera: Camera,
    *,
    render_cfg: RenderCfg,
) -> None:
    x, y = camera.world_to_screen(*center_of_mass)
    size = render_cfg.com_marker_size
    color = render_cfg.com_marker_color
    pygame.draw.line(surface, color, (x - size, y), (x + size, y), 2)
    pygame.draw.line(surface, color, (x, y - size), (x, y + size), 2)
