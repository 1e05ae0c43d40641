"""Rendering helpers for the slingcraft viewer."""

from .camera import Camera
from .assets import HudFont
from .draw import (
    body_pixel_radius,
    draw_body,
    draw_body_velocity,
    draw_center_of_mass,
    draw_craft_pips,
    draw_selection_ring,
    draw_velocity_arrow,
)
from .picking import pick_body
from .ui import build_text_panel, hud_lines, relative_drift

__all__ = [
    "Camera",
    "HudFont",
    "body_pixel_radius",
    "build_text_panel",
    "draw_body",
    "draw_body_velocity",
    "draw_center_of_mass",
    "draw_craft_pips",
    "draw_selection_ring",
    "draw_velocity_arrow",
    "hud_lines",
    "pick_body",
    "relative_drift",
]
