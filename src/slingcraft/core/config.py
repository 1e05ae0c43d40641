"""Configuration dataclasses for the slingcraft simulation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PhysicsCfg:
    gravitational_constant: float = 50.0
    density: float = 2.0e-2
    craft_count_min: int = 0
    craft_count_max: int = 10
    # Longest wall-clock frame the host loop will hand to the engine.
    max_frame_dt: float = 0.25


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1000
    height: int = 800
    fps_cap: int = 120
    background_color: tuple[int, int, int] = (0, 34, 72)
    central_color: tuple[int, int, int] = (255, 183, 77)
    body_color: tuple[int, int, int] = (220, 236, 255)
    selection_color: tuple[int, int, int] = (46, 209, 195)
    craft_pip_color: tuple[int, int, int] = (255, 220, 180)
    craft_pip_empty_color: tuple[int, int, int] = (70, 90, 120)
    craft_pip_radius: int = 3
    craft_pip_spacing: int = 8
    com_marker_color: tuple[int, int, int] = (255, 66, 66)
    com_marker_size: int = 6
    velocity_arrow_color: tuple[int, int, int] = (255, 220, 180)
    velocity_arrow_scale: float = 0.5
    velocity_arrow_head_length: int = 8
    velocity_arrow_head_angle_deg: int = 26
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_warning_color: tuple[int, int, int] = (255, 176, 120)
    hud_background_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.55))
    hud_font_names: tuple[str, ...] = ("dejavusansmono", "consolas", "menlo")
    hud_font_size: int = 16
    zoom_range: float = 40.0
    fit_margin: float = 1.25
    zoom_step: float = 1.15
    camera_smoothing: float = 0.15
    min_body_pixels: int = 2
    pick_tolerance_pixels: float = 6.0


@dataclass(frozen=True)
class LogCfg:
    level: int = logging.INFO
    fmt: str = "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
    run_dir: Path = Path("data") / "runs"
    timeseries_flush_threshold: int = 200
    events_flush_threshold: int = 50
    record_every_steps: int = 1


PHYSICS_CFG = PhysicsCfg()
RENDER_CFG = RenderCfg()
LOG_CFG = LogCfg()


__all__ = ["LOG_CFG", "PHYSICS_CFG", "RENDER_CFG", "LogCfg", "PhysicsCfg", "RenderCfg"]
