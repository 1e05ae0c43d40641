from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import pygame

from .assets import Color, HudFont

if TYPE_CHECKING:  # pragma: no cover
    from slingcraft.core.config import RenderCfg
    from slingcraft.core.model import BodySnapshot, Diagnostics


def relative_drift(current: float, initial: float) -> float:
    if abs(initial) <= 1e-12:
        return 0.0
    return (current - initial) / abs(initial)


def hud_lines(
    diagnostics: Diagnostics,
    initial_energy: float,
    selected: BodySnapshot | None,
    *,
    paused: bool,
    render_cfg: RenderCfg,
) -> list[tuple[str, tuple[int, int, int]]]:
    """Text rows for the diagnostics panel, drift highlighted past 1%."""

    drift = relative_drift(diagnostics.total_energy, initial_energy)
    drift_color = render_cfg.hud_warning_color if abs(drift) > 0.01 else render_cfg.hud_text_color
    com_x, com_y = diagnostics.center_of_mass
    text = render_cfg.hud_text_color
    lines = [
        (f"t = {diagnostics.time:9.2f} s   step {diagnostics.step_count}", text),
        (f"E_kin = {diagnostics.kinetic_energy: .5g}", text),
        (f"E_pot = {diagnostics.potential_energy: .5g}", text),
        (f"E_tot = {diagnostics.total_energy: .5g}", text),
        (f"drift = {drift:+.3%}", drift_color),
        (f"COM = ({com_x:.3f}, {com_y:.3f})", text),
    ]
    if selected is not None:
        lines.append(("", text))
        lines.append((f"[{selected.id}] {selected.name}", render_cfg.selection_color))
        lines.append((f"mass {selected.mass:.4g}  radius {selected.radius:.3g}", text))
        lines.append((f"speed {selected.speed:.4g}  craft {selected.craft_count}", text))
    if paused:
        lines.append(("PAUSED", render_cfg.hud_warning_color))
    return lines


def build_text_panel(
    font: HudFont,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 14),
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.line_height
    width = max(font.width(text) for text, _ in lines) + padding_x * 2
    height = line_height * len(lines) + padding_y * 2
    panel_surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(
        panel_surface,
        background_color,
        panel_surface.get_rect(),
        border_radius=12,
    )
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        text_surf = font.render(text, color)
        panel_surface.blit(text_surf, (padding_x, padding_y + idx * line_height))
    return panel_surface
