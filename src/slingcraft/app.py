"""
Slingcraft - a small gravitational sandbox
==========================================

A central mass and its satellites integrated with symplectic Euler, drawn
with pygame. The viewer only reads simulation state; the one thing it may
change is a body's craft count.

Controls
- Left click: select the body under the pointer
- + / -: add or remove a craft on the selected body
- Space: pause / resume
- Mouse wheel: zoom, right drag: pan
- C: follow the center of mass, F: refit the view
- Esc: quit
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from slingcraft.core.config import LOG_CFG, PHYSICS_CFG, RENDER_CFG, PhysicsCfg, RenderCfg
from slingcraft.core.errors import SlingcraftError
from slingcraft.core.logging_utils import RunLogger, configure_logging
from slingcraft.core.simulation import Simulation
from slingcraft.core.timekeeping import FrameTimer
from slingcraft.data.scenarios import (
    DEFAULT_SCENARIO_KEY,
    SCENARIO_DISPLAY_ORDER,
    Scenario,
    get_scenario,
    load_scenario_file,
)
from slingcraft.render.ui import relative_drift

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the slingcraft gravity sandbox.")
    parser.add_argument(
        "--scenario",
        default=DEFAULT_SCENARIO_KEY,
        choices=SCENARIO_DISPLAY_ORDER,
        help="Built-in starting configuration",
    )
    parser.add_argument("--scenario-file", help="JSON scenario file (overrides --scenario)")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    parser.add_argument("--record", action="store_true", help="Write diagnostics to a run directory")
    parser.add_argument("--run-dir", default=str(LOG_CFG.run_dir), help="Root directory for recorded runs")
    parser.add_argument("--headless", action="store_true", help="Step without opening a window")
    parser.add_argument("--steps", type=int, default=1000, help="Headless step count")
    parser.add_argument("--dt", type=float, default=0.01, help="Headless fixed step in seconds")
    return parser


def resolve_scenario(args: argparse.Namespace) -> Scenario:
    if args.scenario_file:
        return load_scenario_file(args.scenario_file)
    return get_scenario(args.scenario)


def start_recording(run_dir: str, scenario: Scenario, sim: Simulation) -> RunLogger:
    recorder = RunLogger(run_dir)
    recorder.write_meta(
        {
            "scenario_key": scenario.key,
            "scenario_name": scenario.name,
            "scenario_description": scenario.description,
            "G": sim.cfg.gravitational_constant,
            "density": sim.cfg.density,
            "integrator": "semi_implicit_euler",
            "central_id": sim.central_id,
            "bodies": [
                {
                    "id": body.id,
                    "name": body.name,
                    "radius": body.radius,
                    "mass": body.mass,
                    "position": list(body.position),
                    "velocity": list(body.velocity),
                    "craft_count": body.craft_count,
                }
                for body in sim.bodies
            ],
        }
    )
    recorder.log_event((0.0, "setup", sim.central_id, f"{len(sim.bodies)} bodies"))
    recorder.log_diagnostics(sim.diagnostics)
    return recorder


def run_headless(
    sim: Simulation,
    steps: int,
    dt: float,
    recorder: RunLogger | None = None,
    *,
    record_every: int = LOG_CFG.record_every_steps,
) -> float:
    """Step ``sim`` a fixed number of times and return the relative energy drift."""

    initial_energy = sim.diagnostics.total_energy
    record_every = max(1, record_every)
    for _ in range(max(0, steps)):
        diagnostics = sim.step(dt)
        if recorder is not None and diagnostics.step_count % record_every == 0:
            recorder.log_diagnostics(diagnostics)
    drift = relative_drift(sim.diagnostics.total_energy, initial_energy)
    logger.info(
        "Headless run finished: %d steps, t=%.3f, E=%.6g, drift=%+.3e",
        sim.step_count,
        sim.time,
        sim.diagnostics.total_energy,
        drift,
    )
    return drift


def run_viewer(
    sim: Simulation,
    recorder: RunLogger | None = None,
    *,
    physics_cfg: PhysicsCfg = PHYSICS_CFG,
    render_cfg: RenderCfg = RENDER_CFG,
) -> None:
    import pygame

    from slingcraft.render import (
        Camera,
        HudFont,
        build_text_panel,
        draw_body,
        draw_body_velocity,
        draw_center_of_mass,
        draw_craft_pips,
        draw_selection_ring,
        hud_lines,
        pick_body,
    )

    pygame.init()
    screen = pygame.display.set_mode((render_cfg.width, render_cfg.height), pygame.RESIZABLE)
    pygame.display.set_caption("Slingcraft")
    clock = pygame.time.Clock()
    font = HudFont(render_cfg.hud_font_names, render_cfg.hud_font_size)
    camera = Camera(
        screen.get_size(),
        zoom_range=render_cfg.zoom_range,
        margin=render_cfg.fit_margin,
    )
    camera.fit(sim.bodies, sim.diagnostics.center_of_mass)
    timer = FrameTimer(max_dt=physics_cfg.max_frame_dt)

    initial_energy = sim.diagnostics.total_energy
    selected_id: int | None = None
    paused = False

    def select_at(screen_pos: tuple[int, int]) -> None:
        nonlocal selected_id
        world = camera.screen_to_world(*screen_pos)
        selected_id = pick_body(
            sim.bodies, world, camera.pick_tolerance(render_cfg.pick_tolerance_pixels)
        )

    def change_crafts(delta: int) -> None:
        if selected_id is None:
            return
        count = sim.adjust_craft_count(selected_id, delta)
        if recorder is not None:
            recorder.log_event((sim.time, "craft_count", selected_id, count))

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                camera.resize(event.size)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                    timer.reset()
                elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    change_crafts(+1)
                elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                    change_crafts(-1)
                elif event.key == pygame.K_c:
                    camera.follow_com = not camera.follow_com
                elif event.key == pygame.K_f:
                    camera.fit(sim.bodies, sim.diagnostics.center_of_mass)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    select_at(event.pos)
                elif event.button == 3:
                    camera.begin_drag(event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 3:
                camera.end_drag()
            elif event.type == pygame.MOUSEMOTION:
                camera.drag_to(event.pos)
            elif event.type == pygame.MOUSEWHEEL:
                camera.zoom_at(render_cfg.zoom_step ** event.y, pygame.mouse.get_pos())

        dt = timer.tick()
        if not paused:
            diagnostics = sim.step(dt)
            if recorder is not None and diagnostics.step_count % LOG_CFG.record_every_steps == 0:
                recorder.log_diagnostics(diagnostics)

        diagnostics = sim.diagnostics
        camera.update(diagnostics.center_of_mass, render_cfg.camera_smoothing)

        bodies = sim.bodies
        screen.fill(render_cfg.background_color)
        for body in bodies:
            color = render_cfg.central_color if body.id == sim.central_id else render_cfg.body_color
            draw_body(screen, body, camera, color=color, render_cfg=render_cfg)
            draw_body_velocity(screen, body, camera, render_cfg=render_cfg)
            draw_craft_pips(screen, body, camera, physics_cfg.craft_count_max, render_cfg=render_cfg)
        selected = next((body for body in bodies if body.id == selected_id), None)
        if selected is not None:
            draw_selection_ring(screen, selected, camera, render_cfg=render_cfg)
        draw_center_of_mass(screen, diagnostics.center_of_mass, camera, render_cfg=render_cfg)

        panel = build_text_panel(
            font,
            hud_lines(diagnostics, initial_energy, selected, paused=paused, render_cfg=render_cfg),
            background_color=render_cfg.hud_background_color,
        )
        screen.blit(panel, (12, 12))
        pygame.display.flip()
        clock.tick(render_cfg.fps_cap)

    pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        scenario = resolve_scenario(args)
        sim = Simulation.from_scenario(scenario)
    except SlingcraftError as exc:
        parser.error(str(exc))

    recorder = start_recording(args.run_dir, scenario, sim) if args.record else None
    try:
        if args.headless:
            drift = run_headless(sim, args.steps, args.dt, recorder)
            print(f"{scenario.name}: {sim.step_count} steps, relative energy drift {drift:+.3e}")
        else:
            run_viewer(sim, recorder)
    except SlingcraftError as exc:
        logger.error("Simulation stopped: %s", exc)
        if recorder is not None:
            recorder.log_event((sim.time, "diverged", -1, str(exc)))
        return 1
    finally:
        if recorder is not None:
            recorder.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
