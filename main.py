import argparse
import logging
import sys

import pygame

from config import *
from clock import SimulationClock, SimulationOptions, SimulationState
from bodies import build_planets, build_families
from data_loader import fetch_family_data
from simulation import Simulation
from renderer import Orrery


def _build_parser():
    parser = argparse.ArgumentParser(description="Orrery of the planets and the asteroid families.")
    parser.add_argument('--assets', default=ASSETS_SOURCE,
                        help="Directory or http(s) base URL holding the asteroid family JSON files.")
    parser.add_argument('--rate', type=float, default=JDPS, help="Simulated days per second.")
    parser.add_argument('--start-jd', type=float, default=START_JD, help="Julian date the simulation starts at.")
    parser.add_argument('--family', default=ALL_FAMILIES, help="Asteroid family shown at startup.")
    return parser


def load_simulation(args):
    """
    Loads every ephemeris before the first tick.

    Positions are computed from the reference epoch of each record, so the data must be
    complete before the clock starts moving.
    """
    family_data = fetch_family_data(ASTEROID_ASSETS, args.assets)
    planets = build_planets()
    families = build_families(family_data)
    state = SimulationState(SimulationClock(args.start_jd, args.rate), SimulationOptions(family_filter=args.family))
    return Simulation(planets, families, state)


def apply_ui_action(simulation, orrery, action):
    action_type, payload = action
    if action_type == "SELECT_FAMILY":
        simulation.select_family(payload)
    elif action_type == "PLAY":
        simulation.play()
    elif action_type == "PAUSE":
        simulation.pause()
    elif action_type == "TOGGLE_ORBITS":
        simulation.toggle_orbits()
    elif action_type == "SET_RATE":
        simulation.set_rate(payload)
    elif action_type == "RESET_VIEW":
        orrery.reset_view()


def main(argv=None):
    """
    The Main Entry Point.

    Loads the data, sets up the Pygame window and runs the main loop.

    The Loop:
    1.  **Event Handling**: mouse and keyboard, UI actions go to the simulation controls.
    2.  **Tick**: advance simulated time, move every body, reconcile the family filter.
    3.  **Draw**: apply the membership changes to the scene and render the frame.
    """
    args = _build_parser().parse_args(argv)
    simulation = load_simulation(args)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption("Orrery | Solar System |")

    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 18)
    ui_font = pygame.font.Font(None, 28)
    orrery = Orrery(simulation)

    running = True
    left_mouse_dragging = False
    middle_mouse_dragging = False
    last_mouse_pos = None

    while running:
        dt_ms = clock.tick(FPS)
        dt_seconds = dt_ms / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            ui_action = orrery.handle_ui_event(event)
            if ui_action:
                apply_ui_action(simulation, orrery, ui_action)
                continue

            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1 and not orrery.is_over_ui(event.pos):
                    left_mouse_dragging = True
                    last_mouse_pos = event.pos
                elif event.button == 2:
                    middle_mouse_dragging = True
                    last_mouse_pos = event.pos
                elif event.button == 3:
                    orrery.reset_view()
                elif event.button == 4:
                    orrery.camera_zoom *= 1.1
                elif event.button == 5:
                    orrery.camera_zoom = max(0.01, orrery.camera_zoom / 1.1)
            if event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    left_mouse_dragging = False
                elif event.button == 2:
                    middle_mouse_dragging = False
                if not left_mouse_dragging and not middle_mouse_dragging:
                    last_mouse_pos = None
            if event.type == pygame.MOUSEMOTION and last_mouse_pos:
                dx = event.pos[0] - last_mouse_pos[0]
                dy = event.pos[1] - last_mouse_pos[1]
                if left_mouse_dragging:
                    orrery.camera_rotation_y += dx * 0.5
                    orrery.camera_rotation_x = max(-89, min(89, orrery.camera_rotation_x - dy * 0.5))
                elif middle_mouse_dragging:
                    orrery.pan_offset_x += dx
                    orrery.pan_offset_y += dy
                last_mouse_pos = event.pos

        frame = simulation.tick(dt_seconds)
        orrery.apply_transitions(frame.transitions)
        orrery.draw(screen, font, ui_font)

    logging.info(f"Stopped at JD {simulation.clock.epoch_jd:.2f}.")
    pygame.quit()
    sys.exit()


if __name__ == '__main__':
    main()
