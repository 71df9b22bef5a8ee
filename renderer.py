import pygame
import math
import numpy as np
from config import *
from physics import format_jd


# --- Pygame Specific Helper Functions ---
def initial_world_rotation(points):
    """
    Adjusts raw ecliptic coordinates to match the screen's coordinate system.
    The ecliptic Z-axis (out of the planet plane) becomes the screen's up/down axis.
    Works on a single point or an (N, 3) array.
    """
    points = np.asarray(points, dtype=float)
    return np.stack([points[..., 0], -points[..., 2], points[..., 1]], axis=-1)


def camera_view_rotation(points, angle_x_deg, angle_y_deg):
    """ Rotates points (already in world space) by the camera pitch and yaw angles. """
    points = np.asarray(points, dtype=float)
    rad_x = math.radians(angle_x_deg)
    rad_y = math.radians(angle_y_deg)
    x, y, z = points[..., 0], points[..., 1], points[..., 2]
    y_pitched = y * math.cos(rad_x) - z * math.sin(rad_x)
    z_pitched = y * math.sin(rad_x) + z * math.cos(rad_x)
    x_yawed = x * math.cos(rad_y) + z_pitched * math.sin(rad_y)
    z_yawed = -x * math.sin(rad_y) + z_pitched * math.cos(rad_y)
    return np.stack([x_yawed, y_pitched, z_yawed], axis=-1)


def project_3d_to_2d(points, camera_z_offset=CAMERA_Z_OFFSET, scale_factor=20, perspective_strength=0.005):
    """
    Projects 3D points onto the 2D screen.

    Things further away (larger z) appear smaller and closer to the centre of the screen:
    Perspective Factor = 1 / (z * strength + offset)
    Projected X = x * scale * Perspective Factor
    Projected Y = y * scale * Perspective Factor

    Returns:
        tuple: integer screen x and y arrays, and the perspective factor array.
    """
    points = np.asarray(points, dtype=float)
    epsilon = 1e-6
    divisor = (points[..., 2] * perspective_strength) + camera_z_offset + epsilon
    with np.errstate(divide='ignore'):
        perspective = np.where(divisor <= epsilon, 0.0001, 1.0 / divisor)

    sx_float = SCREEN_WIDTH // 2 + points[..., 0] * scale_factor * perspective
    sy_float = SCREEN_HEIGHT // 2 + points[..., 1] * scale_factor * perspective

    # Clamp values to prevent Pygame from crashing with huge numbers
    sx = np.clip(np.nan_to_num(sx_float, nan=COORD_MAX, posinf=COORD_MAX, neginf=COORD_MIN), COORD_MIN, COORD_MAX).astype(int)
    sy = np.clip(np.nan_to_num(sy_float, nan=COORD_MAX, posinf=COORD_MAX, neginf=COORD_MIN), COORD_MIN, COORD_MAX).astype(int)
    return sx, sy, perspective


class PointCloud:
    """Scene representation of one asteroid family, drawn as single pixels."""

    def __init__(self, family, color=ASTEROID_WHITE):
        self.family = family
        self.color = color


# --- Main Orrery Class ---
class Orrery:
    """
    Draws the Simulation to a pygame surface.

    Functions:
    1.  **Scene**: keeps the list of family point clouds currently shown, changed only
        through the membership transitions of each tick.
    2.  **Camera**: rotation, zoom and pan, driven from main.py.
    3.  **UI**: family menu, play/pause/orbit buttons, element table.
    """

    def __init__(self, simulation):
        self.simulation = simulation
        self.scene = []
        for family in simulation.families:
            family.representation = PointCloud(family, family.color)
            if family.active:
                self.scene.append(family.representation)

        self.camera_rotation_x = 30
        self.camera_rotation_y = 0
        self.pan_offset_x = 0
        self.pan_offset_y = 0
        self.camera_zoom = DEFAULT_CAMERA_ZOOM

        # UI Layout
        margin = 5
        button_height = 28
        self.menu_buttons = []
        x = SCREEN_WIDTH - margin
        for name in reversed(simulation.family_names()):
            width = 12 + 8 * len(name)
            x -= width
            self.menu_buttons.insert(0, (name, pygame.Rect(x, margin, width, button_height)))
            x -= margin

        bottom = SCREEN_HEIGHT - button_height - margin
        self.play_button_rect = pygame.Rect(margin, bottom, 70, button_height)
        self.pause_button_rect = pygame.Rect(margin * 2 + 70, bottom, 70, button_height)
        self.orbit_button_rect = pygame.Rect(margin * 3 + 140, bottom, 110, button_height)

    def reset_view(self):
        """This bit resets the camera view to the default state."""
        self.camera_rotation_x = 30
        self.camera_rotation_y = 0
        self.pan_offset_x = 0
        self.pan_offset_y = 0
        self.camera_zoom = DEFAULT_CAMERA_ZOOM

    def apply_transitions(self, transitions):
        """Adds or removes family point clouds following the membership changes of a tick."""
        for transition in transitions:
            cloud = transition.family.representation
            if cloud is None:
                continue
            if transition.active and cloud not in self.scene:
                self.scene.append(cloud)
            elif not transition.active and cloud in self.scene:
                self.scene.remove(cloud)

    def to_screen(self, scene_points, perspective_strength=0.005):
        world = initial_world_rotation(scene_points)
        cam = camera_view_rotation(world, self.camera_rotation_x, self.camera_rotation_y)
        sx, sy, perspective = project_3d_to_2d(cam, scale_factor=self.camera_zoom, perspective_strength=perspective_strength)
        return sx + self.pan_offset_x, sy + self.pan_offset_y, perspective

    def handle_ui_event(self, event):
        """
        Handles clicks on the menu and buttons, and the keyboard shortcuts.

        Returns:
            tuple or None: (action, payload) for main.py to apply to the simulation.
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for name, rect in self.menu_buttons:
                if rect.collidepoint(event.pos):
                    return ("SELECT_FAMILY", name)
            if self.play_button_rect.collidepoint(event.pos):
                return ("PLAY", None)
            if self.pause_button_rect.collidepoint(event.pos):
                return ("PAUSE", None)
            if self.orbit_button_rect.collidepoint(event.pos):
                return ("TOGGLE_ORBITS", None)

        if event.type == pygame.KEYDOWN:
            clock = self.simulation.clock
            if event.key == pygame.K_SPACE:
                return ("PLAY", None) if clock.paused else ("PAUSE", None)
            elif event.key == pygame.K_o:
                return ("TOGGLE_ORBITS", None)
            elif event.key in (pygame.K_UP, pygame.K_PLUS, pygame.K_EQUALS):
                return ("SET_RATE", (clock.rate_per_second or clock.nominal_rate) * 2)
            elif event.key in (pygame.K_DOWN, pygame.K_MINUS):
                return ("SET_RATE", clock.rate_per_second / 2)
        return None

    def is_over_ui(self, pos):
        rects = [rect for _, rect in self.menu_buttons]
        rects += [self.play_button_rect, self.pause_button_rect, self.orbit_button_rect]
        return any(rect.collidepoint(pos) for rect in rects)

    def draw(self, screen, font, ui_font):
        """
        Renders the entire scene.

        Steps:
        1.  Clear screen and draw the Sun.
        2.  Orbit paths, if enabled.
        3.  Family point clouds in the scene, then planets sorted by depth.
        4.  UI overlay (menu, buttons, time, element table).
        """
        screen.fill(BACKGROUND)
        simulation = self.simulation

        # Sun
        sun_x, sun_y, _ = self.to_screen(np.zeros(3))
        pygame.draw.circle(screen, SUN_GLOW, (int(sun_x), int(sun_y)), SUN_RADIUS_PIXELS)
        pygame.draw.circle(screen, SUN_CORE, (int(sun_x), int(sun_y)), SUN_RADIUS_PIXELS // 2)

        if simulation.options.show_orbits:
            for planet in simulation.planets:
                if not np.all(np.isfinite(planet.orbit_path)):
                    continue
                ox, oy, _ = self.to_screen(planet.orbit_path)
                color = tuple(max(int(c * 0.4), ORBIT_GREY[0]) for c in planet.color)
                pygame.draw.lines(screen, color, True, list(zip(ox.tolist(), oy.tolist())), 1)

        for cloud in self.scene:
            points = cloud.family.scene_positions
            if points.size == 0:
                continue
            px, py, _ = self.to_screen(points)
            on_screen = (px >= 0) & (px < SCREEN_WIDTH) & (py >= 0) & (py < SCREEN_HEIGHT)
            for x, y in zip(px[on_screen].tolist(), py[on_screen].tolist()):
                screen.set_at((x, y), cloud.color)

        drawable = []
        for planet in simulation.planets:
            if not planet.visible:
                continue
            world = initial_world_rotation(planet.scene_position)
            cam = camera_view_rotation(world, self.camera_rotation_x, self.camera_rotation_y)
            drawable.append((cam[2], planet, cam))
        drawable.sort(key=lambda item: item[0], reverse=True)

        for _, planet, cam in drawable:
            sx, sy, perspective = project_3d_to_2d(cam, scale_factor=self.camera_zoom)
            sx = int(sx) + self.pan_offset_x
            sy = int(sy) + self.pan_offset_y
            radius = max(MIN_PLANET_RADIUS_PIXELS, min(MAX_PLANET_RADIUS_PIXELS, planet.size * PLANET_RADIUS_PIXELS))
            pygame.draw.circle(screen, planet.color, (sx, sy), int(radius))
            name_surface = font.render(planet.name, True, LIGHT_GREY)
            screen.blit(name_surface, name_surface.get_rect(center=(sx, sy + radius + 8)))

        self.draw_ui(screen, font, ui_font)
        pygame.display.flip()

    def draw_ui(self, screen, font, ui_font):
        simulation = self.simulation
        selected = simulation.options.family_filter

        for name, rect in self.menu_buttons:
            pygame.draw.rect(screen, MID_GREY if name == selected else GREY, rect)
            label = font.render(name, True, WHITE)
            screen.blit(label, label.get_rect(center=rect.center))

        for rect, text in ((self.play_button_rect, "Play"), (self.pause_button_rect, "Pause"),
                           (self.orbit_button_rect, "Hide orbits" if simulation.options.show_orbits else "Show orbits")):
            pygame.draw.rect(screen, GREY, rect)
            label = font.render(text, True, WHITE)
            screen.blit(label, label.get_rect(center=rect.center))

        status = f"{format_jd(simulation.clock.epoch_jd)} | {simulation.clock.rate_per_second:g} days/s"
        screen.blit(ui_font.render(status, True, WHITE), (25, 45))

        # Info box with the element table of the selected family
        screen.blit(ui_font.render(simulation.info_title(), True, WHITE), (25, 80))
        table = simulation.family_table()
        if not table.empty:
            for row, line in enumerate(table.to_string(index=False).splitlines()):
                screen.blit(font.render(line, True, LIGHT_GREY), (25, 110 + row * 16))
