import matplotlib.pyplot as plt
from matplotlib.widgets import Slider
import numpy as np

from config import START_JD, ASTEROID_ASSETS, ASSETS_SOURCE, ALL_FAMILIES, ORBIT_SCALE
from bodies import build_planets, build_families
from data_loader import fetch_family_data
from physics import propagate_table, format_jd

# Top-down (ecliptic plane) view of the planets and asteroid families, with a slider
# to scrub through time.  Handy for checking the data without the pygame window.
family_filter = ALL_FAMILIES
slider_range_days = 3650


def snapshot(planets, families, jd):
    """
    Positions (AU) of every planet and family at Julian date jd.

    Returns:
        dict: {name: (N, 3) array}, planets as single-row arrays. Non-finite rows are dropped.
    """
    positions = {}
    for planet in planets:
        planet.move(jd)
        if planet.visible:
            positions[planet.name] = planet.position.reshape(1, 3)
    for family in families:
        points = propagate_table(family.table, jd)
        positions[family.name] = points[np.all(np.isfinite(points), axis=-1)]
    return positions


def main():
    planets = build_planets()
    families = [family for family in build_families(fetch_family_data(ASTEROID_ASSETS, ASSETS_SOURCE))
                if family_filter in (ALL_FAMILIES, family.name)]

    fig, ax = plt.subplots(figsize=(9, 9))
    plt.subplots_adjust(bottom=0.15)  # Make room for the slider
    fig.patch.set_facecolor('black')
    ax.set_facecolor('black')
    ax.set_aspect('equal')
    ax.grid(True, color='grey', linestyle='-', linewidth=0.5, alpha=0.3)
    ax.tick_params(axis='x', colors='grey', labelsize=6)
    ax.tick_params(axis='y', colors='grey', labelsize=6)
    for spine in ax.spines.values():
        spine.set_color('grey')
    ax.set_xlabel("x (AU)", color='grey')
    ax.set_ylabel("y (AU)", color='grey')
    ax.set_xlim(-6, 6)
    ax.set_ylim(-6, 6)

    for planet in planets:
        path = planet.orbit_path / ORBIT_SCALE  # orbit paths are stored in scene units
        ax.plot(path[:, 0], path[:, 1], color=np.array(planet.color) / 255, linewidth=0.5, alpha=0.6)

    ax.scatter([0], [0], s=40, c='gold')
    family_scat = ax.scatter([], [], s=1, c='white', edgecolors='none')
    planet_scat = ax.scatter([], [], s=20, c=[np.array(p.color) / 255 for p in planets])

    def update_plot(day_offset):
        jd = START_JD + day_offset
        positions = snapshot(planets, families, jd)
        planet_xy = np.vstack([positions[p.name][:, :2] for p in planets if p.name in positions])
        family_points = [positions[f.name][:, :2] for f in families if len(positions[f.name])]
        family_xy = np.vstack(family_points) if family_points else np.empty((0, 2))
        planet_scat.set_offsets(planet_xy)
        family_scat.set_offsets(family_xy)
        ax.set_title(f"{family_filter} | {format_jd(jd)}", color='white', fontsize=12)
        fig.canvas.draw_idle()

    ax_days = plt.axes([0.2, 0.04, 0.65, 0.03], facecolor='grey')
    slider_days = Slider(ax_days, 'Days', -slider_range_days, slider_range_days, valinit=0, color='grey')
    slider_days.label.set_color('grey')
    slider_days.valtext.set_color('grey')
    slider_days.on_changed(update_plot)
    update_plot(0)
    plt.show()


if __name__ == "__main__":
    main()
