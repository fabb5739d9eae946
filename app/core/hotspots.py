"""Wilderness hotspot regions on the 800x800 reference plane."""

from dataclasses import dataclass
from typing import Optional


# Reference plane size (pixels of the 800px Wilderness map thumbnail)
PLANE_SIZE = 800.0

# Label for deaths placed uniformly across the plane
UNASSIGNED_LABEL = "Random Location"


@dataclass(frozen=True)
class HotspotRegion:
    """
    A named circular area where synthetic deaths cluster.

    Coordinates and radius are in reference plane pixels. The density
    weight is informational only; selection among hotspots is uniform.
    """

    x: float
    y: float
    radius: float
    density: float
    name: str


# Rough estimates of PvP/PvM hotspots for demonstration purposes
HOTSPOTS: tuple[HotspotRegion, ...] = (
    # Low level PvP, common entry
    HotspotRegion(x=150, y=700, radius=80, density=0.4, name="Edgeville Wilderness (Lvl 1-5)"),
    # Prayer training, pkers
    HotspotRegion(x=650, y=150, radius=70, density=0.3, name="Chaos Altar / Temple"),
    # High risk, high reward
    HotspotRegion(x=400, y=400, radius=90, density=0.5, name="Revenant Caves Entrance"),
    # PvM + PvP
    HotspotRegion(x=600, y=550, radius=60, density=0.25, name="Wilderness Slayer/Lava Dragons"),
    # Multi-combat, bosses
    HotspotRegion(x=400, y=100, radius=100, density=0.35, name="Deep Wilderness Bosses"),
)


def find_hotspot(name: str) -> Optional[HotspotRegion]:
    """Look up a hotspot by display name."""
    for hotspot in HOTSPOTS:
        if hotspot.name == name:
            return hotspot
    return None
