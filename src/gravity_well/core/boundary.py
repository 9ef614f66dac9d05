# src/gravity_well/core/boundary.py
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, List
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .store import Handle, Kind
if TYPE_CHECKING:
    from .world import World


@dataclass
class Region:
    """Axis-aligned simulated region spanning (0, 0) to (width, height)."""
    width: float
    height: float

    def contains(self, pos: np.ndarray, radius: float = 0.0) -> bool:
        """
        Return True while a circle of `radius` at `pos` still overlaps the region.

        Each axis is allowed to range over [-radius, extent + radius].
        """
        x, y = float(pos[0]), float(pos[1])
        return (
            -radius <= x <= self.width + radius
            and -radius <= y <= self.height + radius
        )

    @property
    def center(self) -> np.ndarray:
        return np.array([self.width / 2.0, self.height / 2.0], dtype=float)

    def half_extent_limit(self, radius: float = 0.0) -> float:
        """Largest distance from the centre that stays inside on both axes, less `radius`."""
        return min(self.width, self.height) / 2.0 - radius

    def bounds(self) -> tuple[float, float, float, float]:
        return 0.0, self.width, 0.0, self.height

    def plot(self, ax=None, delta=0, **kwargs):
        """
        Plot the region outline using matplotlib.

        Parameters
        ----------
        ax : matplotlib.axes.Axes, optional
            Axes to draw on. If None, a new figure and axes are created.
        **kwargs :
            Extra keyword arguments passed to Rectangle, e.g.
            edgecolor, linewidth, linestyle.

        Returns
        -------
        ax or (fig, ax)
            If ax was provided, returns the same Axes.
            If ax was None, returns (fig, ax).
        """
        created_fig = False
        if ax is None:
            fig, ax = plt.subplots()
            created_fig = True

        kwargs.setdefault("fill", False)
        ax.add_patch(Rectangle((0.0, 0.0), self.width, self.height, **kwargs))

        ax.set_xlim(-delta, self.width + delta)
        ax.set_ylim(-delta, self.height + delta)
        ax.set_aspect("equal", adjustable="box")

        if created_fig:
            return fig, ax
        return ax


def despawn_off_region(world: World) -> List[Handle]:
    """Mark satellites that have fully left the region. Moons and the primary stay."""
    store = world.store
    gone: List[Handle] = []
    for h in store.query(Kind.SATELLITE):
        if not world.region.contains(store.pos[h], radius=store.radius[h]):
            if store.despawn(h, reason="left_region", t=world.time):
                gone.append(h)
    return gone
