"""Species color allocation.

Each simulation owns its own palette so that two engines running in the
same process never share color state.
"""

from typing import List, Set, Tuple

Color = Tuple[int, int, int]

DISTINCT_COLORS: Tuple[Color, ...] = (
    (255, 0, 0),      # red
    (0, 128, 255),    # blue
    (51, 204, 51),    # green
    (255, 153, 0),    # orange
    (153, 51, 204),   # purple
    (255, 255, 0),    # yellow
    (255, 0, 128),    # pink
    (0, 204, 204),    # cyan
    (128, 0, 0),      # maroon
    (0, 77, 153),     # navy
    (128, 128, 0),    # olive
    (204, 102, 179),  # magenta
    (102, 204, 102),  # lime
    (255, 128, 77),   # coral
    (77, 153, 230),   # sky blue
    (230, 77, 77),    # salmon
    (128, 0, 128),    # dark purple
    (0, 153, 128),    # teal
    (204, 204, 51),   # gold
    (230, 128, 204),  # light pink
    (77, 77, 204),    # indigo
    (179, 77, 0),     # brown
    (0, 179, 77),     # emerald
    (204, 0, 102),    # crimson
)


def to_hex(color: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


class SpeciesPalette:
    """Hands out distinct colors, reusing them only after all are taken."""

    def __init__(self, colors: Tuple[Color, ...] = DISTINCT_COLORS) -> None:
        if not colors:
            raise ValueError("SpeciesPalette needs at least one color")
        self.colors: List[Color] = list(colors)
        self._used: Set[int] = set()
        self._counter = 0

    def allocate(self) -> str:
        """Return the next unused color as a hex string."""
        if len(self._used) >= len(self.colors):
            self._used.clear()
            self._counter = 0

        index = self._counter % len(self.colors)
        while index in self._used:
            index = (index + 1) % len(self.colors)

        self._used.add(index)
        self._counter += 1
        return to_hex(self.colors[index])

    def reset(self) -> None:
        self._used.clear()
        self._counter = 0
