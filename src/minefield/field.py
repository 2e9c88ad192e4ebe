"""
Minefield module.

Implements the grid of spots with mine placement, stepping with flood
reveal, flagging, chorded auto-step and clear detection.
"""
import copy
import logging
import random
from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Protocol, Tuple

import numpy as np

from .spot import EMPTY_STATES, FlagToggleResult, Spot, SpotState, StepResult


logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class RandomSource(Protocol):
    """Anything that draws uniform integers in ``[0, n)``."""

    def randrange(self, n: int) -> int:
        ...


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class FieldConfig:
    """
    Configuration for a minefield.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines: Requested number of mines. Clamped to the cell count when
            the field is built.
    """

    width: int = 9
    height: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 0 or self.height < 0:
            raise ValueError("Field dimensions cannot be negative")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")


# Preset difficulty levels
BEGINNER = FieldConfig(9, 9, 10)
INTERMEDIATE = FieldConfig(16, 16, 40)
EXPERT = FieldConfig(30, 16, 99)


# ============================================================================
# Minefield Class
# ============================================================================

class Minefield:
    """
    Minesweeper grid state machine.

    Spots are stored row-major, ``index = y * width + x``, with (0, 0) the
    top-left corner. Build with ``Minefield(width, height).with_mines(n)``;
    afterwards only ``step``, ``toggle_flag`` and ``auto_step`` mutate it.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("Field dimensions cannot be negative")
        self._width = width or 1
        self._height = height or 1
        self._mines = 0
        self._mines_placed = False
        self._spots: List[Spot] = [
            Spot() for _ in range(self._width * self._height)
        ]

    @classmethod
    def from_config(
        cls, config: FieldConfig, rng: Optional[RandomSource] = None
    ) -> "Minefield":
        """Create a field from a configuration and place its mines."""
        return cls(config.width, config.height).with_mines(config.mines, rng)

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def with_mines(
        self, count: int, rng: Optional[RandomSource] = None
    ) -> "Minefield":
        """
        Randomly place mines in the field.

        Draws from a shrinking pool of free cell indices, so exactly
        ``count`` draws are made however dense the field gets.

        Args:
            count: Number of mines, clamped to the number of spots.
            rng: Source of uniform integers; a fresh ``random.Random``
                when omitted.

        Returns:
            This field, for chaining onto the constructor.
        """
        if count < 0:
            raise ValueError("Number of mines cannot be negative")
        if self._mines_placed:
            raise RuntimeError("Mines have already been placed")
        if rng is None:
            rng = random.Random()

        spot_count = len(self._spots)
        mines = min(count, spot_count)

        remaining = list(range(spot_count))
        for _ in range(mines):
            pick = rng.randrange(len(remaining))
            if not 0 <= pick < len(remaining):
                raise ValueError(
                    f"Random draw {pick} outside [0, {len(remaining)})"
                )
            remaining[pick], remaining[-1] = remaining[-1], remaining[pick]
            index = remaining.pop()
            y, x = divmod(index, self._width)
            self._place_mine(x, y)

        self._mines = mines
        self._mines_placed = True
        logger.debug(
            "Placed %d mines in %dx%d field",
            self._mines, self._width, self._height,
        )
        return self

    def _place_mine(self, x: int, y: int) -> None:
        """Put a mine at (x, y) and bump the counts of empty neighbors."""
        if not self._is_valid_position(x, y):
            raise ValueError(f"Mine position ({x}, {y}) is outside the field")

        spot = self._spots[self._index(x, y)]
        if spot.state not in EMPTY_STATES:
            return
        spot.state = SpotState.HIDDEN_MINE
        spot.neighboring_mines = 0

        for nx, ny in self.neighbors(x, y):
            neighbor = self._spots[self._index(nx, ny)]
            if neighbor.state in EMPTY_STATES:
                neighbor.neighboring_mines += 1

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, x: int, y: int) -> List[Coord]:
        """
        Get in-bounds neighboring positions.

        Args:
            x: Column of center spot.
            y: Row of center spot.

        Returns:
            List of (x, y) tuples, at most 8.
        """
        result = []
        for ny in (y - 1, y, y + 1):
            for nx in (x - 1, x, x + 1):
                if nx == x and ny == y:
                    continue
                if self._is_valid_position(nx, ny):
                    result.append((nx, ny))
        return result

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within field bounds."""
        return 0 <= x < self._width and 0 <= y < self._height

    def _index(self, x: int, y: int) -> int:
        return y * self._width + x

    # ========================================================================
    # Player Actions (Mid-level)
    # ========================================================================

    def step(self, x: int, y: int) -> StepResult:
        """
        Step on the spot at the given position.

        A revealed spot with no neighboring mines flood-reveals the
        surrounding empty region. Flagged spots are left alone.

        Args:
            x: Column to step on.
            y: Row to step on.

        Returns:
            Result of the step on the spot itself; flood reveal never
            changes it.
        """
        if not self._is_valid_position(x, y):
            return StepResult.INVALID

        spot = self._spots[self._index(x, y)]
        result = spot.step()

        if result == StepResult.BOOM:
            logger.debug("Mine exploded at (%d, %d)", x, y)
        elif result == StepResult.PHEW and spot.neighboring_mines == 0:
            self._flood_reveal(x, y)

        return result

    def _flood_reveal(self, x: int, y: int) -> None:
        """Reveal hidden empty spots reachable through zero-count spots."""
        revealed = 0
        to_visit = [(x, y)]
        while to_visit:
            cx, cy = to_visit.pop()
            for nx, ny in self.neighbors(cx, cy):
                neighbor = self._spots[self._index(nx, ny)]
                if neighbor.state != SpotState.HIDDEN_EMPTY:
                    continue
                neighbor.state = SpotState.REVEALED_EMPTY
                revealed += 1
                if neighbor.neighboring_mines == 0:
                    to_visit.append((nx, ny))

        logger.debug("Flood reveal from (%d, %d) uncovered %d spots", x, y, revealed)

    def auto_step(self, x: int, y: int) -> StepResult:
        """
        Chord: step on every neighbor of a revealed spot.

        Only fires when the number of flagged neighbors equals the spot's
        neighboring mine count. Stops at the first explosion, keeping any
        reveals made before it.

        Args:
            x: Column of the revealed spot.
            y: Row of the revealed spot.

        Returns:
            INVALID if the chord cannot be performed, BOOM if a neighbor
            exploded, PHEW otherwise.
        """
        if not self._is_valid_position(x, y):
            return StepResult.INVALID
        spot = self._spots[self._index(x, y)]
        if spot.state != SpotState.REVEALED_EMPTY:
            return StepResult.INVALID
        if self._count_adjacent_flags(x, y) != spot.neighboring_mines:
            return StepResult.INVALID

        for nx, ny in self.neighbors(x, y):
            neighbor = self._spots[self._index(nx, ny)]
            if neighbor.step() == StepResult.BOOM:
                return StepResult.BOOM
        return StepResult.PHEW

    def _count_adjacent_flags(self, x: int, y: int) -> int:
        """Count flagged spots adjacent to position."""
        count = 0
        for nx, ny in self.neighbors(x, y):
            if self._spots[self._index(nx, ny)].is_flagged:
                count += 1
        return count

    def toggle_flag(self, x: int, y: int) -> FlagToggleResult:
        """
        Toggle flag on a spot.

        Returns:
            ADDED or REMOVED, NONE if out of bounds or not flaggable.
        """
        if not self._is_valid_position(x, y):
            return FlagToggleResult.NONE
        return self._spots[self._index(x, y)].flag()

    def is_cleared(self) -> bool:
        """Check if every spot is revealed or a correctly flagged mine."""
        return all(spot.is_resolved() for spot in self._spots)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def mines(self) -> int:
        return self._mines

    def spot(self, x: int, y: int) -> Optional[Spot]:
        """Get a copy of the spot at position, or None if invalid."""
        if not self._is_valid_position(x, y):
            return None
        return replace(self._spots[self._index(x, y)])

    def spots(self) -> Iterator[Tuple[Coord, Spot]]:
        """Iterate over ``((x, y), spot)`` pairs in row-major order."""
        for index, spot in enumerate(self._spots):
            y, x = divmod(index, self._width)
            yield (x, y), replace(spot)

    def flag_count(self) -> int:
        """Count flagged spots in the field."""
        return sum(1 for spot in self._spots if spot.is_flagged)

    def get_observation(self) -> np.ndarray:
        """
        Get field state as numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with neighboring mine count
                9 = exploded mine
        """
        values = [spot.to_observation() for spot in self._spots]
        return np.array(values, dtype=np.int8).reshape(self._height, self._width)

    def copy(self) -> "Minefield":
        """Return an independent copy of this field."""
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        return (
            f"Minefield(width={self._width}, height={self._height}, "
            f"mines={self._mines})"
        )
