"""
Spot module for the minefield engine.

Represents individual grid spots with their state (hidden/flagged/revealed,
mine or empty) and the two player transitions: stepping and flagging.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class SpotState(Enum):
    """Possible states of a spot."""

    HIDDEN_EMPTY = auto()
    HIDDEN_MINE = auto()
    FLAGGED_EMPTY = auto()
    FLAGGED_MINE = auto()
    REVEALED_EMPTY = auto()
    EXPLODED_MINE = auto()


class StepResult(Enum):
    """Outcome of stepping on a spot."""

    PHEW = auto()
    BOOM = auto()
    INVALID = auto()


class FlagToggleResult(Enum):
    """Outcome of toggling a flag on a spot."""

    ADDED = auto()
    REMOVED = auto()
    NONE = auto()


EMPTY_STATES = frozenset(
    {SpotState.HIDDEN_EMPTY, SpotState.FLAGGED_EMPTY, SpotState.REVEALED_EMPTY}
)
MINE_STATES = frozenset(
    {SpotState.HIDDEN_MINE, SpotState.FLAGGED_MINE, SpotState.EXPLODED_MINE}
)

# Observation codes handed to renderers and agents
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_EXPLODED = 9


# ============================================================================
# Spot Data Class
# ============================================================================

@dataclass
class Spot:
    """
    Represents a single spot in the minefield grid.

    Attributes:
        state: Current state of the spot.
        neighboring_mines: Count of mines in adjacent spots (0-8). Only
            meaningful while the spot is empty; carried unchanged through
            hide/flag/reveal transitions.
    """

    state: SpotState = SpotState.HIDDEN_EMPTY
    neighboring_mines: int = 0

    def step(self) -> StepResult:
        """
        Step on this spot.

        Returns:
            PHEW if a hidden empty spot was revealed, BOOM if a hidden mine
            exploded, INVALID if the spot cannot be stepped on.
        """
        if self.state == SpotState.HIDDEN_EMPTY:
            self.state = SpotState.REVEALED_EMPTY
            return StepResult.PHEW
        if self.state == SpotState.HIDDEN_MINE:
            self.state = SpotState.EXPLODED_MINE
            return StepResult.BOOM
        return StepResult.INVALID

    def flag(self) -> FlagToggleResult:
        """
        Toggle a flag on this spot.

        Returns:
            ADDED or REMOVED for hidden/flagged spots, NONE if the spot has
            already been revealed or exploded.
        """
        toggled = _FLAG_TRANSITIONS.get(self.state)
        if toggled is None:
            return FlagToggleResult.NONE
        self.state = toggled
        if toggled in (SpotState.FLAGGED_EMPTY, SpotState.FLAGGED_MINE):
            return FlagToggleResult.ADDED
        return FlagToggleResult.REMOVED

    def is_resolved(self) -> bool:
        """Check if spot is correctly accounted for (revealed or flagged mine)."""
        return self.state in (SpotState.FLAGGED_MINE, SpotState.REVEALED_EMPTY)

    @property
    def is_mine(self) -> bool:
        """Check if spot holds a mine."""
        return self.state in MINE_STATES

    @property
    def is_empty(self) -> bool:
        """Check if spot holds no mine."""
        return self.state in EMPTY_STATES

    @property
    def is_hidden(self) -> bool:
        """Check if spot is hidden."""
        return self.state in (SpotState.HIDDEN_EMPTY, SpotState.HIDDEN_MINE)

    @property
    def is_flagged(self) -> bool:
        """Check if spot is flagged."""
        return self.state in (SpotState.FLAGGED_EMPTY, SpotState.FLAGGED_MINE)

    @property
    def is_revealed(self) -> bool:
        """Check if spot is revealed (including an exploded mine)."""
        return self.state in (SpotState.REVEALED_EMPTY, SpotState.EXPLODED_MINE)

    def to_observation(self) -> int:
        """
        Convert spot to observation value.

        Returns:
            -1: Hidden spot
            -2: Flagged spot
            0-8: Revealed spot with neighboring mine count
            9: Exploded mine
        """
        if self.is_hidden:
            return OBS_HIDDEN
        if self.is_flagged:
            return OBS_FLAGGED
        if self.state == SpotState.EXPLODED_MINE:
            return OBS_EXPLODED
        if self.state == SpotState.REVEALED_EMPTY:
            return self.neighboring_mines
        raise ValueError(f"Unhandled spot state: {self.state}")


_FLAG_TRANSITIONS = {
    SpotState.HIDDEN_EMPTY: SpotState.FLAGGED_EMPTY,
    SpotState.HIDDEN_MINE: SpotState.FLAGGED_MINE,
    SpotState.FLAGGED_EMPTY: SpotState.HIDDEN_EMPTY,
    SpotState.FLAGGED_MINE: SpotState.HIDDEN_MINE,
}
