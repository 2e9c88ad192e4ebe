"""
Unit tests for Spot class.

Tests spot transitions for stepping and flagging, resolution and
observation conversion.
"""
import pytest
from minefield import FlagToggleResult, Spot, SpotState, StepResult


# ============================================================================
# Spot Initialization Tests
# ============================================================================

class TestSpotInitialization:
    """Test spot creation and default values."""

    def test_default_spot_is_hidden_empty(self) -> None:
        """New spot should be hidden and empty."""
        spot = Spot()
        assert spot.state == SpotState.HIDDEN_EMPTY
        assert spot.is_hidden is True
        assert spot.is_empty is True
        assert spot.is_mine is False

    def test_default_spot_has_zero_neighboring_mines(self) -> None:
        """New spot should have 0 neighboring mines."""
        assert Spot().neighboring_mines == 0


# ============================================================================
# Spot Step Tests
# ============================================================================

class TestSpotStep:
    """Test spot step transitions."""

    def test_step_hidden_empty_reveals(self, numbered_spot: Spot) -> None:
        """Stepping on a hidden empty spot reveals it and keeps its count."""
        assert numbered_spot.step() == StepResult.PHEW
        assert numbered_spot.state == SpotState.REVEALED_EMPTY
        assert numbered_spot.neighboring_mines == 3

    def test_step_hidden_mine_explodes(self, mine_spot: Spot) -> None:
        """Stepping on a hidden mine explodes it."""
        assert mine_spot.step() == StepResult.BOOM
        assert mine_spot.state == SpotState.EXPLODED_MINE

    @pytest.mark.parametrize("state", [
        SpotState.FLAGGED_EMPTY,
        SpotState.FLAGGED_MINE,
        SpotState.REVEALED_EMPTY,
        SpotState.EXPLODED_MINE,
    ])
    def test_step_other_states_is_invalid(self, state: SpotState) -> None:
        """Flagged, revealed and exploded spots cannot be stepped on."""
        spot = Spot(state=state, neighboring_mines=2)
        assert spot.step() == StepResult.INVALID
        assert spot.state == state
        assert spot.neighboring_mines == 2


# ============================================================================
# Spot Flag Tests
# ============================================================================

class TestSpotFlag:
    """Test spot flag toggling."""

    def test_flag_hidden_empty(self, numbered_spot: Spot) -> None:
        """Flagging a hidden empty spot keeps its count."""
        assert numbered_spot.flag() == FlagToggleResult.ADDED
        assert numbered_spot.state == SpotState.FLAGGED_EMPTY
        assert numbered_spot.neighboring_mines == 3
        assert numbered_spot.is_flagged is True

    def test_unflag_flagged_empty(self, numbered_spot: Spot) -> None:
        """Unflagging returns an empty spot to hidden."""
        numbered_spot.flag()
        assert numbered_spot.flag() == FlagToggleResult.REMOVED
        assert numbered_spot.state == SpotState.HIDDEN_EMPTY
        assert numbered_spot.neighboring_mines == 3

    def test_flag_twice_on_mine(self, mine_spot: Spot) -> None:
        """Flagging a mine twice adds then removes the flag."""
        assert mine_spot.flag() == FlagToggleResult.ADDED
        assert mine_spot.state == SpotState.FLAGGED_MINE
        assert mine_spot.flag() == FlagToggleResult.REMOVED
        assert mine_spot.state == SpotState.HIDDEN_MINE

    @pytest.mark.parametrize("state", [
        SpotState.REVEALED_EMPTY,
        SpotState.EXPLODED_MINE,
    ])
    def test_flag_revealed_states_is_none(self, state: SpotState) -> None:
        """Revealed and exploded spots cannot be flagged."""
        spot = Spot(state=state)
        assert spot.flag() == FlagToggleResult.NONE
        assert spot.state == state


# ============================================================================
# Spot Resolution Tests
# ============================================================================

class TestSpotResolved:
    """Test which states count as resolved."""

    @pytest.mark.parametrize("state, expected", [
        (SpotState.HIDDEN_EMPTY, False),
        (SpotState.HIDDEN_MINE, False),
        (SpotState.FLAGGED_EMPTY, False),
        (SpotState.FLAGGED_MINE, True),
        (SpotState.REVEALED_EMPTY, True),
        (SpotState.EXPLODED_MINE, False),
    ])
    def test_is_resolved(self, state: SpotState, expected: bool) -> None:
        """Only revealed empty spots and flagged mines are resolved."""
        assert Spot(state=state).is_resolved() is expected


# ============================================================================
# Spot Observation Tests
# ============================================================================

class TestSpotObservation:
    """Test spot observation values."""

    def test_hidden_spot_observation(self, hidden_spot: Spot, mine_spot: Spot) -> None:
        """Hidden spots return -1 whether or not they hold a mine."""
        assert hidden_spot.to_observation() == -1
        assert mine_spot.to_observation() == -1

    def test_flagged_spot_observation(self, mine_spot: Spot) -> None:
        """Flagged spot returns -2."""
        mine_spot.flag()
        assert mine_spot.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_spot_observation(self, count: int) -> None:
        """Revealed spot returns its neighboring mine count."""
        spot = Spot(neighboring_mines=count)
        spot.step()
        assert spot.to_observation() == count

    def test_exploded_mine_observation(self, mine_spot: Spot) -> None:
        """Exploded mine returns 9."""
        mine_spot.step()
        assert mine_spot.to_observation() == 9
