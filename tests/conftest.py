"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import FieldConfig, Minefield, Spot, SpotState


class ScriptedRandom:
    """Random source that replays fixed draws and records each bound."""

    def __init__(self, draws: Iterable[int] = ()) -> None:
        self.draws = list(draws)
        self.calls: List[int] = []

    def randrange(self, n: int) -> int:
        self.calls.append(n)
        if self.draws:
            return self.draws.pop(0)
        return 0


# ============================================================================
# Minefield Fixtures
# ============================================================================

@pytest.fixture
def empty_field() -> Minefield:
    """Create a 3x4 field with no mines."""
    return Minefield(3, 4)


@pytest.fixture
def make_field() -> Callable[[int, int, Iterable[Tuple[int, int]]], Minefield]:
    """Factory building a field with mines at exact coordinates."""
    def _make(
        width: int, height: int, mines: Iterable[Tuple[int, int]]
    ) -> Minefield:
        field = Minefield(width, height)
        for x, y in mines:
            field._place_mine(x, y)
        return field
    return _make


@pytest.fixture
def two_mine_field(make_field) -> Minefield:
    """
    3x4 field with mines at (2, 0) and (0, 3).

        0 1 2
    0 [   1 * ]
    1 [   1 1 ]
    2 [ 1 1   ]
    3 [ * 1   ]
    """
    return make_field(3, 4, [(2, 0), (0, 3)])


@pytest.fixture
def maze_field(make_field) -> Minefield:
    """
    10x10 field with six mines splitting it into regions.

        0 1 2 3 4 5 6 7 8 9
    0 [     1 * 1           ]
    1 [     1 1 1           ]
    2 [           1 1 1     ]
    3 [   1 1 1   1 * 1 1 1 ]
    4 [   1 * 1   1 1 1 1 * ]
    5 [   1 1 1         1 1 ]
    6 [         1 1 2 1 1   ]
    7 [         1 * 2 * 1   ]
    8 [         1 1 2 1 1   ]
    9 [                     ]
    """
    return make_field(
        10, 10, [(2, 4), (5, 7), (7, 7), (9, 4), (6, 3), (3, 0)]
    )


@pytest.fixture
def scripted_random() -> ScriptedRandom:
    """Random source that always draws index 0."""
    return ScriptedRandom()


@pytest.fixture
def make_random() -> Callable[[Iterable[int]], ScriptedRandom]:
    """Factory for random sources replaying the given draws."""
    return ScriptedRandom


# ============================================================================
# Spot Fixtures
# ============================================================================

@pytest.fixture
def hidden_spot() -> Spot:
    """Create a hidden empty spot."""
    return Spot()


@pytest.fixture
def mine_spot() -> Spot:
    """Create a hidden mine."""
    return Spot(state=SpotState.HIDDEN_MINE)


@pytest.fixture
def numbered_spot() -> Spot:
    """Create a hidden empty spot with neighboring mines."""
    return Spot(neighboring_mines=3)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def small_config() -> FieldConfig:
    """Small configuration for quick environment tests."""
    return FieldConfig(4, 4, 2)


@pytest.fixture
def tiny_config() -> FieldConfig:
    """Two spots, one mine."""
    return FieldConfig(2, 1, 1)
