"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src and the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Cell, GameConfig, GameState


# ============================================================================
# Scripted Random Source
# ============================================================================

class ScriptedRng:
    """
    Stand-in for numpy's Generator that always draws a fixed layout.

    Mines are given as (x, y) positions; every one of them must be
    eligible, otherwise the first move landed too close to a mine.
    """

    def __init__(self, width: int, mines) -> None:
        self.indices = [y * width + x for x, y in mines]

    def choice(self, a, size=None, replace=True):
        eligible = {int(index) for index in a}
        blocked = [index for index in self.indices if index not in eligible]
        assert not blocked, f"Scripted mines in exclusion zone: {blocked}"
        assert size == len(self.indices)
        assert replace is False
        return np.array(self.indices)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def default_game() -> GameState:
    """Create a default 10x10 game with 15 mines."""
    return GameState(rng=np.random.default_rng(1234))


@pytest.fixture
def beginner_game() -> GameState:
    """Create a beginner difficulty game."""
    return GameState(GameConfig(9, 9, 10), rng=np.random.default_rng(7))


@pytest.fixture
def empty_game() -> GameState:
    """Create a game with no mines for cascade testing."""
    return GameState(GameConfig(5, 5, 0))


@pytest.fixture
def scripted_game():
    """Factory for games whose mines land on the given (x, y) cells."""
    def _make(width: int, height: int, mines) -> GameState:
        config = GameConfig(width, height, len(mines))
        return GameState(config, rng=ScriptedRng(width, mines))
    return _make


@pytest.fixture
def walled_game(scripted_game) -> GameState:
    """
    7x3 game with a full column of mines at x=3.

    Revealing (0, 1) first opens x=0..2 and leaves the right side hidden.
    """
    return scripted_game(7, 3, [(3, 0), (3, 1), (3, 2)])


@pytest.fixture
def gapped_game(scripted_game) -> GameState:
    """7x3 game with mines at (3, 0) and (3, 2); (2, 1) shows 2."""
    return scripted_game(7, 3, [(3, 0), (3, 2)])


# ============================================================================
# Inspection Helpers
# ============================================================================

@pytest.fixture
def mine_positions():
    """Read the true mine layout of a game."""
    def _positions(game: GameState):
        width = game.config.width
        return {
            (index % width, index // width)
            for index, cell in enumerate(game._grid)
            if cell.is_mine
        }
    return _positions


@pytest.fixture
def revealed_positions():
    """Read the set of revealed cells of a game."""
    def _positions(game: GameState):
        width = game.config.width
        return {
            (index % width, index // width)
            for index, cell in enumerate(game._grid)
            if cell.is_revealed
        }
    return _positions


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GameConfig:
    """Create a valid game configuration."""
    return GameConfig(9, 9, 10)
