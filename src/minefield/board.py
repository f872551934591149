"""
Board module for Minefield.

Implements the game state machine: lazy first-move-safe mine placement,
cell revealing with flood fill, flagging, chorded actions and win/lose
detection.
"""
import logging
import numbers
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState, CellView
from .errors import InvalidConfigurationError, OutOfBoundsError

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MIN_DIMENSION = 3

# The first cell and its eight neighbors never hold a mine.
EXCLUSION_ZONE_SIZE = 9


class GameStatus(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class GameConfig:
    """
    Configuration for a Minefield game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 10
    height: int = 10
    mine_count: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("width", "height", "mine_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidConfigurationError(f"{name} must be an integer")
        if self.width < MIN_DIMENSION or self.height < MIN_DIMENSION:
            raise InvalidConfigurationError(
                f"Board dimensions must be at least {MIN_DIMENSION}"
            )
        if self.mine_count < 0:
            raise InvalidConfigurationError("Number of mines cannot be negative")
        if self.mine_count > self.max_mines:
            raise InvalidConfigurationError(
                f"Too many mines (max {self.max_mines})"
            )

    @property
    def cell_count(self) -> int:
        """Total number of cells on the grid."""
        return self.width * self.height

    @property
    def max_mines(self) -> int:
        """Largest mine count that fits around an interior first click."""
        return self.cell_count - EXCLUSION_ZONE_SIZE


# Preset difficulty levels
BEGINNER = GameConfig(9, 9, 10)
INTERMEDIATE = GameConfig(16, 16, 40)
EXPERT = GameConfig(30, 16, 99)

PRESETS: Dict[str, GameConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Game State Class
# ============================================================================

@dataclass
class GameState:
    """
    Minefield game state machine.

    Owns the grid of cells and the game-level flags. Mines are placed on
    the first reveal, flag or chord so that the first touched cell and its
    neighbors are always safe.

    Attributes:
        config: Immutable board configuration.
        rng: Random source for mine placement. Anything with a numpy
            ``Generator.choice`` compatible signature works, which lets
            tests pin a layout.
    """

    config: GameConfig = field(default_factory=GameConfig)
    rng: Any = field(default=None, repr=False)
    _grid: List[Cell] = field(
        init=False, default_factory=list, repr=False, compare=False
    )
    _over: bool = field(init=False, default=False)
    _won: bool = field(init=False, default=False)
    _first_move_pending: bool = field(init=False, default=True)

    def __post_init__(self) -> None:
        """Initialize the random source and the grid."""
        if self.rng is None:
            self.rng = np.random.default_rng()
        self._new_game()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _new_game(self) -> None:
        """Allocate a fresh grid of hidden, mine-free cells."""
        self._grid = [Cell() for _ in range(self.config.cell_count)]
        self._over = False
        self._won = False
        self._first_move_pending = True

    def _handle_first_move(self, x: int, y: int) -> None:
        """Place mines and calculate counts on the first action."""
        if not self._first_move_pending:
            return
        self._place_mines(x, y)
        self._calculate_adjacent_mines()
        self._first_move_pending = False

    def _place_mines(self, safe_x: int, safe_y: int) -> None:
        """
        Place mines randomly outside the exclusion zone.

        Args:
            safe_x: Column of the first touched cell.
            safe_y: Row of the first touched cell.
        """
        positions = self._get_valid_mine_positions(safe_x, safe_y)
        mine_count = self.config.mine_count
        if mine_count > len(positions):
            raise InvalidConfigurationError(
                f"Cannot place {mine_count} mines in {len(positions)} cells"
            )
        if mine_count == 0:
            return

        chosen = self.rng.choice(
            np.asarray(positions), size=mine_count, replace=False
        )
        for index in chosen:
            self._grid[int(index)].is_mine = True
        logger.debug(
            "Placed %d mines avoiding (%d, %d)", mine_count, safe_x, safe_y
        )

    def _get_valid_mine_positions(self, safe_x: int, safe_y: int) -> List[int]:
        """Get flat indices of cells more than one step from the safe cell."""
        positions = []
        for y in range(self.config.height):
            for x in range(self.config.width):
                if max(abs(x - safe_x), abs(y - safe_y)) > 1:
                    positions.append(self._index(x, y))
        return positions

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all safe cells."""
        width = self.config.width
        for index, cell in enumerate(self._grid):
            if not cell.is_mine:
                cell.adjacent_mines = self._count_adjacent_mines(
                    index % width, index // width
                )

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_x, neighbor_y in self._get_neighbors(x, y):
            if self._grid[self._index(neighbor_x, neighbor_y)].is_mine:
                count += 1
        return count

    # ========================================================================
    # Grid Access & Neighbor Utilities (Low-level)
    # ========================================================================

    def _index(self, x: int, y: int) -> int:
        """Flat grid index of a position."""
        return y * self.config.width + x

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    def _cell(self, x: int, y: int) -> Cell:
        """Bounds-checked cell access."""
        if not self._is_valid_position(x, y):
            raise OutOfBoundsError(x, y, self.config.width, self.config.height)
        return self._grid[self._index(x, y)]

    def _get_neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples for the up-to-8 neighbors on the grid.
        """
        neighbors = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def _count_adjacent_in_state(self, x: int, y: int, state: CellState) -> int:
        """Count neighbors currently in the given state."""
        return sum(
            1 for neighbor_x, neighbor_y in self._get_neighbors(x, y)
            if self._grid[self._index(neighbor_x, neighbor_y)].state == state
        )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal the cell at the given position.

        On the first move, places mines avoiding this cell's neighborhood.
        A flagged target is revealed as well. A cell with no adjacent mines
        reveals its neighbors transitively. Revealing a mine loses the game.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            True if the board changed, False for an inert action.

        Raises:
            OutOfBoundsError: If the position is off the grid.
        """
        cell = self._cell(x, y)
        if not self.is_playing or cell.is_revealed:
            return False

        self._handle_first_move(x, y)

        if cell.is_mine:
            self._lose()
            return True

        self._reveal_safe_zone(x, y)
        self._check_win_condition()
        return True

    def _lose(self) -> None:
        """End the game and expose everything except wrong flags."""
        self._over = True
        for cell in self._grid:
            if not (cell.is_flagged and not cell.is_mine):
                cell.expose()
        logger.info("Mine revealed, game lost")

    def _reveal_safe_zone(self, x: int, y: int) -> None:
        """Reveal a safe cell and flood fill from it if it is empty."""
        cell = self._grid[self._index(x, y)]
        cell.expose()
        if cell.adjacent_mines != 0:
            return

        revealed = 1
        pending = [(x, y)]
        while pending:
            current_x, current_y = pending.pop()
            for neighbor_x, neighbor_y in self._get_neighbors(current_x, current_y):
                neighbor = self._grid[self._index(neighbor_x, neighbor_y)]
                if neighbor.is_mine or not neighbor.reveal():
                    continue
                revealed += 1
                if neighbor.adjacent_mines == 0:
                    pending.append((neighbor_x, neighbor_y))
        logger.debug("Flood fill from (%d, %d) revealed %d cells", x, y, revealed)

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Flagging counts as the first move for mine placement.

        Args:
            x: Column.
            y: Row.

        Returns:
            True if flag was toggled, False otherwise.

        Raises:
            OutOfBoundsError: If the position is off the grid.
        """
        cell = self._cell(x, y)
        if not self.is_playing or cell.is_revealed:
            return False

        self._handle_first_move(x, y)
        cell.toggle_flag()
        self._check_win_condition()
        return True

    def chord_reveal(self, x: int, y: int) -> bool:
        """
        Reveal all unflagged neighbors if the flag count matches the number.

        Each reveal behaves like :meth:`reveal`, so a wrong flag elsewhere
        around the number can still lose the game.

        Returns:
            True if any neighbor changed, False otherwise.
        """
        cell = self._cell(x, y)
        if not self._can_chord(cell):
            return False
        flagged = self._count_adjacent_in_state(x, y, CellState.FLAGGED)
        if flagged != cell.adjacent_mines:
            return False

        changed = False
        for neighbor_x, neighbor_y in self._get_neighbors(x, y):
            if self._grid[self._index(neighbor_x, neighbor_y)].is_hidden:
                changed = self.reveal(neighbor_x, neighbor_y) or changed
        return changed

    def chord_flag(self, x: int, y: int) -> bool:
        """
        Flag all hidden neighbors if they must all be mines.

        Applies when the number of unrevealed neighbors equals the number.

        Returns:
            True if any neighbor changed, False otherwise.
        """
        cell = self._cell(x, y)
        if not self._can_chord(cell):
            return False
        unrevealed = sum(
            1 for neighbor_x, neighbor_y in self._get_neighbors(x, y)
            if not self._grid[self._index(neighbor_x, neighbor_y)].is_revealed
        )
        if unrevealed != cell.adjacent_mines:
            return False

        changed = False
        for neighbor_x, neighbor_y in self._get_neighbors(x, y):
            if self._grid[self._index(neighbor_x, neighbor_y)].is_hidden:
                changed = self.toggle_flag(neighbor_x, neighbor_y) or changed
        return changed

    def _can_chord(self, cell: Cell) -> bool:
        """Check if a cell can anchor a chord."""
        return self.is_playing and cell.is_revealed and cell.adjacent_mines > 0

    def primary_action(self, x: int, y: int) -> bool:
        """
        Main click: reveal the cell unless flagged, then try to chord it.

        Returns:
            True if the board changed.
        """
        changed = False
        if not self._cell(x, y).is_flagged:
            changed = self.reveal(x, y)
        return self.chord_reveal(x, y) or changed

    def secondary_action(self, x: int, y: int) -> bool:
        """
        Alternate click: toggle the flag, then try to chord-flag the cell.

        Returns:
            True if the board changed.
        """
        changed = self.toggle_flag(x, y)
        return self.chord_flag(x, y) or changed

    def _check_win_condition(self) -> None:
        """Win when every safe cell is revealed or exactly the mines are flagged."""
        if self._first_move_pending or not self.is_playing:
            return

        all_safe_revealed = all(
            cell.is_revealed for cell in self._grid if not cell.is_mine
        )
        all_mines_flagged = all(
            cell.is_mine == cell.is_flagged for cell in self._grid
        )
        if not (all_safe_revealed or all_mines_flagged):
            return

        self._won = True
        for cell in self._grid:
            if cell.is_mine:
                cell.flag()
        logger.info("All mines located, game won")

    def reset(self) -> None:
        """Reset to a fresh game with the same configuration."""
        self._new_game()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def status(self) -> GameStatus:
        """Get current game status."""
        if self._over:
            return GameStatus.LOST
        if self._won:
            return GameStatus.WON
        return GameStatus.PLAYING

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return not (self._over or self._won)

    @property
    def is_over(self) -> bool:
        """Check if a mine was revealed."""
        return self._over

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._won

    @property
    def first_move_pending(self) -> bool:
        """Check if mines are still waiting for the first move."""
        return self._first_move_pending

    @property
    def dimensions(self) -> Tuple[int, int]:
        """Grid size as (width, height)."""
        return self.config.width, self.config.height

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells."""
        return sum(1 for cell in self._grid if cell.is_revealed)

    @property
    def flags_placed(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self._grid if cell.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mine count minus flags; negative when over-flagged."""
        return self.config.mine_count - self.flags_placed

    def cell_view(self, x: int, y: int) -> CellView:
        """
        Get the player-visible projection of a cell.

        Raises:
            OutOfBoundsError: If the position is off the grid.
        """
        return self._cell(x, y).view()

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.fromiter(
            (cell.to_observation() for cell in self._grid),
            dtype=np.int8,
            count=self.config.cell_count,
        )
        return obs.reshape(self.config.height, self.config.width)

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of hidden (x, y) positions, empty once the game ended.
        """
        if not self.is_playing:
            return []
        width = self.config.width
        return [
            (index % width, index // width)
            for index, cell in enumerate(self._grid)
            if cell.is_hidden
        ]


def create(
    width: int,
    height: int,
    mine_count: int,
    rng: Optional[Any] = None,
) -> GameState:
    """
    Build a new game from raw dimensions.

    Raises:
        InvalidConfigurationError: If the configuration is out of range.
    """
    return GameState(GameConfig(width, height, mine_count), rng=rng)
