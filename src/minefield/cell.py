"""
Cell module for Minefield.

Represents individual grid positions with their visibility state
(hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Read-only Projection
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    What a player is allowed to know about a cell.

    Attributes:
        state: Current visual state.
        adjacent_mines: Neighbor mine count, only for a revealed safe cell.
        is_mine: Mine identity, only once the cell is revealed.
    """

    state: CellState
    adjacent_mines: Optional[int] = None
    is_mine: Optional[bool] = None


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minefield grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
            Left at 0 for mine cells.
        state: Current visual state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def expose(self) -> None:
        """Show the cell unconditionally (end of a lost game)."""
        self.state = CellState.REVEALED

    def flag(self) -> None:
        """Mark the cell flagged unconditionally (end of a won game)."""
        self.state = CellState.FLAGGED

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def view(self) -> CellView:
        """Project the cell without leaking hidden mine positions."""
        if not self.is_revealed:
            return CellView(self.state)
        if self.is_mine:
            return CellView(self.state, is_mine=True)
        return CellView(self.state, self.adjacent_mines, False)

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
