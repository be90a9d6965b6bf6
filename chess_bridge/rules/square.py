"""
Squares on the board, in the two coordinate systems that meet at the bridge.

Engine space: Square(file, rank), both 1-indexed, rank increasing upward (a1 = (1, 1)).
UI space: UiSquare(row, col), both 0-indexed, row 0 at the top of the displayed board.

file = col + 1, rank = 8 - row. Both directions go through to_engine / to_ui, nowhere else.
"""

from __future__ import annotations

from dataclasses import dataclass

from chess_bridge.core.exceptions import InvalidSquareError

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8)"""
        file = ord(sq[0]) - ord("a") + 1
        rank = int(sq[1])
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a') - 1)}{self.rank}"

    def is_within_bounds(self) -> bool:
        return (1 <= self.file <= BOARD_DIMENSIONS[0]) and (
            1 <= self.rank <= BOARD_DIMENSIONS[1]
        )


@dataclass(frozen=True)
class UiSquare:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[1]) and (
            0 <= self.col < BOARD_DIMENSIONS[0]
        )


def to_engine(row: int, col: int) -> Square:
    """UI (row, col) -> engine (file, rank)."""
    if not UiSquare(row, col).is_within_bounds():
        raise InvalidSquareError(f"UI square {(row, col)} is not on the board.")
    return Square(file=col + 1, rank=BOARD_DIMENSIONS[1] - row)


def to_ui(square: Square) -> UiSquare:
    """Engine (file, rank) -> UI (row, col). Exact inverse of to_engine."""
    if not square.is_within_bounds():
        raise InvalidSquareError(f"Engine square {square} is not on the board.")
    return UiSquare(row=BOARD_DIMENSIONS[1] - square.rank, col=square.file - 1)

