"""Requests and Response models exchanged with the host UI (all coordinates in UI space)."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, computed_field, field_validator

from chess_bridge.core.exceptions import InvalidRequestError
from chess_bridge.core.shared_types import Color, PieceType, PromotionPiece
from chess_bridge.rules.square import BOARD_DIMENSIONS

PlayerColor = str


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @field_validator(*["from_row", "from_col", "to_row", "to_col"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Coordinate {value!r} is off the board. Rows and columns run from 0 to {BOARD_DIMENSIONS[0] - 1}."
            )
        return value


class PromotionMoveRequest(MoveRequest):
    promotion: PromotionPiece = PromotionPiece.QUEEN

    @field_validator("promotion", mode="before")
    @classmethod
    def resolve_selector(cls, value: Any) -> PromotionPiece:
        """Free-form selector from the host. Anything unrecognized becomes a queen."""
        if isinstance(value, PromotionPiece):
            return value
        return PromotionPiece.from_selector(value if isinstance(value, str) else None)


# --- RESPONSE MODELS ---
class UiMove(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_row: int
    from_col: int
    to_row: int
    to_col: int


class PieceDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: Color
    kind: PieceType

    @computed_field  # type: ignore[prop-decorator]
    @property
    def name(self) -> str:
        """Key used by the host's piece symbol table, e.g. 'WhitePawn'."""
        return f"{self.color.value.capitalize()}{self.kind.value.capitalize()}"


class GameSnapshot(BaseModel):
    """Everything the host needs to render one turn. Read-only."""

    model_config = ConfigDict(frozen=True)

    board: list[list[Optional[PieceDescriptor]]]
    current_player: PlayerColor
    in_check: bool
    is_checkmate: bool
    is_stalemate: bool
    fen: str

    def piece_at(self, row: int, col: int) -> Optional[PieceDescriptor]:
        return self.board[row][col]


class MoveEvaluation(BaseModel):
    """Outcome of trying a candidate move on a throwaway copy of the board."""

    model_config = ConfigDict(frozen=True)

    move: UiMove
    legal: bool
    promotion: Optional[PromotionPiece] = None
    gives_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False
    resulting_fen: Optional[str] = None
