"""
Type definitions used across layers
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def promotion_rank(self) -> int:
        """Engine-space rank a pawn of this color promotes on (white moves UP the board, black moves DOWN)."""
        return 8 if self == Color.WHITE else 1


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class PromotionPiece(StrEnum):
    """
    The closed set of piece kinds a pawn may promote into.
    ----

    Selectors from the host are validated once, at the API boundary.
    NOTE an unrecognized selector resolves to QUEEN on purpose: the host must always be able to complete a promotion.
    """

    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"

    @classmethod
    def parse(cls, selector: str | None) -> Optional[PromotionPiece]:
        """Case-insensitive lookup. Accepts full names ('Knight') and FEN letters ('n'). None if unrecognized."""
        if selector is None:
            return None
        normalized = selector.strip().lower()
        if normalized in PROMOTION_LETTERS:
            return PROMOTION_LETTERS[normalized]
        return cls._value2member_map_.get(normalized)  # type: ignore[return-value]

    @classmethod
    def from_selector(cls, selector: str | None) -> PromotionPiece:
        """Like parse, with the queen default applied."""
        return cls.parse(selector) or cls.QUEEN


PROMOTION_LETTERS: dict[str, PromotionPiece] = {
    "q": PromotionPiece.QUEEN,
    "r": PromotionPiece.ROOK,
    "b": PromotionPiece.BISHOP,
    "n": PromotionPiece.KNIGHT,
}
