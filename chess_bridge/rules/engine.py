"""
Adapter around the external rules engine (python-chess).

The engine owns all chess semantics: legal-move generation, check/checkmate/stalemate detection,
FEN parsing and serialization, and move application. This module only speaks engine-space
Squares (1-indexed file/rank) and translates to/from python-chess' 0-indexed square numbers.
"""

from __future__ import annotations

import logging
from typing import Optional

import chess

from chess_bridge.core.exceptions import EngineMoveError, InvalidPositionError
from chess_bridge.core.shared_types import Color, PieceType, PromotionPiece
from chess_bridge.rules.square import Square

logger = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Type aliases to make signatures easier to read
Occupant = tuple[Color, PieceType]
EngineMove = tuple[Square, Square]

# positions the engine cannot play on, whatever the rest of the FEN says
UNPLAYABLE_STATUS = (
    chess.STATUS_NO_WHITE_KING
    | chess.STATUS_NO_BLACK_KING
    | chess.STATUS_TOO_MANY_KINGS
    | chess.STATUS_PAWNS_ON_BACKRANK
)

PROMOTION_TO_ENGINE: dict[PromotionPiece, chess.PieceType] = {
    PromotionPiece.QUEEN: chess.QUEEN,
    PromotionPiece.ROOK: chess.ROOK,
    PromotionPiece.BISHOP: chess.BISHOP,
    PromotionPiece.KNIGHT: chess.KNIGHT,
}


def _engine_index(square: Square) -> chess.Square:
    return chess.square(square.file - 1, square.rank - 1)


def _from_engine_index(index: chess.Square) -> Square:
    return Square(file=chess.square_file(index) + 1, rank=chess.square_rank(index) + 1)


class EngineBoard:
    """One engine board instance. Not shared: whoever creates it owns it."""

    __slots__ = ("_board",)

    def __init__(self, board: chess.Board) -> None:
        self._board = board

    # -- CREATION --
    @classmethod
    def starting_position(cls) -> EngineBoard:
        return cls(chess.Board(STARTING_FEN))

    @classmethod
    def load_position(cls, fen: str) -> EngineBoard:
        """
        Parse a FEN string.
        ----

        Rejected: anything the engine cannot parse, and boards it cannot play on at all (kings missing or doubled,
        pawns on a back rank). Castling rights that no longer match the rooks and kings are dropped instead.
        """
        try:
            board = chess.Board(fen.strip())
        except ValueError as e:
            raise InvalidPositionError(f"Invalid FEN: {fen!r} ({e})") from e

        board.castling_rights = board.clean_castling_rights()
        if board.status() & UNPLAYABLE_STATUS:
            raise InvalidPositionError(
                f"Invalid FEN: {fen!r} (engine status: {board.status()!r})"
            )
        return cls(board)

    def clone(self) -> EngineBoard:
        """Independent copy, for what-if evaluation that must not touch this board."""
        return EngineBoard(self._board.copy())

    # -- QUERIES --
    def occupant_at(self, square: Square) -> Optional[Occupant]:
        piece = self._board.piece_at(_engine_index(square))
        if piece is None:
            return None
        color = Color.WHITE if piece.color == chess.WHITE else Color.BLACK
        return color, PieceType(chess.piece_name(piece.piece_type))

    @property
    def side_to_move(self) -> Color:
        return Color.WHITE if self._board.turn == chess.WHITE else Color.BLACK

    def is_in_check(self) -> bool:
        return self._board.is_check()

    def is_checkmate(self) -> bool:
        return self._board.is_checkmate()

    def is_stalemate(self) -> bool:
        return self._board.is_stalemate()

    def legal_moves(self) -> list[EngineMove]:
        """
        Legal (from, to) pairs, in the engine's enumeration order.
        ----

        NOTE python-chess lists a pawn push to the last rank once per promotion piece. The pair is kept once,
        at the position of its first occurrence; the piece kind is chosen separately (see apply_promotion).
        """
        pairs: dict[EngineMove, None] = {}
        for move in self._board.legal_moves:
            pair = (_from_engine_index(move.from_square), _from_engine_index(move.to_square))
            pairs.setdefault(pair, None)
        return list(pairs)

    def is_promotion(self, from_square: Square, to_square: Square) -> bool:
        """Pawn at from_square, destination on the terminal rank for that pawn's color."""
        occupant = self.occupant_at(from_square)
        if occupant is None:
            return False
        color, piece_type = occupant
        return piece_type == PieceType.PAWN and to_square.rank == color.promotion_rank

    def to_position_string(self) -> str:
        return self._board.fen()

    # -- MUTATION --
    def apply_move(self, from_square: Square, to_square: Square) -> str:
        """
        Apply a plain from/to move. Returns the UCI string of the move actually played.
        NOTE a pawn reaching the last rank through this path is promoted to a queen.
        """
        promotion = (
            chess.QUEEN if self.is_promotion(from_square, to_square) else None
        )
        return self._push(
            chess.Move(_engine_index(from_square), _engine_index(to_square), promotion)
        )

    def apply_promotion(
        self, from_square: Square, to_square: Square, kind: PromotionPiece
    ) -> str:
        return self._push(
            chess.Move(
                _engine_index(from_square),
                _engine_index(to_square),
                promotion=PROMOTION_TO_ENGINE[kind],
            )
        )

    def _push(self, move: chess.Move) -> str:
        # the board is left untouched when the move is refused
        if not self._board.is_legal(move):
            raise EngineMoveError(f"Engine refused move {move.uci()}")
        self._board.push(move)
        logger.debug("Engine applied %s -> %s", move.uci(), self._board.fen())
        return move.uci()
