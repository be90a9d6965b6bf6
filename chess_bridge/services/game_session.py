"""
Orchestration between the host UI (row/column grid) and the rules engine (file/rank squares).

The GameSession is the sole owner of one engine board. The host only ever sees UI-shaped data:
snapshots, lists of UiMove, and booleans.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Self

from chess_bridge.api.models import (
    GameSnapshot,
    MoveEvaluation,
    MoveRequest,
    PieceDescriptor,
    PromotionMoveRequest,
    UiMove,
)
from chess_bridge.core.config import BridgeConfig, get_config
from chess_bridge.core.exceptions import (
    EngineInconsistencyError,
    EngineMoveError,
    IllegalMoveError,
    PromotionFailedError,
)
from chess_bridge.core.shared_types import PromotionPiece
from chess_bridge.rules.engine import EngineBoard
from chess_bridge.rules.square import BOARD_DIMENSIONS, Square, to_engine, to_ui

logger = logging.getLogger(__name__)


class GameSession:
    """One game, one board. All mutation passes through here."""

    def __init__(
        self,
        config: Optional[BridgeConfig] = None,
        *,
        _board: Optional[EngineBoard] = None,
    ) -> None:
        # _board is for from_fen only: the session must be the sole owner of its board
        self._board = _board if _board is not None else EngineBoard.starting_position()
        self._config = config or get_config()
        self._lock = threading.RLock()
        self._moves_uci: list[str] = []
        self._history_fen: list[str] = []
        logger.info("Created game session at %s", self._board.to_position_string())

    @classmethod
    def from_fen(cls, fen: str, config: Optional[BridgeConfig] = None) -> Self:
        """Start from a supplied position. Raises InvalidPositionError; never falls back to the default position."""
        logger.info("Loading session from FEN: %s", fen)
        return cls(config, _board=EngineBoard.load_position(fen))

    # -- LIFECYCLE --
    def load_fen(self, fen: str) -> None:
        """Replace the position in place. On InvalidPositionError nothing changes."""
        board = EngineBoard.load_position(fen)
        with self._lock:
            self._board = board
            self._clear_history()
        logger.info("Loaded position %s", fen)

    def reset(self) -> None:
        with self._lock:
            self._board = EngineBoard.starting_position()
            self._clear_history()
        logger.info("Session reset to the starting position")

    @property
    def fen(self) -> str:
        with self._lock:
            return self._board.to_position_string()

    def get_fen(self) -> str:
        return self.fen

    @property
    def move_history(self) -> tuple[str, ...]:
        """UCI strings of every move applied since the session started (or was last reset/loaded)."""
        with self._lock:
            return tuple(self._moves_uci)

    @property
    def fen_history(self) -> tuple[str, ...]:
        """Position before each applied move, oldest first."""
        with self._lock:
            return tuple(self._history_fen)

    # -- READ PATH --
    def game_state(self) -> GameSnapshot:
        """Board plus status, recomputed from the live board on every call."""
        rows, cols = BOARD_DIMENSIONS[1], BOARD_DIMENSIONS[0]
        with self._lock:
            return GameSnapshot(
                board=[
                    [self._describe(to_engine(row, col)) for col in range(cols)]
                    for row in range(rows)
                ],
                current_player=self._board.side_to_move.value,
                in_check=self._board.is_in_check(),
                is_checkmate=self._board.is_checkmate(),
                is_stalemate=self._board.is_stalemate(),
                fen=self._board.to_position_string(),
            )

    def valid_moves(self, row: int, col: int) -> list[UiMove]:
        """
        Destinations available to the piece on UI square (row, col).
        ----

        The 'from' of every returned move is the caller's own (row, col), not a round-tripped value.
        """
        source = to_engine(row, col)
        with self._lock:
            if self._board.occupant_at(source) is None:
                logger.debug("No piece at %s", source.to_algebraic())
                return []

            legal_moves = self._board.legal_moves()
            moves = []
            for from_square, to_square in legal_moves:
                if from_square != source:
                    continue
                target = to_ui(to_square)
                moves.append(
                    UiMove(from_row=row, from_col=col, to_row=target.row, to_col=target.col)
                )

        logger.debug(
            "%d of %d legal moves start at %s; first few: %s",
            len(moves),
            len(legal_moves),
            source.to_algebraic(),
            moves[: self._config.move_log_sample],
        )
        return moves

    def is_promotion_move(
        self, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> bool:
        """Should the host prompt for a piece kind before submitting this move?"""
        with self._lock:
            return self._board.is_promotion(
                to_engine(from_row, from_col), to_engine(to_row, to_col)
            )

    # -- WRITE PATH --
    def make_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        """Apply a plain move. False if it is not in the engine's legal-move set, or the engine rejects it."""
        from_square = to_engine(from_row, from_col)
        to_square = to_engine(to_row, to_col)
        with self._lock:
            try:
                self._apply(from_square, to_square)
            except IllegalMoveError as e:
                logger.warning("Move rejected: %s", e)
                return False
            except EngineInconsistencyError as e:
                logger.error("Engine inconsistency: %s", e)
                return False
        return True

    def make_promotion_move(
        self,
        from_row: int,
        from_col: int,
        to_row: int,
        to_col: int,
        promotion_piece: Optional[str],
    ) -> bool:
        """
        Apply a move that may promote a pawn.
        ----

        1. classify: not a pawn reaching its last rank? --> plain make_move (fully certified)
        2. certify the from/to pair against the engine's legal-move set
        3. resolve the selector (unknown selectors become a queen)
        4. apply through the engine's promotion call
        """
        from_square = to_engine(from_row, from_col)
        to_square = to_engine(to_row, to_col)
        with self._lock:
            if self._board.occupant_at(from_square) is None:
                logger.warning("No piece at %s to promote", from_square.to_algebraic())
                return False

            if not self._board.is_promotion(from_square, to_square):
                logger.debug("Not a promotion move, applying as a plain move")
                return self.make_move(from_row, from_col, to_row, to_col)

            kind = PromotionPiece.parse(promotion_piece)
            if kind is None:
                logger.warning(
                    "Unknown promotion piece %r, defaulting to queen", promotion_piece
                )
                kind = PromotionPiece.QUEEN

            try:
                self._apply(from_square, to_square, promote_to=kind)
            except IllegalMoveError as e:
                logger.warning("Promotion rejected: %s", e)
                return False
            except PromotionFailedError as e:
                logger.error("Promotion failed: %s", e)
                return False
        return True

    def apply(self, request: MoveRequest) -> bool:
        """Dispatch a validated request from the API boundary."""
        if isinstance(request, PromotionMoveRequest):
            return self.make_promotion_move(
                request.from_row,
                request.from_col,
                request.to_row,
                request.to_col,
                request.promotion.value,
            )
        return self.make_move(
            request.from_row, request.from_col, request.to_row, request.to_col
        )

    # -- WHAT-IF ANALYSIS (never touches the live board) --
    def evaluate_move(
        self,
        from_row: int,
        from_col: int,
        to_row: int,
        to_col: int,
        promotion_piece: Optional[str] = None,
    ) -> MoveEvaluation:
        """Try a move on a throwaway copy. Promotions use the selected piece (queen by default)."""
        from_square = to_engine(from_row, from_col)
        to_square = to_engine(to_row, to_col)
        with self._lock:
            if (from_square, to_square) not in self._board.legal_moves():
                move = UiMove(
                    from_row=from_row, from_col=from_col, to_row=to_row, to_col=to_col
                )
                return MoveEvaluation(move=move, legal=False)
            promote_to = (
                PromotionPiece.from_selector(promotion_piece)
                if self._board.is_promotion(from_square, to_square)
                else None
            )
            return self._evaluate(from_square, to_square, promote_to)

    def check_giving_moves(self) -> list[UiMove]:
        """
        All legal moves in the current position that leave the opponent in check.
        ----

        A promotion counts when any of the piece kinds it can promote into gives check.
        """
        checks = []
        with self._lock:
            for from_square, to_square in self._board.legal_moves():
                kinds: list[Optional[PromotionPiece]] = (
                    list(PromotionPiece)
                    if self._board.is_promotion(from_square, to_square)
                    else [None]
                )
                evaluations = [
                    self._evaluate(from_square, to_square, kind) for kind in kinds
                ]
                if any(evaluation.gives_check for evaluation in evaluations):
                    checks.append(evaluations[0].move)
        logger.debug("Found %d check-giving moves", len(checks))
        return checks

    # -- Internal helpers --
    def _apply(
        self,
        from_square: Square,
        to_square: Square,
        promote_to: Optional[PromotionPiece] = None,
    ) -> None:
        """Certify, then apply. The engine is never asked to apply a move outside its own legal-move set."""
        if (from_square, to_square) not in self._board.legal_moves():
            raise IllegalMoveError(
                f"Move not allowed: {from_square.to_algebraic()}{to_square.to_algebraic()}"
            )

        before = self._board.to_position_string()
        uci = f"{from_square.to_algebraic()}{to_square.to_algebraic()}"
        try:
            if promote_to is None:
                uci = self._board.apply_move(from_square, to_square)
            else:
                uci = self._board.apply_promotion(from_square, to_square, promote_to)
        except EngineMoveError as e:
            if promote_to is None:
                raise EngineInconsistencyError(f"Legal move {uci} was rejected: {e}") from e
            raise PromotionFailedError(f"Promotion {uci} was rejected: {e}") from e

        self._history_fen.append(before)
        self._moves_uci.append(uci)
        logger.info("Applied %s", uci)
        if self._board.is_in_check():
            logger.info("%s king is in check", self._board.side_to_move.value.capitalize())

    def _evaluate(
        self,
        from_square: Square,
        to_square: Square,
        promote_to: Optional[PromotionPiece] = None,
    ) -> MoveEvaluation:
        """Play an already certified move on a throwaway copy and report the resulting status."""
        source, target = to_ui(from_square), to_ui(to_square)
        move = UiMove(
            from_row=source.row, from_col=source.col, to_row=target.row, to_col=target.col
        )
        trial = self._board.clone()
        try:
            if promote_to is None:
                trial.apply_move(from_square, to_square)
            else:
                trial.apply_promotion(from_square, to_square, promote_to)
        except EngineMoveError as e:
            logger.error("Engine inconsistency during evaluation: %s", e)
            return MoveEvaluation(move=move, legal=False)

        return MoveEvaluation(
            move=move,
            legal=True,
            promotion=promote_to,
            gives_check=trial.is_in_check(),
            is_checkmate=trial.is_checkmate(),
            is_stalemate=trial.is_stalemate(),
            resulting_fen=trial.to_position_string(),
        )

    def _clear_history(self) -> None:
        self._moves_uci.clear()
        self._history_fen.clear()

    def _describe(self, square: Square) -> Optional[PieceDescriptor]:
        occupant = self._board.occupant_at(square)
        if occupant is None:
            return None
        color, kind = occupant
        return PieceDescriptor(color=color, kind=kind)
