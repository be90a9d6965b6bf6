"""
Custom exceptions used across layers.

Everything derives from GameError, so callers can catch a single top-level type
(specific exception types are the responsibility of the layer raising them).
"""


class GameError(Exception):
    """Base class for all errors raised by chess_bridge."""


class InvalidPositionError(GameError):
    """A position (FEN) string could not be parsed by the rules engine."""


class InvalidSquareError(GameError):
    """Coordinates fall outside the 8x8 board."""


class InvalidRequestError(GameError):
    """Data crossing the API boundary failed validation."""


class IllegalMoveError(GameError):
    """The requested from/to pair is not in the engine's current legal-move set."""


class EngineMoveError(GameError):
    """The rules engine refused to apply a move."""


class EngineInconsistencyError(GameError):
    """A move the engine certified as legal was rejected when applied."""


class PromotionFailedError(GameError):
    """A certified promotion move was rejected by the engine's promotion call."""
