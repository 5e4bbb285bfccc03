from backend.models.difficulty import DIFFICULTY_CONFIG, DifficultyConfig, get_difficulty
from backend.models.errors import InvalidConfiguration, InvalidDimension, PuzzleError
from backend.models.outline import CubicSegment, LineSegment, PieceOutline
from backend.models.pattern import EdgePattern, EdgeShape, GridCoordinate
from backend.models.piece import Piece, PlacedBy, PuzzleImage

__all__ = [
    "DIFFICULTY_CONFIG",
    "CubicSegment",
    "DifficultyConfig",
    "EdgePattern",
    "EdgeShape",
    "GridCoordinate",
    "InvalidConfiguration",
    "InvalidDimension",
    "LineSegment",
    "Piece",
    "PieceOutline",
    "PlacedBy",
    "PuzzleError",
    "PuzzleImage",
    "get_difficulty",
]
