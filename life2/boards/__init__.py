"""Concrete board topologies implementing life2.core.Board."""

from .rectangular import RectangularBoard, MOORE_OFFSETS
from .hexagonal import HexagonalBoard
from .masked import MaskedBoard

__all__ = ['RectangularBoard', 'HexagonalBoard', 'MaskedBoard', 'MOORE_OFFSETS']
