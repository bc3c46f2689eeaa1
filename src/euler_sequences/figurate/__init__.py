"""Figurate (polygonal) numbers."""

from euler_sequences.figurate.polygonal_number import (
    HeptagonalNumber,
    HexagonalNumber,
    OctagonalNumber,
    PentagonalNumber,
    PolygonalNumber,
    SquareNumber,
    TriangularNumber,
    polygonal,
)

__all__ = [
    "PolygonalNumber",
    "TriangularNumber",
    "SquareNumber",
    "PentagonalNumber",
    "HexagonalNumber",
    "HeptagonalNumber",
    "OctagonalNumber",
    "polygonal",
]
