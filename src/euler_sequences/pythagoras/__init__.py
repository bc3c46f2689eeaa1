"""Primitive Pythagorean triples."""

from euler_sequences.pythagoras.triple import PythagoreanTriple, PythagoreanTripleSequence

__all__ = ["PythagoreanTriple", "PythagoreanTripleSequence"]
