"""
Calculators Package

Provides the allocation and reduction steps of a progressive calculation.
"""

from .allocation import BracketAllocator
from .reduction import BracketReducer

__all__ = [
    "BracketAllocator",
    "BracketReducer",
]
