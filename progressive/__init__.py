"""
PROGRESSIVE RATES ENGINE
Tiered rate calculation over contiguous brackets
"""

import logging

from .builder import Progressive
from .config import Settings
from .exceptions import InvalidBound, InvalidInput, ProgressiveError, ProtocolViolation
from .models import Bracket, BracketResult, CalculationResult
from .output import OutputBuilder
from .processor import ProgressiveCalculator

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Progressive',
    'ProgressiveCalculator',
    'Bracket',
    'BracketResult',
    'CalculationResult',
    'OutputBuilder',
    'Settings',
    'ProgressiveError',
    'InvalidBound',
    'ProtocolViolation',
    'InvalidInput',
]
