"""Model package for the gravity sand simulation."""

from .state import SimulationState
from .grid import GridState, InvalidGridError, EMPTY, FULL
from .gravity import Gravity
from .coin import CoinFlip, GeneratorCoin, FixedCoin, SequenceCoin
from .engine import SandSimulation, advance, candidate_offsets, create_simulation

__all__ = [
    'SimulationState',
    'GridState',
    'InvalidGridError',
    'EMPTY',
    'FULL',
    'Gravity',
    'CoinFlip',
    'GeneratorCoin',
    'FixedCoin',
    'SequenceCoin',
    'SandSimulation',
    'advance',
    'candidate_offsets',
    'create_simulation',
]
