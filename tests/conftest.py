"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def keep_coin():
    """Coin that always keeps the listed diagonal order."""
    from sand_sim.model import FixedCoin
    return FixedCoin(True)


@pytest.fixture
def swap_coin():
    """Coin that always swaps the two diagonals."""
    from sand_sim.model import FixedCoin
    return FixedCoin(False)


@pytest.fixture
def config_dict():
    """Raw configuration as it would come out of yaml.safe_load."""
    return {
        'grid': {'width': 8, 'height': 6},
        'simulation': {'max_steps': 20},
        'gravity': {
            'angle': 90.0,
            'strength': 1.0,
            'schedule': [
                {'step': 10, 'angle': 0.0},
                {'step': 5, 'angle': 180.0, 'strength': 2.0},
            ],
        },
        'export': {'csv': True, 'snapshot': False, 'gif': False},
        'seed': 7,
    }
