"""
Utilities Package
Network selection, gas calculation, logging and async helpers
"""

from .async_helpers import run_sync
from .gas_calculator import GasCalculator
from .log_config import configure_logging

__all__ = [
    'run_sync',
    'GasCalculator',
    'configure_logging'
]
