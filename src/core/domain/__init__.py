"""
Domain models and value objects.

Contains accumulators built on top of the fixed-point decimal.
"""

from src.core.domain.moving_average import (
    MovingAverage,
    MovingAverageConfig,
    MovingAverageSnapshot,
)

__all__ = [
    "MovingAverage",
    "MovingAverageConfig",
    "MovingAverageSnapshot",
]
