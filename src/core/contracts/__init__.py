"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных decimal и окон
скользящего среднего.
"""

from .validators import (
    ContractValidator,
    DecimalNumeralValidator,
    MovingAverageSnapshotValidator,
    SchemaLoader,
    default_schema_loader,
    validate_decimal_numeral,
    validate_moving_average_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DecimalNumeralValidator",
    "MovingAverageSnapshotValidator",
    # Functions
    "default_schema_loader",
    "validate_decimal_numeral",
    "validate_moving_average_snapshot",
]
