"""
Core math modules для fpd

Fixed-point decimal: magnitude произвольной точности и явный scale.
"""

# Numeral parsing & formatting
from src.core.math.numeral import (
    INTEGER_LITERAL_PATTERN,
    NUMERAL_PATTERN,
    DecimalParseError,
    digits_to_int,
    format_numeral,
    int_to_digits,
    parse_integer_literal,
    parse_numeral,
)

# Fixed-point decimal
from src.core.math.fixed_point import (
    DIVISION_SCRATCH_EXPONENT,
    Decimal,
    DecimalDivisionByZero,
    division_scratch_scale,
    require_int,
    smallest_scale,
    truncating_divide,
)

__all__ = [
    # Numeral — Constants
    "INTEGER_LITERAL_PATTERN",
    "NUMERAL_PATTERN",
    # Numeral — Exceptions
    "DecimalParseError",
    # Numeral — Functions
    "digits_to_int",
    "format_numeral",
    "int_to_digits",
    "parse_integer_literal",
    "parse_numeral",
    # Fixed-point — Constants
    "DIVISION_SCRATCH_EXPONENT",
    # Fixed-point — Exceptions
    "DecimalDivisionByZero",
    # Fixed-point — Types
    "Decimal",
    # Fixed-point — Functions
    "division_scratch_scale",
    "require_int",
    "smallest_scale",
    "truncating_divide",
]
