from .validation import (
    is_numeric, parse_int, parse_float, validate_coordinate, validate_text
)

__all__ = [
    'is_numeric',
    'parse_int',
    'parse_float',
    'validate_coordinate',
    'validate_text'
]
