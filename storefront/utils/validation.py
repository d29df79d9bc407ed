import math
from typing import Optional

from storefront.exceptions import ValidationError

def is_numeric(value: str) -> bool:
    """Check whether a string parses as an integer."""
    try:
        int(value)
        return True
    except (TypeError, ValueError):
        return False

def parse_int(value: str, field: str, minimum: Optional[int] = None) -> int:
    """Parse an integer typed by the user.

    Args:
        value: Raw input text
        field: Field name used in the error message
        minimum: Optional inclusive lower bound

    Returns:
        Parsed integer

    Raises:
        ValidationError: If the text isn't an integer or is below ``minimum``
    """
    text = (value or '').strip()
    if not is_numeric(text):
        raise ValidationError(f"Please enter a valid whole number for {field}")

    number = int(text)
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field.capitalize()} must be at least {minimum}")

    return number

def parse_float(value: str, field: str, minimum: Optional[float] = None) -> float:
    """Parse a decimal number typed by the user.

    Args:
        value: Raw input text
        field: Field name used in the error message
        minimum: Optional inclusive lower bound

    Returns:
        Parsed float

    Raises:
        ValidationError: If the text isn't a finite number or is below ``minimum``
    """
    try:
        number = float((value or '').strip())
    except ValueError:
        raise ValidationError(f"Please enter a valid number for {field}")

    if not math.isfinite(number):
        raise ValidationError(f"Please enter a finite number for {field}")

    if minimum is not None and number < minimum:
        raise ValidationError(f"{field.capitalize()} must be at least {minimum}")

    return number

def validate_coordinate(value: float, field: str, lower: float = 0.0, upper: float = 100.0) -> float:
    """Check that a coordinate lies in the inclusive range [lower, upper]."""
    if not lower <= value <= upper:
        raise ValidationError(f"{field.capitalize()} must be between {lower} and {upper}")
    return value

def validate_text(value: str, field: str, max_length: Optional[int] = None) -> str:
    """Strip a text field and reject empty or over-long values."""
    text = (value or '').strip()
    if not text:
        raise ValidationError(f"{field.capitalize()} cannot be empty")
    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{field.capitalize()} must be at most {max_length} characters")
    return text
