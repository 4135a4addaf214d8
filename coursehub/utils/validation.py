import math
from coursehub.exceptions import ValidationError


def parse_id(value, message="Invalid id"):
    """Accept an int or a string of digits; bools and floats are rejected."""
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.isascii() and value.isdigit():
            return int(value)
    raise ValidationError(message)


def parse_amount(value, message="Amount must be a positive number"):
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(message)
    return amount
