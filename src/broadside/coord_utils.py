from typing import Any


def format_coord(x: int, y: int) -> str:
    """
    Convert zero-based (x, y) to the canonical coordinate string 'x-y'.
    """
    return f"{x}-{y}"


def is_valid_number(value: Any) -> bool:
    """True for a real int; the not-a-number sentinel (None) and bools fail."""
    return isinstance(value, int) and not isinstance(value, bool)


def in_bounds(value: Any, size: int) -> bool:
    """True if *value* is a number in [0, size)."""
    return is_valid_number(value) and 0 <= value < size
