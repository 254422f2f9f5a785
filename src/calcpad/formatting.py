"""Display formatting for the current entry."""

import math
import re

from calcpad.evaluator import NUMBER_PATTERN

ERROR_TEXT = "Error"

# Positions inside a digit run that are followed by a multiple of three digits
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def format_number(text: str, separator: str = ",") -> str:
    """
    Group the integer digits of `text` in thousands.

    The sign and the decimal portion are left untouched. "Error",
    non-numeric text and non-finite values are returned as given.
    """
    if text == ERROR_TEXT or not NUMBER_PATTERN.fullmatch(text):
        return text
    if not math.isfinite(float(text)):
        return text

    integer, dot, fraction = text.partition(".")
    return _THOUSANDS.sub(separator, integer) + dot + fraction


def strip_separator(text: str, separator: str = ",") -> str:
    """Undo `format_number`."""
    return text.replace(separator, "")
