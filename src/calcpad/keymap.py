"""
Keyboard mapping for calcpad front ends.

Translates key names, as reported by a browser `KeyboardEvent.key` or
typed into the REPL, into engine input events.
"""

from calcpad.config import settings
from calcpad.models import InputEvent, InputKind, Operator


KEY_BINDINGS: dict[str, InputKind] = {
    ".": InputKind.DECIMAL_POINT,
    "Enter": InputKind.EVALUATE,
    "=": InputKind.EVALUATE,
    "Escape": InputKind.CLEAR_ALL,
    "Delete": InputKind.CLEAR_ENTRY,
    "Backspace": InputKind.BACKSPACE,
    "%": InputKind.PERCENT,
    # On-screen buttons without a keyboard equivalent
    "CE": InputKind.CLEAR_ENTRY,
    "MS": InputKind.MEMORY_STORE,
    "MR": InputKind.MEMORY_RECALL,
    "M+": InputKind.MEMORY_ADD,
    "M-": InputKind.MEMORY_SUBTRACT,
    "MC": InputKind.MEMORY_CLEAR,
}


def translate_key(key: str, sign_toggle_keys: list[str] | None = None) -> InputEvent | None:
    """Return the input event for `key`, or None if the key is unbound."""
    if len(key) == 1 and key.isdigit() and key.isascii():
        return InputEvent.for_digit(int(key))
    if key in {op.value for op in Operator}:
        return InputEvent.for_operator(key)
    if key in KEY_BINDINGS:
        return InputEvent(kind=KEY_BINDINGS[key])

    toggle_keys = settings.sign_toggle_keys if sign_toggle_keys is None else sign_toggle_keys
    if key in toggle_keys:
        return InputEvent(kind=InputKind.TOGGLE_SIGN)
    return None
