"""
Calculator Engine for calcpad.

Owns all calculator state and turns discrete input events into changes of
the current entry, the pending expression, the memory slot and the
history. The rendering layer only ever reads `get_display_snapshot()` and
`get_history()` after calling an operation.
"""

import functools
from typing import Callable

import structlog

from calcpad.config import Settings, settings
from calcpad.evaluator import (
    CalculatorError,
    ParseFailureError,
    evaluate_expression,
    number_to_string,
    parse_number,
    round_result,
)
from calcpad.formatting import ERROR_TEXT, format_number
from calcpad.history import History
from calcpad.models import DisplaySnapshot, InputEvent, InputKind, Operator
from calcpad.scheduler import PollingScheduler, ScheduledCall, Scheduler

logger = structlog.get_logger()


def _input_event(method: Callable) -> Callable:
    """Leave the error display before handling an input event."""
    @functools.wraps(method)
    def wrapper(self: "CalculatorEngine", *args, **kwargs):
        self._leave_error()
        return method(self, *args, **kwargs)
    return wrapper


class CalculatorEngine:
    """
    Input-state machine behind the calculator display.

    Typing builds up `current_entry`; operator keys commit it, together
    with the operator, to `pending_expression`; evaluating reduces the
    whole expression to a number. Failures switch the display to "Error"
    until a scheduled recovery, or the next input, resets the entry.
    Queries run any due scheduler callbacks first, so an engine on the
    default polling scheduler still recovers without further input.
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        config: Settings | None = None,
    ):
        self.config = config or settings
        self.scheduler = scheduler or PollingScheduler()

        self.current_entry = "0"
        self.pending_expression = ""
        self.last_input_was_operator = False
        self._memory = 0.0
        self.history = History(self.config.history_size)

        self._error = False
        self._recovery: ScheduledCall | None = None

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def in_error(self) -> bool:
        self.scheduler.run_pending()
        return self._error

    @property
    def memory(self) -> float:
        return self._memory

    def get_display_snapshot(self) -> DisplaySnapshot:
        """Return the formatted entry and the raw pending expression."""
        self.scheduler.run_pending()
        if self._error:
            primary = ERROR_TEXT
        else:
            primary = format_number(self.current_entry, self.config.thousands_separator)
        return DisplaySnapshot(primary=primary, secondary=self.pending_expression)

    def get_history(self) -> list[str]:
        """Return up to `history_size` calculations, most recent first."""
        self.scheduler.run_pending()
        return self.history.entries()

    # =========================================================================
    # Entry Editing
    # =========================================================================

    @_input_event
    def digit(self, d: int) -> None:
        """Start a new operand with `d`, or append it to the current one."""
        if not isinstance(d, int) or not 0 <= d <= 9:
            raise ValueError(f"Digit must be an integer 0-9, got {d!r}")

        if self.current_entry == "0" or self.last_input_was_operator:
            self.current_entry = str(d)
            self.last_input_was_operator = False
        elif len(self.current_entry) < self.config.max_entry_length:
            self.current_entry += str(d)

    @_input_event
    def decimal_point(self) -> None:
        if self.last_input_was_operator:
            self.current_entry = "0."
            self.last_input_was_operator = False
        elif "." not in self.current_entry:
            self.current_entry += "."

    @_input_event
    def toggle_sign(self) -> None:
        if self.current_entry == "0":
            return
        if self.current_entry.startswith("-"):
            self.current_entry = self.current_entry[1:] or "0"
        else:
            self.current_entry = "-" + self.current_entry

    @_input_event
    def backspace(self) -> None:
        self.current_entry = self.current_entry[:-1] or "0"

    @_input_event
    def clear_entry(self) -> None:
        self.current_entry = "0"

    @_input_event
    def clear_all(self) -> None:
        """Reset entry and expression; memory and history are kept."""
        self._reset()

    # =========================================================================
    # Arithmetic
    # =========================================================================

    @_input_event
    def operator(self, op: Operator | str) -> None:
        """
        Commit the current entry followed by `op`.

        Pressing another operator before any digit swaps the trailing
        operator instead of chaining a second one.
        """
        symbol = Operator(op).value

        if self.last_input_was_operator:
            self.pending_expression = self.pending_expression[:-1] + symbol
        else:
            self.pending_expression += self.current_entry + symbol
            self.last_input_was_operator = True

    @_input_event
    def evaluate(self) -> None:
        """
        Evaluate the pending expression with the current entry.

        A dangling operator is dropped rather than applied. The built
        expression is left in `pending_expression` so it stays visible
        under "Error" when evaluation fails.
        """
        if self.last_input_was_operator:
            expression = self.pending_expression[:-1]
        else:
            expression = self.pending_expression + self.current_entry
        self.pending_expression = expression

        try:
            value = round_result(evaluate_expression(expression), self.config.result_decimals)
        except CalculatorError as e:
            self._enter_error(e)
            return

        result = number_to_string(value)
        self.history.add(expression, result)
        logger.debug("Evaluated expression", expression=expression, result=result)

        self.current_entry = result
        self.pending_expression = ""
        self.last_input_was_operator = False

    @_input_event
    def percent(self) -> None:
        try:
            value = parse_number(self.current_entry)
        except ParseFailureError as e:
            self._enter_error(e)
            return
        self.current_entry = number_to_string(value / 100)

    # =========================================================================
    # Memory
    # =========================================================================

    def _entry_value(self) -> float | None:
        try:
            return parse_number(self.current_entry)
        except ParseFailureError:
            logger.debug("Memory operation ignored", entry=self.current_entry)
            return None

    @_input_event
    def memory_store(self) -> None:
        value = self._entry_value()
        if value is not None:
            self._memory = value

    @_input_event
    def memory_recall(self) -> None:
        """Replace the current entry with the memory value."""
        self.current_entry = number_to_string(self._memory)
        self.last_input_was_operator = False

    @_input_event
    def memory_add(self) -> None:
        value = self._entry_value()
        if value is not None:
            self._memory += value

    @_input_event
    def memory_subtract(self) -> None:
        value = self._entry_value()
        if value is not None:
            self._memory -= value

    @_input_event
    def memory_clear(self) -> None:
        self._memory = 0.0

    # =========================================================================
    # Event Dispatch
    # =========================================================================

    def on_input(self, event: InputEvent) -> None:
        """Apply a single input event."""
        logger.debug(
            "Input event",
            kind=event.kind.value,
            digit=event.digit,
            operator=event.operator.value if event.operator else None,
        )

        if event.kind == InputKind.DIGIT:
            self.digit(event.digit)
        elif event.kind == InputKind.OPERATOR:
            self.operator(event.operator)
        else:
            handler = getattr(self, event.kind.value, None)
            if handler is None:
                raise ValueError(f"Unsupported input kind: {event.kind}")
            handler()

    # =========================================================================
    # Error State
    # =========================================================================

    def _reset(self) -> None:
        self.current_entry = "0"
        self.pending_expression = ""
        self.last_input_was_operator = False

    def _enter_error(self, error: CalculatorError) -> None:
        logger.info(
            "Entering error state",
            error=type(error).__name__,
            detail=str(error),
            expression=self.pending_expression,
        )
        if self._recovery is not None:
            self._recovery.cancel()

        self._error = True
        self._recovery = self.scheduler.call_later(
            self.config.error_recovery_delay, self._recover
        )

    def _recover(self) -> None:
        """Scheduled exit from the error display."""
        logger.debug("Recovering from error state")
        self._recovery = None
        self._error = False
        self._reset()

    def _leave_error(self) -> None:
        """Exit the error display early because new input arrived."""
        if not self._error:
            return
        if self._recovery is not None:
            self._recovery.cancel()
        self._recover()
