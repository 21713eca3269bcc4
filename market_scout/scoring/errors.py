"""Errors raised by the scoring engine."""


class DegenerateInputError(ValueError):
    """A derived quantity cannot be computed from the given inputs.

    Raised instead of letting infinity or NaN reach a report.

    Attributes:
        quantity: Name of the derived value that could not be computed
        reason: Human readable cause
    """

    def __init__(self, quantity: str, reason: str):
        self.quantity = quantity
        self.reason = reason
        super().__init__(f"cannot compute {quantity}: {reason}")
