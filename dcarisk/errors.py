"""Engine error types.

``ValidationError`` is recoverable: the caller fixes the input and retries.
``ComputeFault`` wraps an unexpected failure inside an already validated run;
any partial output must be discarded.
"""


class DCAError(Exception):
    """Base class for all engine errors."""


class ValidationError(DCAError):
    """Raised when strategy parameters break one or more rules.

    Args:
        errors: Human-readable rule violations, in check order.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid parameters")


class ComputeFault(DCAError):
    """Raised when a validated calculation fails unexpectedly."""
