"""
Errors raised by time scale operations.
"""


class TimeScaleError(ValueError):
    """Base class for all time scale failures."""

    def __init__(self, message: str = "Time scale error!") -> None:
        super().__init__(message)


class NotInTimeScaleError(TimeScaleError):
    """An operation received a value that is not a member of the scale.

    Attributes:
        value: The offending value
    """

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(f"Given t={value} is not in the time scale.")


class NotEnoughArgumentsError(TimeScaleError):
    """A callback was invoked with fewer arguments than it requires."""

    def __init__(self, expected: int, given: int) -> None:
        self.expected = expected
        self.given = given
        super().__init__(
            f"Expected at least {expected} arguments, received {given} arguments"
        )


class UnreachableBoundError(TimeScaleError):
    """The integration walk could not reach its upper bound.

    Raised instead of looping forever when forward jumps stall, overshoot
    the bound, or exceed the configured step budget.
    """

    def __init__(self, lower: float, upper: float, steps: int, reason: str) -> None:
        self.lower = lower
        self.upper = upper
        self.steps = steps
        super().__init__(
            f"Cannot reach t={upper} from t={lower} after {steps} steps: {reason}"
        )
