from typing import Optional


class LaborCalculationError(ValueError):
    """Base class for every error raised while computing shift pay"""


class InvalidTimeFormat(LaborCalculationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid time '{value}'. Use HH:MM (00:00 - 23:59)")


class InvalidDateFormat(LaborCalculationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid date '{value}'. Use YYYY-MM-DD")


class InvalidSalary(LaborCalculationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Base salary must be zero or positive, got {value}")


class InvalidShiftDuration(LaborCalculationError):
    def __init__(self, start_time: str, end_time: str):
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            f"Shift start and end are both {start_time}; a shift must have a non-zero duration"
        )


class ShiftCalculationError(LaborCalculationError):
    """Raised by the weekly fold when one shift of the batch cannot be calculated"""

    def __init__(self, index: int, date: Optional[str], cause: Exception):
        self.index = index
        self.date = date
        self.cause = cause
        super().__init__(f"Shift #{index} ({date}): {cause}")


class ConfigurationError(LaborCalculationError):
    pass
