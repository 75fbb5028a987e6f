"""
Simulator Exceptions

Error taxonomy for the trade simulator. Normal trade execution never
raises; equity going negative is a valid outcome, not an error.
"""

from typing import Iterable, Optional, Tuple


class SimulatorError(Exception):
    """Base exception for simulator errors."""
    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class UnknownPresetError(SimulatorError, KeyError):
    """Preset key is not in the preset table."""
    def __init__(self, preset: str, available: Iterable[str] = ()):
        self.preset = preset
        self.available: Tuple[str, ...] = tuple(available)
        message = f"Unknown preset: {preset!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message, "UNKNOWN_PRESET")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.args[0]


class InvalidParameterError(SimulatorError, ValueError):
    """Parameter value cannot be used (e.g. NaN or infinity)."""
    def __init__(self, name: str, value: object):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for {name}: {value!r}", "INVALID_PARAMETER")
