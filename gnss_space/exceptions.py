"""Errors raised by the GPS space segment."""

from __future__ import annotations


class SpaceSegmentError(Exception):
    """Base class for space segment failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class MissingParameter(SpaceSegmentError, ValueError):
    def __init__(self, field_name: str, section: str = "gpsspacesegment") -> None:
        self.field_name = field_name
        super().__init__(f"the task must define {section}.{field_name}")


class InvalidParameter(SpaceSegmentError, ValueError):
    def __init__(self, field_name: str, reason: str) -> None:
        self.field_name = field_name
        super().__init__(f"invalid parameter '{field_name}': {reason}")


class OrbitFileError(SpaceSegmentError, ValueError):
    """The orbit source cannot be loaded or interpolated."""


class TimeOutOfBounds(SpaceSegmentError, ValueError):
    def __init__(self, t: float, begin: float, end: float, what: str = "GPS time") -> None:
        self.t = float(t)
        self.begin = float(begin)
        self.end = float(end)
        super().__init__(f"{what} {self.t:.3f} out of orbit table bounds [{self.begin:.3f}, {self.end:.3f}]")


class NotInitialized(SpaceSegmentError, RuntimeError):
    def __init__(self, name: str = "space segment") -> None:
        super().__init__(f"{name} updated before reset(); call reset() first.")
