# clockboard_qt/utils/errors.py
"""
Exception hierarchy for the clock board.

Entity and color errors are local: callers substitute a safe value and go on.
Document errors are surfaced to the user with the cause text.
"""


class ClockBoardError(Exception):
    """Base class for every error raised by the clock board"""


class UnknownTimeZoneError(ClockBoardError):
    """Zone identifier cannot be resolved"""

    def __init__(self, time_zone_id, reason: str = ""):
        self.time_zone_id = time_zone_id
        message = f"Unknown time zone: {time_zone_id!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DocumentParseError(ClockBoardError):
    """Malformed JSON or missing required field"""


class DocumentIOError(ClockBoardError):
    """File not found, unreadable or unwritable"""

    def __init__(self, path, cause: Exception = None):
        self.path = str(path)
        self.cause = cause
        message = f"Cannot access '{self.path}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class InvalidColorError(ClockBoardError, ValueError):
    """Color string is neither a supported hex form nor a known color name"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid color: {value!r}")


class IndexOutOfRangeError(ClockBoardError, IndexError):
    """Collection index outside [0, len)"""


class ClockNotFoundError(ClockBoardError, KeyError):
    """No clock with the given identity"""

    def __str__(self):
        return f"No clock with id {self.args[0]!r}"
