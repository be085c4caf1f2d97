class RushHourException(Exception):
    """Base exception class for Rush Hour errors."""
    pass

class InvalidBoard(RushHourException):
    """Raised when a board grid is malformed or breaks the vehicle rules."""
    pass

class OutOfBounds(RushHourException, IndexError):
    """Raised when a cell outside the board is read or written."""
    pass

class InvariantViolation(RushHourException):
    """Raised when the solver's internal bookkeeping is inconsistent."""
    pass

class InvalidMove(RushHourException):
    """Raised when an invalid move is attempted."""
    pass

class CarNotFound(RushHourException):
    """Raised when a specified car is not found on the board."""
    pass
