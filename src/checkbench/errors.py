"""Exception types raised by the harness itself.

Failed checks are never exceptions; these cover misuse and load errors.
"""


class CheckbenchError(Exception):
    """Base class for harness errors."""


class TargetLoadError(CheckbenchError):
    def __init__(self, target: str, cause: BaseException):
        self.target = target
        self.cause = cause
        super().__init__(f"Failed to load test target '{target}': {cause}")


class FixtureStateError(CheckbenchError):
    """Raised when a fixture instance is driven outside its lifecycle."""
