"""Errors raised while decoding TSPLIB files or resolving edge weights."""


class TsplibError(ValueError):
    """Base class for every error raised by tspkit."""


class MalformedInputError(TsplibError):
    """A required token is missing or cannot be read as the expected kind."""

    def __init__(self, message: str, line_number: int = None):
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
        self.line_number = line_number


class FormatViolationError(TsplibError):
    """The token stream is well formed but breaks a structural TSPLIB rule."""


class UnsupportedEdgeWeightTypeError(TsplibError):
    """No weight function is available for the declared edge weight type."""
