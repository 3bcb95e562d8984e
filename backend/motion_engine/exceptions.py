"""Exceptions raised by the motion graphic render engine."""


class MotionEngineError(Exception):
    """Base exception for render engine errors."""

    pass


class EncodeError(MotionEngineError):
    """The encoder process failed; ``details`` carries its diagnostic output."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class EncodeTimeoutError(EncodeError):
    """The encoder did not finish within the configured timeout."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Encoder timed out after {timeout_seconds:g} seconds",
            details=f"ffmpeg exceeded the {timeout_seconds:g}s render timeout",
        )
