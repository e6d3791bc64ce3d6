class EdiDecodeError(Exception):
    """Base class for errors raised by the 837/835 decoders."""


class EmptyPayloadError(EdiDecodeError):
    """Raised when a payload contains no segments after cleaning."""

    def __init__(self, message: str = "No valid EDI segments found"):
        super().__init__(message)


class ParsingFailedError(EdiDecodeError):
    """Wraps any unexpected failure while tokenizing or setting up a dispatch."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Parsing failed: {cause}")
