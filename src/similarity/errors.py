class InvalidArgumentError(ValueError):
    """Raised when an input is malformed (bad bucket count, empty or non-finite sample, shape mismatch)."""


class DegenerateInputError(ValueError):
    """Raised when valid input leaves too little support to run a test."""
