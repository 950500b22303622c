from __future__ import annotations


class ValidationError(ValueError):
    """Base class for every rejection produced by the validators."""


class FormatError(ValidationError):
    """Input is empty, has the wrong length, or is a repeated-digit number."""

    def __init__(self, message: str = "Invalid format") -> None:
        super().__init__(message)


class DigitMismatchError(ValidationError):
    """
    Input is well formed but a check digit does not match.

    Attributes:
        position: 1 for the first check digit, 2 for the second.
        expected: Digit computed from the body.
        found:    Digit present in the input.
    """

    def __init__(self, position: int, expected: int, found: int) -> None:
        super().__init__("Invalid digit")
        self.position = position
        self.expected = expected
        self.found = found
