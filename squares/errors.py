"""
Error kinds raised by the assignment and resolution engines.
The invocation boundary turns each into a structured failure result.
"""
from __future__ import annotations


class SquaresError(Exception):
    """Base for every error the engines raise on purpose."""
    code = "SquaresError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(SquaresError):
    """Missing or empty required fields (board id, squares, game id)."""
    code = "InvalidInputError"


class TooManySquaresError(SquaresError):
    """More than 100 squares in one assignment call."""
    code = "TooManySquaresError"


class InvalidScoreError(SquaresError):
    """Negative or non-numeric score."""
    code = "InvalidScoreError"


class IncompleteGameError(SquaresError):
    """Winner resolution attempted on a game that is not completed."""
    code = "IncompleteGameError"


class UnexpectedError(SquaresError):
    """Any other internal fault, caught at the invocation boundary."""
    code = "UnexpectedError"
