"""
Invocation boundary: every engine call returns a structured result.
Success: {"success": True, ...}. Failure: {"success": False, "error", "errorType"}.
Callers branch on "success" and never use partial results.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable

from squares.errors import SquaresError, UnexpectedError

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"

Invocation = Callable[..., dict[str, Any]]


def failure(error: SquaresError) -> dict[str, Any]:
    return {"success": False, "error": error.message, "errorType": error.code}


def structured_result(operation: str) -> Callable[[Invocation], Invocation]:
    """
    Wrap an invocation so no exception crosses the boundary.
    Validation errors are reported as-is; anything else is logged with its
    traceback and reported as UnexpectedError.
    """

    def decorator(fn: Invocation) -> Invocation:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> dict[str, Any]:
            try:
                body = fn(*args, **kwargs)
            except SquaresError as e:
                logger.warning("%s rejected: %s", operation, e.message)
                return failure(e)
            except Exception as e:
                logger.exception("%s failed: %s", operation, e)
                return failure(UnexpectedError(str(e) or UNKNOWN_ERROR_MESSAGE))
            return {"success": True, **body}

        return wrapper

    return decorator
