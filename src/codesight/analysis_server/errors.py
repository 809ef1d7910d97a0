"""Error taxonomy for analysis tools."""

import traceback
from enum import Enum
from typing import Any

from .models.symbol_models import SymbolRef


class ErrorCode(str, Enum):
    """Codes reported in ``AnalysisError.code``."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    AMBIGUOUS = "AMBIGUOUS"
    TIMEOUT = "TIMEOUT"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    INTERNAL = "INTERNAL"


class AnalysisToolError(Exception):
    """Base class for errors that abort a whole analysis request."""

    code = ErrorCode.INTERNAL

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(AnalysisToolError):
    code = ErrorCode.INVALID_INPUT


class SymbolNotFoundError(AnalysisToolError):
    code = ErrorCode.NOT_FOUND


class AmbiguousSymbolError(AnalysisToolError):
    """The target matched several symbols; carries the candidates and a hint."""

    code = ErrorCode.AMBIGUOUS

    def __init__(self, message: str, candidates: list[SymbolRef], hint: str | None = None):
        super().__init__(message)
        self.candidates = candidates
        self.hint = hint


class AnalysisTimeoutError(AnalysisToolError):
    code = ErrorCode.TIMEOUT


class BackendUnavailableError(AnalysisToolError):
    code = ErrorCode.BACKEND_UNAVAILABLE


def describe_exception(exc: BaseException) -> dict[str, Any]:
    """Diagnostic details for an unexpected exception."""
    return {
        "exception": f"{type(exc).__module__}.{type(exc).__qualname__}",
        "message": str(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }
