"""
Error Definitions for gen-mode

This module defines the exception classes raised by the generation pipeline.
Every failure is fatal to a run: the CLI reports the error and exits without
writing any output.
"""

from typing import Any, Dict, Optional


class GenModeError(Exception):
    """Base exception class for all gen-mode errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InputOutputError(GenModeError):
    """Raised when an input document cannot be read or the output cannot be written."""

    def __init__(self, path: str, operation: str, reason: str, **details):
        message = f"I/O error during {operation} on {path}: {reason}"

        super().__init__(message, details)
        self.path = path
        self.operation = operation
        self.reason = reason


class ParseError(GenModeError):
    """Raised when an input document is not well-formed structured data."""

    def __init__(self, source: str, reason: str, **details):
        message = f"Cannot parse {source}: {reason}"

        super().__init__(message, details)
        self.source = source
        self.reason = reason


class ValidationError(GenModeError):
    """Raised when descriptor data or generated source is invalid."""

    def __init__(self, field: str, value: Any, constraint: str, **details):
        message = f"Validation failed for {field}: {value!r} violates constraint '{constraint}'"

        super().__init__(message, details)
        self.field = field
        self.value = value
        self.constraint = constraint
