"""boundedflow Error Handling Module

This module defines the error handling system for boundedflow, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for boundedflow.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    INVALID_TIMEOUT = "INVALID_TIMEOUT"
    MISSING_REFERENCE = "MISSING_REFERENCE"
    INVALID_DELAY_STRATEGY = "INVALID_DELAY_STRATEGY"
    CONFIG_FILE_NOT_FOUND = "CONFIG_FILE_NOT_FOUND"
    INVALID_CONFIG = "INVALID_CONFIG"

    # Actor Errors
    ACTOR_INTERRUPTED = "ACTOR_INTERRUPTED"
    PRODUCER_ERROR = "PRODUCER_ERROR"
    CONSUMER_ERROR = "CONSUMER_ERROR"

    # Pipeline Errors
    PIPELINE_INITIALIZATION_ERROR = "PIPELINE_INITIALIZATION_ERROR"
    PIPELINE_EXECUTION_ERROR = "PIPELINE_EXECUTION_ERROR"
    PIPELINE_SHUTDOWN_ERROR = "PIPELINE_SHUTDOWN_ERROR"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so that contexts serialize cleanly into log records.

    Attributes:
        operation: Optional operation name that caused the error
        actor_id: Optional producer/consumer identifier
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    actor_id: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            # frozen dataclass: bypass __setattr__ for the coerced copy
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict for logging.

        Returns:
            Dictionary with the non-empty fields and a guaranteed
            additional_data key.

        Example:
            >>> ErrorContext(operation="enqueue").safe_dict()
            {'operation': 'enqueue', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.actor_id is not None:
            data["actor_id"] = self.actor_id
        data["additional_data"] = dict(self.additional_data) if self.additional_data else {}
        return data


class BoundedFlowError(Exception):
    """Base exception class for all boundedflow errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize BoundedFlowError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ApplicationError(BoundedFlowError):
    """Application-level errors.

    These errors occur at the application layer, typically related to
    configuration or command handling.
    """


class InfrastructureError(BoundedFlowError):
    """Errors raised while running threads and shared state.

    Examples:
    - An actor interrupted at a wait point
    - A pipeline thread that could not be started or joined
    """


class ConfigurationError(ApplicationError):
    """Invalid construction arguments or settings.

    Raised before any thread starts: non-positive capacity, non-positive
    wait timeout, missing references, non-callable delay strategies.
    """


class InterruptedExecution(InfrastructureError):
    """An actor was asked to stop while it was waiting.

    The actor records this error on itself and exits; it is never
    re-raised out of ``Thread.run``.
    """


class PipelineExecutionError(InfrastructureError):
    """A pipeline run failed for a reason other than configuration."""


# Convenience functions for common error scenarios
def create_config_error(
    message: str,
    code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
    field: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ConfigurationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = {"field": field} if field else None
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ConfigurationError(code, message, context, original_error)


def create_missing_reference_error(
    name: str,
    operation: str | None = None,
) -> ConfigurationError:
    """Create an error for a required reference that was not supplied."""
    return create_config_error(
        f"Required reference '{name}' must not be None",
        code=ErrorCode.MISSING_REFERENCE,
        field=name,
        operation=operation,
    )


def create_interrupted_error(
    actor_id: str,
    operation: str,
    **additional_data: PrimitiveContextValue,
) -> InterruptedExecution:
    """Create an interruption error for an actor stopped at a wait point."""
    context = ErrorContext(
        operation=operation,
        actor_id=actor_id,
        additional_data=additional_data or None,
    )
    return InterruptedExecution(
        ErrorCode.ACTOR_INTERRUPTED,
        f"{actor_id} interrupted during {operation}",
        context,
    )
