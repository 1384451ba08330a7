"""Custom exceptions for the EquiSplit calculation engine.

This module provides a hierarchy of exception classes for consistent error
handling across property division calculations. All exceptions inherit from
EquiSplitError, making it easy to catch all engine-specific errors.

Example:
    try:
        division = calculator.divide(calculation_input)
    except MissingFactorsError as e:
        # Ask the user for the equitable distribution questionnaire
        return unprocessable(e.details)
    except EquiSplitError as e:
        logger.error(f"Calculation failed: {e}")
        raise
"""

from typing import Any, Optional


class EquiSplitError(Exception):
    """Base exception for all EquiSplit engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.

    Example:
        >>> raise EquiSplitError("Something went wrong", details={"code": 500})
        EquiSplitError: Something went wrong
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize EquiSplitError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the caller can fix the error by correcting
                its input. Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class CalculationError(EquiSplitError):
    """Error raised when a property division calculation cannot complete.

    Attributes:
        step: The calculation step that failed (if known).
        jurisdiction: Two-letter jurisdiction code of the request (if known).
    """

    def __init__(
        self,
        message: str,
        *,
        step: Optional[str] = None,
        jurisdiction: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.step = step
        self.jurisdiction = jurisdiction

        if step:
            self.details["step"] = step
        if jurisdiction:
            self.details["jurisdiction"] = jurisdiction


class InvalidJurisdictionError(CalculationError):
    """Error raised when a jurisdiction code is missing from the state registry.

    Example:
        >>> raise InvalidJurisdictionError("Unknown jurisdiction: ZZ", jurisdiction="ZZ")
        InvalidJurisdictionError: Unknown jurisdiction: ZZ
    """

    def __init__(
        self,
        message: str,
        *,
        jurisdiction: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            step="jurisdiction_lookup",
            jurisdiction=jurisdiction,
            details=details,
            recoverable=True,
        )


class MissingFactorsError(CalculationError):
    """Error raised when equitable distribution is requested without factors.

    Equitable distribution weighs marriage, financial and conduct factors;
    without them the equity factor cannot be computed. The caller maps this
    to an "unprocessable" response so the user can complete the questionnaire.
    """

    def __init__(
        self,
        message: str = "Equitable distribution requires special factors",
        *,
        jurisdiction: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            step="equity_factor",
            jurisdiction=jurisdiction,
            details=details,
            recoverable=True,
        )


class ValidationError(EquiSplitError):
    """Error raised when calculation output violates an engine invariant.

    Attributes:
        field: The field or total that failed validation.
        value: The offending value.
        constraint: The invariant that was violated.

    Example:
        >>> raise ValidationError(
        ...     "Division does not conserve estate value",
        ...     field="total_spouse1_value",
        ...     constraint="spouse totals must equal the net estate",
        ... )
        ValidationError: Division does not conserve estate value
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message, details=details, recoverable=recoverable)
        self.field = field
        self.value = value
        self.constraint = constraint

        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
        if constraint:
            self.details["constraint"] = constraint


class ConfigurationError(EquiSplitError):
    """Error raised when engine configuration is invalid.

    Configuration errors are fatal and require the host application to be
    reconfigured.

    Attributes:
        config_key: The configuration key that is problematic.
        expected: Description of the expected value or format.
        actual: The actual value found (if any).
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, recoverable=False)
        self.config_key = config_key
        self.expected = expected
        self.actual = actual

        if config_key:
            self.details["config_key"] = config_key
        if expected:
            self.details["expected"] = expected
        if actual is not None:
            self.details["actual"] = actual


__all__ = [
    "EquiSplitError",
    "CalculationError",
    "InvalidJurisdictionError",
    "MissingFactorsError",
    "ValidationError",
    "ConfigurationError",
]
