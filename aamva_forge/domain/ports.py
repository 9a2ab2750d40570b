"""Domain Ports - Abstract Contracts for External Collaborators.

The codec itself is pure: it reads an Attribute Record or a raw string and
returns a value. Everything around it (OCR of a photographed card, rendering
the 2-D barcode symbol, scanning a symbol back to text) is reached through
the Port interfaces defined here.

Architecture:
    - Pure abstract interfaces with zero infrastructure dependencies
    - Adapters implement these ports; the codec never imports an adapter
    - Result carries success/failure across the boundary without exceptions
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar('T')


# ============================================================================
# Result Type for Success/Failure Communication
# ============================================================================

@dataclass(frozen=True)
class Result(Generic[T]):
    """Result type for communicating success or failure without exceptions.

    Attributes:
        success: True if the operation succeeded, False otherwise
        value: The successful result value (only present if success=True)
        error: Error message (only present if success=False)
        error_type: Type of error (EncodingError, ValueError, etc.)
        error_details: Additional error context (source, missing elements, etc.)

    Example:
        ```python
        result = encode_record_safe(record)
        if result.is_success():
            renderer.render(result.value)
        else:
            log_error(result.error, result.error_details)
        ```
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    error_details: Optional[dict] = None

    @classmethod
    def success_result(cls, value: T) -> 'Result[T]':
        """Create a successful result."""
        return cls(success=True, value=value)

    @classmethod
    def failure_result(
        cls,
        error: Union[str, Exception],
        error_type: Optional[str] = None,
        error_details: Optional[dict] = None
    ) -> 'Result[T]':
        """Create a failure result.

        Parameters:
            error: Error message or exception
            error_type: Type of error; derived from the exception when omitted
            error_details: Additional context

        Returns:
            Result: Failure result with error information
        """
        error_message = str(error) if isinstance(error, Exception) else error
        error_type_name = error_type or (type(error).__name__ if isinstance(error, Exception) else "UnknownError")

        return cls(
            success=False,
            value=None,
            error=error_message,
            error_type=error_type_name,
            error_details=error_details or {}
        )

    def is_success(self) -> bool:
        """Check if result is successful."""
        return self.success

    def is_failure(self) -> bool:
        """Check if result is a failure."""
        return not self.success


# ============================================================================
# Custom Exception Hierarchy
# ============================================================================

class AamvaForgeError(Exception):
    """Base exception for all codec-related errors."""
    pass


class EncodingError(AamvaForgeError):
    """Raised when the Encoder is handed input that violates its contract.

    Attributes:
        missing_elements: Element identifiers whose slots were unavailable
    """

    def __init__(self, message: str, missing_elements: Optional[list[str]] = None):
        super().__init__(message)
        self.missing_elements = missing_elements or []


class JurisdictionNotFoundError(AamvaForgeError):
    """Raised when a jurisdiction code is not in the registry.

    Attributes:
        code: The code that was looked up
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class ConfigurationError(AamvaForgeError):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


# ============================================================================
# Collaborator Ports
# ============================================================================

class OCRTextPort(ABC):
    """Port for recognizing free text on a photographed document."""

    @abstractmethod
    def recognize(self, image: bytes) -> str:
        """Return the recognized text of an image (may be empty)."""
        pass


class BarcodeRendererPort(ABC):
    """Port for turning an encoded record into a 2-D barcode symbol image.

    Implementations consume the Encoder's output verbatim.
    """

    @abstractmethod
    def render(self, payload: str) -> bytes:
        """Render the payload and return encoded image bytes."""
        pass


class BarcodeScannerPort(ABC):
    """Port for reading the raw text out of a captured barcode symbol.

    The returned text may carry transport noise (CR/LF substitution); it is
    handed to the Decoder unmodified.
    """

    @abstractmethod
    def scan(self, image: bytes) -> Optional[str]:
        """Return the decoded payload, or None if no symbol was found."""
        pass


