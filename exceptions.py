"""
Custom Exceptions for ConsultScribe
===================================

This module defines a hierarchy of custom exceptions that:

1. **Categorize Errors**: Different exception types for different problems
2. **Carry Context**: Include relevant information for debugging
3. **Support APIs**: Map cleanly to HTTP status codes

Exception Hierarchy:
    ConsultScribeError (base)
    ├── TranslationError
    │   ├── TranslationServiceError
    │   ├── TranslationTimeoutError
    │   └── MalformedTranslationError
    ├── ConsultationError
    │   ├── ConsultationNotFoundError
    │   ├── InvalidStatusTransitionError
    │   ├── EmptyTranscriptError
    │   └── MissingPrescriptionError
    └── ConfigurationError

TranslationError never escapes the note pipeline: the pipeline catches it
and falls back to the untranslated transcript.
"""

from typing import Optional


class ConsultScribeError(Exception):
    """
    Base exception for all ConsultScribe errors.

    All custom exceptions inherit from this, allowing code to catch
    all ConsultScribe-related errors with a single except clause:

        try:
            store.approve(consultation_id)
        except ConsultScribeError as e:
            logger.error(f"ConsultScribe error: {e}")

    Attributes:
        message: Human-readable error description
        details: Additional context (dict for API responses)
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to a structured, JSON-serialisable error body."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# =============================================================================
# Translation Errors
# =============================================================================

class TranslationError(ConsultScribeError):
    """Base class for translation failures."""
    pass


class TranslationServiceError(TranslationError):
    """Raised when the translation endpoint cannot be reached or errors out."""

    def __init__(self, endpoint: str, original_error: str):
        super().__init__(
            message=f"Translation service error at {endpoint}: {original_error}",
            details={
                "endpoint": endpoint,
                "original_error": original_error
            }
        )


class TranslationTimeoutError(TranslationError):
    """Raised when the translation call exceeds its time budget."""

    def __init__(self, endpoint: str, timeout_seconds: float):
        super().__init__(
            message=f"Translation timed out after {timeout_seconds:.1f}s",
            details={
                "endpoint": endpoint,
                "timeout_seconds": timeout_seconds
            }
        )


class MalformedTranslationError(TranslationError):
    """Raised when the translation response cannot be interpreted."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Malformed translation response: {reason}",
            details={"reason": reason}
        )


# =============================================================================
# Consultation Errors
# =============================================================================

class ConsultationError(ConsultScribeError):
    """Base class for consultation workflow errors."""
    pass


class ConsultationNotFoundError(ConsultationError):
    """Raised when a consultation id is unknown."""

    def __init__(self, consultation_id: str):
        super().__init__(
            message=f"Consultation not found: {consultation_id}",
            details={"consultation_id": consultation_id}
        )


class InvalidStatusTransitionError(ConsultationError):
    """Raised when a review action is not allowed in the current status."""

    def __init__(self, consultation_id: str, current_status: str, action: str):
        super().__init__(
            message=(
                f"Cannot {action} consultation {consultation_id} "
                f"in status '{current_status}'"
            ),
            details={
                "consultation_id": consultation_id,
                "current_status": current_status,
                "action": action
            }
        )


class EmptyTranscriptError(ConsultationError):
    """Raised when a blank transcript is submitted."""

    def __init__(self):
        super().__init__(
            message="Transcript is empty. Record the consultation before submitting.",
            details={}
        )


class MissingPrescriptionError(ConsultationError):
    """Raised when sending to pharmacy without any prescription entered."""

    def __init__(self, consultation_id: str):
        super().__init__(
            message="Please enter prescriptions before sending to pharmacy",
            details={"consultation_id": consultation_id}
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(ConsultScribeError):
    """Raised when there's a configuration problem."""

    def __init__(self, setting_name: str, issue: str):
        super().__init__(
            message=f"Configuration error for '{setting_name}': {issue}",
            details={
                "setting_name": setting_name,
                "issue": issue
            }
        )
