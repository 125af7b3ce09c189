"""
Exception hierarchy for the MangaTran client.

Translate operations never let these escape to callers; they are carried in
``TranslationOutcome.error`` so the reason for a fallback stays inspectable.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Iterable, List


class MangaTranError(Exception):
    """Base exception for all MangaTran errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = False,
        suggestion: Optional[str] = None
    ):
        """
        Initialize error.

        Args:
            message: Human-readable error message
            details: Additional error details
            recoverable: Whether error can be recovered from
            suggestion: Suggested fix or workaround
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.suggestion = suggestion

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "suggestion": self.suggestion
        }

    def __str__(self) -> str:
        result = self.message
        if self.suggestion:
            result += f"\nSuggestion: {self.suggestion}"
        return result


class DisallowedModelError(MangaTranError):
    """Raised when the selected backend model is not in the allow-list."""

    def __init__(self, model: str, allowed: Iterable[str]):
        allowed_list = sorted(allowed)
        message = f"Model '{model}' is not in the allowed model list"
        details = {
            "model": model,
            "allowed_models": allowed_list
        }
        suggestion = f"Allowed models: {', '.join(allowed_list)}" if allowed_list else "The allow-list is empty"
        super().__init__(message, details, recoverable=False, suggestion=suggestion)
        self.model = model
        self.allowed = allowed_list


class TransportError(MangaTranError):
    """Raised when the chat-completions call fails: network error, non-2xx status or timeout."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status: Optional[int] = None,
        original_error: Optional[BaseException] = None,
        timeout: bool = False
    ):
        """
        Initialize transport error.

        Args:
            message: Error message
            url: Endpoint that was called
            status: HTTP status code, when a response was received
            original_error: Underlying exception, if any
            timeout: True when the attempt exceeded its time budget
        """
        details = {
            "url": url,
            "status": status,
            "original_error": repr(original_error) if original_error else None,
            "timeout": timeout
        }
        suggestion = None
        if timeout:
            suggestion = "The endpoint did not answer in time"
        elif status is None:
            suggestion = "Check that the translation endpoint is reachable"
        elif status >= 500:
            suggestion = "The translation service reported an internal error"
        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.url = url
        self.status = status
        self.original_error = original_error

    @property
    def timed_out(self) -> bool:
        return self.details.get("timeout", False)


class MalformedResponseError(MangaTranError):
    """Raised when a reply is missing content, is not valid JSON or has the wrong shape."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        content: Optional[str] = None
    ):
        details = {
            "operation": operation,
            # Keep the logged excerpt short; image replies can be large.
            "content": content[:200] if isinstance(content, str) else content
        }
        super().__init__(message, details, recoverable=True)
        self.operation = operation
        self.content = content


class ConfigurationError(MangaTranError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        valid_values: Optional[List[Any]] = None
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that's invalid
            invalid_value: Invalid value provided
            valid_values: List of valid values
        """
        details = {
            "config_key": config_key,
            "invalid_value": invalid_value,
            "valid_values": valid_values
        }

        suggestion = None
        if config_key and valid_values:
            suggestion = f"Valid values for {config_key}: {', '.join(map(str, valid_values))}"
        elif config_key:
            suggestion = f"Check configuration for '{config_key}'"

        super().__init__(message, details, recoverable=True, suggestion=suggestion)
        self.config_key = config_key
        self.invalid_value = invalid_value
        self.valid_values = valid_values
