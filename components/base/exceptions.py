"""
Custom exceptions for analysis components.
"""


class ComponentError(Exception):
    """Base exception for all component errors."""

    def __init__(self, message: str, component: str = None, details: dict = None):
        self.message = message
        self.component = component
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ComponentError):
    """Raised when component configuration is invalid or missing."""

    def __init__(self, message: str, component: str = None, missing_keys: list = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, component, details)


class ProcessingError(ComponentError):
    """Raised when component processing fails."""

    def __init__(
        self,
        message: str,
        component: str = None,
        stage: str = None,
        original_error: Exception = None,
    ):
        details = {
            "stage": stage,
            "original_error": str(original_error) if original_error else None,
        }
        super().__init__(message, component, details)
        self.original_error = original_error


class ExternalServiceError(ComponentError):
    """Raised when an external provider (OpenAI embeddings or chat) fails."""

    def __init__(
        self,
        message: str,
        component: str = None,
        service: str = None,
        status_code: int = None,
        retryable: bool = False,
    ):
        details = {
            "service": service,
            "status_code": status_code,
            "retryable": retryable,
        }
        super().__init__(message, component, details)
        self.retryable = retryable


class ProviderTimeoutError(ExternalServiceError):
    """Raised when a provider call exceeds its per-call timeout."""

    def __init__(
        self,
        message: str,
        component: str = None,
        service: str = None,
        timeout_seconds: float = None,
    ):
        super().__init__(message, component, service, retryable=True)
        self.details["timeout_seconds"] = timeout_seconds
