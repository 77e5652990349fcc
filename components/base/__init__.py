"""
Base classes and interfaces for all components.
"""

from components.base.component import BaseComponent
from components.base.config import ComponentConfig
from components.base.exceptions import (
    ComponentError,
    ConfigurationError,
    ExternalServiceError,
    ProcessingError,
    ProviderTimeoutError,
)
from components.base.logging import get_logger
from components.base.rules import (
    EitherPattern,
    KeywordPattern,
    Rule,
    all_matches,
    first_match,
    keywords_present,
    normalize_text,
)

__all__ = [
    "BaseComponent",
    "ComponentConfig",
    "ComponentError",
    "ConfigurationError",
    "ExternalServiceError",
    "ProcessingError",
    "ProviderTimeoutError",
    "get_logger",
    "EitherPattern",
    "KeywordPattern",
    "Rule",
    "all_matches",
    "first_match",
    "keywords_present",
    "normalize_text",
]
