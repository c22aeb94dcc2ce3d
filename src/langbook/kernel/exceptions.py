"""Unified exception hierarchy for langbook.

All library exceptions inherit from LangbookException, enabling unified
error handling across modules.

Categories:
- BusinessException: Rule violations, malformed input
- ConfigurationException: Inconsistent resolver configuration
- InfrastructureException: Failures reading message data
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class LangbookException(Exception):
    """Base exception for all langbook errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "LOCALE_HEADER_INVALID").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(LangbookException):
    """Rule violations and malformed caller input."""


class ValidationException(BusinessException, ValueError):
    """Input validation failures."""


class InvalidLocaleHeaderException(ValidationException):
    """An ``Accept-Language`` item does not match the locale grammar."""

    def __init__(self, value: str) -> None:
        super().__init__(
            f'Invalid "Accept-Language" value "{value}".',
            code="LOCALE_HEADER_INVALID",
            context={"value": value},
        )
        self.value = value


class MessageFormatException(BusinessException, ValueError):
    """A message template is malformed or misses an argument."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(LangbookException):
    """Resolver configuration is inconsistent."""


class RedirectCycleException(ConfigurationException):
    """Locale redirects form a loop."""

    def __init__(self, chain: list[str]) -> None:
        super().__init__(
            f"Locale redirect cycle detected: {' -> '.join(chain)}",
            code="LOCALE_REDIRECT_CYCLE",
            context={"chain": list(chain)},
        )
        self.chain = list(chain)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(LangbookException):
    """Infrastructure failures: file system, parsers, external stores."""


class MessageDataException(InfrastructureException):
    """Message data exists but cannot be turned into a message tree."""
