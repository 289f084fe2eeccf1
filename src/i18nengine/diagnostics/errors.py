"""i18nengine exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic, DiagnosticCode

if TYPE_CHECKING:
    from i18nengine.core.locale import Locale

__all__ = [
    "FormattingError",
    "I18nError",
    "ResourceSetNotFoundError",
    "TemplateError",
]


class I18nError(Exception):
    """Base exception for all i18nengine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize I18nError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ResourceSetNotFoundError(I18nError, LookupError):
    """No resource set could be resolved for a (name, locale) pair.

    Raised when every fallback step, including the root attempt, failed.
    Distinct from a missing key, which is never an error: callers of the
    service receive this only when every name in the configured chain failed.

    Attributes:
        bundle_name: Resource-set name that could not be resolved
        locale: Locale that was requested
    """

    def __init__(self, bundle_name: str, locale: Locale) -> None:
        """Initialize ResourceSetNotFoundError.

        Args:
            bundle_name: Resource-set name that could not be resolved
            locale: Locale that was requested
        """
        diagnostic = Diagnostic(
            code=DiagnosticCode.RESOURCE_SET_NOT_FOUND,
            message=f"Resource set '{bundle_name}' not found for locale '{locale}'",
            hint=f"Provide a root catalog for '{bundle_name}'",
        )
        super().__init__(diagnostic)
        self.bundle_name = bundle_name
        self.locale = locale


class FormattingError(I18nError):
    """Raised when locale-aware argument formatting fails.

    Carries a fallback_value so the formatter can still render the message
    with the argument's plain string form.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value


class TemplateError(I18nError, ValueError):
    """A message template does not follow the placeholder syntax.

    The formatter catches this and renders the raw template unchanged.

    Attributes:
        template: The offending template
        position: Character offset where parsing failed
    """

    def __init__(self, template: str, position: int, reason: str) -> None:
        diagnostic = Diagnostic(
            code=DiagnosticCode.TEMPLATE_INVALID,
            message=f"Invalid message template at position {position}: {reason}",
            hint="Quote literal braces as '{' and apostrophes as ''",
        )
        super().__init__(diagnostic)
        self.template = template
        self.position = position
