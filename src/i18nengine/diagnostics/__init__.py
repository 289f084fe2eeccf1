"""Diagnostic system for i18nengine errors.

Provides structured error diagnostics with codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import FormattingError, I18nError, ResourceSetNotFoundError, TemplateError

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "FormattingError",
    "I18nError",
    "ResourceSetNotFoundError",
    "TemplateError",
]
