"""Runtime formatting package.

Provides positional message formatting with Babel (CLDR) locale conventions.
Depends on core and diagnostics only.

Python 3.13+.
"""

from .formatter import Placeholder, format_message, parse_template
from .locale_context import LocaleContext

__all__ = [
    "LocaleContext",
    "Placeholder",
    "format_message",
    "parse_template",
]
