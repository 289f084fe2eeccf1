"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing resource sets)
        2000-2999: Template errors
    """

    # Lookup errors (1000-1999)
    RESOURCE_SET_NOT_FOUND = 1001

    # Template errors (2000-2999)
    TEMPLATE_INVALID = 2002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[RESOURCE_SET_NOT_FOUND]: Resource set 'app.Messages' not found for locale 'iw_IL'
              = help: Provide a root catalog for 'app.Messages'

        Control characters in the message are escaped so that attacker-supplied
        locale strings cannot forge extra log lines.

        Returns:
            Formatted error message
        """
        message = _escape_control(self.message)
        text = f"error[{self.code.name}]: {message}"
        if self.hint:
            text += f"\n  = help: {_escape_control(self.hint)}"
        return text


def _escape_control(text: str) -> str:
    """Escape control characters (newlines, ESC, etc.) for single-line output."""
    return "".join(
        ch if ch.isprintable() else ch.encode("unicode_escape").decode("ascii")
        for ch in text
    )
