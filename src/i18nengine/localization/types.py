"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating I18NService call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "MessageKey",
    "MessageText",
    "ResourceSetName",
]

type MessageKey = str
"""Symbolic message key (e.g., 'thanks.message', 'key1')."""

type MessageText = str
"""Localized message text, possibly containing {0}-style placeholders."""

type ResourceSetName = str
"""Name of a translation catalog (e.g., 'org.example.Messages')."""
