"""Shared constants for i18nengine.

Centralizes configuration constants used across the localization and runtime
packages. Placing constants here avoids circular imports and provides a single
source of truth.

Constants are grouped by domain:
- Header limits: DoS prevention for Accept-Language parsing
- Configuration: environment variable names
- Formatting: fallbacks used by the message formatter

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Header limits
    "MAX_ACCEPT_LANGUAGE_LENGTH",
    "MAX_LOCALE_CANDIDATES",
    "DEFAULT_QUALITY",
    # Configuration
    "DEV_MODE_ENV_VAR",
    # Cache limits
    "MAX_BABEL_LOCALE_CACHE_SIZE",
    # Formatting
    "FALLBACK_BABEL_LOCALE",
    "NULL_ARGUMENT_TEXT",
    "MAX_TEMPLATE_CACHE_SIZE",
]

# ============================================================================
# HEADER LIMITS
# ============================================================================

# Maximum Accept-Language header length considered by the tokenizer.
# Real browsers send well under 200 characters; anything past 4 KiB is
# truncated at the last complete segment.
MAX_ACCEPT_LANGUAGE_LENGTH: int = 4096

# Maximum number of comma-separated segments parsed from one header.
MAX_LOCALE_CANDIDATES: int = 64

# Quality weight assumed when a segment carries no ";q=" parameter.
DEFAULT_QUALITY: float = 1.0

# ============================================================================
# CONFIGURATION
# ============================================================================

# Environment variable enabling development mode ("true", case-insensitive).
# In development mode every lookup clears the resource-set cache first.
DEV_MODE_ENV_VAR: str = "I18N_DEV_MODE"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached Babel Locale objects used for argument formatting.
MAX_BABEL_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# FORMATTING
# ============================================================================

# Babel locale used for the root locale and for locales CLDR does not know.
FALLBACK_BABEL_LOCALE: str = "en_US"

# Rendering of a None argument in a formatted message.
NULL_ARGUMENT_TEXT: str = "null"

# Maximum parsed message templates kept by the formatter.
MAX_TEMPLATE_CACHE_SIZE: int = 1024
