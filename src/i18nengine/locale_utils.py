"""Locale utilities: normalization, system locale detection, Babel lookup.

Centralizes locale format handling used throughout the codebase. The ambient
default locale is read from the process environment at call time; nothing in
this module caches it.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from typing import TYPE_CHECKING

from i18nengine.constants import FALLBACK_BABEL_LOCALE, MAX_BABEL_LOCALE_CACHE_SIZE
from i18nengine.core.locale import Locale

if TYPE_CHECKING:
    from babel import Locale as BabelLocale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
    "system_default_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to POSIX format.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Case is canonicalized through Locale so that "EN-us" and "en_US" agree.

    Args:
        locale_code: Locale code (e.g., "en-US", "pt-BR", "de_DE.UTF-8")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR", "de_DE")

    Raises:
        ValueError: If locale_code cannot be parsed

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("PT-br")
        'pt_BR'
        >>> normalize_locale("en")
        'en'
    """
    return str(Locale.parse(locale_code))


@functools.lru_cache(maxsize=MAX_BABEL_LOCALE_CACHE_SIZE)
def get_babel_locale(locale: Locale) -> BabelLocale:
    """Get a Babel Locale for formatting, with caching.

    Parses the locale once and caches the result. The root locale and locales
    unknown to CLDR fall back to en_US (logged once per locale thanks to the
    cache).

    Thread-safe via lru_cache internal locking.

    Args:
        locale: Locale to format for

    Returns:
        Babel Locale object

    Example:
        >>> get_babel_locale(Locale("de", "DE")).territory
        'DE'
        >>> get_babel_locale(Locale("xx")).language
        'en'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale as BabelLocale  # noqa: PLC0415
    from babel import UnknownLocaleError  # noqa: PLC0415

    if locale.is_root:
        return BabelLocale.parse(FALLBACK_BABEL_LOCALE)

    try:
        return BabelLocale.parse(str(locale))
    except UnknownLocaleError as e:
        logger.warning(
            "Unknown locale '%s': %s. Formatting with %s", locale, e, FALLBACK_BABEL_LOCALE
        )
    except ValueError as e:
        logger.warning(
            "Invalid locale '%s': %s. Formatting with %s", locale, e, FALLBACK_BABEL_LOCALE
        )
    return BabelLocale.parse(FALLBACK_BABEL_LOCALE)


def clear_locale_cache() -> None:
    """Clear the Babel locale cache (tests and long-running processes)."""
    get_babel_locale.cache_clear()


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Normalizes the result to POSIX format. Filters out "C" and "POSIX"
    pseudo-locales and values that do not parse as a locale.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format.
        Returns "en_US" if not determinable and raise_on_failure is False.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.

    Example:
        >>> import os
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_locale()
        'de_DE'
    """
    import locale as locale_module  # noqa: PLC0415

    # Try OS-level locale detection first
    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    # Fall back to environment variables in order of precedence
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value.split(".")[0] not in ("C", "POSIX", ""):
            try:
                return normalize_locale(value)
            except ValueError:
                logger.debug("Ignoring unparseable %s=%r", var, value)

    # No locale detected
    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    # Default fallback
    return "en_US"


def system_default_locale() -> Locale:
    """Return the process's ambient default locale as a Locale.

    This is the default ``default_locale`` provider of I18NService. It is
    re-evaluated on every call so that changes to the environment are seen.

    Returns:
        Ambient default Locale (en_US when undeterminable)
    """
    return Locale.parse(get_system_locale())
