"""i18nengine - Locale-aware text lookup over named resource sets.

Resolves localized text for a (resource set, locale, key) triple with a
fallback ladder that never leaks the host's default locale into requests that
did not ask for it, caches resolved resource sets for lock-free reads, parses
HTTP Accept-Language values, and formats positional arguments with Babel.

Public API:
    I18NService - Lookup facade with resource-set chain fallback
    I18NConfig - Immutable service configuration
    Locale - Immutable language/region identifier
    AcceptLanguageTokenizer - Accept-Language header iterator
    MappingResourceSetProvider - In-memory catalogs
    PathResourceSetProvider - JSON catalogs on disk
    format_message - Positional message formatting

Exceptions:
    I18nError - Base exception class
    ResourceSetNotFoundError - No resource set for any name in the chain
    FormattingError - Locale-aware argument formatting failed

Submodules:
    i18nengine.localization - Providers, resolver, cache, tokenizer, service
    i18nengine.runtime - Message formatting and LocaleContext
    i18nengine.diagnostics - Error types and diagnostic codes
"""

# Essential Public API - Minimal exports for clean namespace
from .config import I18NConfig
from .core import Locale
from .diagnostics import FormattingError, I18nError, ResourceSetNotFoundError
from .localization import (
    AcceptLanguageTokenizer,
    FallbackInfo,
    I18NService,
    MappingResourceSetProvider,
    PathResourceSetProvider,
    ResourceSet,
    ResourceSetProvider,
)
from .runtime import format_message

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("i18nengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "AcceptLanguageTokenizer",
    "FallbackInfo",
    "FormattingError",
    "I18NConfig",
    "I18NService",
    "I18nError",
    "Locale",
    "MappingResourceSetProvider",
    "PathResourceSetProvider",
    "ResourceSet",
    "ResourceSetNotFoundError",
    "ResourceSetProvider",
    "__version__",
    "format_message",
]
