"""Localization package for I18NService.

Provides the full lookup stack: type aliases, the Accept-Language tokenizer,
resource-set providers, fallback resolution, caching, and the service facade.

Submodules:
    types      - PEP 695 type aliases (MessageKey, MessageText, ResourceSetName)
    tokenizer  - AcceptLanguageTokenizer, LocaleCandidate, parse_accept_language
    loading    - ResourceSet, ResourceSetProvider protocol, MappingResourceSetProvider,
                 PathResourceSetProvider, FallbackInfo
    resolver   - FallbackResolver (locale fallback ladder)
    cache      - BundleCache (copy-on-write resource-set cache)
    service    - I18NService (chain fallback and formatting facade)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from i18nengine.enums import ResolutionStep
from i18nengine.localization.cache import BundleCache
from i18nengine.localization.loading import (
    CatalogChainProvider,
    FallbackInfo,
    MappingResourceSetProvider,
    PathResourceSetProvider,
    ResourceSet,
    ResourceSetProvider,
)
from i18nengine.localization.resolver import FallbackResolver, Resolution
from i18nengine.localization.service import I18NService
from i18nengine.localization.tokenizer import (
    AcceptLanguageTokenizer,
    LocaleCandidate,
    parse_accept_language,
)
from i18nengine.localization.types import MessageKey, MessageText, ResourceSetName

__all__ = [
    # Facade
    "I18NService",
    # Provider protocol and implementations
    "ResourceSetProvider",
    "CatalogChainProvider",
    "MappingResourceSetProvider",
    "PathResourceSetProvider",
    "ResourceSet",
    # Resolution and caching
    "BundleCache",
    "FallbackResolver",
    "Resolution",
    "ResolutionStep",
    # Accept-Language parsing
    "AcceptLanguageTokenizer",
    "LocaleCandidate",
    "parse_accept_language",
    # Fallback observability
    "FallbackInfo",
    # Type aliases for user code type annotations
    "MessageKey",
    "MessageText",
    "ResourceSetName",
]
