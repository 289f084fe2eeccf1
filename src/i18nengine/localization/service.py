"""Resource-set lookup with chain fallback and positional formatting.

Implements I18NService, the public facade of the package. A lookup resolves
one resource set for (name, locale) through the BundleCache, then walks the
configured resource-set names when the key is missing.

Key behaviours:
- A missing key is never an error: the key itself is returned.
- ResourceSetNotFoundError reaches the caller only when every name in the
  chain failed to resolve.
- The ambient default locale is re-read on every call that omits a locale.
- Locales may be given as Locale objects or as raw Accept-Language values.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from i18nengine.config import I18NConfig
from i18nengine.core.locale import Locale
from i18nengine.diagnostics import ResourceSetNotFoundError
from i18nengine.locale_utils import system_default_locale
from i18nengine.localization.cache import BundleCache
from i18nengine.localization.loading import FallbackInfo, ResourceSet, ResourceSetProvider
from i18nengine.localization.resolver import FallbackResolver
from i18nengine.localization.tokenizer import AcceptLanguageTokenizer
from i18nengine.localization.types import MessageKey, ResourceSetName
from i18nengine.runtime.formatter import format_message

__all__ = ["I18NService"]

logger = logging.getLogger(__name__)

type LocaleLike = Locale | str | None


class I18NService:
    """Localized text lookup over an ordered chain of resource sets.

    Example - In-memory catalogs:
        >>> provider = MappingResourceSetProvider({
        ...     ("i18n", ""): {"key1": "[] value1", "thanks": "Thanks {0}!"},
        ...     ("i18n", "de"): {"key1": "[de] value1"},
        ...     ("FooBundle", "fr"): {"key3": "[fr] value3"},
        ...     ("FooBundle", ""): {"key3": "[] value3"},
        ... })
        >>> i18n = I18NService(
        ...     provider,
        ...     bundle_names=("FooBundle",),
        ...     default_bundle_name="i18n",
        ...     default_locale=lambda: Locale("de"),
        ... )
        >>> i18n.get_string("key1", Locale("iw", "IL"))
        '[] value1'
        >>> i18n.get_string("key3", "fr-FR, en;q=0.5")
        '[fr] value3'
        >>> i18n.format("thanks", "jason")
        'Thanks jason!'
        >>> i18n.get_string("no.such.key")
        'no.such.key'

    Thread Safety:
        All methods may be called concurrently. The only shared mutable state
        is the BundleCache, which publishes entries atomically.
    """

    __slots__ = ("_cache", "_config", "_default_locale", "_on_fallback")

    def __init__(
        self,
        provider: ResourceSetProvider,
        *,
        bundle_names: Sequence[ResourceSetName] = (),
        default_bundle_name: ResourceSetName | None = None,
        dev_mode: bool = False,
        config: I18NConfig | None = None,
        default_locale: Callable[[], Locale] = system_default_locale,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            provider: Source of resource sets
            bundle_names: Ordered resource-set names searched on a key miss
            default_bundle_name: Name used when a call names no resource set;
                searched first in the chain
            dev_mode: Clear the resource-set cache before every lookup
            config: Complete configuration; when given, ``bundle_names``,
                ``default_bundle_name`` and ``dev_mode`` must be left unset
            default_locale: Returns the ambient default locale; called on
                every lookup that omits a locale
            on_fallback: Optional callback invoked when a key is served by a
                resource set other than the one requested. Receives a
                FallbackInfo with requested_bundle, resolved_bundle, locale
                and key.

        Raises:
            ValueError: If config is combined with individual settings
        """
        if config is None:
            config = I18NConfig(tuple(bundle_names), default_bundle_name, dev_mode)
        elif bundle_names or default_bundle_name is not None or dev_mode:
            msg = "Pass either config or bundle_names/default_bundle_name/dev_mode, not both"
            raise ValueError(msg)

        self._config = config
        self._default_locale = default_locale
        self._on_fallback = on_fallback
        resolver = FallbackResolver(provider, default_locale)
        self._cache = BundleCache(resolver, dev_mode=config.dev_mode)

        if config.dev_mode:
            logger.info("Development mode enabled: resource sets reload on every lookup")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> I18NConfig:
        """Active configuration (read-only)."""
        return self._config

    @property
    def bundle_names(self) -> tuple[ResourceSetName, ...]:
        """Search order: default name first, then configured names."""
        return self._config.effective_bundle_names

    @property
    def default_bundle_name(self) -> ResourceSetName | None:
        """Name used when a call names no resource set."""
        return self._config.default_bundle_name

    @property
    def default_language(self) -> str:
        """Language of the ambient default locale, read now."""
        return self._default_locale().language

    @property
    def default_region(self) -> str:
        """Region of the ambient default locale, read now."""
        return self._default_locale().region

    @property
    def dev_mode(self) -> bool:
        """Whether the cache is cleared before every lookup."""
        return self._config.dev_mode

    @property
    def cache(self) -> BundleCache:
        """The underlying resource-set cache."""
        return self._cache

    def __repr__(self) -> str:
        return (
            f"I18NService(bundle_names={self.bundle_names!r}, "
            f"dev_mode={self._config.dev_mode}, cache={self._cache!r})"
        )

    # ------------------------------------------------------------------
    # Locale handling
    # ------------------------------------------------------------------

    def get_locale(self, header: str | None) -> Locale:
        """Return the preferred locale of an Accept-Language value.

        Args:
            header: Raw header value, or None

        Returns:
            The highest-weighted parseable locale, or the ambient default
            locale when the header is empty or yields nothing

        Example:
            >>> i18n.get_locale("en, es;q=0.8, zh-TW;q=0.1")
            Locale(language='en', region='')
        """
        if header:
            tokenizer = AcceptLanguageTokenizer(header)
            if tokenizer.has_next():
                return tokenizer.next()
        return self._default_locale()

    def _coerce_locale(self, locale: LocaleLike) -> Locale:
        match locale:
            case None:
                return self._default_locale()
            case Locale():
                return locale
            case str():
                return self.get_locale(locale)
        msg = f"locale must be a Locale, a string, or None, got {type(locale).__name__}"
        raise TypeError(msg)

    def _primary_name(self, bundle_name: ResourceSetName | None) -> ResourceSetName:
        name = bundle_name.strip() if bundle_name is not None else ""
        if name:
            return name
        if self._config.default_bundle_name is not None:
            return self._config.default_bundle_name
        msg = "No resource set named and no default_bundle_name configured"
        raise ValueError(msg)

    # ------------------------------------------------------------------
    # Resource sets
    # ------------------------------------------------------------------

    def get_bundle(
        self,
        bundle_name: ResourceSetName | None = None,
        locale: LocaleLike = None,
    ) -> ResourceSet:
        """Return the resource set resolved for (bundle_name, locale).

        Args:
            bundle_name: Resource-set name, or None for the default name
            locale: Locale, Accept-Language value, or None for the ambient default

        Returns:
            Cached or freshly resolved ResourceSet

        Raises:
            ResourceSetNotFoundError: If the set cannot be resolved
            ValueError: If no name is given and no default is configured
        """
        return self._cache.get(self._primary_name(bundle_name), self._coerce_locale(locale))

    def get_bundle_for_header(
        self, bundle_name: ResourceSetName | None, header: str | None
    ) -> ResourceSet:
        """Return the resource set for the preferred locale of a header."""
        return self._cache.get(self._primary_name(bundle_name), self.get_locale(header))

    def clear_cache(self) -> None:
        """Drop every cached resource set; the next lookups re-resolve."""
        self._cache.clear_all()
        logger.info("Resource-set cache cleared")

    # ------------------------------------------------------------------
    # Text lookup
    # ------------------------------------------------------------------

    def _chain(self, primary: ResourceSetName) -> tuple[ResourceSetName, ...]:
        return (primary, *(name for name in self.bundle_names if name != primary))

    def _lookup(
        self, key: MessageKey, locale: Locale, primary: ResourceSetName
    ) -> tuple[ResourceSetName, str] | None:
        """Find key along the chain.

        Returns:
            (serving name, text), or None when no resolved set has the key

        Raises:
            ResourceSetNotFoundError: If no name in the chain resolved
        """
        first_error: ResourceSetNotFoundError | None = None
        resolved_any = False

        for name in self._chain(primary):
            try:
                resource_set = self._cache.get(name, locale)
            except ResourceSetNotFoundError as e:
                logger.debug("Skipping %s: %s", name, e)
                if first_error is None:
                    first_error = e
                continue
            resolved_any = True
            text = resource_set.get(key)
            if text is not None:
                return (name, text)

        if not resolved_any and first_error is not None:
            raise first_error
        return None

    def get_string(
        self,
        key: MessageKey,
        locale: LocaleLike = None,
        *,
        bundle_name: ResourceSetName | None = None,
    ) -> str:
        """Return the localized text for key.

        Looks in the named (or default) resource set first, then in each
        configured name in order, all for the same locale.

        Args:
            key: Message key
            locale: Locale, Accept-Language value, or None for the ambient default
            bundle_name: Resource set to search first (default: default_bundle_name)

        Returns:
            The text, or ``key`` itself when no resource set in the chain has it

        Raises:
            ResourceSetNotFoundError: If no name in the chain could be resolved
            ValueError: If no name is given and no default is configured
        """
        primary = self._primary_name(bundle_name)
        target = self._coerce_locale(locale)

        found = self._lookup(key, target, primary)
        if found is None:
            logger.debug(
                "Noticed missing resource: bundle=%s, locale=%s, key=%s", primary, target, key
            )
            return key

        name, text = found
        if name != primary and self._on_fallback is not None:
            self._on_fallback(
                FallbackInfo(
                    requested_bundle=primary,
                    resolved_bundle=name,
                    locale=target,
                    key=key,
                )
            )
        return text

    def has_key(
        self,
        key: MessageKey,
        locale: LocaleLike = None,
        *,
        bundle_name: ResourceSetName | None = None,
    ) -> bool:
        """Check whether any resource set in the chain has key.

        Raises:
            ResourceSetNotFoundError: If no name in the chain could be resolved
        """
        primary = self._primary_name(bundle_name)
        return self._lookup(key, self._coerce_locale(locale), primary) is not None

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_args(
        self,
        key: MessageKey,
        args: Sequence[object] | None,
        *,
        locale: LocaleLike = None,
        bundle_name: ResourceSetName | None = None,
    ) -> str:
        """Look up key and substitute positional arguments.

        Numbers and dates are formatted with the conventions of the target
        locale. A template that does not parse is returned as is.

        Args:
            key: Message key
            args: Positional arguments; ``{n}`` takes ``args[n]``
            locale: Locale, Accept-Language value, or None for the ambient default
            bundle_name: Resource set to search first

        Returns:
            Formatted text (the key itself when missing everywhere)

        Raises:
            ResourceSetNotFoundError: If no name in the chain could be resolved
        """
        target = self._coerce_locale(locale)
        template = self.get_string(key, target, bundle_name=bundle_name)
        return format_message(template, tuple(args) if args is not None else (), target)

    def format(
        self,
        key: MessageKey,
        *args: object,
        locale: LocaleLike = None,
        bundle_name: ResourceSetName | None = None,
    ) -> str:
        """Variadic form of ``format_args``.

        Example:
            >>> i18n.format("thanks.message1", "jason", "van zyl")
            'Thanks jason van zyl!'
        """
        return self.format_args(key, args, locale=locale, bundle_name=bundle_name)
