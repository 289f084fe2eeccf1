"""Two-level cache of resolved resource sets.

Maps resource-set name -> requested locale -> ResourceSet. The cache is
unbounded and process-lifetime; entries are only ever added, and the whole
structure is dropped at once by ``clear_all()``.

Concurrency model:
    Readers never lock. They read ``self._bundles``, an outer mapping that is
    never mutated after publication. Writers hold ``self._lock``, build new
    inner and outer dicts (copy-on-write), and publish with a single attribute
    assignment, so a reader sees either the old or the new structure and never
    a partially built inner map. Resolution runs under the lock with a
    double-check, so concurrent misses for the same pair resolve once.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from i18nengine.core.locale import Locale
from i18nengine.diagnostics import ResourceSetNotFoundError
from i18nengine.localization.loading import ResourceSet
from i18nengine.localization.resolver import FallbackResolver
from i18nengine.localization.types import ResourceSetName

__all__ = ["BundleCache"]

logger = logging.getLogger(__name__)

type _BundleMap = Mapping[ResourceSetName, Mapping[Locale, ResourceSet]]

_EMPTY: _BundleMap = MappingProxyType({})
_EMPTY_INNER: Mapping[Locale, ResourceSet] = MappingProxyType({})


class BundleCache:
    """Memoizes resolved resource sets per (name, requested locale).

    In development mode every ``get`` first clears the whole cache (and asks
    the provider to drop its own cache), so edited catalogs are picked up on
    the next lookup.

    Example:
        >>> cache = BundleCache(resolver)
        >>> first = cache.get("app.Messages", Locale("fr", "FR"))
        >>> cache.get("app.Messages", Locale("fr", "FR")) is first
        True
    """

    __slots__ = ("_bundles", "_clears", "_dev_mode", "_lock", "_resolutions", "_resolver")

    def __init__(self, resolver: FallbackResolver, *, dev_mode: bool = False) -> None:
        """Initialize an empty cache.

        Args:
            resolver: Fallback resolver used on cache misses
            dev_mode: Clear the cache before every lookup
        """
        self._resolver = resolver
        self._dev_mode = dev_mode
        self._bundles: _BundleMap = _EMPTY
        self._lock = threading.Lock()
        self._resolutions = 0
        self._clears = 0

    @property
    def dev_mode(self) -> bool:
        """Whether the cache is cleared before every lookup (read-only)."""
        return self._dev_mode

    def get(self, name: ResourceSetName, locale: Locale) -> ResourceSet:
        """Return the resource set for (name, locale), resolving on a miss.

        Args:
            name: Resource-set name
            locale: Requested locale

        Returns:
            Cached or freshly resolved ResourceSet

        Raises:
            ResourceSetNotFoundError: If no fallback step found a resource set
        """
        if self._dev_mode:
            self.clear_all()

        # Fast path: lock-free read of the published snapshot
        by_locale = self._bundles.get(name)
        if by_locale is not None:
            resource_set = by_locale.get(locale)
            if resource_set is not None:
                return resource_set

        return self._resolve_and_publish(name, locale)

    def _resolve_and_publish(self, name: ResourceSetName, locale: Locale) -> ResourceSet:
        with self._lock:
            # Double-check: another thread may have published while we waited
            by_locale = self._bundles.get(name, _EMPTY_INNER)
            resource_set = by_locale.get(locale)
            if resource_set is not None:
                return resource_set

            resolution = self._resolver.resolve(name, locale, by_locale)
            if resolution is None:
                raise ResourceSetNotFoundError(name, locale)

            resource_set = resolution.resource_set
            inner = dict(by_locale)
            inner[locale] = resource_set
            # The resolved locale would resolve to the same set on its own
            inner.setdefault(resource_set.locale, resource_set)

            outer = dict(self._bundles)
            outer[name] = MappingProxyType(inner)
            self._bundles = MappingProxyType(outer)
            self._resolutions += 1

        logger.debug("Cached %s for '%s' (resolved '%s')", name, locale, resource_set.locale)
        return resource_set

    def clear_all(self) -> None:
        """Drop every cached resource set and the provider's own cache."""
        with self._lock:
            self._bundles = _EMPTY
            self._clears += 1
        self._resolver.provider.clear_cache()

    def get_stats(self) -> dict[str, int | bool]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - names (int): Resource-set names with cached entries
            - entries (int): Cached (name, locale) entries
            - resolutions (int): Fallback resolutions performed
            - clears (int): Wholesale clears (including dev-mode clears)
            - dev_mode (bool): Whether development mode is active
        """
        snapshot = self._bundles
        with self._lock:
            resolutions = self._resolutions
            clears = self._clears
        return {
            "names": len(snapshot),
            "entries": sum(len(by_locale) for by_locale in snapshot.values()),
            "resolutions": resolutions,
            "clears": clears,
            "dev_mode": self._dev_mode,
        }

    def __len__(self) -> int:
        return sum(len(by_locale) for by_locale in self._bundles.values())

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:  # noqa: PLR2004
            return False
        name, locale = item
        by_locale = self._bundles.get(name)
        return by_locale is not None and locale in by_locale

    def __repr__(self) -> str:
        return f"BundleCache(entries={len(self)}, dev_mode={self._dev_mode})"

