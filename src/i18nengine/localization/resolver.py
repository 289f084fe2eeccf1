"""Locale fallback resolution for resource sets.

Walks from a requested locale toward a concrete resource set without letting
the host's ambient default locale leak into a lookup that did not ask for it.

Resolution ladder (first success wins):
    1. EXACT            provider lookup for the requested locale. The provider
                        walks lang_REGION -> lang -> root on its own, so a
                        root catalog always wins over the ambient default.
    2. REGION_REPAIR    requested language + ambient region, only when the
                        requested language equals the ambient language.
    3. LANGUAGE_REPAIR  ambient language + requested region, only when the
                        requested region equals the ambient region.
    4. AMBIENT_DEFAULT  the ambient default locale, unless already requested.
    5. ROOT             the neutral resource set.

Steps 2 and 3 are mutually exclusive. A miss at any step is an ordinary None
result; only exhausting the ladder is reported (as None) to the caller.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from i18nengine.core.locale import Locale
from i18nengine.enums import ResolutionStep
from i18nengine.localization.loading import ResourceSet, ResourceSetProvider
from i18nengine.localization.types import ResourceSetName

__all__ = ["FallbackResolver", "Resolution"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of a successful fallback resolution.

    Attributes:
        resource_set: The resolved set
        step: Ladder step that produced it
    """

    resource_set: ResourceSet
    step: ResolutionStep


class FallbackResolver:
    """Chooses the best resource set for a (name, locale) request.

    The ambient default locale is obtained from an injected callable rather
    than read from global state, and is sampled once per ``resolve`` call so
    every comparison within a resolution sees the same value.

    Example:
        >>> provider = MappingResourceSetProvider({("app", ""): {"k": "root"}})
        >>> resolver = FallbackResolver(provider, lambda: Locale("de"))
        >>> result = resolver.resolve("app", Locale("iw", "IL"))
        >>> result.step, result.resource_set.get("k")
        (<ResolutionStep.EXACT: 'exact'>, 'root')
    """

    __slots__ = ("_default_locale", "_provider")

    def __init__(
        self,
        provider: ResourceSetProvider,
        default_locale: Callable[[], Locale],
    ) -> None:
        """Initialize resolver.

        Args:
            provider: Source of resource sets
            default_locale: Returns the ambient default locale when called
        """
        self._provider = provider
        self._default_locale = default_locale

    @property
    def provider(self) -> ResourceSetProvider:
        """The underlying resource-set provider."""
        return self._provider

    def resolve(
        self,
        name: ResourceSetName,
        requested: Locale,
        cached: Mapping[Locale, ResourceSet] | None = None,
    ) -> Resolution | None:
        """Resolve the best resource set for (name, requested).

        Args:
            name: Resource-set name
            requested: Locale the caller asked for
            cached: Already-resolved sets for ``name``, consulted before the
                provider for the repair steps

        Returns:
            Resolution, or None when no step found a resource set
        """
        cached = cached or {}
        ambient = self._default_locale()

        resource_set = self._provider.lookup(name, requested)
        if resource_set is not None:
            return self._found(name, requested, resource_set, ResolutionStep.EXACT)

        if (
            requested.region
            and requested.language == ambient.language
            and ambient.region
        ):
            repaired = requested.with_region(ambient.region)
            resource_set = self._lookup(name, repaired, cached)
            if resource_set is not None:
                return self._found(name, requested, resource_set, ResolutionStep.REGION_REPAIR)
        elif (
            requested.language
            and requested.region
            and requested.region == ambient.region
            and ambient.language
        ):
            repaired = requested.with_language(ambient.language)
            resource_set = self._lookup(name, repaired, cached)
            if resource_set is not None:
                return self._found(name, requested, resource_set, ResolutionStep.LANGUAGE_REPAIR)

        if requested != ambient:
            resource_set = self._lookup(name, ambient, cached)
            if resource_set is not None:
                return self._found(name, requested, resource_set, ResolutionStep.AMBIENT_DEFAULT)

        if not requested.is_root:
            resource_set = self._lookup(name, Locale.ROOT, cached)
            if resource_set is not None:
                return self._found(name, requested, resource_set, ResolutionStep.ROOT)

        logger.debug("No resource set for %s in locale '%s'", name, requested)
        return None

    def _lookup(
        self,
        name: ResourceSetName,
        locale: Locale,
        cached: Mapping[Locale, ResourceSet],
    ) -> ResourceSet | None:
        """Cached set for locale if present, else ask the provider."""
        resource_set = cached.get(locale)
        if resource_set is not None:
            return resource_set
        return self._provider.lookup(name, locale)

    @staticmethod
    def _found(
        name: ResourceSetName,
        requested: Locale,
        resource_set: ResourceSet,
        step: ResolutionStep,
    ) -> Resolution:
        logger.debug(
            "Resolved %s for '%s' to '%s' via %s",
            name,
            requested,
            resource_set.locale,
            step,
        )
        return Resolution(resource_set, step)
