"""Resource-set loading infrastructure.

Provides the resource-set value type, the provider protocol the service
consumes, and two concrete providers:

Components:
    ResourceSet - Immutable key -> text mapping resolved for (name, locale)
    ResourceSetProvider - Protocol for looking up resource sets (structural typing)
    MappingResourceSetProvider - In-memory catalogs
    PathResourceSetProvider - JSON catalogs on disk with path-traversal prevention
    FallbackInfo - Immutable record of a resource-set chain fallback event

Both concrete providers implement the same lookup walk: for a requested
``lang_REGION`` they merge the catalogs found for ``root``, ``lang`` and
``lang_REGION`` (more specific entries win) and report the most specific
locale that had a catalog. They never consult the ambient default locale.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from i18nengine.core.locale import Locale
from i18nengine.localization.types import MessageKey, MessageText, ResourceSetName

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Value types
    "ResourceSet",
    "FallbackInfo",
    # Protocol
    "ResourceSetProvider",
    # Concrete providers
    "CatalogChainProvider",
    "MappingResourceSetProvider",
    "PathResourceSetProvider",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceSet:
    """Immutable key -> text mapping for one resolved (name, locale).

    ``locale`` is the locale the set actually resolved to, which may be less
    specific than the one requested (``fr`` for a ``fr_FR`` request, or root).

    Attributes:
        name: Resource-set name
        locale: Locale the set resolved to
        messages: Read-only mapping of keys to text
    """

    name: ResourceSetName
    locale: Locale
    messages: Mapping[MessageKey, MessageText] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        """Freeze messages behind a read-only view of a private copy."""
        if not isinstance(self.messages, MappingProxyType):
            object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    def get(self, key: MessageKey) -> MessageText | None:
        """Return the text for key, or None when absent."""
        return self.messages.get(key)

    def keys(self) -> Iterator[MessageKey]:
        """Iterate over message keys."""
        return iter(self.messages)

    def __contains__(self, key: object) -> bool:
        return key in self.messages

    def __len__(self) -> int:
        return len(self.messages)

    def __repr__(self) -> str:
        return (
            f"ResourceSet(name={self.name!r}, locale={str(self.locale)!r}, "
            f"keys={len(self.messages)})"
        )


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Record of a key served by a secondary resource set in the chain.

    Attributes:
        requested_bundle: Resource-set name the caller asked for
        resolved_bundle: Resource-set name that contained the key
        locale: Locale the lookup was made for
        key: Message key
    """

    requested_bundle: ResourceSetName
    resolved_bundle: ResourceSetName
    locale: Locale
    key: MessageKey


class ResourceSetProvider(Protocol):
    """Protocol for the external source of resource sets.

    This is a Protocol (structural typing) rather than ABC so that any
    object with matching methods can serve as a provider.

    ``lookup`` must return only sets belonging to the requested locale's own
    walk (``lang_REGION -> lang -> root``) and must signal not-found with None,
    distinguishable from a successfully resolved root set.

    Example:
        >>> class StaticProvider:
        ...     def lookup(self, name, locale):
        ...         if name == "app.Messages":
        ...             return ResourceSet(name, Locale.ROOT, {"hello": "Hello"})
        ...         return None
        ...     def clear_cache(self):
        ...         pass
    """

    def lookup(self, name: ResourceSetName, locale: Locale) -> ResourceSet | None:
        """Return the closest resource set for (name, locale), or None.

        Args:
            name: Resource-set name
            locale: Requested locale

        Returns:
            Resolved ResourceSet, or None when no catalog exists in the walk
        """

    def clear_cache(self) -> None:
        """Drop any internally cached catalog data (hot reload)."""


class CatalogChainProvider:
    """Base class implementing the ``lang_REGION -> lang -> root`` merge walk.

    Subclasses supply single catalogs through ``_load_catalog``; this class
    merges them and builds the ResourceSet.
    """

    __slots__ = ()

    def _load_catalog(
        self, name: ResourceSetName, locale: Locale
    ) -> Mapping[MessageKey, MessageText] | None:
        """Return the catalog stored for exactly (name, locale), or None."""
        raise NotImplementedError

    def lookup(self, name: ResourceSetName, locale: Locale) -> ResourceSet | None:
        """Merge the catalogs along the locale's walk.

        Args:
            name: Resource-set name
            locale: Requested locale

        Returns:
            ResourceSet tagged with the most specific locale found, or None
        """
        merged: dict[MessageKey, MessageText] = {}
        resolved: Locale | None = None
        # Least specific first so more specific catalogs override
        for candidate in reversed(locale.candidates()):
            catalog = self._load_catalog(name, candidate)
            if catalog is None:
                continue
            merged.update(catalog)
            resolved = candidate

        if resolved is None:
            return None
        return ResourceSet(name, resolved, merged)

    def clear_cache(self) -> None:
        """No cached state by default."""


class MappingResourceSetProvider(CatalogChainProvider):
    """In-memory provider built from a mapping of catalogs.

    Keys of ``catalogs`` are ``(name, locale)`` pairs; the locale may be a
    Locale or a code string ("" for root).

    Example:
        >>> provider = MappingResourceSetProvider({
        ...     ("app.Messages", ""): {"key1": "[] value1"},
        ...     ("app.Messages", "fr"): {"key1": "[fr] value1"},
        ... })
        >>> rs = provider.lookup("app.Messages", Locale("fr", "FR"))
        >>> str(rs.locale), rs.get("key1")
        ('fr', '[fr] value1')
    """

    __slots__ = ("_catalogs",)

    def __init__(
        self,
        catalogs: Mapping[tuple[ResourceSetName, Locale | str], Mapping[MessageKey, MessageText]],
    ) -> None:
        normalized: dict[tuple[ResourceSetName, Locale], Mapping[MessageKey, MessageText]] = {}
        for (name, locale), messages in catalogs.items():
            key_locale = locale if isinstance(locale, Locale) else _parse_catalog_locale(locale)
            normalized[(name.strip(), key_locale)] = MappingProxyType(dict(messages))
        self._catalogs = MappingProxyType(normalized)

    def _load_catalog(
        self, name: ResourceSetName, locale: Locale
    ) -> Mapping[MessageKey, MessageText] | None:
        return self._catalogs.get((name, locale))

    @property
    def names(self) -> frozenset[ResourceSetName]:
        """Resource-set names with at least one catalog."""
        return frozenset(name for name, _ in self._catalogs)

    def __repr__(self) -> str:
        return f"MappingResourceSetProvider(catalogs={len(self._catalogs)})"


class PathResourceSetProvider(CatalogChainProvider):
    """File system provider for flat JSON catalogs.

    Layout mirrors dotted resource-set names as directories::

        <root_dir>/app/Messages.json        root catalog of "app.Messages"
        <root_dir>/app/Messages_fr.json     French
        <root_dir>/app/Messages_fr_FR.json  French (France)

    Each file holds a JSON object of string keys to string values. Parsed
    files are cached until ``clear_cache()``; missing files are not cached so
    that catalogs added at runtime become visible.

    Security:
        Resource-set names containing path separators, "..", or empty
        segments are rejected. All resolved paths are validated against
        ``root_dir``.

    Attributes:
        root_dir: Directory containing the catalogs
    """

    __slots__ = ("_cache", "_lock", "_resolved_root", "root_dir")

    def __init__(self, root_dir: str | Path) -> None:
        self.root_dir = Path(root_dir)
        self._resolved_root = self.root_dir.resolve()
        self._cache: dict[Path, Mapping[MessageKey, MessageText]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _validate_name(name: ResourceSetName) -> None:
        """Validate a resource-set name for path traversal.

        Raises:
            ValueError: If the name is empty or contains unsafe components
        """
        if not name:
            msg = "Resource set name cannot be empty"
            raise ValueError(msg)
        if "/" in name or "\\" in name:
            msg = f"Path separators not allowed in resource set name: '{name}'"
            raise ValueError(msg)
        if any(not segment for segment in name.split(".")):
            msg = f"Empty segment in resource set name: '{name}'"
            raise ValueError(msg)

    def describe_path(self, name: ResourceSetName, locale: Locale) -> Path:
        """Return the catalog path for exactly (name, locale).

        Raises:
            ValueError: If the name is unsafe or escapes root_dir
        """
        self._validate_name(name)
        *packages, base = name.split(".")
        filename = f"{base}_{locale}.json" if not locale.is_root else f"{base}.json"
        path = self._resolved_root.joinpath(*packages, filename)
        try:
            path.resolve().relative_to(self._resolved_root)
        except ValueError:
            msg = f"Resource set '{name}' resolves outside {self._resolved_root}"
            raise ValueError(msg) from None
        return path

    def _load_catalog(
        self, name: ResourceSetName, locale: Locale
    ) -> Mapping[MessageKey, MessageText] | None:
        path = self.describe_path(name, locale)

        with self._lock:
            cached = self._cache.get(path)
        if cached is not None:
            return cached

        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        catalog = self._parse(raw, path)
        with self._lock:
            self._cache[path] = catalog
        logger.debug("Loaded catalog %s (%d keys)", path, len(catalog))
        return catalog

    @staticmethod
    def _parse(raw: str, path: Path) -> Mapping[MessageKey, MessageText]:
        """Parse a flat JSON object of strings.

        Raises:
            ValueError: If the file is not a JSON object of string values
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in catalog {path}: {e}"
            raise ValueError(msg) from e
        if not isinstance(data, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in data.items()
        ):
            msg = f"Catalog {path} must be a JSON object of string values"
            raise ValueError(msg)
        return MappingProxyType(data)

    def clear_cache(self) -> None:
        """Forget parsed files so the next lookup re-reads them."""
        with self._lock:
            self._cache.clear()

    def __repr__(self) -> str:
        return f"PathResourceSetProvider(root_dir={str(self.root_dir)!r})"


def _parse_catalog_locale(code: str) -> Locale:
    """Parse a catalog locale code, "" meaning root."""
    return Locale.parse(code) if code.strip() else Locale.ROOT
