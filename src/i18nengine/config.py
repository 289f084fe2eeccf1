"""Service configuration for I18NService.

Provides a single frozen dataclass holding the resource-set chain and the
development-mode switch, so that the service takes one typed object rather
than loose keyword arguments.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from i18nengine.constants import DEV_MODE_ENV_VAR

__all__ = ["I18NConfig"]


def _clean_name(name: object, field_name: str) -> str:
    """Strip a resource-set name, rejecting non-strings and blanks."""
    if not isinstance(name, str):
        msg = f"{field_name} must contain strings, got {type(name).__name__}"
        raise TypeError(msg)
    stripped = name.strip()
    if not stripped:
        msg = f"{field_name} cannot contain blank names"
        raise ValueError(msg)
    return stripped


@dataclass(frozen=True, slots=True)
class I18NConfig:
    """Immutable configuration for I18NService.

    Constructing ``I18NConfig()`` with no arguments is valid; such a service
    can still answer lookups that name a resource set explicitly.

    Attributes:
        bundle_names: Ordered resource-set names consulted when a key is
            missing from the requested set (default: empty)
        default_bundle_name: Name used when a call names no resource set;
            it is always searched first (default: None)
        dev_mode: Clear the resource-set cache before every lookup so catalog
            edits are picked up immediately (default: False)

    Example:
        >>> config = I18NConfig(
        ...     bundle_names=("BarBundle", "FooBundle"),
        ...     default_bundle_name="i18n",
        ... )
        >>> config.effective_bundle_names
        ('i18n', 'BarBundle', 'FooBundle')
    """

    bundle_names: tuple[str, ...] = ()
    default_bundle_name: str | None = None
    dev_mode: bool = False

    def __post_init__(self) -> None:
        """Normalize names at construction time.

        Raises:
            TypeError: If a name is not a string
            ValueError: If a name is blank
        """
        if isinstance(self.bundle_names, str):
            msg = "bundle_names must be a sequence of names, not a single string"
            raise TypeError(msg)
        names = tuple(_clean_name(name, "bundle_names") for name in self.bundle_names)
        object.__setattr__(self, "bundle_names", names)
        if self.default_bundle_name is not None:
            default = _clean_name(self.default_bundle_name, "default_bundle_name")
            object.__setattr__(self, "default_bundle_name", default)

    @property
    def effective_bundle_names(self) -> tuple[str, ...]:
        """Search order: the default name, then configured names without repeats."""
        ordered: dict[str, None] = {}
        if self.default_bundle_name is not None:
            ordered[self.default_bundle_name] = None
        for name in self.bundle_names:
            ordered.setdefault(name, None)
        return tuple(ordered)

    @classmethod
    def from_env(
        cls,
        bundle_names: Iterable[str] = (),
        default_bundle_name: str | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> I18NConfig:
        """Build a configuration with dev mode taken from the environment.

        Development mode is on when ``I18N_DEV_MODE`` equals "true", ignoring
        case and surrounding whitespace. Any other value, or none, leaves it off.

        Args:
            bundle_names: Ordered resource-set names
            default_bundle_name: Default resource-set name
            environ: Mapping to read instead of ``os.environ``

        Returns:
            New I18NConfig
        """
        env = os.environ if environ is None else environ
        dev_mode = env.get(DEV_MODE_ENV_VAR, "").strip().lower() == "true"
        return cls(tuple(bundle_names), default_bundle_name, dev_mode)
