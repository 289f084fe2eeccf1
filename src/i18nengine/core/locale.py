"""Locale value type: language plus optional region.

A Locale is an immutable (language, region) pair. Both subtags are normalized
at construction (language lowercase, region uppercase) so that equality and
hashing are case-insensitive. The empty locale ``Locale.ROOT`` names the
language/region-neutral resource set.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

__all__ = ["Locale"]

# Longest language subtag permitted by BCP-47 (registered values are 2-8 alpha)
_MAX_LANGUAGE_LENGTH: int = 8
_SCRIPT_SUBTAG_LENGTH: int = 4


@dataclass(frozen=True, slots=True)
class Locale:
    """Immutable language/region identifier.

    Subtags are normalized in ``__post_init__``: language is lowercased and
    region uppercased. Missing subtags are empty strings, never None.

    Examples:
        >>> Locale("EN", "us")
        Locale(language='en', region='US')
        >>> Locale.parse("zh-TW").tag
        'zh-TW'
        >>> str(Locale.parse("pt-br"))
        'pt_BR'
        >>> Locale.ROOT.is_root
        True

    Attributes:
        language: ISO 639 language code, lowercase ("" for root)
        region: ISO 3166 region code, uppercase ("" when absent)
    """

    ROOT: ClassVar[Locale]

    language: str = ""
    region: str = ""

    def __post_init__(self) -> None:
        """Normalize subtag case.

        Raises:
            ValueError: If a region is given without a language
        """
        object.__setattr__(self, "language", self.language.strip().lower())
        object.__setattr__(self, "region", self.region.strip().upper())
        if self.region and not self.language:
            msg = f"Region '{self.region}' requires a language"
            raise ValueError(msg)

    @classmethod
    def parse(cls, code: str) -> Locale:
        """Parse a BCP-47 or POSIX locale code.

        Accepts hyphen or underscore separators in any case. POSIX encoding
        and modifier suffixes (``.UTF-8``, ``@euro``) are dropped, as is a
        four-letter script subtag (``zh-Hant-TW`` parses as ``zh_TW``).

        Args:
            code: Locale code such as "en", "en-US", "de_DE.UTF-8"

        Returns:
            Normalized Locale

        Raises:
            ValueError: If the language subtag is missing or not alphabetic
        """
        stripped = code.strip().split(".", 1)[0].split("@", 1)[0]
        if not stripped:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)

        subtags = stripped.replace("_", "-").split("-")
        language = subtags[0]
        if (
            not language.isascii()
            or not language.isalpha()
            or len(language) > _MAX_LANGUAGE_LENGTH
        ):
            msg = f"Invalid language subtag in locale code: '{code}'"
            raise ValueError(msg)

        rest = subtags[1:]
        if rest and len(rest[0]) == _SCRIPT_SUBTAG_LENGTH and rest[0].isalpha():
            rest = rest[1:]

        region = ""
        if rest:
            candidate = rest[0]
            if not candidate.isascii() or not candidate.isalnum():
                msg = f"Invalid region subtag in locale code: '{code}'"
                raise ValueError(msg)
            region = candidate

        return cls(language, region)

    @property
    def is_root(self) -> bool:
        """True for the language/region-neutral locale."""
        return not self.language

    @property
    def tag(self) -> str:
        """BCP-47 form, e.g. ``en-US`` (empty string for root)."""
        return f"{self.language}-{self.region}" if self.region else self.language

    def with_region(self, region: str) -> Locale:
        """Return a copy of this locale with a different region."""
        return Locale(self.language, region)

    def with_language(self, language: str) -> Locale:
        """Return a copy of this locale with a different language."""
        return Locale(language, self.region)

    def candidates(self) -> tuple[Locale, ...]:
        """Return the lookup walk for this locale, most specific first.

        Example:
            >>> [str(c) for c in Locale("fr", "FR").candidates()]
            ['fr_FR', 'fr', '']
        """
        walk: list[Locale] = []
        if self.region:
            walk.append(self)
        if self.language:
            walk.append(Locale(self.language))
        walk.append(Locale.ROOT)
        return tuple(walk)

    def __str__(self) -> str:
        """POSIX form, e.g. ``en_US`` (empty string for root)."""
        return f"{self.language}_{self.region}" if self.region else self.language


Locale.ROOT = Locale()
