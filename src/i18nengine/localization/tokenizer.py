"""Accept-Language header tokenizer.

Parses an HTTP ``Accept-Language`` value into locale candidates ordered by
descending quality weight. Parsing never fails: malformed segments are
skipped and an unusable header simply yields no candidates, leaving the
caller to fall back to its ambient default locale.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from i18nengine.constants import (
    DEFAULT_QUALITY,
    MAX_ACCEPT_LANGUAGE_LENGTH,
    MAX_LOCALE_CANDIDATES,
)
from i18nengine.core.locale import Locale

__all__ = [
    "AcceptLanguageTokenizer",
    "LocaleCandidate",
    "parse_accept_language",
]

logger = logging.getLogger(__name__)

_WILDCARD = "*"


@dataclass(frozen=True, slots=True)
class LocaleCandidate:
    """A locale accepted by the client, with its relative preference weight.

    Attributes:
        locale: Parsed locale
        quality: Preference weight in (0.0, 1.0]
    """

    locale: Locale
    quality: float = DEFAULT_QUALITY


def _parse_segment(segment: str) -> LocaleCandidate | None:
    """Parse one ``tag[;q=weight]`` segment, or return None if unusable."""
    tag, *params = (part.strip() for part in segment.split(";"))
    if not tag or tag == _WILDCARD:
        return None

    quality = DEFAULT_QUALITY
    for param in params:
        name, sep, value = param.partition("=")
        if not sep or name.strip().lower() != "q":
            continue
        try:
            quality = float(value.strip())
        except ValueError:
            logger.debug("Skipping Accept-Language segment with bad weight: %r", segment)
            return None
        # NaN fails both comparisons and is rejected here too
        if not 0.0 < quality <= 1.0:
            return None

    try:
        locale = Locale.parse(tag)
    except ValueError:
        logger.debug("Skipping Accept-Language segment with bad tag: %r", segment)
        return None
    return LocaleCandidate(locale, quality)


def parse_accept_language(header: str | None) -> tuple[LocaleCandidate, ...]:
    """Parse an Accept-Language value into candidates by descending weight.

    Ties keep their original order. A locale listed more than once keeps only
    its highest-weighted occurrence.

    Args:
        header: Raw header value, e.g. ``"en, es;q=0.8, zh-TW;q=0.1"``

    Returns:
        Ordered candidates (empty when nothing parses)

    Example:
        >>> [c.locale.tag for c in parse_accept_language("en, es;q=0.8, zh-TW;q=0.1")]
        ['en', 'es', 'zh-TW']
    """
    if not header:
        return ()

    if len(header) > MAX_ACCEPT_LANGUAGE_LENGTH:
        header = header[:MAX_ACCEPT_LANGUAGE_LENGTH].rpartition(",")[0]

    segments = header.split(",")[:MAX_LOCALE_CANDIDATES]
    parsed = [c for c in map(_parse_segment, segments) if c is not None]
    # list.sort is stable, so equal weights keep header order
    parsed.sort(key=lambda c: c.quality, reverse=True)

    # Deduplicate after sorting so each locale keeps its highest weight
    seen: set[Locale] = set()
    ordered: list[LocaleCandidate] = []
    for candidate in parsed:
        if candidate.locale not in seen:
            seen.add(candidate.locale)
            ordered.append(candidate)
    return tuple(ordered)


class AcceptLanguageTokenizer:
    """Iterator over the locales of an Accept-Language header.

    Example:
        >>> tok = AcceptLanguageTokenizer("en, es;q=0.8, zh-TW;q=0.1")
        >>> tok.next().language
        'en'
        >>> tok.has_next()
        True
        >>> [str(loc) for loc in tok]
        ['es', 'zh_TW']
    """

    __slots__ = ("_candidates", "_position")

    def __init__(self, header: str | None) -> None:
        self._candidates = parse_accept_language(header)
        self._position = 0

    @property
    def candidates(self) -> tuple[LocaleCandidate, ...]:
        """All parsed candidates in preference order (unaffected by iteration)."""
        return self._candidates

    def has_next(self) -> bool:
        """True while candidates remain."""
        return self._position < len(self._candidates)

    def next(self) -> Locale:
        """Return the next locale in preference order.

        Raises:
            StopIteration: If no candidates remain
        """
        return next(self)

    def __iter__(self) -> Iterator[Locale]:
        return self

    def __next__(self) -> Locale:
        if self._position >= len(self._candidates):
            raise StopIteration
        candidate = self._candidates[self._position]
        self._position += 1
        return candidate.locale

    def __repr__(self) -> str:
        tags = ", ".join(f"{c.locale.tag};q={c.quality}" for c in self._candidates)
        return f"AcceptLanguageTokenizer([{tags}], position={self._position})"
