"""Locale context for thread-safe, locale-scoped argument formatting.

Uses Babel for CLDR-compliant number, date, and time formatting without
touching Python's process-global ``locale`` module.

Architecture:
    - LocaleContext: Immutable pairing of a Locale with its Babel locale
    - Formatters use Babel (thread-safe, CLDR-based)
    - Failures raise FormattingError carrying a fallback string

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from i18nengine.core.locale import Locale
from i18nengine.diagnostics import FormattingError
from i18nengine.locale_utils import get_babel_locale

if TYPE_CHECKING:
    from babel import Locale as BabelLocale

__all__ = ["LocaleContext"]

type Number = int | float | Decimal


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use ``LocaleContext.create()`` so the Babel locale comes from the shared
    cache in ``locale_utils``.

    Examples:
        >>> ctx = LocaleContext.create(Locale("en", "US"))
        >>> ctx.format_number(1234.5)
        '1,234.5'

        >>> ctx = LocaleContext.create(Locale("de", "DE"))
        >>> ctx.format_number(1234.5)
        '1.234,5'

    Thread Safety:
        LocaleContext is immutable and thread-safe.
    """

    locale: Locale
    babel_locale: BabelLocale

    @classmethod
    def create(cls, locale: Locale) -> LocaleContext:
        """Create a context; unknown locales format with en_US rules."""
        return cls(locale, get_babel_locale(locale))

    def currency_code(self) -> str:
        """ISO 4217 code of the currency in use in the locale's territory.

        Raises:
            ValueError: If the locale has no territory or the territory has
                no current currency
        """
        territory = self.babel_locale.territory
        if not territory:
            msg = f"Locale '{self.babel_locale}' has no territory to derive a currency from"
            raise ValueError(msg)
        currencies = babel_numbers.get_territory_currencies(territory)
        if not currencies:
            msg = f"No current currency for territory '{territory}'"
            raise ValueError(msg)
        return str(currencies[0])

    def format_number(self, value: Number, style: str | None = None) -> str:
        """Format a number with locale-specific separators.

        Args:
            value: Number to format
            style: None (locale decimal format), "integer", "percent",
                or a CLDR number pattern such as "#,##0.00"

        Returns:
            Formatted number string

        Raises:
            FormattingError: If the value cannot be formatted
        """
        try:
            match style:
                case None:
                    return str(babel_numbers.format_decimal(value, locale=self.babel_locale))
                case "integer":
                    return str(
                        babel_numbers.format_decimal(value, format="#,##0", locale=self.babel_locale)
                    )
                case "percent":
                    return str(babel_numbers.format_percent(value, locale=self.babel_locale))
                case "currency":
                    return str(
                        babel_numbers.format_currency(
                            value, self.currency_code(), locale=self.babel_locale
                        )
                    )
                case pattern:
                    return str(
                        babel_numbers.format_decimal(value, format=pattern, locale=self.babel_locale)
                    )
        except (ValueError, TypeError, InvalidOperation, AttributeError, KeyError) as e:
            msg = f"Number formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_date(self, value: date, style: str | None = None) -> str:
        """Format the date part of a date or datetime.

        Args:
            value: date or datetime
            style: "short" (default), "medium", "long", "full", or a CLDR pattern

        Raises:
            FormattingError: If the value cannot be formatted
        """
        try:
            return str(
                babel_dates.format_date(
                    value, format=style or "short", locale=self.babel_locale
                )
            )
        except (ValueError, TypeError, OverflowError, AttributeError, KeyError) as e:
            msg = f"Date formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_time(self, value: time | datetime, style: str | None = None) -> str:
        """Format the time part of a time or datetime.

        Args:
            value: time or datetime
            style: "short" (default), "medium", "long", "full", or a CLDR pattern

        Raises:
            FormattingError: If the value cannot be formatted
        """
        try:
            return str(
                babel_dates.format_time(
                    value, format=style or "short", locale=self.babel_locale
                )
            )
        except (ValueError, TypeError, OverflowError, AttributeError, KeyError) as e:
            msg = f"Time formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=str(value)) from e

    def format_datetime(self, value: datetime, style: str | None = None) -> str:
        """Format a datetime as date plus time.

        Named styles combine date and time with the locale's own
        dateTimeFormat; any other style is used as a CLDR pattern.

        Raises:
            FormattingError: If the value cannot be formatted
        """
        try:
            return str(
                babel_dates.format_datetime(
                    value, format=style or "short", locale=self.babel_locale
                )
            )
        except (ValueError, TypeError, OverflowError, AttributeError, KeyError) as e:
            msg = f"DateTime formatting failed for '{value}': {e}"
            raise FormattingError(msg, fallback_value=value.isoformat()) from e
