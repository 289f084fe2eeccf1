"""Positional message formatting.

Renders message templates written in the commonly used subset of
``java.text.MessageFormat`` syntax, with locale conventions from Babel:

    {0}                  argument 0, formatted by its runtime type
    {0,number}           locale decimal format
    {0,number,integer}   grouped integer, half-even rounding
    {0,number,percent}   percent
    {0,number,currency}  currency of the locale's territory
    {0,number,#,##0.00}  CLDR number pattern
    {0,date[,style]}     date; style short (default), medium, long, full, or pattern
    {0,time[,style]}     time; same styles
    ''                   literal apostrophe
    'text'               quoted literal text, braces included

Rendering never raises:
    - A placeholder whose index has no argument is kept as ``{n}``.
    - A malformed template is returned unchanged.
    - An argument Babel cannot format is rendered as plain text.

None renders as ``null`` and booleans as ``true``/``false``.

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from functools import lru_cache

from i18nengine.constants import MAX_TEMPLATE_CACHE_SIZE, NULL_ARGUMENT_TEXT
from i18nengine.core.locale import Locale
from i18nengine.diagnostics import FormattingError, TemplateError
from i18nengine.enums import FormatType
from i18nengine.runtime.locale_context import LocaleContext

__all__ = ["Placeholder", "format_message", "parse_template"]

logger = logging.getLogger(__name__)

_QUOTE = "'"


@dataclass(frozen=True, slots=True)
class Placeholder:
    """One ``{index[,type[,style]]}`` element of a parsed template.

    Attributes:
        index: Zero-based argument index
        format_type: Explicit format type, or None to format by value type
        style: Format style or CLDR pattern, or None for the type's default
    """

    index: int
    format_type: FormatType | None = None
    style: str | None = None

    def __str__(self) -> str:
        return f"{{{self.index}}}"


type Segment = str | Placeholder


def _parse_placeholder(template: str, start: int, body: str) -> Placeholder:
    """Parse the text between ``{`` and ``}``."""
    index_text, *rest = body.split(",", 2)
    index_text = index_text.strip()
    if not (index_text.isascii() and index_text.isdigit()):
        raise TemplateError(template, start, f"argument index must be a number, got '{index_text}'")

    type_text = rest[0].strip().lower() if rest else ""
    style = rest[1].strip() if len(rest) > 1 else ""
    if not type_text:
        if style:
            raise TemplateError(template, start, "format style given without a format type")
        return Placeholder(int(index_text))

    try:
        format_type = FormatType(type_text)
    except ValueError:
        raise TemplateError(template, start, f"unknown format type '{type_text}'") from None
    return Placeholder(int(index_text), format_type, style or None)


@lru_cache(maxsize=MAX_TEMPLATE_CACHE_SIZE)
def parse_template(template: str) -> tuple[Segment, ...]:
    """Split a template into literal text and placeholders.

    Parsed templates are cached; the result is an immutable tuple.

    Args:
        template: Message template

    Returns:
        Literal strings interleaved with Placeholder objects

    Raises:
        TemplateError: On an unclosed or nested brace, a non-numeric index,
            or an unknown format type

    Example:
        >>> parse_template("Thanks {0}!")
        ('Thanks ', Placeholder(index=0, format_type=None, style=None), '!')
    """
    segments: list[Segment] = []
    literal: list[str] = []
    in_quote = False
    pos = 0
    length = len(template)

    while pos < length:
        char = template[pos]
        if char == _QUOTE:
            if pos + 1 < length and template[pos + 1] == _QUOTE:
                literal.append(_QUOTE)
                pos += 2
            else:
                in_quote = not in_quote
                pos += 1
            continue

        if in_quote or char != "{":
            literal.append(char)
            pos += 1
            continue

        end = template.find("}", pos + 1)
        if end == -1:
            raise TemplateError(template, pos, "unmatched '{'")
        body = template[pos + 1 : end]
        if "{" in body:
            raise TemplateError(template, pos, "nested '{' inside a placeholder")

        if literal:
            segments.append("".join(literal))
            literal.clear()
        segments.append(_parse_placeholder(template, pos, body))
        pos = end + 1

    if literal:
        segments.append("".join(literal))
    return tuple(segments)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _plain_text(value: object) -> str:
    """Render a value without locale formatting; None and booleans are lowercase."""
    if value is None:
        return NULL_ARGUMENT_TEXT
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _render_argument(context: LocaleContext, value: object, placeholder: Placeholder) -> str:
    """Format one argument according to its placeholder.

    Raises:
        FormattingError: If the value does not fit the requested type or
            Babel rejects it
    """
    if value is None:
        return NULL_ARGUMENT_TEXT

    match placeholder.format_type:
        case FormatType.NUMBER:
            if not _is_number(value):
                msg = f"Cannot format {type(value).__name__} as a number"
                raise FormattingError(msg, fallback_value=_plain_text(value))
            return context.format_number(value, placeholder.style)  # type: ignore[arg-type]
        case FormatType.DATE:
            if not isinstance(value, date):
                msg = f"Cannot format {type(value).__name__} as a date"
                raise FormattingError(msg, fallback_value=_plain_text(value))
            return context.format_date(value, placeholder.style)
        case FormatType.TIME:
            if not isinstance(value, (time, datetime)):
                msg = f"Cannot format {type(value).__name__} as a time"
                raise FormattingError(msg, fallback_value=_plain_text(value))
            return context.format_time(value, placeholder.style)

    # No explicit type: choose by value. datetime is a date subclass, so it goes first.
    if _is_number(value):
        return context.format_number(value)  # type: ignore[arg-type]
    if isinstance(value, datetime):
        return context.format_datetime(value)
    if isinstance(value, date):
        return context.format_date(value)
    if isinstance(value, time):
        return context.format_time(value)
    return _plain_text(value)


def format_message(template: str, args: Sequence[object], locale: Locale) -> str:
    """Substitute positional arguments into a template.

    Args:
        template: Message template
        args: Positional arguments; index n fills ``{n}``
        locale: Locale whose conventions format numbers and dates

    Returns:
        Rendered message (never raises)

    Example:
        >>> format_message("Thanks {0} {1}!", ["Jason", "van Zyl"], Locale("en"))
        'Thanks Jason van Zyl!'
        >>> format_message("{0,number} items", [1234], Locale("de", "DE"))
        '1.234 items'
    """
    try:
        segments = parse_template(template)
    except TemplateError as e:
        logger.debug("Rendering malformed template verbatim: %s", e)
        return template

    context: LocaleContext | None = None
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, str):
            parts.append(segment)
            continue
        if segment.index >= len(args):
            parts.append(str(segment))
            continue
        if context is None:
            context = LocaleContext.create(locale)
        try:
            parts.append(_render_argument(context, args[segment.index], segment))
        except FormattingError as e:
            logger.warning("%s; using '%s'", e, e.fallback_value)
            parts.append(e.fallback_value)
    return "".join(parts)
