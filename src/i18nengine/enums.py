"""Enumerations for i18nengine type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ResolutionStep(StrEnum):
    """Fallback step that produced a resolved resource set.

    StrEnum provides automatic string conversion: str(ResolutionStep.ROOT) == "root"
    """

    EXACT = "exact"
    """Requested locale or one of its own parents (lang_REGION -> lang -> root)"""

    REGION_REPAIR = "region_repair"
    """Requested language combined with the ambient default region"""

    LANGUAGE_REPAIR = "language_repair"
    """Ambient default language combined with the requested region"""

    AMBIENT_DEFAULT = "ambient_default"
    """The ambient default locale itself"""

    ROOT = "root"
    """The language/region-neutral resource set"""


class FormatType(StrEnum):
    """Argument format type inside a ``{index,type,style}`` placeholder.

    StrEnum provides automatic string conversion: str(FormatType.NUMBER) == "number"
    """

    NUMBER = "number"
    DATE = "date"
    TIME = "time"


__all__ = [
    "FormatType",
    "ResolutionStep",
]
