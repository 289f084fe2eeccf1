"""Core value types shared by the localization and runtime layers.

Isolating these here keeps the dependency graph flat:

    core <- runtime <- localization

Exports:
    Locale: Immutable language/region identifier

Python 3.13+.
"""

from .locale import Locale

__all__ = ["Locale"]
