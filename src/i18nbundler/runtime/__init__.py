"""Runtime package: placeholder expansion, formatting and substitution.

Depends on the resources package only through the Mapping interface of
EffectiveTokenTable.

Python 3.13+.
"""

from .expander import ParameterExpander, expand, placeholders
from .formatters import BUILTIN_FORMATS, FormatDefaults, LocaleFormatters, NumberSymbols
from .reporter import CollectingReporter, LoggingReporter, TranslationReporter
from .substitution import TokenSubstitutionEngine
from .translator import Translator

__all__ = [
    "BUILTIN_FORMATS",
    "CollectingReporter",
    "FormatDefaults",
    "LocaleFormatters",
    "LoggingReporter",
    "NumberSymbols",
    "ParameterExpander",
    "TokenSubstitutionEngine",
    "TranslationReporter",
    "Translator",
    "expand",
    "placeholders",
]
