"""Term dictionary and remote translation backends."""

from bondtrans.translate.base import (
    DummyTranslator,
    RemoteTranslator,
    TranslationError,
    create_translator,
)
from bondtrans.translate.terms import (
    TermDictionary,
    TermEntry,
    get_default_terms,
    load_terms_csv,
)

__all__ = [
    "DummyTranslator",
    "RemoteTranslator",
    "TranslationError",
    "create_translator",
    "TermDictionary",
    "TermEntry",
    "get_default_terms",
    "load_terms_csv",
]
