"""
Core data model for bondtrans.

This module defines the small enumerations that every other component
shares:

- TargetLanguage: language codes accepted from gateway callers
- EntityKind: the shapes of upstream records we know how to translate
- ResolutionMode: how a single field may be resolved

Entities themselves are plain mappings parsed from upstream JSON; they are
never wrapped in a class so the pipeline can hand back exactly the shape it
received.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class UnsupportedLanguageError(ValueError):
    """Raised for a target language code the pipeline does not know."""
    pass


class TargetLanguage(str, Enum):
    """Language codes accepted on the gateway's ``lang`` parameter.

    ``eng`` is the language of the upstream data, so it never triggers a
    translation. The Chinese codes differ only in the locale passed to the
    remote translator.
    """
    ENG = "eng"
    ZH = "zh"
    ZH_CN = "zh-cn"
    CHT = "cht"
    ZH_TW = "zh-tw"

    @property
    def is_source(self) -> bool:
        return self is TargetLanguage.ENG

    @property
    def family(self) -> str:
        """Language family used to select a term table ("en" or "zh")."""
        return "en" if self.is_source else "zh"

    @property
    def remote_locale(self) -> str:
        """Locale identifier expected by the remote translation services."""
        return REMOTE_LOCALES[self]


# Remote services want "zh-TW" with an upper-case region
REMOTE_LOCALES = {
    TargetLanguage.ENG: "en",
    TargetLanguage.ZH: "zh-cn",
    TargetLanguage.ZH_CN: "zh-cn",
    TargetLanguage.CHT: "zh-TW",
    TargetLanguage.ZH_TW: "zh-TW",
}

SOURCE_LOCALE = REMOTE_LOCALES[TargetLanguage.ENG]

VARIANTS = {
    "simplified": TargetLanguage.ZH_CN,
    "traditional": TargetLanguage.CHT,
}


def parse_language(
    code: str | TargetLanguage,
    variant: Optional[str] = None,
) -> TargetLanguage:
    """Parse a caller-supplied language code.

    Args:
        code: Language code such as "eng", "zh" or "zh-TW" (case-insensitive)
        variant: Optional "simplified" or "traditional"; only refines the
            generic "zh" code

    Returns:
        The matching TargetLanguage

    Raises:
        UnsupportedLanguageError: If the code or variant is unknown
    """
    if isinstance(code, TargetLanguage):
        language = code
    else:
        try:
            language = TargetLanguage(str(code).strip().lower())
        except ValueError:
            supported = ", ".join(lang.value for lang in TargetLanguage)
            raise UnsupportedLanguageError(
                f"Unsupported target language: {code!r}. Supported: {supported}"
            ) from None

    if variant is None:
        return language

    variant_key = variant.strip().lower()
    if variant_key not in VARIANTS:
        raise UnsupportedLanguageError(
            f"Unknown Chinese variant: {variant!r}. Expected 'simplified' or 'traditional'"
        )
    if language is TargetLanguage.ZH:
        return VARIANTS[variant_key]
    return language


class EntityKind(str, Enum):
    """Kinds of upstream records that carry translatable fields."""
    BOND_EMISSION = "bond-emission"
    ISSUER = "issuer"


class ResolutionMode(str, Enum):
    """How an eligible field is resolved.

    DICTIONARY_ONLY fields hold short categorical values (countries,
    currencies, statuses) and are never sent to a remote translator.
    DICTIONARY_THEN_REMOTE fields fall back to the remote service on a
    dictionary miss.
    """
    DICTIONARY_ONLY = "dictionary-only"
    DICTIONARY_THEN_REMOTE = "dictionary-then-remote"

    @property
    def allows_remote(self) -> bool:
        return self is ResolutionMode.DICTIONARY_THEN_REMOTE
