"""
Remote translator interface and offline implementations.

This module defines:
- Abstract RemoteTranslator interface that all backends implement
- DummyTranslator for tests and offline development
- create_translator factory

Design Philosophy:
- Translation is a best-effort enhancement. ``translate()`` never raises
  for a failed call; it logs the failure and returns the original text.
- Backends only implement ``_request()``, a single attempt that raises
  TranslationError (or lets an httpx error escape) when anything goes wrong.
  Any exception from ``_request()`` is treated as a failed call.
- Locale mapping happens once, here, so backends receive service locales.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from bondtrans.models import SOURCE_LOCALE, TargetLanguage, parse_language


logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """A remote translation call failed."""
    pass


class RemoteTranslator(ABC):
    """Abstract base class for remote translation backends.

    Subclasses implement ``_request``; callers use ``translate``, which
    wraps it with the skip rules and the fallback-to-identity policy.
    """

    def __init__(self):
        self._stats = {
            'requests': 0,
            'succeeded': 0,
            'failed': 0,
            'skipped': 0,
        }

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the backend name (e.g., 'ftapi', 'mymemory', 'dummy')."""
        pass

    @abstractmethod
    async def _request(self, text: str, source_locale: str, target_locale: str) -> str:
        """Perform one remote translation.

        Args:
            text: Non-empty text to translate
            source_locale: Service locale of the text (always "en")
            target_locale: Service locale to translate into

        Returns:
            Translated text

        Raises:
            TranslationError: If the call fails or the response is unusable
        """
        pass

    async def translate(self, text: str, language: TargetLanguage | str) -> str:
        """Translate ``text`` into ``language``, falling back to ``text``.

        Empty text and the source language return immediately without a
        network call. Any exception from the remote call is
        logged and the original text is returned.
        """
        if not text or not text.strip():
            self._stats['skipped'] += 1
            return text

        language = parse_language(language)
        if language.is_source:
            self._stats['skipped'] += 1
            return text

        target_locale = language.remote_locale
        self._stats['requests'] += 1
        try:
            translated = await self._request(text, SOURCE_LOCALE, target_locale)
        except Exception as e:
            self._stats['failed'] += 1
            logger.warning(
                "%s translation to %s failed, keeping original text: %s",
                self.name, target_locale, e,
            )
            return text

        self._stats['succeeded'] += 1
        logger.debug("%s translated %r -> %r", self.name, text[:50], translated[:50])
        return translated

    def get_stats(self) -> dict[str, int]:
        """Get call statistics."""
        return self._stats.copy()

    async def aclose(self) -> None:
        """Release network resources held by the backend."""
        pass

    async def __aenter__(self) -> RemoteTranslator:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class DummyTranslator(RemoteTranslator):
    """An offline translator for testing and development.

    Modes:
    - 'echo': Return the input unchanged
    - 'prefix': Add a [<locale>] prefix
    - 'upper': Return uppercase version
    - 'fail': Raise TranslationError, exercising the fallback path

    Every request is recorded in ``calls`` as (text, target_locale).
    """

    MODES = ("echo", "prefix", "upper", "fail")

    def __init__(self, mode: str = "prefix"):
        super().__init__()
        if mode not in self.MODES:
            raise ValueError(f"Unknown dummy mode: {mode}. Available modes: {', '.join(self.MODES)}")
        self.mode = mode
        self.calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return f"dummy-{self.mode}"

    async def _request(self, text: str, source_locale: str, target_locale: str) -> str:
        self.calls.append((text, target_locale))
        if self.mode == "fail":
            raise TranslationError("dummy translator configured to fail")
        if self.mode == "echo":
            return text
        if self.mode == "upper":
            return text.upper()
        return f"[{target_locale}] {text}"


def create_translator(backend: str, **kwargs) -> RemoteTranslator:
    """Factory function to create a remote translator by name.

    Args:
        backend: Backend name ('ftapi', 'mymemory', 'dummy', 'none', ...)
        **kwargs: Backend-specific arguments (base_url, timeout, client, mode)

    Returns:
        Configured RemoteTranslator instance

    Supported backends and aliases:
        - ftapi, free, default: Free Translate API (used by the gateway)
        - mymemory: MyMemory translation API
        - dummy, test: DummyTranslator (mode from kwargs, default 'prefix')
        - none, offline, echo: DummyTranslator in echo mode, no network
    """
    backend_lower = backend.lower().replace("_", "-")

    if backend_lower in ("ftapi", "free", "default"):
        from bondtrans.translate.free_api import FreeTranslateAPITranslator
        return FreeTranslateAPITranslator(**kwargs)

    elif backend_lower in ("mymemory", "my-memory"):
        from bondtrans.translate.free_api import MyMemoryTranslator
        return MyMemoryTranslator(**kwargs)

    elif backend_lower in ("dummy", "test"):
        return DummyTranslator(mode=kwargs.get("mode", "prefix"))

    elif backend_lower in ("none", "offline", "echo"):
        return DummyTranslator(mode="echo")

    else:
        available = ["ftapi", "mymemory", "dummy", "none"]
        raise ValueError(
            f"Unknown translator backend: {backend}. "
            f"Available backends: {', '.join(available)}"
        )
