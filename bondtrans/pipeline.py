"""
Field translation pipeline for bondtrans.

This module orchestrates the translation of upstream JSON records:
1. Look up the eligible fields for the entity kind (FieldPolicy)
2. Resolve each eligible field through the term dictionary
3. Fall back to the remote translator on a miss, where the policy allows it
4. Return a new record of identical shape

Components:
- TranslationEngine: one entity at a time
- BatchTranslator: many entities, order-preserving and failure-isolating
- TranslationPipeline: wires everything from a PipelineConfig and handles
  the gateway's response envelopes

Design Philosophy:
- Dictionary, policy and translator are built once and injected
- Input records are never mutated; callers may still hold them
- Translation is best-effort: the worst case is English text, never a
  failed response
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from bondtrans.config import (
    DEFAULT_BACKEND,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT,
    ENV_PREFIX,
    LANGUAGE_FIELD,
)
from bondtrans.models import EntityKind, TargetLanguage, parse_language
from bondtrans.policy import DEFAULT_POLICY, FieldPolicy, parse_entity_kind
from bondtrans.translate.base import RemoteTranslator, create_translator
from bondtrans.translate.terms import TermDictionary, get_default_terms, load_terms_csv


logger = logging.getLogger(__name__)


class MalformedEntityError(TypeError):
    """Raised when an entity is not a JSON object."""
    pass


@dataclass
class PipelineConfig:
    """Configuration for the translation pipeline."""
    translator_backend: str = DEFAULT_BACKEND  # 'ftapi', 'mymemory', 'dummy', 'none'
    translator_url: Optional[str] = None  # backend default if None
    timeout: float = DEFAULT_TIMEOUT
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    terms_file: Optional[Path] = None  # merged over the built-in terms
    language_field: str = LANGUAGE_FIELD

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> PipelineConfig:
        """Build a config from ``BONDTRANS_*`` environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value.strip() if value and value.strip() else None

        config = cls()
        if get("BACKEND"):
            config.translator_backend = get("BACKEND")
        if get("TRANSLATOR_URL"):
            config.translator_url = get("TRANSLATOR_URL")
        if get("TIMEOUT"):
            try:
                config.timeout = float(get("TIMEOUT"))
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}TIMEOUT must be a number, got {get('TIMEOUT')!r}") from None
        if get("MAX_CONCURRENCY"):
            try:
                config.max_concurrency = int(get("MAX_CONCURRENCY"))
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}MAX_CONCURRENCY must be an integer, got {get('MAX_CONCURRENCY')!r}"
                ) from None
        if get("TERMS_FILE"):
            config.terms_file = Path(get("TERMS_FILE"))
        if get("LANGUAGE_FIELD"):
            config.language_field = get("LANGUAGE_FIELD")
        return config

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging."""
        return {
            "translator_backend": self.translator_backend,
            "translator_url": self.translator_url,
            "timeout": self.timeout,
            "max_concurrency": self.max_concurrency,
            "terms_file": str(self.terms_file) if self.terms_file else None,
            "language_field": self.language_field,
        }


class TranslationEngine:
    """Translate the eligible fields of a single entity.

    Usage:
        engine = TranslationEngine(get_default_terms(), create_translator("ftapi"))
        bond = await engine.translate(bond, "bond-emission", "zh")
    """

    def __init__(
        self,
        terms: TermDictionary,
        translator: RemoteTranslator,
        policy: FieldPolicy = DEFAULT_POLICY,
    ):
        self.terms = terms
        self.translator = translator
        self.policy = policy

    async def translate(
        self,
        entity: Any,
        entity_kind: str | EntityKind,
        target_language: str | TargetLanguage,
    ) -> Any:
        """Return a translated copy of ``entity``.

        The entity kind and language are validated first, so unknown values
        raise even for the source language. For the source language the entity
        itself is returned without any dictionary or remote work. Otherwise each
        eligible non-empty string field is resolved through the dictionary,
        then through the remote translator if the dictionary misses and the
        field's mode allows it. Remote calls for one entity run concurrently.

        Raises:
            UnknownEntityKindError: If the policy has no such kind
            UnsupportedLanguageError: If the language code is unknown
            MalformedEntityError: If the entity is not a mapping
        """
        rules = self.policy.fields_for(entity_kind)
        language = parse_language(target_language)
        if language.is_source:
            return entity

        if not isinstance(entity, Mapping):
            raise MalformedEntityError(
                f"Expected a JSON object, got {type(entity).__name__}"
            )

        translated = dict(entity)
        use_terms = self.terms.target_lang == language.family
        pending: list[tuple[str, str]] = []

        for rule in rules:
            value = translated.get(rule.field)
            if not isinstance(value, str) or not value.strip():
                continue

            term = self.terms.lookup(value) if use_terms else None
            if term is not None:
                translated[rule.field] = term
            elif rule.allows_remote:
                pending.append((rule.field, value))

        if pending:
            results = await asyncio.gather(*(
                self.translator.translate(value, language) for _, value in pending
            ))
            for (field, _), result in zip(pending, results):
                translated[field] = result

        return translated


class BatchTranslator:
    """Apply a TranslationEngine to a sequence of entities.

    Output order always matches input order. An entity whose translation
    raises is returned untranslated so the rest of the batch still succeeds.
    """

    def __init__(self, engine: TranslationEngine, max_concurrency: int = DEFAULT_MAX_CONCURRENCY):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.engine = engine
        self.max_concurrency = max_concurrency

    async def translate_all(
        self,
        entities: Iterable[Any],
        entity_kind: str | EntityKind,
        target_language: str | TargetLanguage,
    ) -> list[Any]:
        """Translate every entity, preserving order.

        Unknown kinds and languages still raise: they are caller bugs, not
        per-entity failures.
        """
        entities = list(entities)
        kind = parse_entity_kind(entity_kind)
        self.engine.policy.fields_for(kind)
        language = parse_language(target_language)
        if language.is_source:
            return entities

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def run(index: int, entity: Any) -> Any:
            async with semaphore:
                try:
                    return await self.engine.translate(entity, kind, language)
                except Exception as e:
                    logger.warning(
                        "Translation failed for %s entity %d, returning it untranslated: %s",
                        kind.value, index, e,
                    )
                    return entity

        results = await asyncio.gather(*(run(i, entity) for i, entity in enumerate(entities)))
        return list(results)


class TranslationPipeline:
    """Main entry point wiring dictionary, policy and translator together.

    Usage:
        config = PipelineConfig.from_env()
        async with TranslationPipeline(config) as pipeline:
            body = await pipeline.translate_payload(body, "bond-emission", "zh")
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        terms: TermDictionary | None = None,
        policy: FieldPolicy | None = None,
        translator: RemoteTranslator | None = None,
    ):
        self.config = config or PipelineConfig()
        self.terms = terms if terms is not None else self._load_terms()
        self.policy = policy or DEFAULT_POLICY
        self.translator = translator or create_translator(
            self.config.translator_backend,
            base_url=self.config.translator_url,
            timeout=self.config.timeout,
        )
        self.engine = TranslationEngine(self.terms, self.translator, self.policy)
        self.batch = BatchTranslator(self.engine, self.config.max_concurrency)
        logger.info(
            "Translation pipeline ready (%d terms, backend %s): %s",
            len(self.terms), self.translator.name, self.config.to_dict(),
        )

    def _load_terms(self) -> TermDictionary:
        terms = get_default_terms()
        if self.config.terms_file:
            extra = load_terms_csv(self.config.terms_file)
            logger.info("Loaded %d extra terms from %s", len(extra), self.config.terms_file)
            terms = terms.merge(extra)
        return terms

    async def translate(self, entity: Any, entity_kind: str | EntityKind, target_language: str | TargetLanguage) -> Any:
        return await self.engine.translate(entity, entity_kind, target_language)

    async def translate_all(
        self,
        entities: Iterable[Any],
        entity_kind: str | EntityKind,
        target_language: str | TargetLanguage,
    ) -> list[Any]:
        return await self.batch.translate_all(entities, entity_kind, target_language)

    async def translate_payload(
        self,
        payload: Any,
        entity_kind: str | EntityKind,
        target_language: str | TargetLanguage,
    ) -> Any:
        """Translate an upstream response body.

        Accepted shapes:
        - {"items": [...], ...}: items are batch-translated, other keys kept
        - [...]: batch-translated
        - {...}: translated as a single entity
        - None: returned as-is

        Mapping results also get the language marker field set to the
        target language code. The input payload is never modified.
        """
        self.policy.fields_for(entity_kind)
        language = parse_language(target_language)
        if payload is None:
            return None

        if isinstance(payload, list):
            return await self.translate_all(payload, entity_kind, language)

        if not isinstance(payload, Mapping):
            raise MalformedEntityError(
                f"Expected a JSON object or array, got {type(payload).__name__}"
            )

        items = payload.get("items")
        if isinstance(items, list):
            result = dict(payload)
            result["items"] = await self.translate_all(items, entity_kind, language)
        else:
            result = dict(await self.translate(payload, entity_kind, language))

        result[self.config.language_field] = language.value
        return result

    def get_stats(self) -> dict[str, int]:
        return self.translator.get_stats()

    async def aclose(self) -> None:
        await self.translator.aclose()

    async def __aenter__(self) -> TranslationPipeline:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
