"""
bondtrans: field translation for bond-market API responses.

Translates selected fields of Cbonds records (bond emissions, issuers) from
English into Chinese, using a static financial term dictionary first and a
remote translation service as a best-effort fallback.

License: MIT
"""

__version__ = "0.1.0"

from bondtrans.models import EntityKind, ResolutionMode, TargetLanguage
from bondtrans.pipeline import (
    BatchTranslator,
    PipelineConfig,
    TranslationEngine,
    TranslationPipeline,
)

__all__ = [
    "EntityKind",
    "ResolutionMode",
    "TargetLanguage",
    "BatchTranslator",
    "PipelineConfig",
    "TranslationEngine",
    "TranslationPipeline",
]
