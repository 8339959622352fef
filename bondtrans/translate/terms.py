"""
Term dictionary for financial vocabulary.

This module handles:
- The built-in English→Chinese table of bond-market terms
- Loading extra terms from CSV files
- Exact-match lookup used by the translation engine

Design Philosophy:
- Dictionaries are immutable after construction
- Matching is exact and case-sensitive: upstream categorical values come
  from a fixed vocabulary, so "Banking" and "banking" are different terms
- A miss is a normal outcome and never raises
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Optional


@dataclass(frozen=True)
class TermEntry:
    """A single dictionary entry.

    Attributes:
        source: Canonical English term as it appears in upstream data
        target: Translated term
        category: Optional grouping (e.g., "sector", "currency")
    """
    source: str
    target: str
    category: str = ""


class TermDictionary:
    """Read-only exact-match term table for one target language family.

    Later entries win when the same source term appears twice.
    """

    def __init__(
        self,
        entries: Iterable[TermEntry] = (),
        name: str = "default",
        target_lang: str = "zh",
    ):
        self.name = name
        self.target_lang = target_lang
        table = {}
        for entry in entries:
            table[entry.source] = entry
        self._entries = MappingProxyType(table)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TermEntry]:
        return iter(self._entries.values())

    def __contains__(self, source: object) -> bool:
        return source in self._entries

    def __repr__(self) -> str:
        return f"TermDictionary(name={self.name!r}, target_lang={self.target_lang!r}, terms={len(self)})"

    def lookup(self, source: str) -> Optional[str]:
        """Return the translation of ``source``, or None on a miss."""
        entry = self._entries.get(source)
        return entry.target if entry is not None else None

    def search(self, fragment: str) -> list[TermEntry]:
        """Case-insensitive substring search over source and target terms."""
        needle = fragment.lower()
        return [
            e for e in self._entries.values()
            if needle in e.source.lower() or needle in e.target.lower()
        ]

    def to_dict(self) -> dict[str, str]:
        """Convert to simple dict (source → target)."""
        return {e.source: e.target for e in self._entries.values()}

    def merge(self, other: TermDictionary) -> TermDictionary:
        """Merge with another dictionary (other takes precedence on conflicts)."""
        return TermDictionary(
            entries=[*self, *other],
            name=f"{self.name}+{other.name}",
            target_lang=self.target_lang,
        )


# ============================================================================
# Loading Functions
# ============================================================================

def load_terms_csv(
    path: str | Path,
    target_lang: str = "zh",
    has_header: bool = True,
) -> TermDictionary:
    """Load a term dictionary from a CSV file.

    Expected format:
        source_term,target_term[,category]

    Rows with fewer than two columns or an empty term are skipped.
    """
    path = Path(path)
    entries = []

    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.reader(f)
        if has_header:
            next(reader, None)

        for row in reader:
            if len(row) < 2:
                continue
            source = row[0].strip()
            target = row[1].strip()
            if not source or not target:
                continue
            category = row[2].strip() if len(row) > 2 else ""
            entries.append(TermEntry(source, target, category))

    return TermDictionary(entries=entries, name=path.stem, target_lang=target_lang)


# ============================================================================
# Built-in Dictionary
# ============================================================================

def get_default_terms() -> TermDictionary:
    """Return the built-in English→Chinese table of bond-market terms.

    Targets are written in traditional Chinese, matching what the gateway
    has always served for both the simplified and traditional codes.
    """
    entries = [
        # ===== Issuer types =====
        TermEntry("corporate", "企業", "issuer_type"),
        TermEntry("municipal", "市政", "issuer_type"),
        TermEntry("sovereign", "主權", "issuer_type"),
        TermEntry("supranational", "超國家", "issuer_type"),

        # ===== Industry sectors =====
        TermEntry("IT equipment", "資訊科技設備", "sector"),
        TermEntry("Banking", "銀行業", "sector"),
        TermEntry("Oil & Gas", "石油天然氣", "sector"),
        TermEntry("Telecommunications", "電信業", "sector"),
        TermEntry("Utilities", "公用事業", "sector"),
        TermEntry("Healthcare", "醫療保健", "sector"),
        TermEntry("Consumer Goods", "消費品", "sector"),
        TermEntry("Industrial", "工業", "sector"),
        TermEntry("Real Estate", "房地產", "sector"),
        TermEntry("Financial Services", "金融服務", "sector"),

        # ===== Bond classifications =====
        TermEntry("International bonds", "國際債券", "bond_kind"),
        TermEntry("Corporate bonds", "企業債券", "bond_kind"),
        TermEntry("Government bonds", "政府債券", "bond_kind"),
        TermEntry("Municipal bonds", "市政債券", "bond_kind"),
        TermEntry("Senior Unsecured", "高級無擔保", "bond_rank"),
        TermEntry("Subordinated", "次級", "bond_rank"),
        TermEntry("Secured", "有擔保", "bond_rank"),
        TermEntry("Unsecured", "無擔保", "bond_rank"),

        # ===== Statuses =====
        TermEntry("outstanding", "流通中", "status"),
        TermEntry("matured", "已到期", "status"),
        TermEntry("defaulted", "違約", "status"),
        TermEntry("cancelled", "已取消", "status"),

        # ===== Countries =====
        TermEntry("USA", "美國", "country"),
        TermEntry("China", "中國", "country"),
        TermEntry("Japan", "日本", "country"),
        TermEntry("Germany", "德國", "country"),
        TermEntry("United Kingdom", "英國", "country"),
        TermEntry("France", "法國", "country"),
        TermEntry("Canada", "加拿大", "country"),
        TermEntry("Australia", "澳洲", "country"),
        TermEntry("Russia", "俄羅斯", "country"),

        # ===== Currencies =====
        TermEntry("USD", "美元", "currency"),
        TermEntry("EUR", "歐元", "currency"),
        TermEntry("GBP", "英鎊", "currency"),
        TermEntry("JPY", "日圓", "currency"),
        TermEntry("CNY", "人民幣", "currency"),
        TermEntry("HKD", "港幣", "currency"),
        TermEntry("TWD", "台幣", "currency"),

        # ===== Offering and coupon terms =====
        TermEntry("Not specified", "未指定", "general"),
        TermEntry("Public", "公開", "placing"),
        TermEntry("Private", "私募", "placing"),
        TermEntry("Open subscription", "公開認購", "placing"),
        TermEntry("Coupon bonds", "附息債券", "coupon"),
        TermEntry("Zero coupon", "零息債券", "coupon"),
        TermEntry("Floating rate", "浮動利率", "coupon"),
        TermEntry("Fixed rate", "固定利率", "coupon"),
    ]

    return TermDictionary(entries=entries, name="default_en_zh", target_lang="zh")
