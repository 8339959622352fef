"""
Core tests for bondtrans.

These tests verify the static building blocks:
- Language and entity kind parsing
- Term dictionary lookup and loading
- Field policy tables

Run with: pytest tests/test_core.py -v
"""

import pytest

from bondtrans.models import (
    EntityKind,
    ResolutionMode,
    TargetLanguage,
    UnsupportedLanguageError,
    parse_language,
)
from bondtrans.policy import (
    DEFAULT_POLICY,
    FieldPolicy,
    FieldRule,
    UnknownEntityKindError,
    parse_entity_kind,
)
from bondtrans.translate.terms import (
    TermDictionary,
    TermEntry,
    get_default_terms,
    load_terms_csv,
)


class TestTargetLanguage:
    """Tests for language codes and locale mapping."""

    def test_source_language(self):
        """Only eng is the source language."""
        assert TargetLanguage.ENG.is_source
        assert not any(lang.is_source for lang in TargetLanguage if lang is not TargetLanguage.ENG)

    def test_remote_locales(self):
        """Chinese codes map to simplified or traditional service locales."""
        assert TargetLanguage.ZH.remote_locale == "zh-cn"
        assert TargetLanguage.ZH_CN.remote_locale == "zh-cn"
        assert TargetLanguage.CHT.remote_locale == "zh-TW"
        assert TargetLanguage.ZH_TW.remote_locale == "zh-TW"
        assert TargetLanguage.ENG.remote_locale == "en"

    def test_family(self):
        assert TargetLanguage.ENG.family == "en"
        assert TargetLanguage.CHT.family == "zh"

    def test_parse_is_case_insensitive(self):
        assert parse_language("ZH-TW") is TargetLanguage.ZH_TW
        assert parse_language(" eng ") is TargetLanguage.ENG

    def test_parse_accepts_enum(self):
        assert parse_language(TargetLanguage.CHT) is TargetLanguage.CHT

    def test_variant_refines_generic_chinese(self):
        """The variant flag picks the script for the generic zh code."""
        assert parse_language("zh", variant="traditional") is TargetLanguage.CHT
        assert parse_language("zh", variant="simplified") is TargetLanguage.ZH_CN

    def test_variant_ignored_for_explicit_codes(self):
        assert parse_language("zh-cn", variant="traditional") is TargetLanguage.ZH_CN
        assert parse_language("eng", variant="traditional") is TargetLanguage.ENG

    def test_unknown_language_raises(self):
        with pytest.raises(UnsupportedLanguageError):
            parse_language("fr")

    def test_unknown_variant_raises(self):
        with pytest.raises(UnsupportedLanguageError):
            parse_language("zh", variant="cantonese")

    def test_unsupported_language_is_value_error(self):
        assert issubclass(UnsupportedLanguageError, ValueError)


class TestTermDictionary:
    """Tests for the term dictionary."""

    def test_lookup_hit(self):
        terms = get_default_terms()

        assert terms.lookup("Banking") == "銀行業"
        assert terms.lookup("International bonds") == "國際債券"
        assert terms.lookup("USD") == "美元"

    def test_lookup_miss_returns_none(self):
        terms = get_default_terms()

        assert terms.lookup("Aerospace") is None
        assert terms.lookup("") is None

    def test_lookup_is_exact(self):
        """No case folding or trimming."""
        terms = get_default_terms()

        assert terms.lookup("banking") is None
        assert terms.lookup("Banking ") is None
        assert terms.lookup("BANKING") is None

    def test_default_table_coverage(self):
        """The built-in table covers every category of the gateway."""
        terms = get_default_terms()
        categories = {entry.category for entry in terms}

        assert len(terms) > 40
        assert terms.target_lang == "zh"
        assert {"sector", "currency", "country", "status", "bond_kind"} <= categories

    def test_contains_and_to_dict(self):
        terms = TermDictionary([TermEntry("Banking", "銀行業")])

        assert "Banking" in terms
        assert "Mining" not in terms
        assert terms.to_dict() == {"Banking": "銀行業"}

    def test_later_entries_win(self):
        terms = TermDictionary([
            TermEntry("Banking", "銀行"),
            TermEntry("Banking", "銀行業"),
        ])

        assert len(terms) == 1
        assert terms.lookup("Banking") == "銀行業"

    def test_merge_other_takes_precedence(self):
        base = TermDictionary([TermEntry("Banking", "銀行"), TermEntry("USD", "美元")], name="base")
        extra = TermDictionary([TermEntry("Banking", "銀行業"), TermEntry("Mining", "採礦業")], name="extra")

        merged = base.merge(extra)

        assert merged.lookup("Banking") == "銀行業"
        assert merged.lookup("USD") == "美元"
        assert merged.lookup("Mining") == "採礦業"
        assert merged.name == "base+extra"
        assert base.lookup("Banking") == "銀行"

    def test_search(self):
        terms = get_default_terms()

        sources = {entry.source for entry in terms.search("bonds")}

        assert "International bonds" in sources
        assert "Government bonds" in sources
        assert {entry.source for entry in terms.search("美元")} == {"USD"}

    def test_load_csv(self, tmp_path):
        """CSV rows load with optional category; bad rows are skipped."""
        path = tmp_path / "extra_terms.csv"
        path.write_text(
            "source,target,category\n"
            "Mining,採礦業,sector\n"
            "Chemicals,化工\n"
            "incomplete\n"
            ",空白\n",
            encoding="utf-8",
        )

        terms = load_terms_csv(path)

        assert len(terms) == 2
        assert terms.name == "extra_terms"
        assert terms.lookup("Mining") == "採礦業"
        assert terms.lookup("Chemicals") == "化工"
        assert next(e for e in terms if e.source == "Mining").category == "sector"

    def test_load_csv_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_terms_csv(tmp_path / "missing.csv")


class TestFieldPolicy:
    """Tests for the field translation policy."""

    def test_parse_entity_kind(self):
        assert parse_entity_kind("bond-emission") is EntityKind.BOND_EMISSION
        assert parse_entity_kind("ISSUER") is EntityKind.ISSUER
        assert parse_entity_kind(EntityKind.ISSUER) is EntityKind.ISSUER

    def test_unknown_kind_raises(self):
        with pytest.raises(UnknownEntityKindError):
            parse_entity_kind("guarantor")
        with pytest.raises(UnknownEntityKindError):
            DEFAULT_POLICY.fields_for("guarantor")

    def test_bond_emission_fields(self):
        rules = {r.field: r.mode for r in DEFAULT_POLICY.fields_for("bond-emission")}

        assert rules["emitent_branch_name_eng"] is ResolutionMode.DICTIONARY_THEN_REMOTE
        assert rules["status_name_eng"] is ResolutionMode.DICTIONARY_ONLY
        assert rules["currency_name"] is ResolutionMode.DICTIONARY_ONLY
        assert rules["emitent_country_name_eng"] is ResolutionMode.DICTIONARY_ONLY
        assert "kind_name_eng" not in rules

    def test_issuer_fields(self):
        rules = {r.field: r.mode for r in DEFAULT_POLICY.fields_for(EntityKind.ISSUER)}

        assert rules["branch_name_eng"] is ResolutionMode.DICTIONARY_THEN_REMOTE
        assert rules["profile_eng"] is ResolutionMode.DICTIONARY_THEN_REMOTE
        assert rules["country_name_eng"] is ResolutionMode.DICTIONARY_ONLY
        assert rules["type_name_eng"] is ResolutionMode.DICTIONARY_ONLY

    def test_field_order_is_preserved(self):
        fields = [r.field for r in DEFAULT_POLICY.fields_for("issuer")]

        assert fields[:2] == ["branch_name_eng", "profile_eng"]

    def test_rule_allows_remote(self):
        assert FieldRule("a", ResolutionMode.DICTIONARY_THEN_REMOTE).allows_remote
        assert not FieldRule("a", ResolutionMode.DICTIONARY_ONLY).allows_remote

    def test_from_mapping(self):
        policy = FieldPolicy.from_mapping({
            "issuer": {
                "profile_eng": "dictionary-then-remote",
                "country_name_eng": "dictionary-only",
            },
        })

        assert policy.kinds == (EntityKind.ISSUER,)
        assert policy.fields_for("issuer") == (
            FieldRule("profile_eng", ResolutionMode.DICTIONARY_THEN_REMOTE),
            FieldRule("country_name_eng", ResolutionMode.DICTIONARY_ONLY),
        )
        with pytest.raises(UnknownEntityKindError):
            policy.fields_for("bond-emission")

    def test_from_mapping_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            FieldPolicy.from_mapping({"issuer": {"profile_eng": "remote-only"}})

    def test_to_dict_round_trip(self):
        table = DEFAULT_POLICY.to_dict()

        assert FieldPolicy.from_mapping(table).to_dict() == table
        assert table["bond-emission"]["emitent_branch_name_eng"] == "dictionary-then-remote"
