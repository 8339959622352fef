"""
Field translation policy.

Upstream records carry dozens of English fields, but only a handful should
ever be shown translated. The policy is an allow-list: for each entity kind
it names the eligible fields, in order, and the resolution mode of each.
Fields not listed are never touched, whatever their value.

Changing which fields are translated means editing DEFAULT_POLICY (or
passing another FieldPolicy to the pipeline); the engine never changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from bondtrans.models import EntityKind, ResolutionMode


class UnknownEntityKindError(ValueError):
    """Raised when no policy exists for the requested entity kind."""
    pass


def parse_entity_kind(kind: str | EntityKind) -> EntityKind:
    """Parse an entity kind name such as "bond-emission" or "issuer"."""
    if isinstance(kind, EntityKind):
        return kind
    try:
        return EntityKind(str(kind).strip().lower())
    except ValueError:
        known = ", ".join(k.value for k in EntityKind)
        raise UnknownEntityKindError(
            f"Unknown entity kind: {kind!r}. Known kinds: {known}"
        ) from None


@dataclass(frozen=True)
class FieldRule:
    """An eligible field and how it may be resolved."""
    field: str
    mode: ResolutionMode

    @property
    def allows_remote(self) -> bool:
        return self.mode.allows_remote


class FieldPolicy:
    """Immutable table of entity kind → eligible field rules."""

    def __init__(self, rules: Mapping[EntityKind, tuple[FieldRule, ...]]):
        self._rules = MappingProxyType({
            parse_entity_kind(kind): tuple(kind_rules)
            for kind, kind_rules in rules.items()
        })

    @classmethod
    def from_mapping(cls, table: Mapping[str, Mapping[str, str]]) -> FieldPolicy:
        """Build a policy from plain data.

        Example:
            >>> FieldPolicy.from_mapping({
            ...     "issuer": {"branch_name_eng": "dictionary-then-remote"},
            ... })
        """
        return cls({
            parse_entity_kind(kind): tuple(
                FieldRule(field, ResolutionMode(mode))
                for field, mode in fields.items()
            )
            for kind, fields in table.items()
        })

    @property
    def kinds(self) -> tuple[EntityKind, ...]:
        return tuple(self._rules)

    def fields_for(self, kind: str | EntityKind) -> tuple[FieldRule, ...]:
        """Return the ordered eligible fields for ``kind``.

        Raises:
            UnknownEntityKindError: If the kind is unknown or has no policy
        """
        entity_kind = parse_entity_kind(kind)
        try:
            return self._rules[entity_kind]
        except KeyError:
            raise UnknownEntityKindError(
                f"No translation policy for entity kind: {entity_kind.value}"
            ) from None

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            kind.value: {rule.field: rule.mode.value for rule in rules}
            for kind, rules in self._rules.items()
        }


_DICT = ResolutionMode.DICTIONARY_ONLY
_REMOTE = ResolutionMode.DICTIONARY_THEN_REMOTE

# kind_name_eng stays in English on purpose
DEFAULT_POLICY = FieldPolicy({
    EntityKind.BOND_EMISSION: (
        FieldRule("emitent_branch_name_eng", _REMOTE),
        FieldRule("emitent_type_name_eng", _DICT),
        FieldRule("emitent_country_name_eng", _DICT),
        FieldRule("bond_rank_name_eng", _DICT),
        FieldRule("status_name_eng", _DICT),
        FieldRule("currency_name", _DICT),
        FieldRule("coupon_type_name_eng", _DICT),
        FieldRule("placing_type_name_eng", _DICT),
        FieldRule("private_offering_name_eng", _DICT),
    ),
    EntityKind.ISSUER: (
        FieldRule("branch_name_eng", _REMOTE),
        FieldRule("profile_eng", _REMOTE),
        FieldRule("type_name_eng", _DICT),
        FieldRule("country_name_eng", _DICT),
        FieldRule("reg_form_name_eng", _DICT),
    ),
})
