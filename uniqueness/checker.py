"""Attribute uniqueness checks against stored records.

Target attributes can be given as:

    None                              # the validated attribute itself
    "email_address"                   # one lookup column, value read from the validated attribute
    ["email", "tenant_id"]            # unique together
    ["email", ("login", "username")]  # mixed: `login`'s value is looked up in `username`
    {"login": "username"}             # source attribute -> target attribute

The check is read-then-decide; concurrent inserts can still race past it. Pair it
with a DB unique constraint where correctness matters.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field
from typing import Any, Literal

from sqlalchemy import Select

from uniqueness.core.metrics import observe_check
from uniqueness.domain.exceptions import UnexpectedTypeError
from uniqueness.messages import MessageCatalog, get_message_catalog
from uniqueness.query import as_lookup_filter, build_lookup
from uniqueness.records import OrmRecord, primary_key_names
from uniqueness.store import RecordStore

logger = logging.getLogger("uniqueness.check")

DEFAULT_MESSAGE = '{attribute} "{value}" has already been taken.'
DEFAULT_COMBO_MESSAGE = "The combination {values} of {attributes} has already been taken."
DEFAULT_INVALID_MESSAGE = "{attribute} is invalid."

Outcome = Literal["unique", "taken", "combo_taken", "invalid"]


@dataclass(frozen=True)
class TargetAttribute:
    source: str
    target: str


@dataclass(frozen=True)
class ConflictDecision:
    outcome: Outcome
    attribute: str
    attributes: tuple[str, ...] = ()
    message: str | None = None
    params: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def conflict(self) -> bool:
        return self.outcome != "unique"


def is_composite(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, Sequence, Set))


def display_value(value: Any) -> Any:
    if value is None:
        return ""
    return "array()" if is_composite(value) else value


def resolve_target_attributes(config: Any, *, attribute: str) -> tuple[TargetAttribute, ...]:
    if config is None:
        return (TargetAttribute(source=attribute, target=attribute),)
    if isinstance(config, str):
        return (TargetAttribute(source=attribute, target=config),)
    if isinstance(config, Mapping):
        pairs = []
        for source, target in config.items():
            if not isinstance(source, str) or not isinstance(target, str):
                raise UnexpectedTypeError(target, "string")
            pairs.append(TargetAttribute(source=source, target=target))
        return tuple(pairs)
    if isinstance(config, Sequence):
        pairs = []
        for entry in config:
            if isinstance(entry, str):
                pairs.append(TargetAttribute(source=entry, target=entry))
            elif (
                isinstance(entry, tuple)
                and len(entry) == 2
                and all(isinstance(part, str) for part in entry)
            ):
                pairs.append(TargetAttribute(source=entry[0], target=entry[1]))
            else:
                raise UnexpectedTypeError(entry, "string|tuple[string, string]")
        if not pairs:
            raise UnexpectedTypeError(config, "non-empty sequence of attribute names")
        return tuple(pairs)
    raise UnexpectedTypeError(config, "string|sequence|mapping")


def build_attribute_map(
    record: OrmRecord, targets: Sequence[TargetAttribute]
) -> dict[str, Any]:
    return {t.target: record.get(t.source) for t in targets}


class UniquenessChecker:
    def __init__(
        self,
        *,
        store: RecordStore,
        catalog: MessageCatalog | None = None,
        language: str | None = None,
        message: str | None = None,
        combo_message: str | None = None,
        invalid_message: str | None = None,
    ):
        self._store = store
        self._catalog = catalog or get_message_catalog()
        self._language = language
        self.message = message or DEFAULT_MESSAGE
        self.combo_message = combo_message or DEFAULT_COMBO_MESSAGE
        self.invalid_message = invalid_message or DEFAULT_INVALID_MESSAGE

    async def check(
        self,
        candidate: Any,
        attribute: str,
        *,
        target_attributes: Any = None,
        lookup_filter: Any = None,
        target_class: type | None = None,
    ) -> ConflictDecision:
        record = candidate if isinstance(candidate, OrmRecord) else OrmRecord(candidate)
        target_class = target_class or record.model_class
        targets = resolve_target_attributes(target_attributes, attribute=attribute)
        lookup_filter = as_lookup_filter(lookup_filter)

        started = time.perf_counter()
        params = build_attribute_map(record, targets)
        if any(is_composite(value) for value in params.values()):
            decision = self._decision(record, attribute, "invalid", self.invalid_message)
        else:
            query = build_lookup(model_class=target_class, params=params, lookup_filter=lookup_filter)
            if not await self._exists(record, query=query, target_class=target_class, keys=params):
                decision = ConflictDecision(outcome="unique", attribute=attribute)
            elif len(targets) > 1:
                decision = self._combo_decision(record, attribute, targets)
            else:
                decision = self._decision(record, attribute, "taken", self.message)

        duration = time.perf_counter() - started
        observe_check(target=target_class.__name__, outcome=decision.outcome, duration=duration)
        logger.info(
            "Uniqueness check completed",
            extra={
                "target": target_class.__name__,
                "attribute": attribute,
                "outcome": decision.outcome,
                "duration_ms": round(duration * 1000.0, 2),
            },
        )
        return decision

    async def _exists(
        self,
        record: OrmRecord,
        *,
        query: Select,
        target_class: type,
        keys: Mapping[str, Any],
    ) -> bool:
        if record.model_class is not target_class or record.is_new:
            # Nothing stored under the candidate's identity can be excluded.
            return await self._store.exists(query)

        rows = await self._store.fetch_up_to(query, 2)
        if len(rows) != 1:
            return len(rows) > 1

        if sorted(keys) == sorted(primary_key_names(target_class)):
            # Lookup is on the primary key itself: the single match is either the
            # candidate's own row (key unchanged) or another row it was renamed onto.
            return record.old_primary_key != record.primary_key
        # Compare stored identities; the matched row may be the candidate instance
        # itself (identity map) carrying unsaved edits.
        return OrmRecord(rows[0]).old_primary_key != record.old_primary_key

    def _decision(
        self,
        record: OrmRecord,
        attribute: str,
        outcome: Outcome,
        template: str,
        params: dict[str, Any] | None = None,
        attributes: tuple[str, ...] | None = None,
    ) -> ConflictDecision:
        params = dict(params or {})
        params.setdefault("attribute", record.attribute_label(attribute))
        params.setdefault("value", display_value(record.get(attribute)))
        message = self._catalog.translate(template, params, language=self._language)
        return ConflictDecision(
            outcome=outcome,
            attribute=attribute,
            attributes=attributes or (attribute,),
            message=message,
            params=params,
        )

    def _combo_decision(
        self, record: OrmRecord, attribute: str, targets: Sequence[TargetAttribute]
    ) -> ConflictDecision:
        sources = tuple(t.source for t in targets)
        labels = [record.attribute_label(source) for source in sources]
        values = [f'"{display_value(record.get(source))}"' for source in sources]
        return self._decision(
            record,
            attribute,
            "combo_taken",
            self.combo_message,
            {
                "attributes": self._catalog.sentence(labels, language=self._language),
                "values": "-".join(values),
            },
            attributes=sources,
        )
