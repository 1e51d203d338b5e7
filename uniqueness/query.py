from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from sqlalchemy import Select, select
from sqlalchemy.sql.expression import ClauseElement

from uniqueness.domain.exceptions import UnexpectedTypeError


@dataclass(frozen=True)
class StaticCondition:
    """Extra condition AND-appended to the lookup.

    Either a SQL expression (`Account.deleted_at.is_(None)`, `text(...)`) or an
    attribute -> value mapping compared for equality.
    """

    condition: ClauseElement | Mapping[str, Any]

    def apply(self, stmt: Select) -> Select:
        if isinstance(self.condition, Mapping):
            return stmt.filter_by(**self.condition)
        return stmt.where(self.condition)


@dataclass(frozen=True)
class QueryMutator:
    """Callback that receives the lookup statement and returns the statement to run.

    Statements are immutable; the callback must return the result of its
    `.where()` / `.join()` calls rather than relying on in-place changes.
    """

    mutate: Callable[[Select], Select]

    def apply(self, stmt: Select) -> Select:
        result = self.mutate(stmt)
        if not isinstance(result, Select):
            raise UnexpectedTypeError(result, "sqlalchemy.Select")
        return result


LookupFilter: TypeAlias = StaticCondition | QueryMutator


def as_lookup_filter(value: Any) -> LookupFilter | None:
    """Coerce user-supplied filter config into a tagged filter variant."""
    if value is None or isinstance(value, (StaticCondition, QueryMutator)):
        return value
    if isinstance(value, (ClauseElement, Mapping)):
        return StaticCondition(value)
    if callable(value):
        return QueryMutator(value)
    raise UnexpectedTypeError(value, "StaticCondition|QueryMutator")


def build_lookup(
    *,
    model_class: type,
    params: Mapping[str, Any],
    lookup_filter: LookupFilter | None = None,
) -> Select:
    stmt = select(model_class).filter_by(**params)
    if lookup_filter is not None:
        stmt = lookup_filter.apply(stmt)
    return stmt
