from __future__ import annotations

import re
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import InstanceState

from uniqueness.domain.exceptions import UnexpectedTypeError

_CAMEL_BOUNDARY = re.compile(r"(?<![A-Z])[A-Z]")
_WORD_SEPARATORS = re.compile(r"[-_.\s]+")


def generate_attribute_label(name: str) -> str:
    """`tenant_id` -> `Tenant Id`, `firstName` -> `First Name`, `ID` -> `ID`."""
    spaced = _CAMEL_BOUNDARY.sub(lambda m: " " + m.group(0), name)
    words = [w for w in _WORD_SEPARATORS.split(spaced) if w]
    return " ".join(w[0].upper() + w[1:] for w in words)


def primary_key_names(model_class: type) -> list[str]:
    """Attribute keys of the mapped class's primary key, in mapper order."""
    mapper = inspect(model_class)
    return [mapper.get_property_by_column(col).key for col in mapper.primary_key]


class OrmRecord:
    """Read-only view of a mapped SQLAlchemy instance.

    `old_primary_key` is the identity the row was loaded/flushed under; it only
    changes on flush, so it still holds the stored key while the instance carries
    unsaved edits to its primary key attributes.
    """

    def __init__(self, instance: Any):
        try:
            state = inspect(instance)
        except NoInspectionAvailable:
            raise UnexpectedTypeError(instance, "mapped ORM instance") from None
        if not isinstance(state, InstanceState):
            # inspect() on a mapped *class* returns its Mapper.
            raise UnexpectedTypeError(instance, "mapped ORM instance")
        self.instance = instance
        self._state = state

    @property
    def model_class(self) -> type:
        return type(self.instance)

    @property
    def type_name(self) -> str:
        return self.model_class.__qualname__

    @property
    def is_new(self) -> bool:
        return self._state.transient or self._state.pending

    @property
    def primary_key(self) -> tuple[Any, ...]:
        return tuple(self._state.mapper.primary_key_from_instance(self.instance))

    @property
    def old_primary_key(self) -> tuple[Any, ...] | None:
        identity = self._state.identity
        return tuple(identity) if identity is not None else None

    @property
    def primary_key_names(self) -> list[str]:
        return primary_key_names(self.model_class)

    def get(self, name: str) -> Any:
        return getattr(self.instance, name)

    def attribute_label(self, name: str) -> str:
        labels = getattr(self.model_class, "attribute_labels", None) or {}
        return labels.get(name) or generate_attribute_label(name)
