from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sized
from dataclasses import dataclass
from typing import Any

from uniqueness.checker import display_value
from uniqueness.messages import MessageCatalog
from uniqueness.records import OrmRecord
from uniqueness.store import RecordStore


class ValidationErrors:
    """Ordered attribute -> messages collection."""

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = {}

    def add(self, attribute: str, message: str) -> None:
        self._errors.setdefault(attribute, []).append(message)

    def has_errors(self, attribute: str | None = None) -> bool:
        if attribute is None:
            return bool(self._errors)
        return bool(self._errors.get(attribute))

    def first(self, attribute: str) -> str | None:
        messages = self._errors.get(attribute)
        return messages[0] if messages else None

    def clear(self, attribute: str | None = None) -> None:
        if attribute is None:
            self._errors.clear()
        else:
            self._errors.pop(attribute, None)

    def as_dict(self) -> dict[str, list[str]]:
        return {attribute: list(messages) for attribute, messages in self._errors.items()}

    def __bool__(self) -> bool:
        return self.has_errors()

    def __repr__(self) -> str:
        return f"ValidationErrors({self._errors!r})"


@dataclass
class ValidationContext:
    record: OrmRecord
    errors: ValidationErrors
    store: RecordStore
    catalog: MessageCatalog
    language: str | None = None


def is_empty(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, Sized) and not isinstance(value, (str, bytes)) and len(value) == 0


class Validator:
    """Base class for attribute validators.

    Subclasses implement `validate_attribute`; the base class handles attribute
    iteration, the skip rules and message formatting.
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        *,
        message: str | None = None,
        skip_on_error: bool = True,
        skip_on_empty: bool = True,
        when: Callable[[Any, str], bool] | None = None,
    ):
        self.attributes = [attributes] if isinstance(attributes, str) else list(attributes)
        self.message = message
        self.skip_on_error = skip_on_error
        self.skip_on_empty = skip_on_empty
        self.when = when

    async def validate_attributes(
        self, context: ValidationContext, attributes: Iterable[str] | None = None
    ) -> None:
        names = self.attributes
        if attributes is not None:
            wanted = set(attributes)
            names = [name for name in names if name in wanted]

        for attribute in names:
            if self.skip_on_error and context.errors.has_errors(attribute):
                continue
            if self.skip_on_empty and is_empty(context.record.get(attribute)):
                continue
            if self.when is not None and not self.when(context.record.instance, attribute):
                continue
            await self.validate_attribute(context, attribute)

    async def validate_attribute(self, context: ValidationContext, attribute: str) -> None:
        raise NotImplementedError

    def add_error(
        self,
        context: ValidationContext,
        attribute: str,
        message: str,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        params = dict(params or {})
        params.setdefault("attribute", context.record.attribute_label(attribute))
        if "value" not in params:
            params["value"] = display_value(context.record.get(attribute))
        context.errors.add(
            attribute, context.catalog.translate(message, params, language=context.language)
        )
