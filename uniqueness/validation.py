from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from uniqueness.domain.exceptions import ModelValidationError
from uniqueness.messages import MessageCatalog, get_message_catalog
from uniqueness.records import OrmRecord
from uniqueness.store import RecordStore
from uniqueness.validators.base import ValidationContext, ValidationErrors, Validator

logger = logging.getLogger("uniqueness.validation")


async def validate(
    instance: Any,
    validators: Iterable[Validator],
    *,
    store: RecordStore,
    catalog: MessageCatalog | None = None,
    language: str | None = None,
    attributes: Iterable[str] | None = None,
) -> ValidationErrors:
    """Run `validators` against a mapped instance and return the collected errors.

    `attributes` limits validation to the named attributes (e.g. only the fields a
    PATCH touched). Validators run in order; with `skip_on_error` a later validator
    won't re-report an attribute an earlier one already failed.
    """

    record = OrmRecord(instance)
    context = ValidationContext(
        record=record,
        errors=ValidationErrors(),
        store=store,
        catalog=catalog or get_message_catalog(),
        language=language,
    )
    wanted = list(attributes) if attributes is not None else None
    for validator in validators:
        await validator.validate_attributes(context, wanted)

    if context.errors:
        logger.info(
            "Record validation failed",
            extra={
                "target": record.type_name,
                "error_count": sum(len(m) for m in context.errors.as_dict().values()),
            },
        )
    return context.errors


async def validate_or_raise(
    instance: Any,
    validators: Iterable[Validator],
    *,
    store: RecordStore,
    catalog: MessageCatalog | None = None,
    language: str | None = None,
    attributes: Iterable[str] | None = None,
) -> None:
    errors = await validate(
        instance,
        validators,
        store=store,
        catalog=catalog,
        language=language,
        attributes=attributes,
    )
    if errors:
        raise ModelValidationError(errors.as_dict())
