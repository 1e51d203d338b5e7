from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from uniqueness.checker import UniquenessChecker, resolve_target_attributes
from uniqueness.query import as_lookup_filter
from uniqueness.validators.base import ValidationContext, Validator


class UniqueValidator(Validator):
    """
    Validates that attribute values are not already used by a stored record.

    Examples:

        # email must be unique
        UniqueValidator("email")
        # login must be unique, checked against the `username` column
        UniqueValidator("login", target_attribute="username")
        # email + tenant_id unique together, both get the error
        UniqueValidator(["email", "tenant_id"], target_attribute=["email", "tenant_id"])
        # only active accounts count
        UniqueValidator("email", filter=Account.deleted_at.is_(None))
        UniqueValidator("email", filter=lambda stmt: stmt.where(Account.tenant_id == 1))
    """

    def __init__(
        self,
        attributes: str | Iterable[str],
        *,
        target_class: type | None = None,
        target_attribute: Any = None,
        filter: Any = None,  # noqa: A002
        message: str | None = None,
        combo_message: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(attributes, message=message, **kwargs)
        self.target_class = target_class
        self.target_attribute = target_attribute
        self.filter = as_lookup_filter(filter)
        self.combo_message = combo_message
        # Fail on malformed target specs at declaration time, not mid-request.
        for attribute in self.attributes:
            resolve_target_attributes(target_attribute, attribute=attribute)

    async def validate_attribute(self, context: ValidationContext, attribute: str) -> None:
        checker = UniquenessChecker(
            store=context.store,
            catalog=context.catalog,
            language=context.language,
            message=self.message,
            combo_message=self.combo_message,
        )
        decision = await checker.check(
            context.record,
            attribute,
            target_attributes=self.target_attribute,
            lookup_filter=self.filter,
            target_class=self.target_class,
        )
        if decision.conflict and decision.message is not None:
            context.errors.add(attribute, decision.message)
