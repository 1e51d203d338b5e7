"""Attribute uniqueness validation for SQLAlchemy models.

- `UniquenessChecker` decides whether a record's attribute value(s) are already taken.
- `UniqueValidator` plugs the checker into the `validate()` pipeline.
- Lookups are read-only and best effort; DB unique constraints remain the source of truth.
"""

from __future__ import annotations

from uniqueness.checker import ConflictDecision, TargetAttribute, UniquenessChecker
from uniqueness.domain.exceptions import FileError, ModelValidationError, UnexpectedTypeError
from uniqueness.messages import MessageCatalog, get_message_catalog
from uniqueness.query import QueryMutator, StaticCondition
from uniqueness.records import OrmRecord
from uniqueness.store import RecordStore, SqlAlchemyRecordStore
from uniqueness.validation import validate, validate_or_raise
from uniqueness.validators.base import ValidationErrors, Validator
from uniqueness.validators.unique import UniqueValidator

__all__ = [
    "ConflictDecision",
    "FileError",
    "MessageCatalog",
    "ModelValidationError",
    "OrmRecord",
    "QueryMutator",
    "RecordStore",
    "SqlAlchemyRecordStore",
    "StaticCondition",
    "TargetAttribute",
    "UnexpectedTypeError",
    "UniqueValidator",
    "UniquenessChecker",
    "ValidationErrors",
    "Validator",
    "get_message_catalog",
    "validate",
    "validate_or_raise",
]
