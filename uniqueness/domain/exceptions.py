from __future__ import annotations

from typing import Any

_SCALAR_TYPE_NAMES: dict[type, str] = {
    bool: "boolean",
    int: "integer",
    float: "double",
    str: "string",
    list: "array",
    tuple: "array",
    dict: "array",
}


def describe_type(value: Any) -> str:
    """Name the runtime type of `value` for error messages.

    Builtin scalars get a category name (`integer`, `string`, ...); anything else is
    named by its class, module-qualified unless it is a builtin.
    """

    if value is None:
        return "NULL"
    cls = type(value)
    if cls in _SCALAR_TYPE_NAMES:
        return _SCALAR_TYPE_NAMES[cls]
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


class ModelValidationError(Exception):
    """Raised by `validate_or_raise` when a record fails validation."""

    def __init__(self, errors: dict[str, list[str]], message: str = "Validation failed."):
        super().__init__(message)
        self.message = message
        self.errors = errors


class FileError(Exception):
    """Base class for argument/file handling errors raised at API boundaries."""


class UnexpectedTypeError(FileError):
    """Raised when an argument is not of the expected type."""

    def __init__(self, value: Any, expected_type: str):
        self.value = value
        self.expected_type = expected_type
        self.message = f"Expected argument of type {expected_type}, {describe_type(value)} given"
        super().__init__(self.message)
