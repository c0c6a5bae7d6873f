# recipe_store/src/domain/errors.py
from __future__ import annotations


class RecipeStoreError(Exception):
    """Base class for every error raised by the recipe store."""


class RecipeNotFound(RecipeStoreError, LookupError):
    def __init__(self, recipe_uuid: str) -> None:
        super().__init__(f"Recipe not found: {recipe_uuid}")
        self.recipe_uuid = recipe_uuid


class InvalidIdentifier(RecipeStoreError, ValueError):
    """The caller passed a string that is not a store identifier."""

    def __init__(self, recipe_uuid: str) -> None:
        super().__init__(f"Invalid recipe identifier: {recipe_uuid!r}")
        self.recipe_uuid = recipe_uuid


class StoreError(RecipeStoreError):
    """Transport or server failure talking to the document store. Not retried here."""


# -------------------------
# Enum codec
# -------------------------
class UnknownEnumLabel(ValueError):
    def __init__(self, enum_name: str, label: str) -> None:
        super().__init__(f"Unknown {enum_name} label: {label!r}")
        self.enum_name = enum_name
        self.label = label


class UnknownEnumCode(ValueError):
    def __init__(self, enum_name: str, code: int) -> None:
        super().__init__(f"Unknown {enum_name} legacy code: {code!r}")
        self.enum_name = enum_name
        self.code = code


# -------------------------
# Decoding stored documents
# -------------------------
class DecodeError(RecipeStoreError, ValueError):
    """A stored document violates the recipe document contract."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class MissingRequiredField(DecodeError):
    def __init__(self, field: str) -> None:
        super().__init__(field, "required field is missing")


class TypeMismatch(DecodeError):
    def __init__(self, field: str, expected: str, actual: object) -> None:
        super().__init__(field, f"expected {expected}, got {type(actual).__name__}")
        self.expected = expected


class InvalidEnumValue(DecodeError):
    def __init__(self, field: str, value: object) -> None:
        super().__init__(field, f"unrecognised enum value {value!r}")
        self.value = value


class InvalidFieldValue(DecodeError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(field, reason)
        self.reason = reason
