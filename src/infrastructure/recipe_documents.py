# recipe_store/src/infrastructure/recipe_documents.py
"""
Recipe <-> MongoDB document mapping.

Encoding is total: every field defined below is written, and an unset value
is stored as an explicit null rather than a missing key. Enums are written as
their string label and quantities always as doubles.

Decoding is strict about shape and lenient about absence:
- a missing or null optional field decodes to None
- a missing required field raises MissingRequiredField
- a value of the wrong physical type raises TypeMismatch
- an enum may be stored as a label (current) or an integer code (legacy)
- a list fails as a whole on its first bad element

Error field names carry the full path, e.g. ``steps[2].step``.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

from bson import Decimal128, ObjectId

from src.domain.entities import (
    Amount,
    BookSource,
    HACCPValue,
    Ingredient,
    IngredientData,
    Recipe,
    RecipeRequest,
    Step,
    Temperature,
    Yield,
)
from src.domain.enum_codec import OVEN_FAN_CODEC, TEMPERATURE_UNIT_CODEC, EnumCodec
from src.domain.errors import (
    InvalidEnumValue,
    InvalidFieldValue,
    MissingRequiredField,
    TypeMismatch,
    UnknownEnumCode,
    UnknownEnumLabel,
)

log = logging.getLogger("infra.recipe_documents")

Document = Dict[str, Any]
T = TypeVar("T")

# Wire contract: renaming any of these needs a data migration.
RECIPE_UUID = "_id"
RECIPE_NAME = "recipe_name"
OVEN_TIME = "oven_time"
NOTES = "notes"
OVEN_FAN = "oven_fan"
OVEN_TEMP = "oven_temp"
SOURCE_BOOK = "source_book"
SOURCE_AUTHORS = "source_authors"
SOURCE_URL = "source_url"
INGREDIENTS = "ingredients"
STEPS = "steps"
YIELDS = "yields"

AMOUNT = "amount"
UNIT = "unit"
AMOUNTS = "amounts"
PROCESSING = "processing"
INGREDIENT_NAME = "ingredient_name"
USDA_NUM = "usda_num"
INGREDIENT = "ingredient"
SUBSTITUTIONS = "substitutions"
STEP = "step"
HACCP = "haccp"
CONTROL_POINT = "control_point"
CRITICAL_CONTROL_POINT = "critical_control_point"
AUTHORS = "authors"
TITLE = "title"
ISBN = "isbn"


# ----------------------------
# Encoding
# ----------------------------
def _same(v: T) -> T:
    return v


def _float_or_none(v: Optional[float]) -> Optional[float]:
    return None if v is None else float(v)


def _enum_or_none(codec: EnumCodec, v: Any) -> Optional[str]:
    return None if v is None else codec.label_of(v)


def _each_or_none(items: Optional[Tuple[T, ...]], encode: Callable[[T], Any]) -> Optional[List[Any]]:
    if items is None:
        return None
    return [encode(x) for x in items]


def _sub_or_none(value: Optional[T], encode: Callable[[T], Document]) -> Optional[Document]:
    return None if value is None else encode(value)


def encode_amount(a: Amount) -> Document:
    return {AMOUNT: _float_or_none(a.amount), UNIT: a.unit}


def encode_ingredient_data(d: IngredientData) -> Document:
    return {
        AMOUNTS: _each_or_none(d.amounts, encode_amount),
        PROCESSING: _each_or_none(d.processing, _same),
        NOTES: d.notes,
        INGREDIENT_NAME: d.ingredient_name,
        USDA_NUM: d.usda_num,
    }


def encode_ingredient(i: Ingredient) -> Document:
    return {
        INGREDIENT: _sub_or_none(i.ingredient, encode_ingredient_data),
        SUBSTITUTIONS: _each_or_none(i.substitutions, encode_ingredient_data),
    }


def encode_haccp(h: HACCPValue) -> Document:
    return {
        CONTROL_POINT: h.control_point,
        CRITICAL_CONTROL_POINT: h.critical_control_point,
    }


def encode_step(s: Step) -> Document:
    return {
        STEP: s.step,
        HACCP: _sub_or_none(s.haccp, encode_haccp),
        NOTES: s.notes,
    }


def encode_yield(y: Yield) -> Document:
    return {AMOUNT: _float_or_none(y.amount), UNIT: y.unit}


def encode_temperature(t: Temperature) -> Document:
    return {
        AMOUNT: _float_or_none(t.amount),
        UNIT: _enum_or_none(TEMPERATURE_UNIT_CODEC, t.unit),
    }


def encode_book_source(b: BookSource) -> Document:
    return {
        AUTHORS: _each_or_none(b.authors, _same),
        TITLE: b.title,
        ISBN: b.isbn,
        NOTES: b.notes,
    }


def encode_recipe_request(r: RecipeRequest) -> Document:
    """Document body for a recipe, without ``_id``."""
    return {
        RECIPE_NAME: r.recipe_name,
        OVEN_TIME: _float_or_none(r.oven_time),
        NOTES: r.notes,
        OVEN_FAN: _enum_or_none(OVEN_FAN_CODEC, r.oven_fan),
        OVEN_TEMP: _sub_or_none(r.oven_temp, encode_temperature),
        SOURCE_BOOK: _sub_or_none(r.source_book, encode_book_source),
        SOURCE_AUTHORS: _each_or_none(r.source_authors, _same),
        SOURCE_URL: r.source_url,
        INGREDIENTS: _each_or_none(r.ingredients, encode_ingredient),
        STEPS: _each_or_none(r.steps, encode_step),
        YIELDS: _each_or_none(r.yields, encode_yield),
    }


def encode_recipe(r: Recipe) -> Document:
    doc: Document = {RECIPE_UUID: ObjectId(r.recipe_uuid)}
    doc.update(encode_recipe_request(r.to_request()))
    return doc


# ----------------------------
# Decoding helpers
# ----------------------------
def _path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def _as_mapping(value: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeMismatch(field, "document", value)
    return value


def _as_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise TypeMismatch(field, "string", value)
    return value


def _as_float(value: Any, field: str) -> float:
    # bool is an int subclass; a stored true/false is never a quantity
    if isinstance(value, bool):
        raise TypeMismatch(field, "number", value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Decimal128):
        try:
            return float(value.to_decimal())
        except (ValueError, ArithmeticError):
            raise InvalidFieldValue(field, f"not a usable number: {value}") from None
    raise TypeMismatch(field, "number", value)


def _opt_str(doc: Mapping[str, Any], key: str, parent: str) -> Optional[str]:
    v = doc.get(key)
    return None if v is None else _as_str(v, _path(parent, key))


def _req_str(doc: Mapping[str, Any], key: str, parent: str) -> str:
    v = doc.get(key)
    if v is None:
        raise MissingRequiredField(_path(parent, key))
    return _as_str(v, _path(parent, key))


def _opt_float(doc: Mapping[str, Any], key: str, parent: str) -> Optional[float]:
    v = doc.get(key)
    return None if v is None else _as_float(v, _path(parent, key))


def _opt_sub(
    doc: Mapping[str, Any],
    key: str,
    parent: str,
    decode: Callable[[Mapping[str, Any], str], T],
) -> Optional[T]:
    v = doc.get(key)
    if v is None:
        return None
    field = _path(parent, key)
    return decode(_as_mapping(v, field), field)


def _opt_list(
    doc: Mapping[str, Any],
    key: str,
    parent: str,
    decode_item: Callable[[Any, str], T],
) -> Optional[Tuple[T, ...]]:
    v = doc.get(key)
    if v is None:
        return None
    field = _path(parent, key)
    if not isinstance(v, (list, tuple)):
        raise TypeMismatch(field, "array", v)
    return tuple(decode_item(item, f"{field}[{i}]") for i, item in enumerate(v))


def _sub_item(decode: Callable[[Mapping[str, Any], str], T]) -> Callable[[Any, str], T]:
    def _decode(item: Any, field: str) -> T:
        return decode(_as_mapping(item, field), field)
    return _decode


def _opt_enum(doc: Mapping[str, Any], key: str, parent: str, codec: EnumCodec) -> Any:
    v = doc.get(key)
    if v is None:
        return None
    field = _path(parent, key)
    # the physical type picks the encoding: label (current) or code (legacy)
    if isinstance(v, str):
        try:
            return codec.variant_of_label(v)
        except UnknownEnumLabel:
            raise InvalidEnumValue(field, v) from None
    if isinstance(v, int) and not isinstance(v, bool):
        try:
            return codec.variant_of_legacy_code(int(v))
        except UnknownEnumCode:
            raise InvalidEnumValue(field, v) from None
    raise TypeMismatch(field, "string or integer", v)


def _decode_identifier(doc: Mapping[str, Any]) -> str:
    v = doc.get(RECIPE_UUID)
    if v is None:
        raise MissingRequiredField(RECIPE_UUID)
    if isinstance(v, ObjectId):
        return str(v)
    # every record is addressed by ObjectId; anything else is unreachable
    raise TypeMismatch(RECIPE_UUID, "ObjectId", v)


# ----------------------------
# Decoding
# ----------------------------
def decode_amount(doc: Mapping[str, Any], path: str = "") -> Amount:
    return Amount(amount=_opt_float(doc, AMOUNT, path), unit=_req_str(doc, UNIT, path))


def decode_ingredient_data(doc: Mapping[str, Any], path: str = "") -> IngredientData:
    return IngredientData(
        amounts=_opt_list(doc, AMOUNTS, path, _sub_item(decode_amount)),
        processing=_opt_list(doc, PROCESSING, path, _as_str),
        notes=_opt_str(doc, NOTES, path),
        ingredient_name=_opt_str(doc, INGREDIENT_NAME, path),
        usda_num=_opt_str(doc, USDA_NUM, path),
    )


def decode_ingredient(doc: Mapping[str, Any], path: str = "") -> Ingredient:
    return Ingredient(
        ingredient=_opt_sub(doc, INGREDIENT, path, decode_ingredient_data),
        substitutions=_opt_list(doc, SUBSTITUTIONS, path, _sub_item(decode_ingredient_data)),
    )


def decode_haccp(doc: Mapping[str, Any], path: str = "") -> HACCPValue:
    value = HACCPValue(
        control_point=_opt_str(doc, CONTROL_POINT, path),
        critical_control_point=_opt_str(doc, CRITICAL_CONTROL_POINT, path),
    )
    if not value.is_exclusive:
        # older records may carry both; readable, but new writes reject it
        log.warning("%s sets both control_point and critical_control_point", path or HACCP)
    return value


def decode_step(doc: Mapping[str, Any], path: str = "") -> Step:
    return Step(
        step=_req_str(doc, STEP, path),
        haccp=_opt_sub(doc, HACCP, path, decode_haccp),
        notes=_opt_str(doc, NOTES, path),
    )


def decode_yield(doc: Mapping[str, Any], path: str = "") -> Yield:
    return Yield(amount=_opt_float(doc, AMOUNT, path), unit=_req_str(doc, UNIT, path))


def decode_temperature(doc: Mapping[str, Any], path: str = "") -> Temperature:
    return Temperature(
        amount=_opt_float(doc, AMOUNT, path),
        unit=_opt_enum(doc, UNIT, path, TEMPERATURE_UNIT_CODEC),
    )


def decode_book_source(doc: Mapping[str, Any], path: str = "") -> BookSource:
    return BookSource(
        title=_req_str(doc, TITLE, path),
        authors=_opt_list(doc, AUTHORS, path, _as_str),
        isbn=_opt_str(doc, ISBN, path),
        notes=_opt_str(doc, NOTES, path),
    )


def decode_recipe(doc: Any) -> Recipe:
    """Decode a stored recipe document. Raises a DecodeError subclass on bad data."""
    doc = _as_mapping(doc, "<document>")
    recipe_uuid = _decode_identifier(doc)

    oven_time = _opt_float(doc, OVEN_TIME, "")
    if oven_time is not None and (not math.isfinite(oven_time) or oven_time < 0):
        raise InvalidFieldValue(OVEN_TIME, f"must be a finite non-negative number, got {oven_time}")

    return Recipe(
        recipe_uuid=recipe_uuid,
        recipe_name=_opt_str(doc, RECIPE_NAME, ""),
        oven_fan=_opt_enum(doc, OVEN_FAN, "", OVEN_FAN_CODEC),
        oven_temp=_opt_sub(doc, OVEN_TEMP, "", decode_temperature),
        oven_time=oven_time,
        ingredients=_opt_list(doc, INGREDIENTS, "", _sub_item(decode_ingredient)),
        notes=_opt_str(doc, NOTES, ""),
        source_book=_opt_sub(doc, SOURCE_BOOK, "", decode_book_source),
        source_authors=_opt_list(doc, SOURCE_AUTHORS, "", _as_str),
        source_url=_opt_str(doc, SOURCE_URL, ""),
        steps=_opt_list(doc, STEPS, "", _sub_item(decode_step)),
        yields=_opt_list(doc, YIELDS, "", _sub_item(decode_yield)),
    )
