# recipe_store/src/domain/entities.py
"""
Open Recipe Format entities.

All values are frozen; ordered lists are tuples. Change a recipe with
dataclasses.replace, never in place.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields
from typing import Optional, Tuple

from src.domain.enum_codec import OvenFanValue, TemperatureUnit, oven_fan_display

DEFAULT_YIELD_UNIT = "servings"

# hex form of a store-assigned ObjectId
_RECIPE_UUID_RE = re.compile(r"[0-9a-f]{24}")


def _require_str(owner: str, name: str, value: object) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{owner}.{name} must be a string, got {type(value).__name__}")


@dataclass(frozen=True)
class Amount:
    amount: Optional[float]
    unit: str

    def __post_init__(self) -> None:
        _require_str("Amount", "unit", self.unit)


@dataclass(frozen=True)
class IngredientData:
    # amounts[n] belongs to the recipe's yields[n]
    amounts: Optional[Tuple[Amount, ...]] = None
    processing: Optional[Tuple[str, ...]] = None
    notes: Optional[str] = None
    ingredient_name: Optional[str] = None
    usda_num: Optional[str] = None


@dataclass(frozen=True)
class Ingredient:
    ingredient: Optional[IngredientData] = None
    substitutions: Optional[Tuple[IngredientData, ...]] = None


@dataclass(frozen=True)
class HACCPValue:
    control_point: Optional[str] = None
    critical_control_point: Optional[str] = None

    @property
    def is_exclusive(self) -> bool:
        """A step should carry a control point or a critical control point, not both."""
        return not (self.control_point and self.critical_control_point)


@dataclass(frozen=True)
class Step:
    step: str
    haccp: Optional[HACCPValue] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        _require_str("Step", "step", self.step)


@dataclass(frozen=True)
class Yield:
    amount: Optional[float] = None
    unit: str = DEFAULT_YIELD_UNIT

    def __post_init__(self) -> None:
        _require_str("Yield", "unit", self.unit)


@dataclass(frozen=True)
class Temperature:
    amount: Optional[float] = None
    unit: Optional[TemperatureUnit] = None


@dataclass(frozen=True)
class BookSource:
    title: str
    authors: Optional[Tuple[str, ...]] = None
    isbn: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        _require_str("BookSource", "title", self.title)


def _check_oven_time(owner: str, oven_time: Optional[float]) -> None:
    if oven_time is not None and (not math.isfinite(oven_time) or oven_time < 0):
        raise ValueError(f"{owner}.oven_time must be a finite non-negative number, got {oven_time}")


@dataclass(frozen=True)
class RecipeRequest:
    """A recipe that has not been given an identifier by the store yet."""

    recipe_name: Optional[str] = None
    oven_fan: Optional[OvenFanValue] = None
    oven_temp: Optional[Temperature] = None
    oven_time: Optional[float] = None  # minutes
    ingredients: Optional[Tuple[Ingredient, ...]] = None
    notes: Optional[str] = None
    source_book: Optional[BookSource] = None
    source_authors: Optional[Tuple[str, ...]] = None
    source_url: Optional[str] = None
    steps: Optional[Tuple[Step, ...]] = None
    yields: Optional[Tuple[Yield, ...]] = None

    def __post_init__(self) -> None:
        _check_oven_time("RecipeRequest", self.oven_time)


@dataclass(frozen=True)
class Recipe:
    recipe_uuid: str
    recipe_name: Optional[str] = None
    oven_fan: Optional[OvenFanValue] = None
    oven_temp: Optional[Temperature] = None
    oven_time: Optional[float] = None  # minutes
    ingredients: Optional[Tuple[Ingredient, ...]] = None
    notes: Optional[str] = None
    source_book: Optional[BookSource] = None
    source_authors: Optional[Tuple[str, ...]] = None
    source_url: Optional[str] = None
    steps: Optional[Tuple[Step, ...]] = None
    yields: Optional[Tuple[Yield, ...]] = None

    def __post_init__(self) -> None:
        if not isinstance(self.recipe_uuid, str) or not _RECIPE_UUID_RE.fullmatch(self.recipe_uuid):
            raise ValueError(f"Recipe.recipe_uuid must be 24 lowercase hex digits, got {self.recipe_uuid!r}")
        _check_oven_time("Recipe", self.oven_time)

    @classmethod
    def from_request(cls, recipe_uuid: str, request: RecipeRequest) -> "Recipe":
        values = {f.name: getattr(request, f.name) for f in fields(RecipeRequest)}
        return cls(recipe_uuid=recipe_uuid, **values)

    def to_request(self) -> RecipeRequest:
        return RecipeRequest(**{f.name: getattr(self, f.name) for f in fields(RecipeRequest)})

    @property
    def oven_fan_label(self) -> str:
        return oven_fan_display(self.oven_fan)
