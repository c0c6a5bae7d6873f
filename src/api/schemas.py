# recipe_store/src/api/schemas.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.domain.entities import (
    DEFAULT_YIELD_UNIT,
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
from src.domain.enum_codec import OVEN_FAN_CODEC, TEMPERATURE_UNIT_CODEC
from src.domain.errors import UnknownEnumLabel


def _tuple_or_none(items):
    return None if items is None else tuple(items)


def _canonical_label(codec, v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    try:
        return codec.label_of(codec.variant_of_label(v))
    except UnknownEnumLabel as e:
        raise ValueError(f"must be one of {', '.join(codec.labels())}") from e


class AmountSchema(BaseModel):
    amount: Optional[float] = None
    unit: str

    def to_domain(self) -> Amount:
        return Amount(amount=self.amount, unit=self.unit)

    @classmethod
    def from_domain(cls, a: Amount) -> "AmountSchema":
        return cls(amount=a.amount, unit=a.unit)


class IngredientDataSchema(BaseModel):
    amounts: Optional[List[AmountSchema]] = None
    processing: Optional[List[str]] = None
    notes: Optional[str] = None
    ingredient_name: Optional[str] = None
    usda_num: Optional[str] = None

    def to_domain(self) -> IngredientData:
        return IngredientData(
            amounts=None if self.amounts is None else tuple(a.to_domain() for a in self.amounts),
            processing=_tuple_or_none(self.processing),
            notes=self.notes,
            ingredient_name=self.ingredient_name,
            usda_num=self.usda_num,
        )

    @classmethod
    def from_domain(cls, d: IngredientData) -> "IngredientDataSchema":
        return cls(
            amounts=None if d.amounts is None else [AmountSchema.from_domain(a) for a in d.amounts],
            processing=None if d.processing is None else list(d.processing),
            notes=d.notes,
            ingredient_name=d.ingredient_name,
            usda_num=d.usda_num,
        )


class IngredientSchema(BaseModel):
    ingredient: Optional[IngredientDataSchema] = None
    substitutions: Optional[List[IngredientDataSchema]] = None

    def to_domain(self) -> Ingredient:
        return Ingredient(
            ingredient=None if self.ingredient is None else self.ingredient.to_domain(),
            substitutions=None if self.substitutions is None else tuple(s.to_domain() for s in self.substitutions),
        )

    @classmethod
    def from_domain(cls, i: Ingredient) -> "IngredientSchema":
        return cls(
            ingredient=None if i.ingredient is None else IngredientDataSchema.from_domain(i.ingredient),
            substitutions=None if i.substitutions is None else [IngredientDataSchema.from_domain(s) for s in i.substitutions],
        )


class HACCPSchema(BaseModel):
    control_point: Optional[str] = None
    critical_control_point: Optional[str] = None

    def to_domain(self) -> HACCPValue:
        return HACCPValue(control_point=self.control_point, critical_control_point=self.critical_control_point)

    @classmethod
    def from_domain(cls, h: HACCPValue) -> "HACCPSchema":
        return cls(control_point=h.control_point, critical_control_point=h.critical_control_point)


class StepSchema(BaseModel):
    step: str
    haccp: Optional[HACCPSchema] = None
    notes: Optional[str] = None

    def to_domain(self) -> Step:
        return Step(step=self.step, haccp=None if self.haccp is None else self.haccp.to_domain(), notes=self.notes)

    @classmethod
    def from_domain(cls, s: Step) -> "StepSchema":
        return cls(step=s.step, haccp=None if s.haccp is None else HACCPSchema.from_domain(s.haccp), notes=s.notes)


class YieldSchema(BaseModel):
    amount: Optional[float] = None
    unit: str = DEFAULT_YIELD_UNIT

    def to_domain(self) -> Yield:
        return Yield(amount=self.amount, unit=self.unit)

    @classmethod
    def from_domain(cls, y: Yield) -> "YieldSchema":
        return cls(amount=y.amount, unit=y.unit)


class TemperatureSchema(BaseModel):
    amount: Optional[float] = None
    unit: Optional[str] = Field(default=None, examples=["Celsius"])

    @field_validator("unit")
    @classmethod
    def _unit_label(cls, v: Optional[str]) -> Optional[str]:
        return _canonical_label(TEMPERATURE_UNIT_CODEC, v)

    def to_domain(self) -> Temperature:
        unit = None if self.unit is None else TEMPERATURE_UNIT_CODEC.variant_of_label(self.unit)
        return Temperature(amount=self.amount, unit=unit)

    @classmethod
    def from_domain(cls, t: Temperature) -> "TemperatureSchema":
        unit = None if t.unit is None else TEMPERATURE_UNIT_CODEC.label_of(t.unit)
        return cls(amount=t.amount, unit=unit)


class BookSourceSchema(BaseModel):
    authors: Optional[List[str]] = None
    title: str
    isbn: Optional[str] = None
    notes: Optional[str] = None

    def to_domain(self) -> BookSource:
        return BookSource(title=self.title, authors=_tuple_or_none(self.authors), isbn=self.isbn, notes=self.notes)

    @classmethod
    def from_domain(cls, b: BookSource) -> "BookSourceSchema":
        return cls(
            authors=None if b.authors is None else list(b.authors),
            title=b.title,
            isbn=b.isbn,
            notes=b.notes,
        )


class _RecipeFields(BaseModel):
    recipe_name: Optional[str] = Field(default=None, examples=["Pumpkin soup"])
    oven_fan: Optional[str] = Field(default=None, examples=["High"])
    oven_temp: Optional[TemperatureSchema] = None
    oven_time: Optional[float] = Field(default=None, ge=0, description="Minutes in the oven")
    ingredients: Optional[List[IngredientSchema]] = None
    notes: Optional[str] = None
    source_book: Optional[BookSourceSchema] = None
    source_authors: Optional[List[str]] = None
    source_url: Optional[str] = None
    steps: Optional[List[StepSchema]] = None
    yields: Optional[List[YieldSchema]] = None

    @field_validator("oven_fan")
    @classmethod
    def _oven_fan_label(cls, v: Optional[str]) -> Optional[str]:
        return _canonical_label(OVEN_FAN_CODEC, v)


class RecipeRequestBody(_RecipeFields):
    @model_validator(mode="after")
    def _haccp_exclusive(self) -> "RecipeRequestBody":
        for i, s in enumerate(self.steps or []):
            if s.haccp is not None and not s.haccp.to_domain().is_exclusive:
                raise ValueError(
                    f"steps[{i}].haccp: set either control_point or critical_control_point, not both"
                )
        return self

    def to_domain(self) -> RecipeRequest:
        return RecipeRequest(
            recipe_name=self.recipe_name,
            oven_fan=None if self.oven_fan is None else OVEN_FAN_CODEC.variant_of_label(self.oven_fan),
            oven_temp=None if self.oven_temp is None else self.oven_temp.to_domain(),
            oven_time=self.oven_time,
            ingredients=None if self.ingredients is None else tuple(i.to_domain() for i in self.ingredients),
            notes=self.notes,
            source_book=None if self.source_book is None else self.source_book.to_domain(),
            source_authors=_tuple_or_none(self.source_authors),
            source_url=self.source_url,
            steps=None if self.steps is None else tuple(s.to_domain() for s in self.steps),
            yields=None if self.yields is None else tuple(y.to_domain() for y in self.yields),
        )


class RecipeResponse(_RecipeFields):
    recipe_uuid: str

    @classmethod
    def from_domain(cls, r: Recipe) -> "RecipeResponse":
        return cls(
            recipe_uuid=r.recipe_uuid,
            recipe_name=r.recipe_name,
            oven_fan=None if r.oven_fan is None else OVEN_FAN_CODEC.label_of(r.oven_fan),
            oven_temp=None if r.oven_temp is None else TemperatureSchema.from_domain(r.oven_temp),
            oven_time=r.oven_time,
            ingredients=None if r.ingredients is None else [IngredientSchema.from_domain(i) for i in r.ingredients],
            notes=r.notes,
            source_book=None if r.source_book is None else BookSourceSchema.from_domain(r.source_book),
            source_authors=None if r.source_authors is None else list(r.source_authors),
            source_url=r.source_url,
            steps=None if r.steps is None else [StepSchema.from_domain(s) for s in r.steps],
            yields=None if r.yields is None else [YieldSchema.from_domain(y) for y in r.yields],
        )


class CreateRecipeResponse(BaseModel):
    status: int
    recipe_uuid: str


class StatusResponse(BaseModel):
    status: int
