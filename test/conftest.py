from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from src.domain.entities import (
    Amount,
    BookSource,
    HACCPValue,
    Ingredient,
    IngredientData,
    RecipeRequest,
    Step,
    Temperature,
    Yield,
)
from src.domain.enum_codec import OvenFanValue, TemperatureUnit
from src.infrastructure.mongo_repositories import MongoRecipeRepository


class _FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]], error: Exception | None = None) -> None:
        self._docs = list(docs)
        self._error = error
        self.closed = False

    async def __aenter__(self) -> "_FakeCursor":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.closed = True

    def __aiter__(self) -> "_FakeCursor":
        return self

    async def __anext__(self) -> Dict[str, Any]:
        if self._error is not None:
            raise self._error
        if not self._docs:
            raise StopAsyncIteration
        return self._docs.pop(0)


class FakeRecipeCollection:
    """In-memory stand-in for the async pymongo collection calls the repository makes."""

    def __init__(self) -> None:
        self.docs: Dict[Any, Dict[str, Any]] = {}
        self.cursors: List[_FakeCursor] = []

    def seed(self, doc: Dict[str, Any]) -> str:
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = doc
        return str(doc["_id"])

    async def insert_one(self, doc: Dict[str, Any]) -> SimpleNamespace:
        oid = ObjectId()
        stored = copy.deepcopy(doc)
        stored["_id"] = oid
        self.docs[oid] = stored
        return SimpleNamespace(inserted_id=oid)

    async def find_one(self, flt: Dict[str, Any]) -> Dict[str, Any] | None:
        doc = self.docs.get(flt["_id"])
        return copy.deepcopy(doc)

    def find(self, flt: Dict[str, Any]) -> _FakeCursor:
        cursor = _FakeCursor([copy.deepcopy(d) for d in self.docs.values()])
        self.cursors.append(cursor)
        return cursor

    async def replace_one(self, flt: Dict[str, Any], doc: Dict[str, Any]) -> SimpleNamespace:
        oid = flt["_id"]
        if oid not in self.docs:
            return SimpleNamespace(matched_count=0, modified_count=0)
        stored = copy.deepcopy(doc)
        stored["_id"] = oid
        self.docs[oid] = stored
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def delete_one(self, flt: Dict[str, Any]) -> SimpleNamespace:
        removed = self.docs.pop(flt["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)


class UnreachableCollection:
    """Every call fails the way pymongo does when no server answers."""

    def _error(self) -> ServerSelectionTimeoutError:
        return ServerSelectionTimeoutError("127.0.0.1:27017: connection refused")

    async def insert_one(self, doc: Dict[str, Any]) -> Any:
        raise self._error()

    async def find_one(self, flt: Dict[str, Any]) -> Any:
        raise self._error()

    def find(self, flt: Dict[str, Any]) -> _FakeCursor:
        return _FakeCursor([], error=self._error())

    async def replace_one(self, flt: Dict[str, Any], doc: Dict[str, Any]) -> Any:
        raise self._error()

    async def delete_one(self, flt: Dict[str, Any]) -> Any:
        raise self._error()


@pytest.fixture
def collection() -> FakeRecipeCollection:
    return FakeRecipeCollection()


@pytest.fixture
def repo(collection: FakeRecipeCollection) -> MongoRecipeRepository:
    return MongoRecipeRepository(collection)


@pytest.fixture
def unreachable_collection() -> UnreachableCollection:
    return UnreachableCollection()


@pytest.fixture
def unreachable_repo(unreachable_collection: UnreachableCollection) -> MongoRecipeRepository:
    return MongoRecipeRepository(unreachable_collection)


def make_full_request() -> RecipeRequest:
    flour = IngredientData(
        amounts=(Amount(2.0, "cup"), Amount(4.0, "cup")),
        processing=("sifted",),
        notes="plain flour",
        ingredient_name="flour",
        usda_num="20081",
    )
    spelt = IngredientData(
        amounts=(Amount(2.0, "cup"), Amount(4.0, "cup")),
        processing=("sifted",),
        notes=None,
        ingredient_name="spelt flour",
    )
    chicken = IngredientData(
        amounts=(Amount(1, "kg"), Amount(2, "kg")),
        processing=("whole", "raw"),
        ingredient_name="chicken",
    )
    return RecipeRequest(
        recipe_name="Roast chicken with bread",
        oven_fan=OvenFanValue.HIGH,
        oven_temp=Temperature(amount=200, unit=TemperatureUnit.CELSIUS),
        oven_time=75,
        ingredients=(
            Ingredient(ingredient=flour, substitutions=(spelt,)),
            Ingredient(ingredient=chicken, substitutions=()),
        ),
        notes="Sunday lunch",
        source_book=BookSource(
            title="The Roast Book",
            authors=("A. Cook", "B. Baker"),
            isbn="978-0-00-000000-0",
            notes=None,
        ),
        source_authors=("A. Cook",),
        source_url="https://example.org/roast",
        steps=(
            Step(step="Preheat the oven."),
            Step(
                step="Roast the chicken.",
                haccp=HACCPValue(critical_control_point="Internal temperature reaches 74C."),
                notes="Rest for 10 minutes",
            ),
        ),
        yields=(Yield(4), Yield(8, "portions")),
    )


@pytest.fixture
def full_request() -> RecipeRequest:
    return make_full_request()
