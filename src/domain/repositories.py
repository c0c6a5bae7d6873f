# recipe_store/src/domain/repositories.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from src.domain.entities import Recipe, RecipeRequest


class RecipeRepo(ABC):
    """
    Recipe persistence keyed by an opaque string identifier.

    Every write replaces whole documents. Concurrent writes to the same
    identifier are last-writer-wins.
    """

    @abstractmethod
    async def create(self, request: RecipeRequest) -> str: ...

    @abstractmethod
    async def fetch_one(self, recipe_uuid: str) -> Recipe: ...

    @abstractmethod
    async def fetch_all(self) -> List[Recipe]: ...

    @abstractmethod
    async def update(self, recipe_uuid: str, request: RecipeRequest) -> None: ...

    @abstractmethod
    async def delete(self, recipe_uuid: str) -> None: ...
