# recipe_store/src/application/usecases.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from src.domain.entities import Recipe, RecipeRequest
from src.domain.repositories import RecipeRepo

log = logging.getLogger("app.usecases")


@dataclass(frozen=True)
class CreateRecipe:
    recipe_repo: RecipeRepo

    async def __call__(self, request: RecipeRequest) -> str:
        recipe_uuid = await self.recipe_repo.create(request)
        log.info("create recipe name=%r -> %s", request.recipe_name, recipe_uuid)
        return recipe_uuid


@dataclass(frozen=True)
class GetRecipe:
    recipe_repo: RecipeRepo

    async def __call__(self, recipe_uuid: str) -> Recipe:
        key = (recipe_uuid or "").strip()
        return await self.recipe_repo.fetch_one(key)


@dataclass(frozen=True)
class ListRecipes:
    recipe_repo: RecipeRepo

    async def __call__(self) -> List[Recipe]:
        return await self.recipe_repo.fetch_all()


#: full replacement, fields missing from the request are cleared
@dataclass(frozen=True)
class EditRecipe:
    recipe_repo: RecipeRepo

    async def __call__(self, recipe_uuid: str, request: RecipeRequest) -> None:
        await self.recipe_repo.update(recipe_uuid.strip(), request)
        log.info("edit recipe %s", recipe_uuid)


@dataclass(frozen=True)
class DeleteRecipe:
    recipe_repo: RecipeRepo

    async def __call__(self, recipe_uuid: str) -> None:
        await self.recipe_repo.delete(recipe_uuid.strip())
        log.info("delete recipe %s", recipe_uuid)
