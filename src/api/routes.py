# recipe_store/src/api/routes.py
from __future__ import annotations

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.api.schemas import CreateRecipeResponse, RecipeRequestBody, RecipeResponse, StatusResponse
from src.application.usecases import CreateRecipe, DeleteRecipe, EditRecipe, GetRecipe, ListRecipes
from src.domain.errors import DecodeError, InvalidIdentifier, RecipeNotFound, StoreError

log = logging.getLogger("api.routes")
router = APIRouter()


# -------------------------
# Dependencies via app.state
# -------------------------
def _from_state(request: Request, name: str) -> Any:
    uc = getattr(request.app.state, name, None)
    if uc is None:
        raise RuntimeError(f"{name} not initialized. Check app startup wiring.")
    return uc


def get_create_recipe(request: Request) -> CreateRecipe:
    return _from_state(request, "create_recipe")


def get_get_recipe(request: Request) -> GetRecipe:
    return _from_state(request, "get_recipe")


def get_list_recipes(request: Request) -> ListRecipes:
    return _from_state(request, "list_recipes")


def get_edit_recipe(request: Request) -> EditRecipe:
    return _from_state(request, "edit_recipe")


def get_delete_recipe(request: Request) -> DeleteRecipe:
    return _from_state(request, "delete_recipe")


def _to_http(e: Exception, what: str) -> HTTPException:
    if isinstance(e, RecipeNotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InvalidIdentifier):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, DecodeError):
        log.error("%s: stored recipe is invalid: %s", what, e)
        return HTTPException(status_code=500, detail=f"stored recipe is invalid: {e}")
    if isinstance(e, StoreError):
        log.error("%s: store unavailable: %s", what, e)
        return HTTPException(status_code=503, detail="recipe store unavailable")
    log.exception("Processing %s error", what)
    return HTTPException(status_code=500, detail=str(e))


# -------------------------
# /recipe
# -------------------------
@router.post("/recipe", status_code=status.HTTP_201_CREATED, response_model=CreateRecipeResponse)
async def create_recipe(body: RecipeRequestBody, uc: CreateRecipe = Depends(get_create_recipe)) -> Any:
    try:
        recipe_uuid = await uc(body.to_domain())
    except Exception as e:
        raise _to_http(e, "POST /recipe") from e
    return CreateRecipeResponse(status=status.HTTP_201_CREATED, recipe_uuid=recipe_uuid)


@router.get("/recipe", response_model=List[RecipeResponse])
async def list_recipes(uc: ListRecipes = Depends(get_list_recipes)) -> Any:
    try:
        recipes = await uc()
    except Exception as e:
        raise _to_http(e, "GET /recipe") from e
    return [RecipeResponse.from_domain(r) for r in recipes]


@router.get("/recipe/{recipe_uuid}", response_model=RecipeResponse)
async def get_recipe(recipe_uuid: str, uc: GetRecipe = Depends(get_get_recipe)) -> Any:
    try:
        recipe = await uc(recipe_uuid)
    except Exception as e:
        raise _to_http(e, "GET /recipe/{id}") from e
    return RecipeResponse.from_domain(recipe)


@router.put("/recipe/{recipe_uuid}", response_model=StatusResponse)
async def edit_recipe(
    recipe_uuid: str,
    body: RecipeRequestBody,
    uc: EditRecipe = Depends(get_edit_recipe),
) -> Any:
    try:
        await uc(recipe_uuid, body.to_domain())
    except Exception as e:
        raise _to_http(e, "PUT /recipe/{id}") from e
    return StatusResponse(status=status.HTTP_200_OK)


@router.delete("/recipe/{recipe_uuid}", response_model=StatusResponse)
async def delete_recipe(recipe_uuid: str, uc: DeleteRecipe = Depends(get_delete_recipe)) -> Any:
    try:
        await uc(recipe_uuid)
    except Exception as e:
        raise _to_http(e, "DELETE /recipe/{id}") from e
    return StatusResponse(status=status.HTTP_200_OK)
