# recipe_store/src/infrastructure/mongo_repositories.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from src.domain.entities import Recipe, RecipeRequest
from src.domain.errors import DecodeError, InvalidIdentifier, RecipeNotFound, StoreError
from src.domain.repositories import RecipeRepo
from src.infrastructure.recipe_documents import RECIPE_UUID, decode_recipe, encode_recipe_request

log = logging.getLogger("infra.mongo_repo")


def _parse_object_id(recipe_uuid: str) -> ObjectId:
    # ObjectId(None) would mint a fresh id
    if not isinstance(recipe_uuid, str):
        raise InvalidIdentifier(str(recipe_uuid))
    try:
        return ObjectId(recipe_uuid)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifier(recipe_uuid) from e


class MongoRecipeRepository(RecipeRepo):
    """
    Recipe repository backed by a MongoDB collection.

    The collection (and so the client behind it) is created once by the
    caller and injected here. No retries: store failures surface as
    StoreError for the caller to handle.
    """

    def __init__(self, col: AsyncCollection) -> None:
        self._col = col

    def _decode(self, doc: Dict[str, Any]) -> Recipe:
        try:
            return decode_recipe(doc)
        except DecodeError:
            log.error("Invalid recipe document: _id=%s", doc.get(RECIPE_UUID))
            raise

    async def create(self, request: RecipeRequest) -> str:
        body = encode_recipe_request(request)
        try:
            result = await self._col.insert_one(body)
        except PyMongoError as e:
            log.error("insert_one failed: %s", e)
            raise StoreError(f"Could not create recipe: {e}") from e

        inserted_id = result.inserted_id
        if not isinstance(inserted_id, ObjectId):
            raise StoreError(f"Store returned a non-ObjectId _id: {inserted_id!r}")
        recipe_uuid = str(inserted_id)
        log.info("Created recipe %s", recipe_uuid)
        return recipe_uuid

    async def fetch_one(self, recipe_uuid: str) -> Recipe:
        try:
            oid = _parse_object_id(recipe_uuid)
        except InvalidIdentifier:
            # a malformed id cannot name a stored recipe
            raise RecipeNotFound(recipe_uuid) from None

        try:
            doc = await self._col.find_one({RECIPE_UUID: oid})
        except PyMongoError as e:
            log.error("find_one failed for %s: %s", recipe_uuid, e)
            raise StoreError(f"Could not fetch recipe {recipe_uuid}: {e}") from e

        if doc is None:
            raise RecipeNotFound(recipe_uuid)
        return self._decode(doc)

    async def fetch_all(self) -> List[Recipe]:
        items: List[Recipe] = []
        try:
            async with self._col.find({}) as cursor:
                async for doc in cursor:
                    # one broken record fails the whole listing
                    items.append(self._decode(doc))
        except PyMongoError as e:
            log.error("find failed: %s", e)
            raise StoreError(f"Could not list recipes: {e}") from e
        log.debug("Fetched %d recipes", len(items))
        return items

    async def update(self, recipe_uuid: str, request: RecipeRequest) -> None:
        oid = _parse_object_id(recipe_uuid)
        body = encode_recipe_request(request)
        try:
            result = await self._col.replace_one({RECIPE_UUID: oid}, body)
        except PyMongoError as e:
            log.error("replace_one failed for %s: %s", recipe_uuid, e)
            raise StoreError(f"Could not update recipe {recipe_uuid}: {e}") from e

        if result.matched_count == 0:
            raise RecipeNotFound(recipe_uuid)
        log.info("Replaced recipe %s", recipe_uuid)

    async def delete(self, recipe_uuid: str) -> None:
        oid = _parse_object_id(recipe_uuid)
        try:
            result = await self._col.delete_one({RECIPE_UUID: oid})
        except PyMongoError as e:
            log.error("delete_one failed for %s: %s", recipe_uuid, e)
            raise StoreError(f"Could not delete recipe {recipe_uuid}: {e}") from e

        if result.deleted_count == 0:
            raise RecipeNotFound(recipe_uuid)
        log.info("Deleted recipe %s", recipe_uuid)
