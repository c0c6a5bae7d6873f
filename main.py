from __future__ import annotations

import logging

import uvicorn
from dotenv import load_dotenv
load_dotenv()
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from src.api.routes import router
from src.application.usecases import CreateRecipe, DeleteRecipe, EditRecipe, GetRecipe, ListRecipes
from src.core.config import (
    API_HOST,
    API_PORT,
    CORS_ORIGINS,
    MONGO_APP_NAME,
    MONGO_DB,
    MONGO_RECIPES_COL,
    MONGO_TIMEOUT_MS,
    MONGO_URI,
)
from src.infrastructure.mongo_repositories import MongoRecipeRepository

log = logging.getLogger("app")


def wire_recipe_store(app: FastAPI, col: AsyncCollection) -> None:
    recipe_repo = MongoRecipeRepository(col)

    # DI for routes.py
    app.state.create_recipe = CreateRecipe(recipe_repo)
    app.state.get_recipe = GetRecipe(recipe_repo)
    app.state.list_recipes = ListRecipes(recipe_repo)
    app.state.edit_recipe = EditRecipe(recipe_repo)
    app.state.delete_recipe = DeleteRecipe(recipe_repo)


def create_app() -> FastAPI:
    app = FastAPI(title="Recipe Store")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["content-type"],
    )
    app.include_router(router)

    @app.on_event("startup")
    async def on_startup() -> None:
        client: AsyncMongoClient = AsyncMongoClient(
            MONGO_URI,
            appname=MONGO_APP_NAME,
            serverSelectionTimeoutMS=MONGO_TIMEOUT_MS,
        )
        app.state.mongo_client = client
        wire_recipe_store(app, client[MONGO_DB][MONGO_RECIPES_COL])
        log.info("Startup complete (db=%s, collection=%s)", MONGO_DB, MONGO_RECIPES_COL)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        client = getattr(app.state, "mongo_client", None)
        if client is not None:
            await client.close()

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host=API_HOST, port=API_PORT, reload=False)
