from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fusion_recipes.api.generate import router as generate_router
from fusion_recipes.api.profiles import router as profiles_router
from fusion_recipes.api.recipes import router as recipes_router
from fusion_recipes.api.relay import router as relay_router
from fusion_recipes.core.config import get_settings
from fusion_recipes.db.sqlite import init_db


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    get_settings()
    init_db()
    yield


app = FastAPI(title="Fusion Recipes", version="0.1.0", lifespan=lifespan)
app.include_router(generate_router)
app.include_router(recipes_router)
app.include_router(profiles_router)
app.include_router(relay_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
