from typing import Literal

from fastapi import APIRouter, HTTPException, Query

from fusion_recipes.db import catalog
from fusion_recipes.schemas.recipe import Recipe

router = APIRouter()


@router.get("/recipes", response_model=list[Recipe])
async def list_recipes(
    dish_type: str | None = None,
    cuisine: str | None = None,
    dietary_tag: list[str] | None = Query(default=None),
    creator_id: str | None = None,
    favorites_only: bool = False,
    q: str | None = None,
    sort: Literal["newest", "quick"] = "newest",
) -> list[Recipe]:
    return catalog.list_recipes(
        dish_type=dish_type,
        cuisine=cuisine,
        dietary_tags=dietary_tag,
        creator_id=creator_id,
        favorites_only=favorites_only,
        query=q,
        sort=sort,
    )


@router.get("/recipes/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str) -> Recipe:
    recipe = catalog.get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.post("/recipes/{recipe_id}/favorite")
async def toggle_favorite(recipe_id: str) -> dict[str, str | bool]:
    is_favorite = catalog.toggle_favorite(recipe_id)
    if is_favorite is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"id": recipe_id, "is_favorite": is_favorite}
