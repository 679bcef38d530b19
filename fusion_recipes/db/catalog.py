import json
import logging
import sqlite3
from datetime import UTC, datetime
from typing import Any, Literal

from fusion_recipes.db.sqlite import get_conn
from fusion_recipes.schemas.recipe import Recipe
from fusion_recipes.services.errors import PersistError

logger = logging.getLogger(__name__)

persistence_counters = {
    "success": 0,
    "failure": 0,
}


def recipe_to_row(recipe: Recipe, creator_id: str) -> dict[str, Any]:
    """Map a recipe onto the shared catalog row layout.

    ``description`` holds the flavor text, ingredients are stored as
    ``{"items": [...]}`` and steps as ``{"cooking": [...]}``. Keep in step
    with ``row_to_recipe``.
    """
    now = datetime.now(UTC).isoformat()
    return {
        "id": recipe.id,
        "creator_id": creator_id,
        "title": recipe.title,
        "description": recipe.flavor_text,
        "cuisines": json.dumps(recipe.cuisines),
        "ingredients": json.dumps({"items": recipe.ingredients}),
        "instructions": json.dumps({"cooking": recipe.steps}),
        "dietary_tags": json.dumps(recipe.dietary_tags),
        "cooking_time": recipe.cooking_time,
        "prep_time_min": recipe.prep_time_min,
        "dish_type": recipe.dish_type,
        "difficulty": recipe.difficulty,
        "is_favorite": 0,
        "created_at": now,
        "updated_at": now,
    }


def row_to_recipe(row: sqlite3.Row) -> Recipe:
    ingredients = json.loads(row["ingredients"])
    instructions = json.loads(row["instructions"])
    return Recipe(
        id=str(row["id"]),
        title=str(row["title"]),
        flavor_text=row["description"] or "",
        ingredients=list(ingredients.get("items", [])),
        steps=list(instructions.get("cooking", [])),
        cooking_time=row["cooking_time"] or "",
        prep_time_min=int(row["prep_time_min"]),
        cuisines=json.loads(row["cuisines"]),
        dietary_tags=json.loads(row["dietary_tags"]),
        dish_type=str(row["dish_type"]),
        difficulty=row["difficulty"],
        is_favorite=bool(row["is_favorite"]),
    )


def persist(recipe: Recipe, creator_id: str) -> None:
    """Insert one recipe; the favorite flag always starts out false."""
    row = recipe_to_row(recipe, creator_id)
    try:
        with get_conn() as conn:
            conn.execute(
                """
                INSERT INTO recipes (
                    id, creator_id, title, description, cuisines, ingredients,
                    instructions, dietary_tags, cooking_time, prep_time_min,
                    dish_type, difficulty, is_favorite, created_at, updated_at
                )
                VALUES (
                    :id, :creator_id, :title, :description, :cuisines, :ingredients,
                    :instructions, :dietary_tags, :cooking_time, :prep_time_min,
                    :dish_type, :difficulty, :is_favorite, :created_at, :updated_at
                )
                """,
                row,
            )
    except sqlite3.Error as exc:
        persistence_counters["failure"] += 1
        raise PersistError(recipe.id, f"Catalog store rejected recipe: {exc}") from exc

    persistence_counters["success"] += 1


def get_recipe(recipe_id: str) -> Recipe | None:
    with get_conn() as conn:
        row = conn.execute("SELECT * FROM recipes WHERE id = ?", (recipe_id,)).fetchone()
    return row_to_recipe(row) if row is not None else None


def list_recipes(
    *,
    dish_type: str | None = None,
    cuisine: str | None = None,
    dietary_tags: list[str] | None = None,
    creator_id: str | None = None,
    favorites_only: bool = False,
    query: str | None = None,
    sort: Literal["newest", "quick"] = "newest",
) -> list[Recipe]:
    clauses: list[str] = []
    params: list[Any] = []

    if dish_type:
        clauses.append("lower(dish_type) = lower(?)")
        params.append(dish_type)
    if cuisine:
        clauses.append("EXISTS (SELECT 1 FROM json_each(recipes.cuisines) WHERE value = ?)")
        params.append(cuisine)
    for tag in dietary_tags or []:
        clauses.append("EXISTS (SELECT 1 FROM json_each(recipes.dietary_tags) WHERE value = ?)")
        params.append(tag)
    if creator_id:
        clauses.append("creator_id = ?")
        params.append(creator_id)
    if favorites_only:
        clauses.append("is_favorite = 1")
    if query:
        clauses.append("lower(title) LIKE ?")
        params.append(f"%{query.lower()}%")

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    order = "prep_time_min ASC, created_at DESC" if sort == "quick" else "created_at DESC"

    with get_conn() as conn:
        rows = conn.execute(f"SELECT * FROM recipes {where} ORDER BY {order}", params).fetchall()

    return [row_to_recipe(row) for row in rows]


def toggle_favorite(recipe_id: str) -> bool | None:
    """Flip the favorite flag; returns the new value, or None if missing."""
    with get_conn() as conn:
        row = conn.execute(
            "SELECT is_favorite FROM recipes WHERE id = ?", (recipe_id,)
        ).fetchone()
        if row is None:
            return None

        new_value = not bool(row["is_favorite"])
        conn.execute(
            "UPDATE recipes SET is_favorite = ?, updated_at = ? WHERE id = ?",
            (int(new_value), datetime.now(UTC).isoformat(), recipe_id),
        )

    logger.info("recipe_favorite_toggled", extra={"recipe_id": recipe_id, "is_favorite": new_value})
    return new_value
