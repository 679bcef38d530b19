import logging
from typing import Literal

from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel

from fusion_recipes.core.config import get_settings
from fusion_recipes.db.profiles import get_profile
from fusion_recipes.schemas.preferences import PreferenceSelections
from fusion_recipes.schemas.recipe import Recipe
from fusion_recipes.services.client_factory import get_generation_client
from fusion_recipes.services.errors import (
    AuthConfigError,
    PreferenceValidationError,
    RecipePipelineError,
)
from fusion_recipes.services.pipeline import RecipeGenerationPipeline
from fusion_recipes.services.preferences import aggregate

router = APIRouter()
logger = logging.getLogger(__name__)

generate_api_counters = {
    "success": 0,
    "failure": 0,
    "rejected": 0,
}

_GENERATION_FAILED = {
    "code": "generation_failed",
    "message": "Failed to generate recipes. Please try again.",
}

_GENERATION_MISCONFIGURED = {
    "code": "generation_misconfigured",
    "message": "Recipe generation is not configured. Please contact the administrator.",
}


class GenerateRecipesResponse(BaseModel):
    recipes: list[Recipe]
    source: Literal["generated", "fallback"]


@router.post("/generate", response_model=GenerateRecipesResponse)
def generate_recipes(
    selections: PreferenceSelections,
    x_user_id: str = Header(min_length=1),
) -> GenerateRecipesResponse:
    settings = get_settings()

    try:
        profile = get_profile(x_user_id) if selections.use_profile_prefs else None
        request = aggregate(selections, profile)
    except PreferenceValidationError as exc:
        generate_api_counters["rejected"] += 1
        raise HTTPException(
            status_code=422, detail={"code": exc.reason, "message": str(exc)}
        ) from exc

    pipeline = RecipeGenerationPipeline(settings, client_factory=get_generation_client)
    try:
        result = pipeline.run(request, creator_id=x_user_id)
    except AuthConfigError as exc:
        generate_api_counters["failure"] += 1
        raise HTTPException(status_code=500, detail=_GENERATION_MISCONFIGURED) from exc
    except RecipePipelineError as exc:
        generate_api_counters["failure"] += 1
        raise HTTPException(status_code=503, detail=_GENERATION_FAILED) from exc

    generate_api_counters["success"] += 1
    if result.unpersisted_ids:
        logger.warning(
            "api_recipe_generation",
            extra={
                "outcome": "partially_persisted",
                "recipes_count": len(result.recipes),
                "unpersisted_count": len(result.unpersisted_ids),
            },
        )
    return GenerateRecipesResponse(recipes=result.recipes, source=result.source)
