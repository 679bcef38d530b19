import logging
from typing import Any

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fusion_recipes.core.config import get_settings
from fusion_recipes.schemas.preferences import PreferenceSelections
from fusion_recipes.services import prompt_builder, response_parser
from fusion_recipes.services.client_factory import get_direct_client
from fusion_recipes.services.errors import PreferenceValidationError, RecipePipelineError
from fusion_recipes.services.preferences import aggregate

router = APIRouter()
logger = logging.getLogger(__name__)


class RelayPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    dish_type: str | None = None
    cuisines: list[str] = Field(default_factory=list)
    dietary_tags: list[str] = Field(default_factory=list)
    custom_ingredients: list[str] = Field(default_factory=list)


@router.post("/functions/generate-recipe")
def relay_generate_recipe(
    payload: dict[str, Any],
    authorization: str | None = Header(default=None),
) -> JSONResponse:
    """Relay function holding the upstream credential for relay-mode callers."""
    settings = get_settings()
    if settings.relay_token and authorization != f"Bearer {settings.relay_token}":
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    try:
        body = RelayPayload.model_validate(payload)
        # Dietary tags arrive already merged; run them through the same cleanup.
        request = aggregate(
            PreferenceSelections(
                dish_type=body.dish_type,
                cuisines=body.cuisines,
                lifestyle=body.dietary_tags,
                custom_ingredients=body.custom_ingredients,
            ),
            use_profile_prefs=False,
        )
    except (ValidationError, PreferenceValidationError):
        return JSONResponse(
            {"error": "dish_type and 1-2 cuisines are required"}, status_code=400
        )

    try:
        client = get_direct_client(settings)
        raw = client.generate(request, prompt_builder.build(request))
        recipes = response_parser.parse(raw, request)
    except RecipePipelineError as exc:
        logger.warning(
            "relay_recipe_generation",
            extra={"outcome": "failure", "error_class": exc.error_class},
        )
        return JSONResponse({"error": str(exc)}, status_code=500)

    logger.info(
        "relay_recipe_generation",
        extra={"outcome": "success", "recipes_count": len(recipes)},
    )
    return JSONResponse([recipe.model_dump() for recipe in recipes])
