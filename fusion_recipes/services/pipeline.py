import logging
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

from fusion_recipes.core.config import Settings, get_settings
from fusion_recipes.db import catalog
from fusion_recipes.schemas.recipe import GenerationRequest, Recipe
from fusion_recipes.services import prompt_builder, response_parser
from fusion_recipes.services.client_base import GenerationClient
from fusion_recipes.services.client_factory import get_generation_client
from fusion_recipes.services.errors import PersistError, RecipePipelineError
from fusion_recipes.services.fallback import FallbackRecipeSupplier

logger = logging.getLogger(__name__)

generation_counters = {
    "success": 0,
    "failure": 0,
    "fallback": 0,
    "unpersisted": 0,
}


class GenerationResult(BaseModel):
    recipes: list[Recipe]
    source: Literal["generated", "fallback"]
    unpersisted_ids: list[str] = Field(default_factory=list)


class RecipeGenerationPipeline:
    """Prompt, generate, parse and persist one batch of recipes.

    Generation and parse failures either propagate or, outside production,
    are replaced by fallback recipes. Persistence is attempted once per
    recipe; a failed write is logged and reported in ``unpersisted_ids`` but
    never removes the recipe from the result.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client_factory: Callable[[Settings], GenerationClient] = get_generation_client,
        persist: Callable[[Recipe, str], None] = catalog.persist,
        fallback: FallbackRecipeSupplier | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client_factory = client_factory
        self._persist = persist
        self._fallback = fallback or FallbackRecipeSupplier()

    def run(self, request: GenerationRequest, creator_id: str) -> GenerationResult:
        prompt = prompt_builder.build(request)
        transport = self._settings.generation_transport

        try:
            client = self._client_factory(self._settings)
            raw = client.generate(request, prompt)
            recipes = response_parser.parse(raw, request)
        except RecipePipelineError as exc:
            if self._settings.fallback_enabled:
                generation_counters["fallback"] += 1
                logger.warning(
                    "recipe_generation",
                    extra={
                        "outcome": "fallback",
                        "transport": transport,
                        "app_env": self._settings.app_env,
                        "error_class": exc.error_class,
                        **self._request_shape_fields(request),
                    },
                )
                return GenerationResult(recipes=self._fallback.supply(request), source="fallback")

            generation_counters["failure"] += 1
            logger.warning(
                "recipe_generation",
                extra={
                    "outcome": "failure",
                    "transport": transport,
                    "app_env": self._settings.app_env,
                    "error_class": exc.error_class,
                    **self._request_shape_fields(request),
                },
            )
            raise

        generation_counters["success"] += 1
        logger.info(
            "recipe_generation",
            extra={
                "outcome": "success",
                "transport": transport,
                "recipes_count": len(recipes),
                **self._request_shape_fields(request),
            },
        )

        unpersisted_ids = self._persist_all(recipes, creator_id)
        return GenerationResult(
            recipes=recipes, source="generated", unpersisted_ids=unpersisted_ids
        )

    def _persist_all(self, recipes: list[Recipe], creator_id: str) -> list[str]:
        unpersisted_ids: list[str] = []
        for recipe in recipes:
            try:
                self._persist(recipe, creator_id)
            except PersistError as exc:
                generation_counters["unpersisted"] += 1
                unpersisted_ids.append(recipe.id)
                logger.error(
                    "recipe_persistence",
                    extra={
                        "outcome": "failure",
                        "recipe_id": recipe.id,
                        "error_class": exc.error_class,
                    },
                )
        return unpersisted_ids

    @staticmethod
    def _request_shape_fields(request: GenerationRequest) -> dict[str, Any]:
        return {
            "cuisines_count": len(request.cuisines),
            "dietary_tags_count": len(request.dietary_tags),
            "custom_ingredients_count": len(request.custom_ingredients),
        }
