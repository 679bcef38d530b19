import json
import logging
import secrets
import string
import time
from typing import Any

from pydantic import ValidationError

from fusion_recipes.schemas.recipe import (
    ECHOED_FIELDS,
    GeneratedRecipe,
    GenerationRequest,
    RawModelResponse,
    Recipe,
)
from fusion_recipes.services.errors import ParseError

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_SUFFIX_LENGTH = 9


def new_recipe_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"recipe-{int(time.time() * 1000)}-{suffix}"


def issue_recipe_ids(count: int) -> list[str]:
    ids: list[str] = []
    while len(ids) < count:
        candidate = new_recipe_id()
        if candidate not in ids:
            ids.append(candidate)
    return ids


def _extract_content(payload: Any) -> str:
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ParseError(
            ParseError.MISSING_CONTENT, "Model response did not include message content"
        ) from exc

    if not isinstance(content, str) or not content.strip():
        raise ParseError(
            ParseError.MISSING_CONTENT, "Model response did not include message content"
        )
    return content


def _decode_json(text: str) -> Any:
    """Decode JSON, accepting a payload wrapped in a markdown code fence."""
    candidate = text.strip()
    if candidate.startswith("```"):
        candidate = candidate.split("\n", 1)[1] if "\n" in candidate else ""
        if candidate.rstrip().endswith("```"):
            candidate = candidate.rstrip()[:-3]

    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise ParseError(ParseError.MALFORMED_PAYLOAD, "Model content was not valid JSON") from exc


def _recipe_entries(raw: RawModelResponse) -> list[Any]:
    if raw.transport == "relay":
        decoded = _decode_json(raw.payload) if isinstance(raw.payload, str) else raw.payload
        entries = decoded
    else:
        decoded = _decode_json(_extract_content(raw.payload))
        entries = decoded.get("recipes") if isinstance(decoded, dict) else None

    if not isinstance(entries, list) or not entries:
        raise ParseError(ParseError.MISSING_RECIPE_LIST, "Model output had no recipe list")
    return entries


def parse(raw: RawModelResponse, request: GenerationRequest) -> list[Recipe]:
    """Turn one upstream response into recipes, in emission order.

    Entries that fail ``GeneratedRecipe`` validation are dropped and logged;
    the batch fails only when nothing valid remains. Cuisines, dietary tags
    and dish type always echo the originating request.
    """
    entries = _recipe_entries(raw)

    accepted: list[GeneratedRecipe] = []
    for index, entry in enumerate(entries):
        try:
            accepted.append(GeneratedRecipe.model_validate(entry))
        except ValidationError as exc:
            error_fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
            logger.warning(
                "recipe_entry_rejected",
                extra={
                    "transport": raw.transport,
                    "entry_index": index,
                    "error_fields": error_fields,
                },
            )

    if not accepted:
        raise ParseError(ParseError.NO_VALID_RECIPES, "No recipe entry matched the schema")

    echoed = {
        "cuisines": list(request.cuisines),
        "dietary_tags": list(request.dietary_tags),
        "dish_type": request.dish_type,
    }
    recipes = []
    for recipe_id, generated in zip(issue_recipe_ids(len(accepted)), accepted):
        fields = generated.model_dump(exclude=set(ECHOED_FIELDS))
        recipes.append(Recipe(id=recipe_id, difficulty="medium", **fields, **echoed))
    return recipes
