import json

from fusion_recipes.schemas.recipe import GeneratedRecipe, GenerationRequest, PromptText

SYSTEM_PROMPT = (
    "You are a professional chef specializing in fusion cuisine. "
    "Generate detailed recipes in the exact format requested."
)

CLOSING_CLAUSE = (
    "Ensure the recipe is practical for home cooks while maintaining authenticity. "
    "Include precise measurements and clear instructions."
)

# Rendered once from the parser's own model; see GeneratedRecipe.
OUTPUT_SCHEMA = json.dumps(
    {
        "recipes": [
            {name: field.examples[0] for name, field in GeneratedRecipe.model_fields.items()}
        ]
    },
    indent=2,
    ensure_ascii=False,
)


def _cuisine_sentence(request: GenerationRequest) -> str:
    if len(request.cuisines) == 1:
        return (
            f"Create an authentic {request.dish_type} recipe that truly captures the "
            f"essence of {request.cuisines[0]} cuisine."
        )
    return (
        f"Create an innovative {request.dish_type} recipe that harmoniously fuses "
        f"{' and '.join(request.cuisines)} cuisines, combining traditional elements "
        "from each culinary tradition."
    )


def build(request: GenerationRequest) -> PromptText:
    parts = [_cuisine_sentence(request)]

    if request.dietary_tags:
        parts.append(
            "The recipe must strictly adhere to these dietary requirements: "
            f"{', '.join(request.dietary_tags)}. Ensure all ingredients and preparation "
            "methods comply with these restrictions."
        )

    if request.custom_ingredients:
        parts.append(
            "Make use of these ingredients where they fit: "
            f"{', '.join(request.custom_ingredients)}."
        )

    parts.append(CLOSING_CLAUSE)
    parts.append(f"\nReturn the response in this exact JSON format:\n{OUTPUT_SCHEMA}")

    return PromptText(system=SYSTEM_PROMPT, user="\n".join(parts))
